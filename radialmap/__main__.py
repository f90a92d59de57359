import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from radialmap import (
    DocumentError,
    Viewport,
    check_sequence_consistency,
    generate_svg_document,
    layout_scene,
    load_document,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out radial strategy maps")
    parser.add_argument("path", help="Path to the strategy map JSON document")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--width",
        type=float,
        default=1000.0,
        help="Drawing width in pixels (default: 1000)",
    )
    parser.add_argument(
        "--height",
        type=float,
        default=800.0,
        help="Drawing height in pixels (default: 800)",
    )
    parser.add_argument(
        "--padding",
        type=float,
        default=56.0,
        help="Space between the outer ring and the drawing edge (default: 56)",
    )
    parser.add_argument(
        "--svg-output-path",
        help="Write a standalone SVG preview of the map to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    logger.info("Loading strategy map from %s", args.path)
    try:
        document = load_document(args.path)
    except (DocumentError, OSError) as exc:
        logger.error("Could not load %s: %s", args.path, exc)
        raise SystemExit(1) from exc

    logger.info(
        "Loaded %d axis/axes, %d ring(s), %d node(s)",
        len(document.axes),
        len(document.rings),
        len(document.nodes),
    )

    viewport = Viewport(width=args.width, height=args.height, padding=args.padding)
    scene = layout_scene(document.axes, document.rings, document.nodes, viewport)
    warnings = check_sequence_consistency(document.axes, document.rings, document.nodes)
    for warning in warnings:
        logger.warning("Sequence warning: %s", warning.message)

    print(f"Title: {document.title}")
    if document.subtitle:
        print(f"Subtitle: {document.subtitle}")
    cx, cy = scene.center
    print(f"Center: ({cx:.2f}, {cy:.2f})  outer radius: {scene.outer_radius:.2f}")

    print("Axes:")
    for axis in scene.axes:
        x, y = axis.end
        print(f"  {axis.axis_id} [{axis.label}]: end=({x:.2f}, {y:.2f})")

    print("Nodes:")
    for node in scene.nodes:
        print(
            f"  {node.node_id} on {node.axis_id}/{node.ring_id}: "
            f"r={node.radius:.2f} ({node.x:.2f}, {node.y:.2f})"
        )

    print("Contours:")
    for contour in sorted(scene.contours, key=lambda c: c.rank):
        radii = ", ".join(f"{r:.2f}" for r in contour.radii)
        print(f"  {contour.ring_id}: [{radii}]")

    print("Warnings:")
    if warnings:
        for warning in warnings:
            print(f"  - {warning.message}")
    else:
        print("  (none)")

    if args.svg_output_path:
        output_path = Path(args.svg_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing SVG preview to %s", output_path)
        svg_document = generate_svg_document(scene, viewport, title=document.title)
        output_path.write_text(svg_document, encoding="utf-8")
        print(f"SVG preview written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
