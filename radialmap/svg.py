"""Standalone SVG preview of a laid-out scene."""

from __future__ import annotations

import math
from typing import Dict, List, Optional
from xml.sax.saxutils import escape, quoteattr

from .layout import SceneLayout
from .model import Viewport

CONTOUR_STYLES: Dict[int, Dict[str, str]] = {
    0: {"fill": "#5beebb", "stroke": "#1FD6A2", "stroke-width": "1"},
    1: {"fill": "#16cc99", "stroke": "#12C792", "stroke-width": "1"},
    2: {"fill": "#159d6d", "stroke": "#0D7F59", "stroke-width": "1.5"},
}
DOT_RADIUS = 8
LABEL_FONT_SIZE = 13
LABEL_LINE_HEIGHT = 14
AXIS_FONT_SIZE = 18

standalone_tpl = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="%(w)s" height="%(h)s" viewBox="0 0 %(w)s %(h)s" font-family="system-ui, sans-serif">
%(title)s<circle cx="%(cx)s" cy="%(cy)s" r="%(r)s" fill="#d6f4ff" stroke="#ddd"/>
%(body)s
</svg>
"""


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        return "0"
    formatted = f"{value:.2f}".rstrip("0").rstrip(".")
    return formatted if formatted not in ("", "-0") else "0"


def _attrs(values: Dict[str, str]) -> str:
    return " ".join(f"{key}={quoteattr(val)}" for key, val in values.items())


def generate_svg_body(scene: SceneLayout) -> str:
    lines: List[str] = []
    for contour in scene.contours:
        if not contour.path:
            continue
        style = CONTOUR_STYLES.get(contour.rank, CONTOUR_STYLES[0])
        lines.append(
            f'<path d="{contour.path}" {_attrs(style)} stroke-linejoin="round" '
            f'data-ring={quoteattr(contour.ring_id)}/>'
        )

    cx, cy = scene.center
    for axis in scene.axes:
        x2, y2 = axis.end
        lx, ly = axis.label_pos
        lines.append(
            f'<line x1="{_format_float(cx)}" y1="{_format_float(cy)}" '
            f'x2="{_format_float(x2)}" y2="{_format_float(y2)}" stroke="rgba(0,0,0,0.45)" stroke-width="2"/>'
        )
        lines.append(
            f'<text x="{_format_float(lx)}" y="{_format_float(ly)}" text-anchor="{axis.text_anchor}" '
            f'dominant-baseline="middle" font-size="{AXIS_FONT_SIZE}" fill="#333">{escape(axis.label)}</text>'
        )

    for node in scene.nodes:
        lines.append(
            f'<circle cx="{_format_float(node.x)}" cy="{_format_float(node.y)}" r="{DOT_RADIUS}" '
            f'fill="#0CE7A8" stroke="rgba(0,0,0,0.25)" data-node={quoteattr(node.node_id)}/>'
        )
        tx, ty = node.label_pos
        spans = []
        for idx, line in enumerate(node.label_lines):
            dy = "0" if idx == 0 else str(LABEL_LINE_HEIGHT)
            spans.append(f'<tspan x="{_format_float(tx)}" dy="{dy}">{escape(line)}</tspan>')
        lines.append(
            f'<text x="{_format_float(tx)}" y="{_format_float(ty)}" font-size="{LABEL_FONT_SIZE}" '
            f'fill="#333">{"".join(spans)}</text>'
        )
    return "\n".join(lines)


def generate_svg_document(
    scene: SceneLayout, viewport: Viewport, *, title: Optional[str] = None
) -> str:
    w, h = viewport.size
    cx, cy = scene.center
    return standalone_tpl % {
        "w": _format_float(w),
        "h": _format_float(h),
        "cx": _format_float(cx),
        "cy": _format_float(cy),
        "r": _format_float(scene.outer_radius),
        "title": f"<title>{escape(title)}</title>\n" if title else "",
        "body": generate_svg_body(scene),
    }
