from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

Point = Tuple[float, float]

DEFAULT_WIDTH = 1000.0
DEFAULT_HEIGHT = 800.0
DEFAULT_PADDING = 56.0


@dataclass
class Axis:
    id: str
    label: str = ''
    north_star: str = ''


@dataclass
class Ring:
    id: str
    label: str = ''


@dataclass
class Node:
    id: str
    label: str
    axis_id: str
    ring_id: str
    sequence: int = 1
    wrap_width: Optional[float] = None
    r_override: Optional[float] = None  # fraction of outer radius, or legacy px


@dataclass
class Viewport:
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    padding: float = DEFAULT_PADDING

    @property
    def size(self) -> Point:
        """Return the drawing size, substituting defaults for an unmeasured container."""
        w = self.width if self.width > 0 else DEFAULT_WIDTH
        h = self.height if self.height > 0 else DEFAULT_HEIGHT
        return float(w), float(h)

    @property
    def center(self) -> Point:
        w, h = self.size
        return w / 2.0, h / 2.0

    @property
    def outer_radius(self) -> float:
        w, h = self.size
        return max(1.0, min(w, h) / 2.0 - self.padding)


@dataclass
class StrategyMap:
    title: str = 'Untitled Strategy'
    subtitle: str = ''
    axes: List[Axis] = field(default_factory=list)
    rings: List[Ring] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)


DEFAULT_RINGS: Tuple[Ring, ...] = (
    Ring('now', 'Now'),
    Ring('next', 'Next'),
    Ring('later', 'Later'),
    Ring('uncommitted', 'Uncommitted'),
)


def node_order_key(node: Node) -> Tuple[float, str]:
    return (node.sequence, node.label)


def axis_nodes(nodes: Iterable[Node], axis_id: str) -> List[Node]:
    """Nodes on ``axis_id`` in their total order: sequence first, label breaks ties."""
    return sorted((n for n in nodes if n.axis_id == axis_id), key=node_order_key)


def ring_ranks(rings: Iterable[Ring]) -> Dict[str, int]:
    return {ring.id: idx for idx, ring in enumerate(rings)}
