"""
node.py - Flow Node
===================
One box on the diagram: a command, an event or a policy.

Design decisions:
  - Identity is the kind prefix plus the label ("command-PlaceOrder"), so a
    command and an event with the same name are different nodes.
  - Base style (fill, border) is fixed when the node is created.  Highlight
    state is never written here; the highlighter layers an opacity on top
    and hands back copies.
  - Labels are accepted verbatim, empty strings included.
"""

from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Node Kind Enum - one column per kind on the canvas
# ---------------------------------------------------------------------------
class NodeKind(Enum):
    COMMAND = "command"   # blue, left column
    EVENT   = "event"     # green, middle column
    POLICY  = "policy"    # event-derived colour, right column

    @property
    def prefix(self) -> str:
        return f"{self.value}-"

    def node_id(self, label: str) -> str:
        """Kind-prefixed identity for a label."""
        return f"{self.prefix}{label}"


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class GraphNode:
    """
    Attributes:
        id       : Kind-prefixed label, unique within a graph.
        kind     : NodeKind.
        label    : Entity name shown on the canvas (and copied on click).
        x, y     : Canvas coordinates in pixels, top-left of the box.
        color    : Fill colour.
        border   : Border colour (same as fill for policies).
        opacity  : 1.0 for the base layer; the highlighter lowers it.
    """

    __slots__ = ("id", "kind", "label", "x", "y", "color", "border", "opacity")

    def __init__(
        self,
        kind: NodeKind,
        label: str,
        x: float,
        y: float,
        color: str,
        border: Optional[str] = None,
        opacity: float = 1.0,
    ):
        self.id: str         = kind.node_id(label)
        self.kind: NodeKind  = kind
        self.label: str      = label
        self.x: float        = x
        self.y: float        = y
        self.color: str      = color
        self.border: str     = border or color
        self.opacity: float  = opacity

    def with_opacity(self, opacity: float) -> "GraphNode":
        """Copy of this node with a different opacity."""
        return GraphNode(self.kind, self.label, self.x, self.y, self.color, self.border, opacity)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":      self.id,
            "kind":    self.kind.value,
            "label":   self.label,
            "x":       self.x,
            "y":       self.y,
            "color":   self.color,
            "border":  self.border,
            "opacity": self.opacity,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"GraphNode(id={self.id}, pos=({self.x:g},{self.y:g}), color={self.color})"

    def __eq__(self, other) -> bool:
        return isinstance(other, GraphNode) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
