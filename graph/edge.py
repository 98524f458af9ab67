"""
edge.py - Flow Edge
===================
A directed connector between two nodes: command -> event,
event -> policy or policy -> command.

Design decisions:
  - `source` and `target` are node-id strings, NOT node references.
    This keeps edges serialisable and avoids circular references.
  - The id is derived from the endpoints ("<source>-<target>") so declaring
    the same connection twice collapses to one edge.
  - Every edge is drawn as a curved connector ending in a closed arrowhead
    in its own colour; only colour, opacity, width and animation vary.
"""

from typing import Optional


DEFAULT_STROKE_WIDTH = 2


def edge_id(source: str, target: str) -> str:
    return f"{source}-{target}"


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class GraphEdge:
    """
    Attributes:
        id           : "<source>-<target>".
        source       : ID of the tail node.
        target       : ID of the head node.
        color        : Stroke and arrowhead colour.
        animated     : Whether the renderer draws a moving dash.
        opacity      : 1.0 for the base layer; the highlighter lowers it.
        stroke_width : Line width in pixels.
    """

    __slots__ = ("id", "source", "target", "color", "animated", "opacity", "stroke_width")

    def __init__(
        self,
        source: str,
        target: str,
        color: str,
        animated: bool = True,
        opacity: float = 1.0,
        stroke_width: float = DEFAULT_STROKE_WIDTH,
    ):
        self.id:           str   = edge_id(source, target)
        self.source:       str   = source
        self.target:       str   = target
        self.color:        str   = color
        self.animated:     bool  = animated
        self.opacity:      float = opacity
        self.stroke_width: float = stroke_width

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def touches(self, node_id: str) -> bool:
        """True if node_id is either endpoint."""
        return self.source == node_id or self.target == node_id

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    def restyled(self, animated: bool, opacity: float, stroke_width: float) -> "GraphEdge":
        return GraphEdge(self.source, self.target, self.color, animated, opacity, stroke_width)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":           self.id,
            "source":       self.source,
            "target":       self.target,
            "color":        self.color,
            "animated":     self.animated,
            "opacity":      self.opacity,
            "stroke_width": self.stroke_width,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"GraphEdge({self.source} → {self.target}, color={self.color}, animated={self.animated})"

    def __eq__(self, other) -> bool:
        return isinstance(other, GraphEdge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
