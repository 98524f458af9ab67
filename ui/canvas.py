"""
canvas.py - SVG Flow Renderer
=============================
Pure rendering function: FlowGraph → SVG string.

The renderer consumes:
  • graph   – a FlowGraph, usually the highlighter's output
  • config  – visual config (margins, node box, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation, NO layout.  Positions, colours and opacities all come
    from the graph; this module only draws them.
  - Edges are cubic curves from the right side of the source box to the
    left side of the target box, ending in a closed arrowhead.  One
    <marker> per edge colour is emitted in <defs>.
  - Animated edges get the `animated` class; the page CSS moves the dash.
  - Every node group carries data-id / data-label for the click handler.
"""

from typing import Dict, List, Tuple

from markupsafe import escape

from graph import FlowGraph, GraphEdge, GraphNode, NodeKind
from layout import constants as C


# ---------------------------------------------------------------------------
# Visual Config - dimensions, fonts, minimap colours
# ---------------------------------------------------------------------------
class CanvasConfig:
    margin:        int = 40
    bg:            str = "#f8fafc"

    # node box
    node_width:    int = C.NODE_WIDTH
    node_height:   int = C.NODE_HEIGHT
    node_radius:   int = 8
    node_border:   int = 2
    font_size:     int = C.FONT_SIZE
    font_color:    str = "#ffffff"
    font_family:   str = "'DM Sans', sans-serif"

    # edge
    curve_pull:    int = 80
    arrow_size:    int = 10

    # minimap
    minimap_width: int = 220
    minimap_bg:    str = "#e2e8f0"
    minimap_colors: Dict[str, str] = {
        "command": "#3b82f6",
        "event":   "#10b981",
        "policy":  "#f59e0b",
    }
    minimap_default: str = "#64748b"


CONFIG = CanvasConfig()


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(graph: FlowGraph, config: CanvasConfig = CONFIG) -> str:
    """Returns an SVG string for the whole diagram."""
    (min_x, min_y), (width, height) = _viewport(graph, config)

    svg_parts = [
        f'<svg id="canvas-svg" width="{width}" height="{height}" '
        f'viewBox="{min_x} {min_y} {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg">',
        f'<rect class="pane" x="{min_x}" y="{min_y}" width="{width}" height="{height}" fill="{config.bg}"/>',
        _render_markers(graph, config),
    ]

    # -- edges (draw first so nodes sit on top) --
    for edge in graph.edges.values():
        svg_parts.append(_render_edge(graph, edge, config))

    # -- nodes --
    for node in graph.nodes.values():
        svg_parts.append(_render_node(node, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def render_minimap(graph: FlowGraph, config: CanvasConfig = CONFIG) -> str:
    """Scaled-down overview; nodes coloured by kind, edges omitted."""
    (min_x, min_y), (width, height) = _viewport(graph, config)
    scale = config.minimap_width / width
    mm_h = max(1, round(height * scale))

    parts = [
        f'<svg id="minimap-svg" width="{config.minimap_width}" height="{mm_h}" '
        f'viewBox="{min_x} {min_y} {width} {height}" xmlns="http://www.w3.org/2000/svg">',
        f'<rect x="{min_x}" y="{min_y}" width="{width}" height="{height}" fill="{config.minimap_bg}"/>',
    ]
    for node in graph.nodes.values():
        parts.append(
            f'<rect x="{node.x}" y="{node.y}" width="{config.node_width}" height="{config.node_height}" '
            f'rx="{config.node_radius}" fill="{minimap_color(node, config)}" opacity="{node.opacity}"/>'
        )
    parts.append("</svg>")
    return "\n".join(parts)


def minimap_color(node: GraphNode, config: CanvasConfig = CONFIG) -> str:
    return config.minimap_colors.get(node.kind.value, config.minimap_default)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _render_node(node: GraphNode, config: CanvasConfig) -> str:
    x, y = node.x, node.y
    w, h = config.node_width, config.node_height
    label = escape(node.label)

    parts = [
        f'<g class="node node-{node.kind.value}" data-id="{escape(node.id)}" '
        f'data-label="{label}" opacity="{node.opacity}">',
        f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" rx="{config.node_radius}" '
        f'fill="{node.color}" stroke="{node.border}" stroke-width="{config.node_border}"/>',
        f'  <text x="{x + w / 2}" y="{y + h / 2}" text-anchor="middle" dominant-baseline="central" '
        f'font-size="{config.font_size}" font-family="{config.font_family}" '
        f'fill="{config.font_color}">{label}</text>',
        '</g>',
    ]
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(graph: FlowGraph, edge: GraphEdge, config: CanvasConfig) -> str:
    src = graph.get_node(edge.source)
    tgt = graph.get_node(edge.target)
    if not src or not tgt:
        return ""

    # right side of the source box → left side of the target box
    x1 = src.x + config.node_width
    y1 = src.y + config.node_height / 2
    x2 = tgt.x
    y2 = tgt.y + config.node_height / 2
    pull = config.curve_pull
    path = f"M {x1} {y1} C {x1 + pull} {y1}, {x2 - pull} {y2}, {x2} {y2}"

    css = "edge animated" if edge.animated else "edge"
    return (
        f'<path class="{css}" data-id="{escape(edge.id)}" d="{path}" fill="none" '
        f'stroke="{edge.color}" stroke-width="{edge.stroke_width}" opacity="{edge.opacity}" '
        f'marker-end="url(#{_marker_id(edge.color)})"/>'
    )


def _render_markers(graph: FlowGraph, config: CanvasConfig) -> str:
    """One closed arrowhead <marker> per distinct edge colour."""
    size = config.arrow_size
    colors = dict.fromkeys(e.color for e in graph.edges.values())
    parts = ["<defs>"]
    for color in colors:
        parts.append(
            f'  <marker id="{_marker_id(color)}" viewBox="0 0 10 10" refX="10" refY="5" '
            f'markerWidth="{size}" markerHeight="{size}" markerUnits="userSpaceOnUse" orient="auto">'
            f'<path d="M 0 0 L 10 5 L 0 10 z" fill="{color}"/></marker>'
        )
    parts.append("</defs>")
    return "\n".join(parts)


def _marker_id(color: str) -> str:
    return "arrow-" + color.lstrip("#")


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
def _viewport(graph: FlowGraph, config: CanvasConfig) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Bounding box of all node boxes plus margin: ((min_x, min_y), (w, h))."""
    m = config.margin
    if not graph.nodes:
        return (0, 0), (C.POLICY_X + config.node_width + m, config.node_height + 2 * m)

    xs: List[float] = [n.x for n in graph.nodes.values()]
    ys: List[float] = [n.y for n in graph.nodes.values()]
    min_x = min(xs) - m
    min_y = min(ys) - m
    max_x = max(xs) + config.node_width + m
    max_y = max(ys) + config.node_height + m
    return (min_x, min_y), (max_x - min_x, max_y - min_y)


def kind_counts(graph: FlowGraph) -> Dict[str, int]:
    return {kind.value: len(graph.nodes_of_kind(kind)) for kind in NodeKind}
