"""
highlighter.py - Selection Highlighter
======================================
Pure function: (FlowGraph, selected node id) → re-styled FlowGraph.

With nothing selected the graph comes back as-is.  With a node selected:

    connected = {selected} ∪ targets of its out-edges ∪ sources of its in-edges

  • edges touching the selected node   opacity 1,    width 3, animated
  • every other edge                   opacity 0.15, width 2, still
  • nodes in `connected`               opacity 1
  • every other node                   opacity 0.3

Only one hop is followed; neighbours of neighbours are dimmed.

Design decisions:
  - Highlighting is a separate layer.  `overrides()` computes per-id
    NodeOverride / EdgeOverride records; `apply()` merges them onto copies
    of the base nodes & edges.  The input graph is never touched, so a new
    selection always starts from the clean base style.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Set, Tuple

from graph import FlowGraph
from graph.edge import DEFAULT_STROKE_WIDTH

ACTIVE_EDGE_WIDTH = 3
DIMMED_EDGE_OPACITY = 0.15
DIMMED_NODE_OPACITY = 0.3


@dataclass(frozen=True)
class NodeOverride:
    opacity: float


@dataclass(frozen=True)
class EdgeOverride:
    opacity:      float
    stroke_width: float
    animated:     bool


ACTIVE_EDGE   = EdgeOverride(opacity=1.0, stroke_width=ACTIVE_EDGE_WIDTH, animated=True)
INACTIVE_EDGE = EdgeOverride(opacity=DIMMED_EDGE_OPACITY, stroke_width=DEFAULT_STROKE_WIDTH, animated=False)


def connectivity_set(graph: FlowGraph, selected: str) -> Set[str]:
    """The selected node plus its one-hop neighbours in either direction."""
    return {selected} | graph.neighbours(selected)


def overrides(
    graph: FlowGraph, selected: str
) -> Tuple[Dict[str, NodeOverride], Dict[str, EdgeOverride]]:
    connected = connectivity_set(graph, selected)
    node_layer = {
        nid: NodeOverride(1.0 if nid in connected else DIMMED_NODE_OPACITY)
        for nid in graph.nodes
    }
    edge_layer = {
        eid: ACTIVE_EDGE if edge.touches(selected) else INACTIVE_EDGE
        for eid, edge in graph.edges.items()
    }
    return node_layer, edge_layer


def apply(
    graph: FlowGraph,
    node_layer: Dict[str, NodeOverride],
    edge_layer: Dict[str, EdgeOverride],
) -> FlowGraph:
    """New graph with the override layers merged onto copies of the base style."""
    out = FlowGraph()
    for nid, node in graph.nodes.items():
        layer = node_layer.get(nid)
        out.add_node(node.with_opacity(layer.opacity) if layer else node)
    for eid, edge in graph.edges.items():
        layer = edge_layer.get(eid)
        if layer:
            edge = edge.restyled(layer.animated, layer.opacity, layer.stroke_width)
        out.add_edge(edge)
    return out


def highlight(graph: FlowGraph, selected: Optional[str]) -> FlowGraph:
    if selected is None:
        return graph
    return apply(graph, *overrides(graph, selected))
