"""
graph/
-----
Core data layer.  Public API:

    from graph import FlowGraph, GraphNode, GraphEdge
    from graph import NodeKind
"""

from graph.node  import GraphNode, NodeKind
from graph.edge  import GraphEdge, edge_id
from graph.graph import FlowGraph

__all__ = [
    "GraphNode", "NodeKind",
    "GraphEdge", "edge_id",
    "FlowGraph",
]
