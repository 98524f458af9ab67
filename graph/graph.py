"""
graph.py - Flow Graph Container
===============================
Single source of truth for a built diagram.  The layout builder writes
it once per input load; the highlighter and the renderer only read it.

Responsibilities:
  1. Insert-if-absent on nodes & edges      (first declaration wins)
  2. Adjacency queries                      (neighbours, incident edges)
  3. Serialisation for the JSON API         (to_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
    Dict insertion order is the creation order, which keeps output
    deterministic for a given input sequence.
  - `add_node` / `add_edge` never overwrite.  A repeated id returns the
    stored instance untouched, so a node's position is fixed at creation.
  - An edge is only stored when both endpoints already exist.
"""

from typing import Dict, List, Optional, Set

from graph.node import GraphNode, NodeKind
from graph.edge import GraphEdge


class FlowGraph:
    """
    Attributes:
        nodes : {node_id: GraphNode}
        edges : {edge_id: GraphEdge}
    """

    def __init__(self):
        self.nodes: Dict[str, GraphNode] = {}
        self.edges: Dict[str, GraphEdge] = {}

    # ==================================================================
    # INSERT-IF-ABSENT
    # ==================================================================
    def add_node(self, node: GraphNode) -> GraphNode:
        """Store `node` unless its id is taken; return whichever is stored."""
        return self.nodes.setdefault(node.id, node)

    def add_edge(self, edge: GraphEdge) -> Optional[GraphEdge]:
        """Store `edge` unless its id is taken.  None if an endpoint is missing."""
        if edge.source not in self.nodes or edge.target not in self.nodes:
            return None
        return self.edges.setdefault(edge.id, edge)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self.nodes.get(node_id)

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def incident_edges(self, node_id: str) -> List[GraphEdge]:
        """Edges with node_id as source or target."""
        return [e for e in self.edges.values() if e.touches(node_id)]

    def neighbours(self, node_id: str) -> Set[str]:
        """One-hop neighbourhood, ignoring edge direction."""
        return {e.other_end(node_id) for e in self.incident_edges(node_id)}

    def nodes_of_kind(self, kind: NodeKind) -> List[GraphNode]:
        return [n for n in self.nodes.values() if n.kind is kind]

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def copy(self) -> "FlowGraph":
        """New containers over the same node and edge objects."""
        g = FlowGraph()
        g.nodes = dict(self.nodes)
        g.edges = dict(self.edges)
        return g

    def __repr__(self) -> str:
        return f"FlowGraph(nodes={self.node_count()}, edges={self.edge_count()})"
