"""Tests for the flow graph container."""

from graph import FlowGraph, GraphEdge, GraphNode, NodeKind, edge_id


def make_graph():
    g = FlowGraph()
    g.add_node(GraphNode(NodeKind.COMMAND, "A", 100, 0, "#3b82f6"))
    g.add_node(GraphNode(NodeKind.EVENT, "x", 600, 0, "#10b981"))
    g.add_node(GraphNode(NodeKind.POLICY, "P", 1100, 0, "#ef4444"))
    g.add_edge(GraphEdge("command-A", "event-x", "#64748b"))
    g.add_edge(GraphEdge("event-x", "policy-P", "#ef4444"))
    return g


def test_node_identity_is_kind_prefixed():
    node = GraphNode(NodeKind.EVENT, "OrderPlaced", 600, 0, "#10b981")
    assert node.id == "event-OrderPlaced"
    assert node.border == node.color


def test_add_node_keeps_first_declaration():
    g = FlowGraph()
    first = g.add_node(GraphNode(NodeKind.COMMAND, "A", 100, 0, "#3b82f6"))
    again = g.add_node(GraphNode(NodeKind.COMMAND, "A", 100, 500, "#000000"))
    assert again is first
    assert g.nodes["command-A"].y == 0
    assert g.node_count() == 1


def test_add_edge_is_idempotent():
    g = make_graph()
    stored = g.edges["command-A-event-x"]
    assert g.add_edge(GraphEdge("command-A", "event-x", "#ffffff")) is stored
    assert g.edge_count() == 2
    assert stored.color == "#64748b"


def test_add_edge_refuses_dangling_endpoint():
    g = make_graph()
    assert g.add_edge(GraphEdge("policy-P", "command-Missing", "#ef4444")) is None
    assert "policy-P-command-Missing" not in g.edges


def test_edge_id_joins_endpoints():
    assert edge_id("event-x", "policy-P") == "event-x-policy-P"


def test_neighbours_ignore_direction():
    g = make_graph()
    assert g.neighbours("event-x") == {"command-A", "policy-P"}
    assert g.neighbours("command-A") == {"event-x"}
    assert g.neighbours("nope") == set()


def test_incident_edges():
    g = make_graph()
    assert {e.id for e in g.incident_edges("event-x")} == {"command-A-event-x", "event-x-policy-P"}


def test_to_dict_lists_nodes_and_edges_in_creation_order():
    data = make_graph().to_dict()
    assert [n["id"] for n in data["nodes"]] == ["command-A", "event-x", "policy-P"]
    assert [e["id"] for e in data["edges"]] == ["command-A-event-x", "event-x-policy-P"]
    assert data["nodes"][2]["kind"] == "policy"
    assert data["edges"][0]["source"] == "command-A"


def test_copy_is_independent():
    g = make_graph()
    copy = g.copy()
    copy.add_node(GraphNode(NodeKind.EVENT, "y", 600, 100, "#10b981"))
    copy.add_edge(GraphEdge("command-A", "event-y", "#64748b"))
    assert g.node_count() == 3
    assert g.edge_count() == 2
    assert copy.node_count() == 4
    assert copy.edge_count() == 3


def test_with_opacity_copies():
    node = GraphNode(NodeKind.COMMAND, "A", 100, 0, "#3b82f6")
    dim = node.with_opacity(0.3)
    assert dim.opacity == 0.3
    assert node.opacity == 1.0
    assert dim == node
