"""Tests for the three-column layout builder."""

import logging

import pytest

from graph import NodeKind
from layout import CommandEvent, LayoutState, PolicyCommand, build, build_from_data, color_of
from layout import constants as C
from layout.builder import place_command, place_external_event


def positions(graph):
    return {nid: (n.x, n.y) for nid, n in graph.nodes.items()}


class TestEndToEnd:
    def test_nodes_and_positions(self, order_graph):
        assert positions(order_graph) == {
            "command-PlaceOrder": (100, 0),
            "event-OrderPlaced": (600, 0),
            "policy-NotifyWarehouse": (1100, 0),
            "command-ShipOrder": (100, 75),
        }

    def test_edges(self, order_graph):
        assert list(order_graph.edges) == [
            "command-PlaceOrder-event-OrderPlaced",
            "event-OrderPlaced-policy-NotifyWarehouse",
            "policy-NotifyWarehouse-command-ShipOrder",
        ]

    def test_policy_and_its_edges_share_event_color(self, order_graph):
        color = color_of("OrderPlaced")
        assert order_graph.nodes["policy-NotifyWarehouse"].color == color
        assert order_graph.nodes["policy-NotifyWarehouse"].border == color
        assert order_graph.edges["event-OrderPlaced-policy-NotifyWarehouse"].color == color
        assert order_graph.edges["policy-NotifyWarehouse-command-ShipOrder"].color == color

    def test_command_edges_are_slate(self, order_graph):
        edge = order_graph.edges["command-PlaceOrder-event-OrderPlaced"]
        assert edge.color == C.LINK_COLOR
        assert edge.animated is True

    def test_missing_command_is_logged(self, order_flow, caplog):
        with caplog.at_level(logging.WARNING, logger="layout.builder"):
            build_from_data(order_flow)
        assert "ShipOrder" in caplog.text


class TestCommandsPass:
    def test_command_centred_on_its_events(self):
        g = build([CommandEvent("A", ("e1", "e2", "e3")), CommandEvent("B", ("e4",))], [])
        assert positions(g) == {
            "command-A": (100, 100),
            "event-e1": (600, 0),
            "event-e2": (600, 100),
            "event-e3": (600, 200),
            "command-B": (100, 275),
            "event-e4": (600, 275),
        }

    def test_two_events_put_command_between_them(self):
        g = build([CommandEvent("A", ("x", "y"))], [])
        assert g.nodes["command-A"].y == 50

    def test_repeated_command_keeps_first_position(self):
        g = build([CommandEvent("A", ("x",)), CommandEvent("A", ("y",))], [])
        assert len(g.nodes_of_kind(NodeKind.COMMAND)) == 1
        assert g.nodes["command-A"].y == 0
        assert g.nodes["event-y"].y == 75
        assert set(g.edges) == {"command-A-event-x", "command-A-event-y"}

    def test_shared_event_is_not_moved(self):
        g = build([CommandEvent("A", ("x",)), CommandEvent("B", ("x",))], [])
        assert g.nodes["event-x"].y == 0
        assert g.nodes["command-B"].y == 75
        assert len(g.nodes_of_kind(NodeKind.EVENT)) == 1
        assert set(g.edges) == {"command-A-event-x", "command-B-event-x"}

    def test_repeated_command_event_pair_gives_one_edge(self):
        g = build([CommandEvent("A", ("x", "x"))], [])
        assert list(g.edges) == ["command-A-event-x"]
        assert g.nodes["event-x"].y == 0

    def test_command_without_events_is_accepted(self):
        g = build([CommandEvent("A", ()), CommandEvent("B", ("x",))], [])
        assert g.nodes["command-A"].y == -50
        assert g.nodes["command-B"].y == -25
        assert g.edge_count() == 1

    def test_same_name_different_kinds_are_distinct(self):
        g = build([CommandEvent("Foo", ("Foo",))], [])
        assert set(g.nodes) == {"command-Foo", "event-Foo"}

    def test_empty_labels_make_degenerate_nodes(self):
        g = build([CommandEvent("", ("",))], [])
        assert set(g.nodes) == {"command-", "event-"}
        assert g.nodes["command-"].label == ""


class TestPoliciesPass:
    def test_external_events_stack_below_commands(self):
        g = build(
            [CommandEvent("A", ("x",))],
            [
                PolicyCommand("P1", "ext1", "A"),
                PolicyCommand("P2", "ext2", "A"),
                PolicyCommand("P3", "ext1", "A"),
            ],
        )
        assert g.nodes["event-ext1"].y == 75
        assert g.nodes["event-ext2"].y == 150
        assert [n.y for n in g.nodes_of_kind(NodeKind.POLICY)] == [0, 75, 150]

    def test_duplicate_policy_records_dedupe(self):
        record = PolicyCommand("P", "x", "A")
        g = build([CommandEvent("A", ("x",))], [record, record])
        assert len(g.nodes_of_kind(NodeKind.POLICY)) == 1
        assert set(g.edges) == {"command-A-event-x", "event-x-policy-P", "policy-P-command-A"}

    def test_policy_keeps_color_of_first_trigger(self):
        g = build(
            [CommandEvent("A", ("e1", "e2"))],
            [PolicyCommand("P", "e1", "A"), PolicyCommand("P", "e2", "A")],
        )
        assert g.nodes["policy-P"].color == color_of("e1")
        assert g.edges["event-e2-policy-P"].color == color_of("e2")
        assert g.edges["policy-P-command-A"].color == color_of("e1")

    def test_missing_command_edge_skipped_when_not_creating(self, order_flow, caplog):
        with caplog.at_level(logging.WARNING, logger="layout.builder"):
            g = build_from_data(order_flow, create_missing_commands=False)
        assert "command-ShipOrder" not in g.nodes
        assert "policy-NotifyWarehouse-command-ShipOrder" not in g.edges
        assert g.node_count() == 3
        assert g.edge_count() == 2
        assert "edge skipped" in caplog.text

    def test_missing_commands_take_the_running_cursor(self):
        g = build(
            [CommandEvent("A", ("x",))],
            [PolicyCommand("P1", "ext", "B"), PolicyCommand("P2", "x", "C")],
        )
        # A band ends at 75, external event "ext" takes 75, then B and C follow
        assert g.nodes["event-ext"].y == 75
        assert g.nodes["command-B"].y == 150
        assert g.nodes["command-C"].y == 225


class TestInvariants:
    def test_columns(self, shop_flow):
        g = build_from_data(shop_flow)
        expected_x = {NodeKind.COMMAND: 100, NodeKind.EVENT: 600, NodeKind.POLICY: 1100}
        for node in g.nodes.values():
            assert node.x == expected_x[node.kind]

    def test_every_edge_has_both_endpoints(self, shop_flow):
        g = build_from_data(shop_flow)
        for edge in g.edges.values():
            assert edge.source in g.nodes
            assert edge.target in g.nodes

    def test_kind_styles(self, shop_flow):
        g = build_from_data(shop_flow)
        for node in g.nodes_of_kind(NodeKind.COMMAND):
            assert (node.color, node.border) == (C.COMMAND_FILL, C.COMMAND_BORDER)
        for node in g.nodes_of_kind(NodeKind.EVENT):
            assert (node.color, node.border) == (C.EVENT_FILL, C.EVENT_BORDER)

    def test_deterministic(self, shop_flow):
        assert build_from_data(shop_flow).to_dict() == build_from_data(shop_flow).to_dict()

    def test_empty_input(self):
        g = build([], [])
        assert g.node_count() == 0
        assert g.edge_count() == 0


class TestPassesInIsolation:
    def test_place_command_advances_cursor(self):
        state = place_command(LayoutState(), CommandEvent("A", ("x", "y")))
        assert state.y_offset == 175
        assert state.graph.node_ids() == ["command-A", "event-x", "event-y"]

    def test_place_external_event_skips_known_events(self):
        state = place_command(LayoutState(), CommandEvent("A", ("x",)))
        state = place_external_event(state, PolicyCommand("P", "x", "A"))
        assert state.y_offset == 75
        state = place_external_event(state, PolicyCommand("P", "ext", "A"))
        assert state.y_offset == 150
        assert state.graph.nodes["event-ext"].y == 75

    @pytest.mark.parametrize("prefix", [0, 1, 2])
    def test_prefix_layout_is_stable(self, shop_flow, prefix):
        full = build_from_data(shop_flow)
        partial = build(shop_flow.command_events[:prefix], [])
        for nid, node in partial.nodes.items():
            assert (node.x, node.y) == (full.nodes[nid].x, full.nodes[nid].y)

    def test_build_leaves_passed_state_untouched(self):
        start = place_command(LayoutState(), CommandEvent("A", ("x",)))
        g = build([CommandEvent("B", ("y",))], [PolicyCommand("P", "y", "C")], state=start)
        assert start.y_offset == 75
        assert start.graph.node_ids() == ["command-A", "event-x"]
        assert start.policy_count == 0
        assert start.colors == {}
        assert g.node_ids()[:2] == ["command-A", "event-x"]
        assert g.nodes["command-B"].y == 75
