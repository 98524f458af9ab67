"""
builder.py - Three-Column Layout Builder
========================================
Pure function: flow records → positioned, styled FlowGraph.

Columns, left to right: commands, events, policies.  Vertical placement is
rule-based, never computed by a physics or auto-layout pass:

  1. commands pass        each command reserves a band of (k-1)*100 px for
                          its k events and sits at the band's midpoint;
                          new events are stacked 100 px apart in the band.
                          The cursor then moves past the band plus 75 px.
  2. external events      events that trigger a policy but are never emitted
                          by a listed command are appended below, 75 px apart.
  3. colours              every distinct trigger event gets a palette colour.
  4. policies pass        policies are stacked 75 px apart in their own
                          column, wired event → policy → command in the
                          trigger event's colour.

Design decisions:
  - The passes are an explicit fold over a LayoutState (cursor, graph,
    policy counter, colours).  Each pass is a plain function of
    (state, records) so any prefix of the input can be laid out and
    inspected in isolation.
  - Node and edge creation go through FlowGraph's insert-if-absent, so the
    first declaration of an entity fixes its position and repeated
    declarations never move it.
  - Output depends only on input order: same records in, same graph out.
"""

import logging
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Dict, Iterable, Optional

from graph import FlowGraph, GraphEdge, GraphNode, NodeKind
from layout import constants as C
from layout.palette import color_of
from layout.records import CommandEvent, FlowData, PolicyCommand

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Fold state
# ---------------------------------------------------------------------------
@dataclass
class LayoutState:
    """
    Attributes:
        y_offset     : Running vertical cursor shared by commands, external
                       events and materialised missing commands.
        graph        : Nodes & edges created so far.
        policy_count : Distinct policies placed so far (drives policy y).
        colors       : {event_name: colour} for events that trigger policies.
    """

    y_offset:     float            = 0
    graph:        FlowGraph        = field(default_factory=FlowGraph)
    policy_count: int              = 0
    colors:       Dict[str, str]   = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Node factories
# ---------------------------------------------------------------------------
def command_node(name: str, y: float) -> GraphNode:
    return GraphNode(NodeKind.COMMAND, name, C.COMMAND_X, y, C.COMMAND_FILL, C.COMMAND_BORDER)


def event_node(name: str, y: float) -> GraphNode:
    return GraphNode(NodeKind.EVENT, name, C.EVENT_X, y, C.EVENT_FILL, C.EVENT_BORDER)


def policy_node(name: str, y: float, color: str) -> GraphNode:
    return GraphNode(NodeKind.POLICY, name, C.POLICY_X, y, color, color)


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------
def place_command(state: LayoutState, record: CommandEvent) -> LayoutState:
    """Commands pass step: one command, its events and the links between them."""
    band = (len(record.events) - 1) * C.EVENT_STEP
    graph = state.graph

    command = graph.add_node(command_node(record.command, state.y_offset + band / 2))

    for i, event_name in enumerate(record.events):
        event = graph.add_node(event_node(event_name, state.y_offset + i * C.EVENT_STEP))
        graph.add_edge(GraphEdge(command.id, event.id, C.LINK_COLOR))

    state.y_offset += band + C.VERTICAL_SPACING
    return state


def place_external_event(state: LayoutState, record: PolicyCommand) -> LayoutState:
    """External-events pass step: trigger events no command emits."""
    if not state.graph.has_node(NodeKind.EVENT.node_id(record.event)):
        state.graph.add_node(event_node(record.event, state.y_offset))
        state.y_offset += C.VERTICAL_SPACING
    return state


def assign_color(state: LayoutState, record: PolicyCommand) -> LayoutState:
    """Colour pass step: first sighting of a trigger event fixes its colour."""
    if record.event not in state.colors:
        state.colors[record.event] = color_of(record.event)
    return state


def place_policy(
    state: LayoutState,
    record: PolicyCommand,
    create_missing_commands: bool = True,
) -> LayoutState:
    """Policies pass step: the policy node plus event → policy → command."""
    graph = state.graph
    color = state.colors[record.event]

    policy_id = NodeKind.POLICY.node_id(record.policy)
    if not graph.has_node(policy_id):
        graph.add_node(policy_node(record.policy, state.policy_count * C.VERTICAL_SPACING, color))
        state.policy_count += 1

    event_id = NodeKind.EVENT.node_id(record.event)
    graph.add_edge(GraphEdge(event_id, policy_id, color))

    command_id = NodeKind.COMMAND.node_id(record.command)
    if not graph.has_node(command_id):
        if not create_missing_commands:
            log.warning(
                "policy %r issues undeclared command %r; edge skipped",
                record.policy, record.command,
            )
            return state
        log.warning(
            "policy %r issues undeclared command %r; placing it at y=%g",
            record.policy, record.command, state.y_offset,
        )
        graph.add_node(command_node(record.command, state.y_offset))
        state.y_offset += C.VERTICAL_SPACING

    graph.add_edge(GraphEdge(policy_id, command_id, color))
    return state


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
def build(
    command_events: Iterable[CommandEvent],
    policy_commands: Iterable[PolicyCommand],
    create_missing_commands: bool = True,
    state: Optional[LayoutState] = None,
) -> FlowGraph:
    """
    Lay out a flow diagram.

    Args:
        command_events          : Commands with the events they emit, in order.
        policy_commands         : Policy records, in order.
        create_missing_commands : If True, a command only named as a policy
                                  target is added below the laid-out commands.
                                  If False, the policy → command edge is dropped.
        state                   : Starting fold state (fresh by default).
                                  It is copied first and never modified.
    """
    command_events = list(command_events)
    policy_commands = list(policy_commands)
    if state is None:
        state = LayoutState()
    else:
        state = replace(state, graph=state.graph.copy(), colors=dict(state.colors))

    state = reduce(place_command, command_events, state)
    state = reduce(place_external_event, policy_commands, state)
    state = reduce(assign_color, policy_commands, state)
    state = reduce(
        lambda s, r: place_policy(s, r, create_missing_commands),
        policy_commands,
        state,
    )

    log.debug("layout built: %r", state.graph)
    return state.graph


def build_from_data(data: FlowData, create_missing_commands: bool = True) -> FlowGraph:
    return build(data.command_events, data.policy_commands, create_missing_commands)
