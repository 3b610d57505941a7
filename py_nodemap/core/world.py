"""
World state and player movement.

A WorldState is an immutable value. Moving the player produces a new state
that shares the graph and decorations of the old one.
"""

from dataclasses import dataclass, replace
from typing import List

from .graph_builder import EdgeDirection, Graph
from .map_document import DecorationSet

# Player start when the map has no nodes at all
EMPTY_MAP_NODE_ID = 0


@dataclass(frozen=True)
class OnNode:
    """The player stands on a node."""
    node_id: int


# Only one kind of location exists today; in-transit positions would join here
Location = OnNode


@dataclass(frozen=True)
class WorldState:
    player_location: Location
    graph: Graph
    decorations: DecorationSet = ()


def init_world(graph: Graph, decorations: DecorationSet = ()) -> WorldState:
    """
    Create the starting state with the player on the first node.

    Args:
        graph: Navigable graph
        decorations: Cosmetic polygons

    Returns:
        WorldState on the smallest node id, or on EMPTY_MAP_NODE_ID when the
        graph has no nodes
    """
    start = min(graph.nodes) if graph.nodes else EMPTY_MAP_NODE_ID
    return WorldState(OnNode(start), graph, tuple(decorations))


def current_node_id(state: WorldState) -> int:
    return state.player_location.node_id


def outgoing_edges(graph: Graph, node_id: int) -> List[EdgeDirection]:
    """Edges leaving node_id, ordered by destination."""
    return sorted(
        (edge for edge in graph.edges if edge.origin == node_id),
        key=lambda edge: edge.destination,
    )


def move(state: WorldState, target: int) -> WorldState:
    """
    Move the player to target if an edge leads there.

    Illegal moves (no such edge, unknown node, moving onto the current node)
    return the given state unchanged.
    """
    if not state.graph.has_edge(current_node_id(state), target):
        return state
    return replace(state, player_location=OnNode(target))
