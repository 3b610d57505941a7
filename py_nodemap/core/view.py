"""
Render-ready data derived from a world state.

Nothing here affects game logic. The renderer draws node markers, edge
segments and decoration polygons straight from a MapView.
"""

import math
from enum import Enum
from typing import List, NamedTuple, Optional

from ..config import settings
from .geometry import (
    LineSegment,
    Point,
    direction_between,
    rotate,
    scale_vector_to_length,
    translate,
)
from .graph_builder import EdgeDirection, Graph
from .map_document import DecorationSet
from .world import WorldState, current_node_id, move


class ReachabilityClass(Enum):
    """How a node relates to the player's position."""
    CURRENT_LOCATION = "current"
    DIRECTLY_REACHABLE = "reachable"
    UNREACHABLE = "unreachable"


class NodeView(NamedTuple):
    node_id: int
    location: Point
    reachability: ReachabilityClass
    opacity: float


class EdgeView(NamedTuple):
    edge: EdgeDirection
    segment: LineSegment


class MapView(NamedTuple):
    """Everything the renderer consumes for one frame."""
    nodes: List[NodeView]
    edges: List[EdgeView]
    decorations: DecorationSet
    node_radius: float
    edge_stroke_width: float
    edge_stroke_color: str


def edge_geometry(graph: Graph, edge: EdgeDirection) -> Optional[LineSegment]:
    """Segment between the edge's endpoints, None if either node is unknown."""
    start = graph.location(edge.origin)
    end = graph.location(edge.destination)
    if start is None or end is None:
        return None
    return LineSegment(start, end)


def visual_edge_segment(segment: LineSegment,
                        node_radius: Optional[float] = None,
                        stroke_width: Optional[float] = None) -> Optional[LineSegment]:
    """
    Segment to draw for an edge.

    Both ends are pulled in by node_radius + stroke_width so the line stops
    short of the node markers, then the segment is shifted stroke_width to the
    side so opposite directions of a link are drawn next to each other.

    Args:
        segment: Full centre-to-centre segment
        node_radius: Defaults to settings.node_radius
        stroke_width: Defaults to settings.edge_stroke_width

    Returns:
        Trimmed and offset segment, or None for a zero-length segment
    """
    if node_radius is None:
        node_radius = settings.node_radius
    if stroke_width is None:
        stroke_width = settings.edge_stroke_width

    direction = direction_between(segment.start, segment.end)
    if direction is None:
        return None

    trim = node_radius + stroke_width
    offset = scale_vector_to_length(rotate(direction, math.pi / 2), stroke_width)

    start = translate(segment.start, scale_vector_to_length(direction, trim))
    end = translate(segment.end, scale_vector_to_length(direction, -trim))

    return LineSegment(translate(start, offset), translate(end, offset))


def reachability_class(state: WorldState, node_id: int) -> ReachabilityClass:
    if current_node_id(state) == node_id:
        return ReachabilityClass.CURRENT_LOCATION
    if move(state, node_id).player_location != state.player_location:
        return ReachabilityClass.DIRECTLY_REACHABLE
    return ReachabilityClass.UNREACHABLE


def _opacity(reachability: ReachabilityClass) -> float:
    if reachability is ReachabilityClass.CURRENT_LOCATION:
        return settings.current_node_opacity
    if reachability is ReachabilityClass.DIRECTLY_REACHABLE:
        return settings.reachable_node_opacity
    return settings.unreachable_node_opacity


def build_view(state: WorldState) -> MapView:
    """
    Collect node, edge and decoration data for the renderer.

    Nodes come in id order and edges in (origin, destination) order. Edges
    without drawable geometry are left out.
    """
    nodes = []
    for node_id in sorted(state.graph.nodes):
        reachability = reachability_class(state, node_id)
        nodes.append(NodeView(node_id,
                              state.graph.nodes[node_id].visual_location,
                              reachability,
                              _opacity(reachability)))

    edges = []
    for edge in sorted(state.graph.edges, key=lambda e: (e.origin, e.destination)):
        segment = edge_geometry(state.graph, edge)
        visual = visual_edge_segment(segment) if segment is not None else None
        if visual is not None:
            edges.append(EdgeView(edge, visual))

    return MapView(
        nodes=nodes,
        edges=edges,
        decorations=state.decorations,
        node_radius=settings.node_radius,
        edge_stroke_width=settings.edge_stroke_width,
        edge_stroke_color=settings.edge_stroke_color,
    )
