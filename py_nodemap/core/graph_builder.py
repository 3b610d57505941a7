"""
Navigable graph construction.

Builds the edge set for a map from its node locations:
1. Enumerate every ordered node pair as a candidate edge
2. Keep candidates shorter than a distance threshold
3. Remove longer edges that cross shorter ones

Edges are directed. Construction starts symmetric, but pruning judges each
direction on its own, so a link can survive in one direction only.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Sequence

import numpy as np
import structlog
from scipy.spatial.distance import cdist

from ..config import settings
from .geometry import (
    LineSegment,
    Point,
    scale_segment_about_point,
    segment_intersection,
    segment_length,
    segment_midpoint,
)

logger = structlog.get_logger()


class Node(NamedTuple):
    """A graph vertex with its on-screen location."""
    id: int
    visual_location: Point


@dataclass(frozen=True)
class EdgeDirection:
    """A directed link from origin to destination."""
    origin: int
    destination: int

    def __post_init__(self):
        if self.origin == self.destination:
            raise ValueError(f"Edge endpoints must differ, got {self.origin} twice")

    def reversed(self) -> "EdgeDirection":
        return EdgeDirection(self.destination, self.origin)


@dataclass(frozen=True)
class Graph:
    """Nodes keyed by id plus the set of traversable directed edges."""
    nodes: Dict[int, Node] = field(default_factory=dict)
    edges: FrozenSet[EdgeDirection] = field(default_factory=frozenset)

    def __hash__(self):
        return hash((frozenset(self.nodes.items()), self.edges))

    def location(self, node_id: int) -> Optional[Point]:
        node = self.nodes.get(node_id)
        return node.visual_location if node is not None else None

    def has_edge(self, origin: int, destination: int) -> bool:
        if origin == destination:
            return False
        return EdgeDirection(origin, destination) in self.edges


def nodes_from_locations(locations: Iterable[Point]) -> List[Node]:
    """Assign sequential ids, starting at 0, in the given order."""
    return [Node(i, Point(*location)) for i, location in enumerate(locations)]


def candidate_edges(node_ids: Sequence[int]) -> List[EdgeDirection]:
    """
    Every ordered pair of distinct nodes.

    The enumeration order (origin-major) is the tie-break order used when
    ranking equally long edges.
    """
    return [
        EdgeDirection(origin, destination)
        for origin in node_ids
        for destination in node_ids
        if origin != destination
    ]


def filter_by_distance(candidates: Sequence[EdgeDirection],
                       locations: Mapping[int, Point],
                       threshold: float) -> List[EdgeDirection]:
    """
    Keep candidates whose endpoints are strictly closer than threshold.

    Args:
        candidates: Edges to filter, order is preserved
        locations: Node id to location
        threshold: Exclusive maximum edge length

    Returns:
        Filtered edges
    """
    if not candidates:
        return []

    ids = list(locations)
    index = {node_id: i for i, node_id in enumerate(ids)}
    coords = np.array([locations[node_id] for node_id in ids], dtype=float)
    distances = cdist(coords, coords)

    return [
        edge for edge in candidates
        if distances[index[edge.origin], index[edge.destination]] < threshold
    ]


def edge_segment(edge: EdgeDirection, locations: Mapping[int, Point]) -> LineSegment:
    return LineSegment(locations[edge.origin], locations[edge.destination])


def edge_priorities(edges: Sequence[EdgeDirection],
                    locations: Mapping[int, Point]) -> Dict[EdgeDirection, int]:
    """
    Rank edges by length, shortest first.

    Priority is the negated rank: the shortest edge gets 0, the next -1 and
    so on. The sort is stable, so equal lengths keep enumeration order and
    every priority is unique.
    """
    ranked = sorted(edges, key=lambda edge: segment_length(edge_segment(edge, locations)))
    return {edge: -rank for rank, edge in enumerate(ranked)}


def remove_longer_intersecting(edges: Sequence[EdgeDirection],
                               locations: Mapping[int, Point],
                               shrink_factor: Optional[float] = None) -> List[EdgeDirection]:
    """
    Drop every edge crossed by an edge of equal or higher priority.

    Segments are shrunk about their midpoints before testing so edges that
    share an endpoint never count as crossing. An edge is never compared with
    itself or with its reverse. All decisions are made against the full input
    set in a single pass; removing an edge does not rescue the edges it crossed.

    Args:
        edges: Distance-filtered edges
        locations: Node id to location
        shrink_factor: Segment scale for the crossing test, defaults to
            settings.intersection_shrink_factor

    Returns:
        Surviving edges in input order
    """
    if shrink_factor is None:
        shrink_factor = settings.intersection_shrink_factor

    priorities = edge_priorities(edges, locations)
    shrunk = {}
    for edge in edges:
        segment = edge_segment(edge, locations)
        shrunk[edge] = scale_segment_about_point(segment, segment_midpoint(segment), shrink_factor)

    survivors = []
    for edge in edges:
        reverse = edge.reversed()
        dominated = any(
            priorities[other] >= priorities[edge]
            and segment_intersection(shrunk[edge], shrunk[other]) is not None
            for other in edges
            if other != edge and other != reverse
        )
        if not dominated:
            survivors.append(edge)

    return survivors


def build_graph(nodes: Sequence[Node], threshold: Optional[float] = None) -> Graph:
    """
    Build the navigable graph for a set of nodes.

    Args:
        nodes: Nodes in id order
        threshold: Exclusive maximum edge length, defaults to
            settings.edge_distance_threshold

    Returns:
        Graph with the surviving directed edges
    """
    if threshold is None:
        threshold = settings.edge_distance_threshold

    node_map = {node.id: node for node in nodes}
    locations = {node.id: node.visual_location for node in nodes}

    candidates = candidate_edges(list(node_map))
    nearby = filter_by_distance(candidates, locations, threshold)
    survivors = remove_longer_intersecting(nearby, locations)

    logger.info("Graph built",
                nodes=len(node_map),
                candidates=len(candidates),
                within_threshold=len(nearby),
                edges=len(survivors),
                pruned=len(nearby) - len(survivors),
                threshold=threshold)

    return Graph(nodes=node_map, edges=frozenset(survivors))
