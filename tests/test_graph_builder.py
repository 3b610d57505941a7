"""Tests for graph construction and edge pruning."""

import pytest
from py_nodemap.core.geometry import Point
from py_nodemap.core.graph_builder import (
    EdgeDirection, Graph, Node, build_graph, candidate_edges, edge_priorities,
    filter_by_distance, nodes_from_locations, remove_longer_intersecting,
)


def _edges(*pairs):
    return {EdgeDirection(a, b) for a, b in pairs}


def _both_ways(*pairs):
    return _edges(*pairs) | _edges(*[(b, a) for a, b in pairs])


# Unit square: four sides of 100 and two crossing diagonals of ~141.4
SQUARE = [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]

# Two crossing links, 0-1 (length 100) shorter than 2-3 (length 110)
CROSSING = [Point(0, 0), Point(100, 0), Point(50, -30), Point(50, 80)]


class TestEdgeDirection:
    """Test directed edge values."""

    def test_self_loop_rejected(self):
        """Test self loop rejected."""
        with pytest.raises(ValueError):
            EdgeDirection(3, 3)

    def test_reversed(self):
        """Test reversing an edge swaps its endpoints."""
        assert EdgeDirection(1, 2).reversed() == EdgeDirection(2, 1)

    def test_hashable_and_directed(self):
        """Test hashable and directed."""
        assert EdgeDirection(1, 2) == EdgeDirection(1, 2)
        assert EdgeDirection(1, 2) != EdgeDirection(2, 1)
        assert len({EdgeDirection(1, 2), EdgeDirection(1, 2)}) == 1


class TestCandidates:
    """Test candidate enumeration and distance filtering."""

    @pytest.mark.parametrize("n", [0, 1, 2, 5, 9])
    def test_candidate_count(self, n):
        """Test that n nodes give n*(n-1) distinct candidates."""
        candidates = candidate_edges(list(range(n)))
        assert len(candidates) == n * (n - 1)
        assert len(set(candidates)) == n * (n - 1)

    def test_enumeration_order(self):
        """Test enumeration order."""
        assert candidate_edges([0, 1, 2]) == [
            EdgeDirection(0, 1), EdgeDirection(0, 2),
            EdgeDirection(1, 0), EdgeDirection(1, 2),
            EdgeDirection(2, 0), EdgeDirection(2, 1),
        ]

    def test_nodes_from_locations(self):
        """Test nodes from locations."""
        nodes = nodes_from_locations([(1, 2), Point(3, 4)])
        assert nodes == [Node(0, Point(1, 2)), Node(1, Point(3, 4))]

    def test_distance_filter_is_strict(self):
        """Test distance filter is strict."""
        locations = {0: Point(0, 0), 1: Point(100, 0), 2: Point(0, 50)}
        candidates = candidate_edges([0, 1, 2])
        kept = filter_by_distance(candidates, locations, 100)
        assert set(kept) == _both_ways((0, 2))

    def test_distance_filter_preserves_order(self):
        """Test distance filter preserves order."""
        locations = {i: p for i, p in enumerate(SQUARE)}
        candidates = candidate_edges([0, 1, 2, 3])
        kept = filter_by_distance(candidates, locations, 120)
        assert kept == [edge for edge in candidates if edge in set(kept)]
        assert len(kept) == 8

    def test_distance_filter_empty(self):
        """Test filtering no candidates."""
        assert filter_by_distance([], {}, 100) == []


class TestRemoveLongerIntersecting:
    """Test crossing-edge pruning."""

    def test_priorities_rank_by_length(self):
        """Test priorities rank by length."""
        locations = {i: p for i, p in enumerate(SQUARE)}
        edges = candidate_edges([0, 1, 2, 3])
        priorities = edge_priorities(edges, locations)

        assert sorted(priorities.values()) == list(range(-11, 1))
        # Ties keep enumeration order
        assert priorities[EdgeDirection(0, 1)] == 0
        assert priorities[EdgeDirection(0, 3)] == -1
        assert priorities[EdgeDirection(0, 2)] == -8
        assert priorities[EdgeDirection(1, 3)] == -9
        assert priorities[EdgeDirection(2, 0)] == -10
        assert priorities[EdgeDirection(3, 1)] == -11

    def test_shorter_crossing_edge_wins(self):
        """Test shorter crossing edge wins."""
        locations = {i: p for i, p in enumerate(CROSSING)}
        edges = candidate_edges([0, 1, 2, 3])
        survivors = remove_longer_intersecting(edges, locations)

        assert set(survivors) == set(edges) - _both_ways((2, 3))
        assert _both_ways((0, 1)) <= set(survivors)

    def test_equal_length_crossing_keeps_one_direction(self):
        """Test equal length crossing keeps one direction."""
        locations = {i: p for i, p in enumerate(SQUARE)}
        edges = candidate_edges([0, 1, 2, 3])
        survivors = set(remove_longer_intersecting(edges, locations))

        sides = _both_ways((0, 1), (1, 2), (2, 3), (3, 0))
        assert survivors == sides | _edges((0, 2))

    def test_reciprocal_edges_do_not_prune_each_other(self):
        """Test reciprocal edges do not prune each other."""
        locations = {0: Point(0, 0), 1: Point(10, 10)}
        edges = [EdgeDirection(0, 1), EdgeDirection(1, 0)]
        assert remove_longer_intersecting(edges, locations) == edges

    def test_edges_sharing_an_endpoint_survive(self):
        """Test edges sharing an endpoint survive."""
        locations = {0: Point(0, 0), 1: Point(10, 0), 2: Point(0, 10)}
        edges = candidate_edges([0, 1, 2])
        assert remove_longer_intersecting(edges, locations) == edges

    def test_single_pass(self):
        """Test that removing an edge does not rescue edges it crossed."""
        # c crosses b, b crosses a; c is not rescued by b being removed
        locations = {
            0: Point(0, 0), 1: Point(100, 0),       # a: length 100
            2: Point(30, -40), 3: Point(30, 70),    # b: length 110, crosses a
            4: Point(-20, 50), 5: Point(120, 50),   # c: length 140, crosses b only
        }
        edges = [EdgeDirection(0, 1), EdgeDirection(2, 3), EdgeDirection(4, 5)]
        assert remove_longer_intersecting(edges, locations) == [EdgeDirection(0, 1)]

    def test_deterministic(self):
        """Test that pruning gives the same result on repeated runs."""
        locations = {i: p for i, p in enumerate(SQUARE)}
        edges = candidate_edges([0, 1, 2, 3])
        first = remove_longer_intersecting(edges, locations)
        second = remove_longer_intersecting(edges, locations)
        assert first == second

    def test_without_shrinking_shared_endpoints_still_ignored(self):
        """Test without shrinking shared endpoints still ignored."""
        locations = {0: Point(0, 0), 1: Point(10, 0), 2: Point(5, 5)}
        edges = candidate_edges([0, 1, 2])
        assert remove_longer_intersecting(edges, locations, shrink_factor=1.0) == edges


class TestBuildGraph:
    """Test the full builder."""

    def test_empty(self):
        """Test that no nodes give an empty graph."""
        graph = build_graph([])
        assert graph == Graph(nodes={}, edges=frozenset())

    def test_single_node(self):
        """Test single node."""
        graph = build_graph(nodes_from_locations([Point(5, 5)]))
        assert list(graph.nodes) == [0]
        assert graph.edges == frozenset()

    def test_hardcoded_map(self):
        """Test the edge set of the hardcoded five-node map."""
        nodes = nodes_from_locations([
            Point(100, 100), Point(200, 90), Point(210, 200), Point(280, 160), Point(95, 200),
        ])
        graph = build_graph(nodes, threshold=130)

        assert graph.edges == _both_ways((0, 1), (0, 4), (1, 2), (1, 3), (2, 3), (2, 4))
        assert graph.has_edge(0, 1)
        assert not graph.has_edge(0, 2)

    def test_threshold_defaults_to_settings(self):
        """Test threshold defaults to settings."""
        # 0-2 is ~148.7 apart: outside 130, inside the 160 default
        nodes = nodes_from_locations([Point(100, 100), Point(210, 200)])
        assert build_graph(nodes).edges == _both_ways((0, 1))
        assert build_graph(nodes, threshold=130).edges == frozenset()

    def test_square_graph(self):
        """Test that only one diagonal direction of a square survives."""
        graph = build_graph(nodes_from_locations(SQUARE), threshold=200)
        assert graph.has_edge(0, 2)
        assert not graph.has_edge(2, 0)
        assert not graph.has_edge(1, 3)
        assert not graph.has_edge(3, 1)

    def test_every_edge_references_nodes(self):
        """Test every edge references nodes."""
        graph = build_graph(nodes_from_locations(CROSSING), threshold=200)
        for edge in graph.edges:
            assert edge.origin in graph.nodes
            assert edge.destination in graph.nodes

    def test_graph_lookups(self):
        """Test node location and edge lookups."""
        graph = build_graph(nodes_from_locations([Point(0, 0), Point(10, 0)]))
        assert graph.location(1) == Point(10, 0)
        assert graph.location(7) is None
        assert not graph.has_edge(0, 0)

    def test_graph_is_hashable(self):
        """Test that equal graphs hash equally and can key a dict."""
        nodes = nodes_from_locations([Point(0, 0), Point(10, 0)])
        first = build_graph(nodes)
        second = build_graph(nodes)
        assert hash(first) == hash(second)
        assert {first: "map"}[second] == "map"
        assert hash(Graph()) == hash(Graph())
