"""Tests for all-pairs shortest path algorithms."""

import math

import numpy as np
import pytest

from gconduit.exceptions import ConfigurationError, UnknownVertexError
from gconduit.graphs import Graph, all_pairs_shortest_paths, dijkstra, floyd_warshall


class TestFloydWarshall:
    """Tests for Floyd-Warshall algorithm."""

    def test_floyd_warshall_simple(self):
        """Test Floyd-Warshall on simple graph."""
        G = Graph(directed=True, weighted=True)
        G.add_edge("A", "B", 1.0)
        G.add_edge("B", "C", 2.0)
        G.add_edge("A", "C", 5.0)

        result = floyd_warshall(G)

        assert result.vertices == ("A", "B", "C")
        assert result.distance_between("A", "C") == 3.0
        assert result.distance_between("C", "A") == math.inf
        assert result.path("A", "C") == ["A", "B", "C"]
        assert result.path("C", "A") is None
        assert result.path("B", "B") == ["B"]
        assert result.has_negative_cycle is False

    def test_matrix_shapes(self):
        """Test distance and successor matrices."""
        G = Graph(weighted=True)
        G.add_edge("A", "B", 2.0)
        result = floyd_warshall(G)
        assert result.distance.shape == (2, 2)
        assert result.successor.dtype == np.int64
        np.testing.assert_array_equal(result.distance, [[0.0, 2.0], [2.0, 0.0]])

    def test_parallel_edges_take_minimum(self):
        """Test parallel edges contribute their smallest weight."""
        G = Graph(directed=True, weighted=True)
        G.add_edge("A", "B", 5.0)
        G.add_edge("A", "B", 2.0)
        assert floyd_warshall(G).distance_between("A", "B") == 2.0

    def test_negative_weights(self):
        """Test negative weights without a cycle."""
        G = Graph(directed=True, weighted=True)
        G.add_edge("A", "B", 4.0)
        G.add_edge("B", "C", -2.0)
        G.add_edge("A", "C", 3.0)
        result = floyd_warshall(G)
        assert result.distance_between("A", "C") == 2.0
        assert not result.has_negative_cycle

    def test_negative_cycle(self):
        """Test negative cycle detection."""
        G = Graph(directed=True, weighted=True)
        G.add_edge("A", "B", 1.0)
        G.add_edge("B", "A", -3.0)
        assert floyd_warshall(G).has_negative_cycle is True

    def test_unknown_vertex(self):
        """Test lookups of unknown vertices raise UnknownVertexError."""
        G = Graph()
        G.add_vertex("A")
        result = floyd_warshall(G)
        with pytest.raises(UnknownVertexError):
            result.distance_between("A", "Z")

    def test_matches_dijkstra(self, random_graph):
        """Test Floyd-Warshall agrees with Dijkstra from every source."""
        G = random_graph(25, 0.15, directed=True, weighted=True)
        result = floyd_warshall(G)
        for source in G:
            sp = dijkstra(G, source)
            for target in G:
                assert result.distance_between(source, target) == pytest.approx(
                    sp.distance_to(target)
                )


class TestAllPairsShortestPaths:
    """Tests for per-source all-pairs search."""

    def test_unweighted_hops(self):
        """Test the unweighted case returns float hop counts."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("B", "C")])
        result = all_pairs_shortest_paths(G)
        assert list(result) == ["A", "B", "C"]
        assert result["A"].distance["C"] == 2.0
        assert result["C"].path_to("A") == ["C", "B", "A"]

    def test_workers_do_not_change_results(self, random_graph):
        """Test threaded runs give the same results in the same order."""
        G = random_graph(30, 0.12, directed=True, weighted=True)
        serial = all_pairs_shortest_paths(G)
        threaded = all_pairs_shortest_paths(G, workers=4)
        assert list(serial) == list(threaded)
        for v in G:
            assert dict(serial[v].distance) == dict(threaded[v].distance)
            assert dict(serial[v].parent) == dict(threaded[v].parent)

    def test_negative_weights_use_bellman_ford(self):
        """Test auto picks Bellman-Ford when a weight is negative."""
        G = Graph(directed=True, weighted=True)
        G.add_edge("A", "B", 2.0)
        G.add_edge("B", "C", -1.0)
        result = all_pairs_shortest_paths(G)
        assert result["A"].distance["C"] == 1.0
        assert result["A"].has_negative_cycle is False

    def test_invalid_options(self):
        """Test invalid method or workers raise ConfigurationError."""
        G = Graph()
        G.add_edge("A", "B")
        with pytest.raises(ConfigurationError):
            all_pairs_shortest_paths(G, method="johnson")
        with pytest.raises(ConfigurationError):
            all_pairs_shortest_paths(G, workers=0)
