"""Tests for link prediction scores."""

import math

import pytest

from gconduit.exceptions import ConfigurationError, UnknownVertexError
from gconduit.graphs import (
    Graph,
    LinkScore,
    adamic_adar_index,
    common_neighbors,
    jaccard_coefficient,
    predict_links,
)


def square():
    G = Graph()
    G.add_edges_from([("A", "B"), ("B", "C"), ("A", "D"), ("D", "C")])
    return G


class TestNeighborhoodScores:
    """Tests for pairwise similarity scores."""

    def test_common_neighbors(self):
        """Test shared neighbors come back in u's adjacency order."""
        assert common_neighbors(square(), "A", "C") == ("B", "D")
        assert common_neighbors(square(), "A", "B") == ()

    def test_common_neighbors_directed(self):
        """Test directed graphs count u -> x -> v intermediates only."""
        G = Graph(directed=True)
        G.add_edges_from([("A", "B"), ("B", "C"), ("D", "A"), ("D", "C")])
        assert common_neighbors(G, "A", "C") == ("B",)
        assert common_neighbors(G, "C", "A") == ()

    def test_jaccard(self):
        """Test Jaccard on identical and partial neighborhoods."""
        assert jaccard_coefficient(square(), "A", "C") == pytest.approx(1.0)
        G = square()
        G.add_edge("A", "E")
        assert jaccard_coefficient(G, "A", "C") == pytest.approx(2 / 3)

    def test_jaccard_empty(self):
        """Test two isolated vertices score zero."""
        G = Graph()
        G.add_vertex("A")
        G.add_vertex("B")
        assert jaccard_coefficient(G, "A", "B") == 0.0

    def test_adamic_adar(self):
        """Test Adamic-Adar weights each intermediate by 1 / log(degree)."""
        assert adamic_adar_index(square(), "A", "C") == pytest.approx(2 / math.log(2))

    def test_adamic_adar_hub_counts_less(self):
        """Test a high-degree intermediate contributes less."""
        G = Graph()
        G.add_edges_from([("A", "H"), ("H", "C"), ("A", "R"), ("R", "C")])
        for leaf in range(5):
            G.add_edge("H", leaf)
        score = adamic_adar_index(G, "A", "C")
        assert score == pytest.approx(1 / math.log(7) + 1 / math.log(2))

    def test_adamic_adar_degree_one_intermediate(self):
        """Test a degree-1 intermediate contributes 1 in a directed graph."""
        G = Graph(directed=True)
        G.add_edges_from([("A", "B"), ("B", "C")])
        assert adamic_adar_index(G, "A", "C") == 1.0

    def test_unknown_vertex(self):
        """Test unknown vertices raise UnknownVertexError."""
        with pytest.raises(UnknownVertexError):
            common_neighbors(square(), "A", "Z")
        with pytest.raises(UnknownVertexError):
            adamic_adar_index(square(), "Z", "A")


class TestPredictLinks:
    """Tests for ranked link prediction."""

    def test_path(self):
        """Test the two ends of a path are the only candidate."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("B", "C")])
        predictions = predict_links(G)
        assert len(predictions) == 1
        assert predictions[0].source == "A"
        assert predictions[0].target == "C"
        assert predictions[0].score == pytest.approx(1 / math.log(2))

    def test_ties_keep_insertion_order(self):
        """Test equal scores are ordered by source then target position."""
        G = Graph()
        for leaf in (1, 2, 3):
            G.add_edge(0, leaf)
        pairs = [(p.source, p.target) for p in predict_links(G)]
        assert pairs == [(1, 2), (1, 3), (2, 3)]
        assert len(predict_links(G, top_k=2)) == 2

    def test_ranked_by_score(self):
        """Test higher scores come first."""
        G = square()
        G.add_edge("C", "E")
        predictions = predict_links(G, method="common_neighbors")
        assert predictions[0] == LinkScore("A", "C", 2.0)
        scores = [p.score for p in predictions]
        assert scores == sorted(scores, reverse=True)

    def test_existing_edges_excluded(self):
        """Test existing edges are skipped unless requested."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("B", "C"), ("C", "A")])
        assert predict_links(G) == ()
        included = predict_links(G, include_existing=True)
        assert {(p.source, p.target) for p in included} == {("A", "B"), ("A", "C"), ("B", "C")}

    def test_directed(self):
        """Test directed predictions follow edge direction."""
        G = Graph(directed=True)
        G.add_edges_from([("A", "B"), ("B", "C")])
        assert [(p.source, p.target) for p in predict_links(G, method="jaccard")] == [("A", "C")]

    def test_invalid_options(self):
        """Test unknown methods and non-positive top_k are rejected."""
        with pytest.raises(ConfigurationError):
            predict_links(square(), method="katz")
        with pytest.raises(ConfigurationError):
            predict_links(square(), top_k=0)
