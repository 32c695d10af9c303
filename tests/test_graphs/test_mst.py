"""Tests for minimum spanning tree algorithms."""

import pytest

from gconduit.exceptions import MissingWeightError, UnknownVertexError
from gconduit.graphs import Graph, UnionFind, kruskal_mst, prim_mst

TEXTBOOK_EDGES = [
    ("A", "B", 4),
    ("A", "E", 8),
    ("B", "C", 8),
    ("B", "E", 11),
    ("B", "F", 7),
    ("C", "D", 7),
    ("C", "G", 4),
    ("C", "F", 2),
    ("D", "G", 9),
    ("D", "H", 14),
    ("E", "F", 1),
    ("F", "G", 6),
    ("G", "H", 10),
    ("H", "F", 2),
]


def textbook_graph():
    G = Graph(weighted=True)
    G.add_edges_from(TEXTBOOK_EDGES)
    return G


def brute_force_mst_weight(vertices, edges):
    """Minimum total weight over all spanning trees (small graphs only)."""
    from itertools import combinations

    best = None
    for subset in combinations(edges, len(vertices) - 1):
        uf = UnionFind(vertices)
        if all(uf.union(u, v) for u, v, _ in subset):
            total = sum(w for _, _, w in subset)
            best = total if best is None else min(best, total)
    return best


class TestKruskal:
    """Tests for Kruskal's MST algorithm."""

    def test_kruskal_simple(self):
        """Test Kruskal on a triangle."""
        G = Graph(weighted=True)
        G.add_edges_from([("A", "B", 1.0), ("B", "C", 2.0), ("A", "C", 3.0)])

        mst = kruskal_mst(G)
        assert len(mst) == 2
        assert mst.total_weight == 3.0
        assert mst.edges == (("A", "B", 1.0), ("B", "C", 2.0))

    def test_textbook_graph(self):
        """Test the eight-vertex graph selects seven edges of total weight 27."""
        mst = kruskal_mst(textbook_graph())
        assert len(mst.edges) == 7
        assert mst.total_weight == 27.0

    def test_matches_independent_minimum(self):
        """Test the total equals an independently computed minimum."""
        G = Graph(weighted=True)
        edges = TEXTBOOK_EDGES[:10]
        G.add_edges_from(edges)
        expected = brute_force_mst_weight(G.vertices(), edges)
        assert kruskal_mst(G).total_weight == expected

    def test_spans_every_vertex(self):
        """Test the selected edges connect every vertex without cycles."""
        G = textbook_graph()
        uf = UnionFind(G.vertices())
        for u, v, _ in kruskal_mst(G).edges:
            assert uf.union(u, v)
        assert uf.set_count == 1

    def test_disconnected_forest(self):
        """Test Kruskal returns a spanning forest on disconnected graphs."""
        G = Graph(weighted=True)
        G.add_edge("A", "B", 1.0)
        G.add_edge("C", "D", 2.0)
        mst = kruskal_mst(G)
        assert len(mst) == 2
        assert mst.total_weight == 3.0

    def test_tie_keeps_insertion_order(self):
        """Test equal weights are taken in insertion order."""
        G = Graph(weighted=True)
        G.add_edges_from([("A", "B", 1.0), ("B", "C", 1.0), ("A", "C", 1.0)])
        assert [e[:2] for e in kruskal_mst(G).edges] == [("A", "B"), ("B", "C")]

    def test_self_loops_ignored(self):
        """Test self-loops never join the tree."""
        G = Graph(weighted=True)
        G.add_edge("A", "A", 0.0)
        G.add_edge("A", "B", 1.0)
        assert kruskal_mst(G).edges == (("A", "B", 1.0),)

    def test_unweighted(self):
        """Test unweighted graphs count each edge as 1."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("B", "C"), ("C", "A")])
        assert kruskal_mst(G).total_weight == 2.0

    def test_missing_weight(self):
        """Test a weighted graph with a missing weight fails fast."""
        G = Graph(weighted=True)
        G.add_edge("A", "B")
        with pytest.raises(MissingWeightError):
            kruskal_mst(G)

    def test_empty_graph(self):
        """Test an empty graph has an empty tree."""
        mst = kruskal_mst(Graph(weighted=True))
        assert mst.edges == ()
        assert mst.total_weight == 0.0


class TestPrim:
    """Tests for Prim's MST algorithm."""

    def test_prim_simple(self):
        """Test Prim on a path."""
        G = Graph(weighted=True)
        G.add_edge("A", "B", 1.0)
        G.add_edge("B", "C", 2.0)
        assert prim_mst(G, "A").edges == (("A", "B", 1.0), ("B", "C", 2.0))

    def test_textbook_graph(self):
        """Test Prim finds the same total as Kruskal."""
        G = textbook_graph()
        mst = prim_mst(G)
        assert len(mst) == 7
        assert mst.total_weight == 27.0

    def test_any_start(self):
        """Test the total does not depend on the start vertex."""
        G = textbook_graph()
        for start in G:
            assert prim_mst(G, start).total_weight == 27.0

    def test_agrees_with_kruskal(self, random_graph):
        """Test Prim and Kruskal agree on random weighted graphs."""
        for directed in (False, True):
            G = random_graph(30, 0.2, directed=directed, weighted=True)
            assert prim_mst(G).total_weight == pytest.approx(kruskal_mst(G).total_weight)
            assert len(prim_mst(G)) == len(kruskal_mst(G))

    def test_disconnected_forest(self):
        """Test Prim covers every component."""
        G = Graph(weighted=True)
        G.add_edge("A", "B", 1.0)
        G.add_edge("C", "D", 2.0)
        G.add_vertex("E")
        mst = prim_mst(G)
        assert mst.edges == (("A", "B", 1.0), ("C", "D", 2.0))

    def test_unknown_start(self):
        """Test an unknown start raises UnknownVertexError."""
        G = Graph(weighted=True)
        G.add_edge("A", "B", 1.0)
        with pytest.raises(UnknownVertexError):
            prim_mst(G, "Z")
