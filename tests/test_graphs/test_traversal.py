"""Tests for graph traversal algorithms."""

import pytest

from gconduit import optimization_context
from gconduit.exceptions import ConfigurationError, CycleError, UnknownVertexError
from gconduit.graphs import (
    Graph,
    bfs,
    dfs,
    dfs_recursive,
    has_cycle,
    reconstruct_path,
    topological_sort,
)


def six_vertex_graph():
    """Undirected A-F graph with two shortest routes from A to F."""
    G = Graph()
    for u, v in [("A", "B"), ("A", "C"), ("B", "D"), ("C", "E"), ("D", "F"), ("E", "F")]:
        G.add_edge(u, v)
    return G


class TestBFS:
    """Tests for breadth-first search."""

    def test_bfs_simple(self):
        """Test BFS on simple graph."""
        G = Graph()
        G.add_edge("A", "B")
        G.add_edge("A", "C")
        G.add_edge("B", "D")

        result = bfs(G, "A")

        assert result.source == "A"
        assert result.order == ("A", "B", "C", "D")
        assert dict(result.distance) == {"A": 0, "B": 1, "C": 1, "D": 2}
        assert result.parent["A"] is None
        assert result.parent["D"] == "B"

    def test_six_vertex_scenario(self):
        """Test BFS from A visits all six vertices and reaches F in three hops."""
        G = six_vertex_graph()
        result = bfs(G, "A")

        assert len(result.order) == 6
        assert set(result.order) == set("ABCDEF")
        assert result.order[0] == "A"
        assert result.distance["F"] == 3
        path = reconstruct_path(result.parent, "F")
        assert len(path) == 4
        assert path in (["A", "B", "D", "F"], ["A", "C", "E", "F"])

    @pytest.mark.parametrize("optimized", [False, True])
    def test_six_vertex_scenario_both_engines(self, optimized):
        """Test both BFS engines agree on the six-vertex scenario."""
        result = bfs(six_vertex_graph(), "A", optimized=optimized)
        assert result.order == ("A", "B", "C", "D", "E", "F")
        assert result.distance["F"] == 3
        assert result.parent["F"] == "D"

    def test_bfs_disconnected(self):
        """Test BFS leaves unreachable vertices out of the maps."""
        G = Graph()
        G.add_edge("A", "B")
        G.add_vertex("C")

        result = bfs(G, "A")
        assert "C" not in result.order
        assert "C" not in result.distance
        assert "C" not in result.parent

    def test_bfs_directed(self):
        """Test BFS follows edge direction."""
        G = Graph(directed=True)
        G.add_edge("A", "B")
        G.add_edge("C", "A")

        assert bfs(G, "A").order == ("A", "B")
        assert bfs(G, "C").order == ("C", "A", "B")

    def test_bfs_unknown_source(self):
        """Test BFS with an unknown source."""
        G = Graph()
        G.add_vertex("A")
        with pytest.raises(UnknownVertexError):
            bfs(G, "Z")
        with pytest.raises(KeyError):
            bfs(G, "Z", optimized=True)

    def test_bfs_does_not_mutate(self):
        """Test BFS leaves the graph untouched."""
        G = six_vertex_graph()
        before = (G.vertices(), G.edges())
        bfs(G, "A")
        bfs(G, "A", optimized=True)
        assert (G.vertices(), G.edges()) == before

    def test_results_read_only(self):
        """Test result maps cannot be modified."""
        result = bfs(six_vertex_graph(), "A")
        with pytest.raises(TypeError):
            result.distance["A"] = 5

    def test_config_selects_engine(self):
        """Test optimized=None follows the process-wide setting."""
        G = six_vertex_graph()
        with optimization_context(True):
            result = bfs(G, "A")
        assert result.order == bfs(G, "A", optimized=False).order

    def test_engines_agree_on_distances(self, random_graph):
        """Test both engines reach the same vertices at the same depths."""
        G = random_graph(60, 0.08, directed=True)
        for source in [0, 7, 31]:
            plain = bfs(G, source, optimized=False)
            fast = bfs(G, source, optimized=True)
            assert dict(plain.distance) == dict(fast.distance)
            assert set(plain.order) == set(fast.order)
            for v, p in fast.parent.items():
                if p is not None:
                    assert G.has_edge(p, v)
                    assert fast.distance[p] == fast.distance[v] - 1

    def test_bfs_self_loops_and_parallel_edges(self):
        """Test self-loops and parallel edges do not duplicate visits."""
        G = Graph()
        G.add_edge("A", "A")
        G.add_edge("A", "B")
        G.add_edge("A", "B")
        result = bfs(G, "A")
        assert result.order == ("A", "B")


class TestDFS:
    """Tests for depth-first search."""

    def test_dfs_recursive_simple(self):
        """Test recursive DFS on a simple graph."""
        G = Graph()
        G.add_edge("A", "B")
        G.add_edge("A", "C")
        G.add_edge("B", "D")

        result = dfs_recursive(G, "A")
        assert result.preorder == ("A", "B", "D", "C")
        assert result.postorder == ("D", "B", "C", "A")
        assert result.parent["D"] == "B"
        assert result.parent["A"] is None

    def test_iterative_matches_recursive(self, random_graph):
        """Test iterative and recursive DFS produce identical results."""
        G = random_graph(50, 0.06, directed=True)
        for source in [0, 10, 25]:
            a = dfs(G, source)
            b = dfs_recursive(G, source)
            assert a.preorder == b.preorder
            assert a.postorder == b.postorder
            assert dict(a.parent) == dict(b.parent)

    def test_dfs_deep_chain(self):
        """Test iterative DFS handles chains deeper than the recursion limit."""
        G = Graph(directed=True)
        n = 5000
        for i in range(n - 1):
            G.add_edge(i, i + 1)
        result = dfs(G, 0)
        assert len(result.preorder) == n
        assert result.postorder[0] == n - 1

    def test_dfs_cycle(self):
        """Test DFS on a cycle visits each vertex once."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("B", "C"), ("C", "A")])
        result = dfs(G, "A")
        assert result.preorder == ("A", "B", "C")
        assert result.parent["C"] == "B"

    def test_dfs_unknown_source(self):
        """Test DFS with an unknown source."""
        G = Graph()
        with pytest.raises(UnknownVertexError):
            dfs(G, "A")
        with pytest.raises(UnknownVertexError):
            dfs_recursive(G, "A")


class TestHasCycle:
    """Tests for cycle detection."""

    def test_directed_acyclic(self):
        """Test a diamond DAG has no cycle."""
        G = Graph(directed=True)
        G.add_edges_from([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
        assert not has_cycle(G)

    def test_directed_cycle(self):
        """Test a back edge closes a directed cycle."""
        G = Graph(directed=True)
        G.add_edges_from([("a", "b"), ("b", "c"), ("c", "a")])
        assert has_cycle(G)

    def test_directed_cycle_in_later_root(self):
        """Test cycles unreachable from the first vertex are found."""
        G = Graph(directed=True)
        G.add_vertex("lonely")
        G.add_edges_from([("x", "y"), ("y", "x")])
        assert has_cycle(G)

    def test_directed_self_loop(self):
        """Test a directed self-loop is a cycle."""
        G = Graph(directed=True)
        G.add_edge("a", "a")
        assert has_cycle(G)

    def test_undirected_tree(self):
        """Test a forest has no cycle even though edges run both ways."""
        G = Graph()
        G.add_edges_from([("a", "b"), ("b", "c"), ("x", "y")])
        G.add_vertex("z")
        assert not has_cycle(G)

    def test_undirected_cycle(self):
        """Test a triangle is a cycle."""
        G = Graph()
        G.add_edges_from([("a", "b"), ("b", "c"), ("c", "a")])
        assert has_cycle(G)

    @pytest.mark.parametrize("edges", [[("a", "b"), ("a", "b")], [("a", "a")]])
    def test_undirected_parallel_and_self_loop(self, edges):
        """Test parallel edges and self-loops close undirected cycles."""
        G = Graph()
        G.add_edges_from(edges)
        assert has_cycle(G)

    def test_empty_graph(self):
        """Test the empty graph is acyclic."""
        assert not has_cycle(Graph(directed=True))


class TestTopologicalSort:
    """Tests for topological ordering."""

    def test_diamond(self):
        """Test the order is the reverse depth-first finish order."""
        G = Graph(directed=True)
        G.add_edges_from([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
        assert topological_sort(G) == ("a", "c", "b", "d")

    def test_edges_point_forward(self, random_graph):
        """Test every edge of a random DAG goes forward in the order."""
        base = random_graph(40, 0.1, directed=True)
        G = Graph(directed=True)
        for v in reversed(base.vertices()):
            G.add_vertex(v)
        for edge in base.edges():
            if edge.source < edge.target:
                G.add_edge(edge.source, edge.target)
        order = topological_sort(G)
        position = {v: i for i, v in enumerate(order)}
        assert sorted(order) == list(range(40))
        for edge in G.edges():
            assert position[edge.source] < position[edge.target]

    def test_deep_chain(self):
        """Test a long chain sorts without recursion limits."""
        G = Graph(directed=True)
        n = 5000
        for i in range(n - 1):
            G.add_edge(i, i + 1)
        assert topological_sort(G) == tuple(range(n))

    def test_cycle_raises(self):
        """Test a directed cycle has no topological order."""
        G = Graph(directed=True)
        G.add_edges_from([("a", "b"), ("b", "a")])
        with pytest.raises(CycleError):
            topological_sort(G)

    def test_undirected_rejected(self):
        """Test undirected graphs are rejected."""
        G = Graph()
        G.add_edge("a", "b")
        with pytest.raises(ConfigurationError):
            topological_sort(G)
