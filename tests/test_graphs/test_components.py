"""Tests for connected and strongly connected components."""

from gconduit.graphs import (
    Graph,
    UnionFind,
    bfs,
    condensation,
    connected_components,
    is_connected,
    is_strongly_connected,
    largest_connected_component,
    number_connected_components,
    strongly_connected_components,
)


def cyclic_digraph():
    """1 -> 2 -> 3 -> 1, 3 -> 4, 4 <-> 5, plus an isolated 6."""
    G = Graph(directed=True)
    G.add_edges_from([(1, 2), (2, 3), (3, 1), (3, 4), (4, 5), (5, 4)])
    G.add_vertex(6)
    return G


class TestConnectedComponents:
    """Tests for (weakly) connected components."""

    def test_two_components(self):
        """Test two separate edges form two components."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("C", "D")])
        assert connected_components(G) == (("A", "B"), ("C", "D"))
        assert number_connected_components(G) == 2
        assert not is_connected(G)

    def test_members_keep_insertion_order(self):
        """Test members follow insertion order, not discovery order."""
        G = Graph()
        for v in "DCBA":
            G.add_vertex(v)
        G.add_edges_from([("A", "D"), ("B", "C")])
        assert connected_components(G) == (("D", "A"), ("C", "B"))

    def test_isolated_vertices(self):
        """Test isolated vertices are singleton components."""
        G = Graph()
        G.add_edge("A", "B")
        G.add_vertex("C")
        assert connected_components(G) == (("A", "B"), ("C",))

    def test_directed_is_weak(self):
        """Test edge direction is ignored."""
        G = Graph(directed=True)
        G.add_edges_from([("A", "B"), ("C", "B")])
        assert connected_components(G) == (("A", "B", "C"),)
        assert is_connected(G)

    def test_empty_graph(self):
        """Test the empty graph has no components and is not connected."""
        assert connected_components(Graph()) == ()
        assert not is_connected(Graph())
        assert largest_connected_component(Graph()) == ()

    def test_largest(self):
        """Test the largest component wins and ties go to the earliest."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("C", "D"), ("D", "E")])
        assert largest_connected_component(G) == ("C", "D", "E")
        H = Graph()
        H.add_edges_from([("A", "B"), ("C", "D")])
        assert largest_connected_component(H) == ("A", "B")

    def test_agrees_with_union_find(self, random_graph):
        """Test every edge stays within one component and counts match."""
        G = random_graph(60, 0.03)
        components = connected_components(G)
        owner = {v: i for i, members in enumerate(components) for v in members}
        for edge in G.edges():
            assert owner[edge.source] == owner[edge.target]
        assert sum(len(c) for c in components) == len(G)

        uf = UnionFind(G)
        for edge in G.edges():
            uf.union(edge.source, edge.target)
        assert uf.set_count == len(components)


class TestStronglyConnectedComponents:
    """Tests for Kosaraju's algorithm."""

    def test_simple(self):
        """Test a two-cycle feeding a sink."""
        G = Graph(directed=True)
        G.add_edges_from([("A", "B"), ("B", "A"), ("B", "C")])
        assert strongly_connected_components(G) == (("A", "B"), ("C",))

    def test_topological_order(self):
        """Test components come before the components they point to."""
        sccs = strongly_connected_components(cyclic_digraph())
        assert set(sccs) == {(1, 2, 3), (4, 5), (6,)}
        assert sccs.index((1, 2, 3)) < sccs.index((4, 5))

    def test_dag_gives_singletons(self):
        """Test an acyclic graph has one component per vertex."""
        G = Graph(directed=True)
        G.add_edges_from([("A", "B"), ("B", "C"), ("A", "C")])
        assert strongly_connected_components(G) == (("A",), ("B",), ("C",))
        assert not is_strongly_connected(G)

    def test_cycle_is_strongly_connected(self):
        """Test a directed cycle is one component."""
        G = Graph(directed=True)
        G.add_edges_from([(i, (i + 1) % 5) for i in range(5)])
        assert is_strongly_connected(G)
        assert strongly_connected_components(G) == ((0, 1, 2, 3, 4),)

    def test_undirected_matches_connected(self):
        """Test undirected input yields its connected components."""
        G = Graph()
        G.add_edges_from([("A", "B"), ("C", "D")])
        assert set(strongly_connected_components(G)) == set(connected_components(G))

    def test_long_cycle_no_recursion_limit(self):
        """Test a cycle far deeper than the recursion limit."""
        G = Graph(directed=True)
        n = 5000
        G.add_edges_from([(i, (i + 1) % n) for i in range(n)])
        assert len(strongly_connected_components(G)) == 1

    def test_mutual_reachability(self, random_graph):
        """Test vertices share a component exactly when they reach each other."""
        G = random_graph(20, 0.08, directed=True)
        owner = {}
        for i, members in enumerate(strongly_connected_components(G)):
            for v in members:
                owner[v] = i
        reach = {v: set(bfs(G, v).distance) for v in G}
        for u in G:
            for v in G:
                mutual = v in reach[u] and u in reach[v]
                assert (owner[u] == owner[v]) == mutual


class TestCondensation:
    """Tests for the component DAG."""

    def test_condensation(self):
        """Test components become vertices joined by single edges."""
        result = condensation(cyclic_digraph())
        dag = result.graph
        assert len(dag) == 3
        first, second = result.mapping[1], result.mapping[4]
        assert dag.has_edge(first, second)
        assert dag.edge_count() == 1
        assert dag.vertex_attrs(first)["members"] == (1, 2, 3)
        assert result.components[second] == (4, 5)

    def test_condensation_is_acyclic(self, random_graph):
        """Test the condensation has no cycles."""
        G = random_graph(25, 0.1, directed=True)
        dag = condensation(G).graph
        assert len(strongly_connected_components(dag)) == len(dag)
