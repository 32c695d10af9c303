"""Tests for direction-optimized BFS over CSR snapshots."""

import numpy as np
import pytest

from gconduit.exceptions import ConfigurationError, InvalidSourceError
from gconduit.graphs import Graph
from gconduit.optimized import Direction, direction_optimized_bfs, to_csr, top_down_bfs


def path_csr(n, directed=False):
    G = Graph(directed=directed)
    for i in range(n - 1):
        G.add_edge(i, i + 1)
    return to_csr(G)


def assert_same_traversal(a, b):
    np.testing.assert_array_equal(a.visited.get_set_indices(), b.visited.get_set_indices())
    np.testing.assert_array_equal(a.distance.to_array(), b.distance.to_array())
    np.testing.assert_array_equal(a.parent, b.parent)
    assert a.levels == b.levels


class TestDirectionOptimizedBFS:
    """Tests for the switching BFS engine."""

    def test_path(self):
        """Test distances and parents on a path."""
        result = direction_optimized_bfs(path_csr(3), 0)
        assert result.distance.to_array().tolist() == [0, 1, 2]
        assert result.parent.tolist() == [-1, 0, 1]
        assert result.levels == 2
        assert len(result.modes) == result.levels

    def test_unreached(self):
        """Test unreachable vertices stay unvisited with parent -1."""
        G = Graph(directed=True)
        G.add_edge("A", "B")
        G.add_vertex("C")
        result = direction_optimized_bfs(to_csr(G), 1)
        assert result.visited.get_set_indices().tolist() == [1]
        assert result.distance.get(0) is None
        assert result.parent.tolist() == [-1, -1, -1]
        assert result.levels == 0
        assert result.modes == ()

    def test_lowest_index_parent(self):
        """Test a vertex reached from two frontier vertices takes the lower index."""
        G = Graph(directed=True)
        G.add_edges_from([(0, 2), (0, 1), (2, 3), (1, 3)])
        csr = to_csr(G)
        # Vertex ids follow insertion order: 0, 2, 1, 3 -> indices 0, 1, 2, 3.
        for mode in (None, "top_down", "bottom_up"):
            result = direction_optimized_bfs(csr, 0, force_mode=mode)
            assert result.parent[csr.index_of(3)] == csr.index_of(2)
        assert top_down_bfs(csr, 0).parent[csr.index_of(3)] == csr.index_of(2)

    def test_switching_thresholds(self):
        """Test extreme thresholds alternate the direction every level."""
        result = direction_optimized_bfs(path_csr(5), 0, alpha=1e6, beta=1e-6)
        assert result.modes == (
            Direction.BOTTOM_UP,
            Direction.TOP_DOWN,
            Direction.BOTTOM_UP,
            Direction.TOP_DOWN,
        )
        assert result.distance.to_array().tolist() == [0, 1, 2, 3, 4]

    def test_starts_top_down(self):
        """Test a small frontier with many unvisited vertices expands top-down."""
        result = direction_optimized_bfs(path_csr(50), 0)
        assert result.modes[:3] == (Direction.TOP_DOWN,) * 3

    def test_dense_graph_goes_bottom_up(self, random_graph):
        """Test a dense graph switches to bottom-up with default thresholds."""
        csr = to_csr(random_graph(200, 0.2))
        result = direction_optimized_bfs(csr, 0)
        assert Direction.BOTTOM_UP in result.modes
        assert_same_traversal(result, top_down_bfs(csr, 0))

    @pytest.mark.parametrize("directed", [False, True])
    @pytest.mark.parametrize("force_mode", [None, Direction.TOP_DOWN, Direction.BOTTOM_UP])
    def test_matches_reference(self, random_graph, directed, force_mode):
        """Test every mode agrees with the reference top-down engine."""
        for p in (0.02, 0.05, 0.2):
            csr = to_csr(random_graph(80, p, directed=directed))
            for source in (0, 17, 79):
                fast = direction_optimized_bfs(csr, source, force_mode=force_mode)
                assert_same_traversal(fast, top_down_bfs(csr, source))
                if force_mode is not None:
                    assert set(fast.modes) <= {force_mode}

    def test_parallel_edges_and_self_loops(self):
        """Test multigraph entries do not disturb the traversal."""
        G = Graph(directed=True)
        G.add_edges_from([(0, 0), (0, 1), (0, 1), (1, 2), (2, 0)])
        csr = to_csr(G)
        for mode in ("top_down", "bottom_up"):
            result = direction_optimized_bfs(csr, 0, force_mode=mode)
            assert result.distance.to_array().tolist() == [0, 1, 2]

    def test_level_order(self):
        """Test level_order sorts by distance then index."""
        G = Graph()
        G.add_edges_from([(0, 2), (0, 1), (2, 3)])
        csr = to_csr(G)
        order = direction_optimized_bfs(csr, 0).level_order()
        assert [csr.vertex_at(i) for i in order] == [0, 2, 1, 3]

    def test_long_path_widens_distances(self):
        """Test distances beyond 255 widen storage."""
        result = direction_optimized_bfs(path_csr(300), 0)
        assert result.distance.get(299) == 299
        assert result.distance.dtype == np.uint16

    @pytest.mark.parametrize("source", [-1, 3, "A", True, 1.0])
    def test_invalid_source(self, source):
        """Test sources outside the index range raise InvalidSourceError."""
        with pytest.raises(InvalidSourceError):
            direction_optimized_bfs(path_csr(3), source)
        with pytest.raises(IndexError):
            top_down_bfs(path_csr(3), source)

    def test_numpy_integer_source(self):
        """Test numpy integers are accepted as sources."""
        result = direction_optimized_bfs(path_csr(3), np.int64(2))
        assert result.source == 2

    @pytest.mark.parametrize("options", [{"alpha": 0}, {"beta": -1.0}, {"force_mode": "sideways"}])
    def test_invalid_options(self, options):
        """Test bad thresholds and modes raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            direction_optimized_bfs(path_csr(3), 0, **options)


class TestTopDownBFS:
    """Tests for the reference engine."""

    def test_modes_all_top_down(self):
        """Test the reference engine reports only top-down levels."""
        result = top_down_bfs(path_csr(4), 0)
        assert result.modes == (Direction.TOP_DOWN,) * 3

    def test_directed(self):
        """Test direction is respected."""
        result = top_down_bfs(path_csr(3, directed=True), 2)
        assert result.visited.get_set_indices().tolist() == [2]
