"""
All-pairs shortest path algorithms.

Floyd-Warshall computes the full distance matrix with numpy, one intermediate
vertex per step. all_pairs_shortest_paths repeats a single-source search from
every vertex and can spread the sources over worker threads.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapter 25.2 (Floyd-Warshall).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Mapping, Optional, Tuple

import numpy as np

from ..exceptions import UnknownVertexError
from .core import Graph
from .shortest import ShortestPathResult, bellman_ford, dijkstra, resolve_method
from .traversal import bfs
from .utils import freeze, map_sources


@dataclass(frozen=True)
class AllPairsResult:
    """
    Floyd-Warshall output.

    Attributes:
        vertices: Row/column order of the matrices (graph insertion order).
        distance: (n, n) float64 matrix; inf where no path exists.
        successor: (n, n) int64 matrix of next-hop indices; -1 where no path.
        has_negative_cycle: True if any vertex reaches itself with negative cost.
    """

    vertices: Tuple[Hashable, ...]
    distance: np.ndarray
    successor: np.ndarray
    has_negative_cycle: bool

    def _index(self, vertex: Hashable) -> int:
        try:
            return self.vertices.index(vertex)
        except ValueError:
            raise UnknownVertexError(vertex) from None

    def distance_between(self, u: Hashable, v: Hashable) -> float:
        """Return shortest distance u -> v (inf if unreachable)."""
        return float(self.distance[self._index(u), self._index(v)])

    def path(self, u: Hashable, v: Hashable) -> Optional[List[Hashable]]:
        """
        Return the vertices on a shortest path u -> v, or None if unreachable.

        Paths through a negative cycle are not well defined; None is returned
        if the successor chain does not reach v within n steps.
        """
        i, j = self._index(u), self._index(v)
        if self.successor[i, j] < 0:
            return None
        path = [self.vertices[i]]
        for _ in range(len(self.vertices)):
            if i == j:
                return path
            i = int(self.successor[i, j])
            path.append(self.vertices[i])
        return path if i == j else None


def floyd_warshall(graph: Graph) -> AllPairsResult:
    """
    Floyd-Warshall algorithm for all-pairs shortest paths.

    Computes shortest distances between all pairs of vertices. Handles
    negative edge weights; negative cycles are reported through
    has_negative_cycle (distances through them are then meaningless).
    Parallel edges contribute their minimum weight.

    Args:
        graph: Graph (directed or undirected).

    Returns:
        AllPairsResult with distance and successor matrices.

    Raises:
        MissingWeightError: If a weighted graph has an edge without a weight.

    Complexity: O(n^3) time, O(n^2) memory.

    Example:
        >>> G = Graph(directed=True, weighted=True)
        >>> G.add_edge('A', 'B', 1.0)
        >>> G.add_edge('B', 'C', 2.0)
        >>> result = floyd_warshall(G)
        >>> result.distance_between('A', 'C')
        3.0
        >>> result.path('A', 'C')
        ['A', 'B', 'C']
    """
    graph.validate_weights()
    vertices = tuple(graph.vertices())
    index = {v: i for i, v in enumerate(vertices)}
    n = len(vertices)

    dist = np.full((n, n), np.inf)
    succ = np.full((n, n), -1, dtype=np.int64)
    np.fill_diagonal(dist, 0.0)
    succ[np.arange(n), np.arange(n)] = np.arange(n)

    for u, v, weight in graph.arcs():
        i, j = index[u], index[v]
        if weight < dist[i, j]:
            dist[i, j] = weight
            succ[i, j] = j

    for k in range(n):
        candidate = dist[:, k, None] + dist[None, k, :]
        better = candidate < dist
        if better.any():
            dist = np.where(better, candidate, dist)
            succ = np.where(better, succ[:, k, None], succ)

    return AllPairsResult(
        vertices=vertices,
        distance=dist,
        successor=succ,
        has_negative_cycle=bool((np.diag(dist) < 0).any()),
    )


def all_pairs_shortest_paths(
    graph: Graph, workers: Optional[int] = None, method: str = "auto"
) -> Mapping[Hashable, ShortestPathResult]:
    """
    Single-source shortest paths from every vertex.

    Each source is independent; with workers > 1 they run on a thread pool.
    The returned mapping is in vertex insertion order regardless of workers.

    Args:
        graph: Graph to search.
        workers: Number of worker threads (None or 1 runs inline).
        method: "bfs", "dijkstra", "bellman_ford" or "auto" (BFS when
            unweighted, Dijkstra when weights are non-negative, else
            Bellman-Ford).

    Returns:
        Read-only mapping source -> ShortestPathResult.

    Raises:
        ConfigurationError: If method or workers is invalid.
        NegativeWeightError: If Dijkstra is requested on negative weights.
    """
    method = resolve_method(graph, method)

    def run(source: Hashable) -> ShortestPathResult:
        if method == "bfs":
            result = bfs(graph, source, optimized=False)
            return ShortestPathResult(
                source,
                freeze({v: float(d) for v, d in result.distance.items()}),
                result.parent,
            )
        if method == "dijkstra":
            return dijkstra(graph, source)
        return bellman_ford(graph, source)

    sources = graph.vertices()
    results = map_sources(run, sources, workers)
    merged: Dict[Hashable, ShortestPathResult] = dict(zip(sources, results))
    return freeze(merged)


__all__ = ["AllPairsResult", "all_pairs_shortest_paths", "floyd_warshall"]
