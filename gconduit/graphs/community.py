"""
Community detection: Louvain modularity optimization, label propagation and
Girvan-Newman edge removal.

Louvain alternates two phases. Local moving visits vertices in insertion
order and moves each to the neighboring community with the largest modularity
gain; aggregation then contracts communities into super-vertices (summed
edge weights, intra-community weight kept as self-loops) and repeats on the
smaller graph. Directed input is folded into its undirected view.

References:
    - Blondel, V. D., Guillaume, J.-L., Lambiotte, R., Lefebvre, E.
      "Fast unfolding of communities in large networks" (2008).
    - Raghavan, U. N., Albert, R., Kumara, S. "Near linear time algorithm to
      detect community structures in large-scale networks" (2007).
    - Girvan, M., Newman, M. E. J. "Community structure in social and
      biological networks" (2002).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from ..exceptions import ConfigurationError
from ..logging import get_logger
from .centrality import edge_betweenness_centrality
from .components import connected_components
from .core import Edge, Graph
from .utils import freeze

logger = get_logger(__name__)

Partition = Union[Mapping[Hashable, Hashable], Iterable[Iterable[Hashable]]]


@dataclass(frozen=True)
class CommunityResult:
    """
    Louvain output.

    Attributes:
        partition: Vertex -> community id (0..k-1, numbered by first member).
        communities: Member tuples indexed by community id.
        modularity: Modularity of the returned partition.
        levels: Aggregation levels that improved modularity.
        modularity_history: Modularity of the singleton partition followed by
            the value after each improving level (non-decreasing).
    """

    partition: Mapping[Hashable, int]
    communities: Tuple[Tuple[Hashable, ...], ...]
    modularity: float
    levels: int
    modularity_history: Tuple[float, ...]


@dataclass(frozen=True)
class LabelPropagationResult:
    """Label propagation output: partition, communities, sweeps, convergence flag."""

    partition: Mapping[Hashable, int]
    communities: Tuple[Tuple[Hashable, ...], ...]
    iterations: int
    converged: bool


class _LevelGraph:
    """Undirected weighted graph over 0..n-1 with self-loop weights kept apart."""

    def __init__(self, n: int):
        self.adj: List[Dict[int, float]] = [{} for _ in range(n)]
        self.loops = [0.0] * n

    def __len__(self) -> int:
        return len(self.loops)

    def add(self, i: int, j: int, w: float) -> None:
        if i == j:
            self.loops[i] += w
        else:
            self.adj[i][j] = self.adj[i].get(j, 0.0) + w
            self.adj[j][i] = self.adj[j].get(i, 0.0) + w

    def degrees(self) -> List[float]:
        return [sum(nbrs.values()) + 2.0 * loop for nbrs, loop in zip(self.adj, self.loops)]

    def total_weight(self) -> float:
        return sum(self.loops) + sum(sum(nbrs.values()) for nbrs in self.adj) / 2.0

    def modularity(self, community: List[int], resolution: float) -> float:
        m = self.total_weight()
        if m <= 0:
            return 0.0
        inner: Dict[int, float] = {}
        tot: Dict[int, float] = {}
        for i, k in enumerate(self.degrees()):
            c = community[i]
            tot[c] = tot.get(c, 0.0) + k
            within = self.loops[i]
            for j, w in self.adj[i].items():
                if community[j] == c:
                    within += w / 2.0
            inner[c] = inner.get(c, 0.0) + within
        return sum(
            inner.get(c, 0.0) / m - resolution * (t / (2.0 * m)) ** 2 for c, t in tot.items()
        )

    def aggregate(self, community: List[int]) -> "_LevelGraph":
        coarse = _LevelGraph(max(community) + 1)
        for i, nbrs in enumerate(self.adj):
            ci = community[i]
            coarse.loops[ci] += self.loops[i]
            for j, w in nbrs.items():
                cj = community[j]
                if ci == cj:
                    # Each intra edge is seen from both ends.
                    coarse.loops[ci] += w / 2.0
                else:
                    coarse.adj[ci][cj] = coarse.adj[ci].get(cj, 0.0) + w
        return coarse


def _undirected_view(graph: Graph) -> Tuple[_LevelGraph, List[Hashable]]:
    vertices = graph.vertices()
    index = {v: i for i, v in enumerate(vertices)}
    level = _LevelGraph(len(vertices))
    for edge in graph.edges():
        weight = edge.value if graph.weighted else 1.0
        level.add(index[edge.source], index[edge.target], weight)
    return level, vertices


def _renumber(labels: List[int]) -> List[int]:
    """Relabel to 0..k-1 in order of first appearance."""
    seen: Dict[int, int] = {}
    return [seen.setdefault(label, len(seen)) for label in labels]


def _local_moving(
    level: _LevelGraph, resolution: float, epsilon: float, max_passes: int
) -> Tuple[List[int], bool]:
    """One Louvain phase one. Returns (community per node, whether anything moved)."""
    n = len(level)
    community = list(range(n))
    k = level.degrees()
    tot = list(k)
    m = level.total_weight()
    two_m_sq = 2.0 * m * m
    moved_any = False

    for _ in range(max_passes):
        moved = False
        for i in range(n):
            current = community[i]
            links: Dict[int, float] = {}
            for j, w in level.adj[i].items():
                links[community[j]] = links.get(community[j], 0.0) + w

            tot[current] -= k[i]
            best = current
            best_gain = links.get(current, 0.0) / m - resolution * tot[current] * k[i] / two_m_sq
            for c, k_in in links.items():
                gain = k_in / m - resolution * tot[c] * k[i] / two_m_sq
                if gain > best_gain + epsilon:
                    best, best_gain = c, gain
            tot[best] += k[i]

            if best != current:
                community[i] = best
                moved = True
        if not moved:
            break
        moved_any = True

    return _renumber(community), moved_any


def _check_louvain_options(
    resolution: float, epsilon: float, max_levels: int, max_passes: int
) -> None:
    if resolution < 0:
        raise ConfigurationError(f"resolution must be non-negative, got {resolution}")
    if epsilon < 0:
        raise ConfigurationError(f"epsilon must be non-negative, got {epsilon}")
    if max_levels < 1:
        raise ConfigurationError(f"max_levels must be at least 1, got {max_levels}")
    if max_passes < 1:
        raise ConfigurationError(f"max_passes must be at least 1, got {max_passes}")


def _group(vertices: List[Hashable], labels: List[int]) -> Tuple[Tuple[Hashable, ...], ...]:
    groups: List[List[Hashable]] = [[] for _ in range(max(labels, default=-1) + 1)]
    for vertex, label in zip(vertices, labels):
        groups[label].append(vertex)
    return tuple(tuple(g) for g in groups)


def louvain(
    graph: Graph,
    resolution: float = 1.0,
    epsilon: float = 1e-7,
    max_levels: int = 32,
    max_passes: int = 100,
) -> CommunityResult:
    """
    Louvain community detection.

    The gain of moving vertex i (degree k_i) into community C is::

        k_i,in / m - resolution * sum_tot(C) * k_i / (2 m^2)

    where k_i,in is the weight from i into C and m the total edge weight. A
    move must beat staying put by more than epsilon. The algorithm stops when
    a level yields no modularity gain above epsilon or max_levels is reached.

    Args:
        graph: Graph (directed edges are treated as undirected).
        resolution: Resolution parameter; larger values favor smaller
            communities.
        epsilon: Minimum improvement for a move or a level to count.
        max_levels: Cap on aggregation levels.
        max_passes: Cap on local-moving passes per level.

    Returns:
        CommunityResult.

    Raises:
        ConfigurationError: If an option is out of range.
        NegativeWeightError: If a weighted graph has a negative weight.

    Complexity: roughly O(E) per pass; few levels in practice.

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([(0, 1), (1, 2), (2, 0), (3, 4), (4, 5), (5, 3), (2, 3)])
        >>> result = louvain(G)
        >>> result.communities
        ((0, 1, 2), (3, 4, 5))
    """
    _check_louvain_options(resolution, epsilon, max_levels, max_passes)
    graph.validate_weights(non_negative=True)

    level, vertices = _undirected_view(graph)
    membership = list(range(len(vertices)))
    best_q = level.modularity(list(range(len(level))), resolution)
    history = [best_q]
    levels = 0

    if level.total_weight() > 0:
        for depth in range(max_levels):
            community, moved = _local_moving(level, resolution, epsilon, max_passes)
            if not moved:
                break
            q = level.modularity(community, resolution)
            logger.debug(
                "Louvain level %d: %d -> %d communities, modularity %.6f",
                depth + 1,
                len(level),
                max(community) + 1,
                q,
            )
            if q - best_q <= epsilon:
                break
            membership = [community[c] for c in membership]
            history.append(q)
            best_q = q
            levels += 1
            level = level.aggregate(community)

    labels = _renumber(membership)
    partition = {v: labels[i] for i, v in enumerate(vertices)}
    return CommunityResult(
        partition=freeze(partition),
        communities=_group(vertices, labels),
        modularity=best_q,
        levels=levels,
        modularity_history=tuple(history),
    )


def modularity(graph: Graph, partition: Partition, resolution: float = 1.0) -> float:
    """
    Modularity of a partition on the undirected view of graph.

    Q = sum over communities c of  L_c / m - resolution * (d_c / 2m)^2, with
    L_c the weight inside c, d_c its total degree and m the total weight.

    Args:
        graph: Graph.
        partition: Mapping vertex -> label, or an iterable of member groups.
            Every vertex must be assigned exactly once.
        resolution: Resolution parameter.

    Returns:
        Modularity; 0.0 for a graph without edges.

    Raises:
        UnknownVertexError: If the partition names a vertex not in graph.
        ConfigurationError: If a vertex is unassigned or assigned twice.
    """
    if isinstance(partition, Mapping):
        assignment = dict(partition)
    else:
        assignment = {}
        for label, group in enumerate(partition):
            for vertex in group:
                if vertex in assignment:
                    raise ConfigurationError(f"Vertex {vertex!r} assigned to two communities")
                assignment[vertex] = label

    for vertex in assignment:
        graph.require_vertex(vertex)
    level, vertices = _undirected_view(graph)
    missing = [v for v in vertices if v not in assignment]
    if missing:
        raise ConfigurationError(f"Partition does not assign vertex {missing[0]!r}")

    ids: Dict[Hashable, int] = {}
    community = [ids.setdefault(assignment[v], len(ids)) for v in vertices]
    return level.modularity(community, resolution)


def label_propagation(
    graph: Graph, max_iterations: int = 100, seed: Optional[int] = None
) -> LabelPropagationResult:
    """
    Asynchronous label propagation.

    Each vertex starts with its own label and repeatedly adopts the label with
    the largest total edge weight among its neighbors, keeping its current
    label when that is among the best. Ties otherwise go to the label seen
    first. Stops when a sweep changes nothing.

    Args:
        graph: Graph (directed edges are treated as undirected).
        max_iterations: Cap on sweeps.
        seed: Shuffle the sweep order with numpy's default_rng(seed). None
            sweeps in insertion order.

    Returns:
        LabelPropagationResult.

    Raises:
        ConfigurationError: If max_iterations is less than 1.
    """
    if max_iterations < 1:
        raise ConfigurationError(f"max_iterations must be at least 1, got {max_iterations}")

    level, vertices = _undirected_view(graph)
    n = len(level)
    labels = list(range(n))
    rng = np.random.default_rng(seed) if seed is not None else None
    converged = False
    iterations = 0

    for iterations in range(1, max_iterations + 1):
        order = rng.permutation(n).tolist() if rng is not None else range(n)
        changed = False
        for i in order:
            if not level.adj[i]:
                continue
            weight: Dict[int, float] = {}
            for j, w in level.adj[i].items():
                weight[labels[j]] = weight.get(labels[j], 0.0) + w
            top = max(weight.values())
            if weight.get(labels[i], -1.0) == top:
                continue
            labels[i] = next(label for label, w in weight.items() if w == top)
            changed = True
        if not changed:
            converged = True
            break

    final = _renumber(labels)
    return LabelPropagationResult(
        partition=freeze({v: final[i] for i, v in enumerate(vertices)}),
        communities=_group(vertices, final),
        iterations=iterations,
        converged=converged,
    )


@dataclass(frozen=True)
class DendrogramLevel:
    """
    One split of a Girvan-Newman run.

    Attributes:
        communities: Connected components of the remaining graph, ordered by
            first vertex, without those below min_community_size.
        modularity: Modularity of the full component partition, scored on the
            original graph.
        removed: (source, target) keys of the edges removed to reach this
            level; empty for the starting level.
    """

    communities: Tuple[Tuple[Hashable, ...], ...]
    modularity: float
    removed: Tuple[Tuple[Hashable, Hashable], ...]


@dataclass(frozen=True)
class GirvanNewmanResult:
    """Girvan-Newman dendrogram, from the starting components down."""

    levels: Tuple[DendrogramLevel, ...]

    def best(self) -> DendrogramLevel:
        """Return the first level with the highest modularity."""
        return max(self.levels, key=lambda level: level.modularity)


def _remaining(graph: Graph, edges: List[Edge]) -> Graph:
    working = Graph(directed=graph.directed, weighted=graph.weighted)
    for vertex in graph:
        working.add_vertex(vertex)
    for edge in edges:
        working.add_edge(edge.source, edge.target, edge.weight)
    return working


def girvan_newman(
    graph: Graph,
    max_communities: Optional[int] = None,
    min_community_size: int = 1,
    max_iterations: int = 100,
    weighted: bool = False,
) -> GirvanNewmanResult:
    """
    Divisive community detection by repeated removal of the busiest edges.

    Each round recomputes edge betweenness on the remaining graph and removes
    every edge whose score is within 1e-10 of the maximum, then records the
    connected components as a new dendrogram level. Directed graphs split
    into weakly connected components.

    Args:
        graph: Graph. Not modified.
        max_communities: Stop once a level has at least this many communities.
        min_community_size: Drop smaller components from reported levels.
        max_iterations: Cap on removal rounds.
        weighted: Use weighted edge betweenness.

    Returns:
        GirvanNewmanResult; levels[0] holds the components before any removal.

    Raises:
        ConfigurationError: If an option is below 1.
        NegativeWeightError: If weighted and a weight is negative.

    Complexity: O(k * V * E) for k rounds; intended for small graphs.
    """
    if max_communities is not None and max_communities < 1:
        raise ConfigurationError(f"max_communities must be at least 1, got {max_communities}")
    if min_community_size < 1:
        raise ConfigurationError(
            f"min_community_size must be at least 1, got {min_community_size}"
        )
    if max_iterations < 1:
        raise ConfigurationError(f"max_iterations must be at least 1, got {max_iterations}")

    def level(working: Graph, removed: Tuple) -> DendrogramLevel:
        components = connected_components(working)
        return DendrogramLevel(
            communities=tuple(c for c in components if len(c) >= min_community_size),
            modularity=modularity(graph, components),
            removed=removed,
        )

    edges = graph.edges()
    levels = [level(graph, ())]
    for _ in range(max_iterations):
        if not edges:
            break
        working = _remaining(graph, edges)
        scores = edge_betweenness_centrality(working, weighted=weighted)
        top = max(scores.values())
        removed = tuple(key for key, value in scores.items() if abs(value - top) < 1e-10)
        edges = [e for e in edges if (e.source, e.target) not in removed]

        current = level(_remaining(graph, edges), removed)
        levels.append(current)
        logger.debug(
            "Girvan-Newman removed %d edge keys: %d communities, modularity %.4f",
            len(removed),
            len(current.communities),
            current.modularity,
        )
        if max_communities is not None and len(current.communities) >= max_communities:
            break

    return GirvanNewmanResult(tuple(levels))


__all__ = [
    "CommunityResult",
    "DendrogramLevel",
    "GirvanNewmanResult",
    "LabelPropagationResult",
    "girvan_newman",
    "label_propagation",
    "louvain",
    "modularity",
]
