"""
Centrality measures: degree, closeness, betweenness, edge betweenness, HITS
and Katz.

Betweenness uses Brandes' accumulation: one shortest-path search per source
(BFS, or Dijkstra when weighted) followed by a dependency back-propagation
pass in reverse discovery order.

References:
    - Brandes, U. "A Faster Algorithm for Betweenness Centrality" (2001).
    - Wasserman, S., Faust, K. "Social Network Analysis" (1994), closeness for
      disconnected graphs.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, Hashable, List, Mapping, Optional, Tuple

import numpy as np

from ..exceptions import ConfigurationError
from ..logging import get_logger
from .core import Graph
from .shortest import dijkstra
from .structures import PriorityQueue
from .traversal import bfs
from .utils import edge_weight, freeze, map_sources

logger = get_logger(__name__)

_DEGREE_MODES = ("out", "in", "total")


def degree_centrality(
    graph: Graph, mode: str = "out", normalized: bool = True
) -> Mapping[Hashable, float]:
    """
    Degree centrality read directly from adjacency sizes.

    Args:
        graph: Graph.
        mode: "out", "in" or "total" (in + out). Undirected graphs use the
            plain degree for every mode.
        normalized: Divide by n - 1.

    Returns:
        Read-only mapping vertex -> centrality.

    Raises:
        ConfigurationError: If mode is unknown.

    Complexity: O(V).
    """
    if mode not in _DEGREE_MODES:
        raise ConfigurationError(f"Unknown mode {mode!r}; expected one of {_DEGREE_MODES}")

    if not graph.directed:
        counts = {v: graph.degree(v) for v in graph}
    elif mode == "out":
        counts = {v: graph.out_degree(v) for v in graph}
    elif mode == "in":
        counts = {v: graph.in_degree(v) for v in graph}
    else:
        counts = {v: graph.degree(v) for v in graph}

    n = graph.vertex_count()
    scale = 1.0 / (n - 1) if normalized and n > 1 else 1.0
    return freeze({v: c * scale for v, c in counts.items()})


def closeness_centrality(
    graph: Graph,
    weighted: bool = False,
    workers: Optional[int] = None,
    wf_improved: bool = True,
) -> Mapping[Hashable, float]:
    """
    Closeness centrality from each vertex's outgoing shortest-path distances.

    With r the number of vertices reachable from u (u included) and n the
    vertex count::

        closeness(u) = (r - 1) / sum_dist(u) * (r - 1) / (n - 1)

    The second factor (Wasserman-Faust) scales by the reachable fraction, so
    vertices in small components are not overrated. A vertex reaching nothing
    scores 0.

    Args:
        graph: Graph.
        weighted: Use Dijkstra distances instead of hop counts.
        workers: Thread count for the per-source searches.
        wf_improved: Apply the reachable-fraction factor.

    Returns:
        Read-only mapping vertex -> closeness.

    Raises:
        NegativeWeightError: If weighted and a weight is negative.
        ConfigurationError: If workers is less than 1.

    Complexity: O(V * (V + E)) unweighted, O(V * E log V) weighted.
    """
    if weighted:
        graph.validate_weights(non_negative=True)
    n = graph.vertex_count()

    def score(u: Hashable) -> float:
        if weighted:
            distances = dijkstra(graph, u).distance
        else:
            distances = bfs(graph, u, optimized=False).distance
        total = float(sum(distances.values()))
        reached = len(distances) - 1
        if total <= 0 or n <= 1:
            return 0.0
        value = reached / total
        if wf_improved:
            value *= reached / (n - 1)
        return value

    sources = graph.vertices()
    return freeze(dict(zip(sources, map_sources(score, sources, workers))))


# Predecessor entries are (vertex, edge arena index).
_Pred = Tuple[Hashable, int]


def _single_source(
    graph: Graph, s: Hashable, weighted: bool
) -> Tuple[List[Hashable], Dict[Hashable, List[_Pred]], Dict[Hashable, float]]:
    """Return (vertices in non-decreasing distance order, predecessors, path counts)."""
    order: List[Hashable] = []
    preds: Dict[Hashable, List[_Pred]] = {s: []}
    sigma: Dict[Hashable, float] = {s: 1.0}

    if not weighted:
        dist = {s: 0}
        queue = deque([s])
        while queue:
            v = queue.popleft()
            order.append(v)
            for entry in graph.neighbors(v):
                w = entry.vertex
                if w not in dist:
                    dist[w] = dist[v] + 1
                    sigma[w] = 0.0
                    preds[w] = []
                    queue.append(w)
                if dist[w] == dist[v] + 1:
                    sigma[w] += sigma[v]
                    preds[w].append((v, entry.edge))
        return order, preds, sigma

    # Settled vertices never gain predecessors, so zero-weight ties follow
    # settle order and the predecessor graph stays acyclic.
    dist_w: Dict[Hashable, float] = {s: 0.0}
    settled = set()
    pq = PriorityQueue()
    pq.push(s, 0.0)
    while pq:
        v, d = pq.pop_min()
        settled.add(v)
        order.append(v)
        for entry in graph.neighbors(v):
            w = entry.vertex
            if w in settled:
                continue
            nd = d + edge_weight(graph, entry)
            if w not in dist_w:
                dist_w[w] = nd
                pq.push(w, nd)
                sigma[w] = sigma[v]
                preds[w] = [(v, entry.edge)]
            elif nd < dist_w[w]:
                dist_w[w] = nd
                pq.decrease_key(w, nd)
                sigma[w] = sigma[v]
                preds[w] = [(v, entry.edge)]
            elif nd == dist_w[w]:
                sigma[w] += sigma[v]
                preds[w].append((v, entry.edge))
    return order, preds, sigma


def betweenness_centrality(
    graph: Graph, normalized: bool = False, weighted: bool = False
) -> Mapping[Hashable, float]:
    """
    Vertex betweenness centrality (Brandes).

    Counts, for each vertex, the fraction of shortest paths between other
    pairs that pass through it. Undirected totals are halved since every path
    is found from both ends.

    Args:
        graph: Graph.
        normalized: Divide by (n-1)(n-2), or (n-1)(n-2)/2 when undirected.
        weighted: Use edge weights (Dijkstra) instead of hop counts. Equal-length
            alternatives through zero-weight edges are followed in settle
            order only, so every counted path is simple.

    Returns:
        Read-only mapping vertex -> betweenness.

    Raises:
        NegativeWeightError: If weighted and a weight is negative.

    Complexity: O(V * E) unweighted, O(V * E + V^2 log V) weighted.

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([('A', 'B'), ('B', 'C')])
        >>> betweenness_centrality(G)['B']
        1.0
    """
    if weighted:
        graph.validate_weights(non_negative=True)

    bc: Dict[Hashable, float] = {v: 0.0 for v in graph}
    for s in graph:
        order, preds, sigma = _single_source(graph, s, weighted)
        delta = dict.fromkeys(order, 0.0)
        for w in reversed(order):
            coeff = (1.0 + delta[w]) / sigma[w]
            for v, _ in preds[w]:
                delta[v] += sigma[v] * coeff
            if w != s:
                bc[w] += delta[w]

    n = graph.vertex_count()
    scale = 0.5 if not graph.directed else 1.0
    if normalized and n > 2:
        # Undirected halving cancels against the undirected pair count.
        scale = 1.0 / ((n - 1) * (n - 2))
    return freeze({v: value * scale for v, value in bc.items()})


def edge_betweenness_centrality(
    graph: Graph, normalized: bool = False, weighted: bool = False
) -> Mapping[Tuple[Hashable, Hashable], float]:
    """
    Edge betweenness centrality (Brandes accumulation over edges).

    Keys are the (source, target) pairs of the stored edge records; parallel
    edges share one key and their scores add up.

    Args:
        graph: Graph.
        normalized: Divide by n(n-1), or n(n-1)/2 when undirected.
        weighted: Use edge weights (Dijkstra) instead of hop counts.

    Returns:
        Read-only mapping (source, target) -> betweenness.

    Raises:
        NegativeWeightError: If weighted and a weight is negative.
    """
    if weighted:
        graph.validate_weights(non_negative=True)

    by_index = [0.0] * len(graph.edges())
    for s in graph:
        order, preds, sigma = _single_source(graph, s, weighted)
        delta = dict.fromkeys(order, 0.0)
        for w in reversed(order):
            coeff = (1.0 + delta[w]) / sigma[w]
            for v, edge_index in preds[w]:
                credit = sigma[v] * coeff
                by_index[edge_index] += credit
                delta[v] += credit

    n = graph.vertex_count()
    scale = 0.5 if not graph.directed else 1.0
    if normalized and n > 1:
        scale = 1.0 / (n * (n - 1))

    ebc: Dict[Tuple[Hashable, Hashable], float] = {}
    for edge in graph.edges():
        key = (edge.source, edge.target)
        ebc[key] = ebc.get(key, 0.0) + by_index[edge.index] * scale
    return freeze(ebc)


@dataclass(frozen=True)
class HITSResult:
    """
    Hub and authority scores.

    Attributes:
        hubs: Vertex -> hub score.
        authorities: Vertex -> authority score.
        iterations: Power iterations performed.
        converged: True if the L1 change of the hub vector fell below tolerance.
    """

    hubs: Mapping[Hashable, float]
    authorities: Mapping[Hashable, float]
    iterations: int
    converged: bool


@dataclass(frozen=True)
class KatzResult:
    """Katz scores, iterations performed, convergence flag and last L1 delta."""

    scores: Mapping[Hashable, float]
    iterations: int
    converged: bool
    delta: float


def _check_iteration(max_iterations: int, tolerance: float) -> None:
    if int(max_iterations) != max_iterations or max_iterations < 1:
        raise ConfigurationError(
            f"max_iterations must be a positive integer, got {max_iterations}"
        )
    if not tolerance > 0:
        raise ConfigurationError(f"tolerance must be positive, got {tolerance}")


def _arc_arrays(
    graph: Graph, weighted: bool
) -> Tuple[List[Hashable], np.ndarray, np.ndarray, np.ndarray]:
    vertices = graph.vertices()
    index = {v: i for i, v in enumerate(vertices)}
    src, dst, weights = [], [], []
    for u, v, w in graph.arcs():
        src.append(index[u])
        dst.append(index[v])
        weights.append(w if weighted else 1.0)
    return (
        vertices,
        np.asarray(src, dtype=np.int64),
        np.asarray(dst, dtype=np.int64),
        np.asarray(weights, dtype=np.float64),
    )


def _scale_to_max(values: np.ndarray) -> np.ndarray:
    peak = values.max(initial=0.0)
    return values / peak if peak > 0 else values


def hits(
    graph: Graph,
    max_iterations: int = 100,
    tolerance: float = 1e-8,
    normalized: bool = True,
    weighted: bool = False,
) -> HITSResult:
    """
    Hubs and authorities (Kleinberg's HITS) by power iteration.

    A good hub points to good authorities and a good authority is pointed to
    by good hubs::

        authority = A^T hub,    hub = A authority

    Both vectors are rescaled to a maximum of 1 after every step. Undirected
    edges count in both directions.

    Args:
        graph: Graph.
        max_iterations: Iteration cap, default 100.
        tolerance: L1 convergence threshold on the hub vector.
        normalized: Rescale each vector to sum 1; otherwise the largest score
            is 1.
        weighted: Multiply contributions by edge weight.

    Returns:
        HITSResult. A graph without edges scores 0 everywhere.

    Raises:
        ConfigurationError: If max_iterations or tolerance is out of range.
        NegativeWeightError: If weighted and a weight is negative.

    Complexity: O(k * (V + E)) for k iterations.

    References:
        - Kleinberg, J. "Authoritative sources in a hyperlinked environment"
          (1999).
    """
    _check_iteration(max_iterations, tolerance)
    if weighted:
        graph.validate_weights(non_negative=True)
    vertices, src, dst, weights = _arc_arrays(graph, weighted)
    n = len(vertices)
    if n == 0:
        return HITSResult(freeze({}), freeze({}), 0, True)

    hub = np.ones(n)
    converged = False
    iterations = 0
    for iterations in range(1, int(max_iterations) + 1):
        authority = _scale_to_max(np.bincount(dst, weights=weights * hub[src], minlength=n))
        new_hub = _scale_to_max(np.bincount(src, weights=weights * authority[dst], minlength=n))
        delta = float(np.abs(new_hub - hub).sum())
        hub = new_hub
        if delta < tolerance:
            converged = True
            break

    if not converged:
        logger.warning("HITS did not converge within %d iterations", iterations)
    authority = _scale_to_max(np.bincount(dst, weights=weights * hub[src], minlength=n))

    if normalized:
        if hub.sum() > 0:
            hub = hub / hub.sum()
        if authority.sum() > 0:
            authority = authority / authority.sum()
    return HITSResult(
        hubs=freeze({v: float(hub[i]) for i, v in enumerate(vertices)}),
        authorities=freeze({v: float(authority[i]) for i, v in enumerate(vertices)}),
        iterations=iterations,
        converged=converged,
    )


def katz_centrality(
    graph: Graph,
    alpha: float = 0.1,
    beta: float = 1.0,
    max_iterations: int = 1000,
    tolerance: float = 1e-6,
    normalized: bool = True,
    weighted: bool = False,
) -> KatzResult:
    """
    Katz centrality by fixed-point iteration.

    Every vertex receives a baseline beta plus alpha times the score of each
    in-neighbor::

        x = alpha * A^T x + beta

    The iteration converges when alpha is below 1 / lambda_max of the
    adjacency matrix; otherwise scores grow without bound and the result is
    reported as not converged. Iteration stops once the L1 change is below
    n * tolerance.

    Args:
        graph: Graph (undirected edges count in both directions).
        alpha: Attenuation factor, default 0.1.
        beta: Baseline score, default 1.0.
        max_iterations: Iteration cap, default 1000.
        tolerance: Per-vertex convergence threshold.
        normalized: Scale scores to unit Euclidean norm.
        weighted: Multiply contributions by edge weight.

    Returns:
        KatzResult. Without normalization, a vertex with no in-edges scores
        exactly beta.

    Raises:
        ConfigurationError: If alpha is negative, beta is not positive, or an
            iteration option is out of range.
        NegativeWeightError: If weighted and a weight is negative.

    Complexity: O(k * (V + E)) for k iterations.

    Example:
        >>> G = Graph(directed=True)
        >>> G.add_edge('A', 'B')
        >>> katz_centrality(G, normalized=False).scores['B']
        1.1
    """
    if not alpha >= 0:
        raise ConfigurationError(f"alpha must be non-negative, got {alpha}")
    if not beta > 0:
        raise ConfigurationError(f"beta must be positive, got {beta}")
    _check_iteration(max_iterations, tolerance)
    if weighted:
        graph.validate_weights(non_negative=True)
    vertices, src, dst, weights = _arc_arrays(graph, weighted)
    n = len(vertices)
    if n == 0:
        return KatzResult(freeze({}), 0, True, 0.0)

    x = np.zeros(n)
    delta = float("inf")
    converged = False
    iterations = 0
    for iterations in range(1, int(max_iterations) + 1):
        x_new = alpha * np.bincount(dst, weights=weights * x[src], minlength=n) + beta
        delta = float(np.abs(x_new - x).sum())
        x = x_new
        if delta < n * tolerance:
            converged = True
            break
        if not np.isfinite(delta):
            break

    if converged:
        logger.debug("Katz converged after %d iterations (delta=%.3e)", iterations, delta)
    else:
        logger.warning(
            "Katz centrality did not converge within %d iterations (delta=%.3e); "
            "alpha=%s may exceed 1 / lambda_max",
            iterations,
            delta,
            alpha,
        )

    if normalized:
        norm = float(np.linalg.norm(x))
        if norm > 0 and np.isfinite(norm):
            x = x / norm
    scores = {v: float(x[i]) for i, v in enumerate(vertices)}
    return KatzResult(freeze(scores), iterations, converged, delta)


__all__ = [
    "HITSResult",
    "KatzResult",
    "betweenness_centrality",
    "closeness_centrality",
    "degree_centrality",
    "edge_betweenness_centrality",
    "hits",
    "katz_centrality",
]
