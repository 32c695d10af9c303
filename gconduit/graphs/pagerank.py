"""
PageRank algorithm using power iteration.

Computes importance scores for vertices based on a random walk with damping
factor. Mass held by dangling vertices (no outgoing edges) is redistributed
every iteration, uniformly or by the personalization vector.

References:
    - Page, L., Brin, S., Motwani, R., Winograd, T. "The PageRank Citation Ranking:
      Bringing Order to the Web" (1998).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Mapping, Optional

import numpy as np

from ..exceptions import ConfigurationError
from ..logging import get_logger
from .core import Graph
from .utils import freeze

logger = get_logger(__name__)


@dataclass(frozen=True)
class PageRankResult:
    """
    PageRank scores and convergence status.

    Attributes:
        scores: Vertex -> score; scores sum to 1.0 for non-empty graphs.
        iterations: Power iterations performed.
        converged: True if the L1 delta fell below tolerance.
        delta: L1 delta of the last iteration.
    """

    scores: Mapping[Hashable, float]
    iterations: int
    converged: bool
    delta: float

    def top(self, k: int = 10):
        """Return the k highest-scoring (vertex, score) pairs."""
        return sorted(self.scores.items(), key=lambda item: -item[1])[:k]


def _check_options(damping_factor: float, max_iterations: int, tolerance: float) -> None:
    if not 0.0 <= damping_factor <= 1.0:
        raise ConfigurationError(f"damping_factor must be in [0, 1], got {damping_factor}")
    if int(max_iterations) != max_iterations or max_iterations < 1:
        raise ConfigurationError(
            f"max_iterations must be a positive integer, got {max_iterations}"
        )
    if not tolerance > 0:
        raise ConfigurationError(f"tolerance must be positive, got {tolerance}")


def pagerank(
    graph: Graph,
    damping_factor: float = 0.85,
    max_iterations: int = 100,
    tolerance: float = 1e-6,
    personalization: Optional[Mapping[Hashable, float]] = None,
    weighted: bool = False,
) -> PageRankResult:
    """
    Compute PageRank scores using power iteration.

    PageRank models a random surfer who follows links with probability
    damping_factor and jumps to a random vertex otherwise. Iteration stops when
    the L1 change drops below tolerance or after max_iterations, whichever
    comes first; non-convergence is reported in the result and logged.

    Args:
        graph: Graph (undirected edges are followed both ways).
        damping_factor: Probability of following a link, default 0.85.
        max_iterations: Iteration cap, default 100.
        tolerance: L1 convergence threshold, default 1e-6.
        personalization: Optional vertex -> non-negative weight for the jump
            and dangling distributions. Normalized to sum 1; omitted vertices
            get 0.
        weighted: Split each vertex's outgoing mass by edge weight instead of
            evenly (requires a weighted graph to matter).

    Returns:
        PageRankResult.

    Raises:
        ConfigurationError: If an option is out of range or personalization
            has negative entries or zero total.
        UnknownVertexError: If personalization names a vertex not in graph.
        NegativeWeightError: If weighted and a weight is negative.

    Complexity: O(k * (V + E)) where k is number of iterations until convergence.

    Example:
        >>> G = Graph(directed=True)
        >>> G.add_edge('A', 'B')
        >>> result = pagerank(G)
        >>> round(sum(result.scores.values()), 6)
        1.0
    """
    _check_options(damping_factor, max_iterations, tolerance)
    if weighted:
        graph.validate_weights(non_negative=True)

    vertices = graph.vertices()
    n = len(vertices)
    if n == 0:
        return PageRankResult(freeze({}), 0, True, 0.0)

    index: Dict[Hashable, int] = {v: i for i, v in enumerate(vertices)}

    if personalization is None:
        jump = np.full(n, 1.0 / n)
    else:
        jump = np.zeros(n)
        for vertex, value in personalization.items():
            graph.require_vertex(vertex)
            if value < 0:
                raise ConfigurationError(
                    f"personalization values must be non-negative, got {value} for {vertex!r}"
                )
            jump[index[vertex]] = value
        total = jump.sum()
        if total <= 0:
            raise ConfigurationError("personalization must have a positive total")
        jump /= total

    src = []
    dst = []
    weights = []
    for u, v, w in graph.arcs():
        src.append(index[u])
        dst.append(index[v])
        weights.append(w if weighted else 1.0)
    src = np.asarray(src, dtype=np.int64)
    dst = np.asarray(dst, dtype=np.int64)
    weights = np.asarray(weights, dtype=np.float64)

    out_weight = np.bincount(src, weights=weights, minlength=n)
    dangling = out_weight <= 0
    # Share of the source's mass carried by each arc.
    share = np.zeros_like(weights)
    live = out_weight[src] > 0
    share[live] = weights[live] / out_weight[src][live]

    pr = np.full(n, 1.0 / n)
    delta = float("inf")
    converged = False
    iterations = 0

    for iterations in range(1, int(max_iterations) + 1):
        pr_new = damping_factor * np.bincount(dst, weights=pr[src] * share, minlength=n)
        pr_new += damping_factor * pr[dangling].sum() * jump
        pr_new += (1.0 - damping_factor) * jump

        delta = float(np.abs(pr_new - pr).sum())
        pr = pr_new
        if delta < tolerance:
            converged = True
            break

    if converged:
        logger.debug("PageRank converged after %d iterations (delta=%.3e)", iterations, delta)
    else:
        logger.warning(
            "PageRank did not converge within %d iterations (delta=%.3e, tolerance=%.1e)",
            iterations,
            delta,
            tolerance,
        )

    scores = {vertices[i]: float(pr[i]) for i in range(n)}
    return PageRankResult(freeze(scores), iterations, converged, delta)


__all__ = ["PageRankResult", "pagerank"]
