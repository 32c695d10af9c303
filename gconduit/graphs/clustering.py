"""
Clustering methods: graph Laplacian, spectral clustering and k-core decomposition.

Spectral clustering embeds vertices with the smallest eigenvectors of the
Laplacian and groups the rows with deterministic k-means. k-core decomposition
peels minimum-degree vertices with the indexed priority queue.

References:
    - Golub, G. H., Van Loan, C. F. "Matrix Computations", 4th ed.
    - Von Luxburg, U. "A Tutorial on Spectral Clustering" (2007).
    - Batagelj, V., Zaversnik, M. "An O(m) Algorithm for Cores Decomposition of
      Networks" (2003).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Mapping, Tuple

import numpy as np

from ..exceptions import ConfigurationError
from .core import Graph
from .structures import PriorityQueue
from .utils import freeze


def graph_laplacian_matrix(graph: Graph, normalized: bool = False) -> np.ndarray:
    """
    Compute graph Laplacian matrix L = D - W.

    W is the symmetric weight matrix of the undirected view (parallel edges
    summed, self-loops ignored). Rows follow graph insertion order.

    Args:
        graph: Graph instance.
        normalized: Return the symmetric normalized Laplacian
            I - D^(-1/2) W D^(-1/2) instead (isolated vertices get a zero row).

    Returns:
        (n, n) numpy array.

    Raises:
        MissingWeightError: If a weighted graph has an edge without a weight.

    Example:
        >>> G = Graph(weighted=True)
        >>> G.add_edge('A', 'B', 1.0)
        >>> graph_laplacian_matrix(G).tolist()
        [[1.0, -1.0], [-1.0, 1.0]]
    """
    graph.validate_weights()
    vertices = graph.vertices()
    index = {v: i for i, v in enumerate(vertices)}
    n = len(vertices)

    W = np.zeros((n, n))
    for edge in graph.edges():
        i, j = index[edge.source], index[edge.target]
        if i == j:
            continue
        w = edge.value if graph.weighted else 1.0
        W[i, j] += w
        W[j, i] += w

    degree = W.sum(axis=1)
    if not normalized:
        return np.diag(degree) - W

    # Avoid division by zero for isolated vertices
    inv_sqrt = np.zeros(n)
    nonzero = degree > 0
    inv_sqrt[nonzero] = 1.0 / np.sqrt(degree[nonzero])
    return np.diag(nonzero.astype(float)) - inv_sqrt[:, None] * W * inv_sqrt[None, :]


@dataclass(frozen=True)
class SpectralResult:
    """
    Spectral clustering output.

    Attributes:
        assignments: Vertex -> cluster id (0..k-1, numbered by first member).
        communities: Member tuples indexed by cluster id.
        eigenvalues: The k smallest Laplacian eigenvalues used for the embedding.
    """

    assignments: Mapping[Hashable, int]
    communities: Tuple[Tuple[Hashable, ...], ...]
    eigenvalues: np.ndarray


def spectral_clustering(
    graph: Graph, k: int, normalized: bool = True, max_iterations: int = 100
) -> SpectralResult:
    """
    Perform spectral clustering with the k smallest Laplacian eigenvectors.

    Uses k-means on the rows of the eigenvector matrix to assign clusters.
    With normalized=True the rows are scaled to unit length first
    (Ng-Jordan-Weiss).

    Args:
        graph: Graph instance (directed edges are treated as undirected).
        k: Number of clusters.
        normalized: Use the normalized Laplacian.
        max_iterations: k-means iteration cap.

    Returns:
        SpectralResult.

    Raises:
        ConfigurationError: If k < 1 or k > number of vertices.

    Complexity: O(n^3) for eigenvalue decomposition, O(n*k*iterations) for k-means.

    Example:
        >>> G = Graph()
        >>> G.add_edge('A', 'B')
        >>> G.add_edge('C', 'D')
        >>> spectral_clustering(G, k=2).communities
        (('A', 'B'), ('C', 'D'))
    """
    vertices = graph.vertices()
    n = len(vertices)
    if k < 1:
        raise ConfigurationError(f"k must be >= 1, got {k}")
    if k > n:
        raise ConfigurationError(f"k must be <= number of vertices ({n}), got {k}")

    L = graph_laplacian_matrix(graph, normalized=normalized)
    eigenvalues, eigenvectors = np.linalg.eigh(L)
    embedding = eigenvectors[:, :k]

    if normalized:
        row_norms = np.linalg.norm(embedding, axis=1, keepdims=True)
        embedding = embedding / np.maximum(row_norms, 1e-10)

    labels = _kmeans_deterministic(embedding, k, max_iterations)

    # Number clusters by first member for stable output.
    ids: Dict[int, int] = {}
    assignment = [ids.setdefault(int(label), len(ids)) for label in labels]
    groups: List[List[Hashable]] = [[] for _ in range(len(ids))]
    for vertex, cluster in zip(vertices, assignment):
        groups[cluster].append(vertex)

    return SpectralResult(
        assignments=freeze(dict(zip(vertices, assignment))),
        communities=tuple(tuple(g) for g in groups),
        eigenvalues=eigenvalues[:k],
    )


def _kmeans_deterministic(data: np.ndarray, k: int, max_iter: int = 100) -> np.ndarray:
    """
    Deterministic k-means clustering.

    Farthest-first initialization: the first row, then repeatedly the row
    farthest from all chosen centroids (lowest index on ties).

    Args:
        data: (n, d) array of n data points in d dimensions.
        k: Number of clusters.
        max_iter: Maximum iterations.

    Returns:
        (n,) array of cluster assignments (0 to k-1).
    """
    n = data.shape[0]
    if k >= n:
        return np.arange(n)

    chosen = [0]
    nearest = np.linalg.norm(data - data[0], axis=1)
    for _ in range(1, k):
        nxt = int(np.argmax(nearest))
        chosen.append(nxt)
        nearest = np.minimum(nearest, np.linalg.norm(data - data[nxt], axis=1))
    centroids = data[chosen].copy()

    assignments = np.full(n, -1)
    for _ in range(max_iter):
        diff = data[:, np.newaxis, :] - centroids[np.newaxis, :, :]
        new_assignments = np.argmin((diff**2).sum(axis=2), axis=1)

        if np.array_equal(new_assignments, assignments):
            break
        assignments = new_assignments

        for j in range(k):
            mask = assignments == j
            if mask.any():
                centroids[j] = data[mask].mean(axis=0)

    return assignments


@dataclass(frozen=True)
class KCoreResult:
    """
    k-core decomposition.

    Attributes:
        coreness: Vertex -> largest k such that the vertex is in the k-core.
        max_core: Largest coreness (0 for graphs without edges).
        order: Vertices in peeling (degeneracy) order.
    """

    coreness: Mapping[Hashable, int]
    max_core: int
    order: Tuple[Hashable, ...]

    def core(self, k: int) -> Tuple[Hashable, ...]:
        """Return the vertices of the k-core."""
        return tuple(v for v, c in self.coreness.items() if c >= k)


def _simple_neighbors(graph: Graph) -> Dict[Hashable, Dict[Hashable, None]]:
    # Dicts as insertion-ordered sets keep peeling order reproducible.
    nbrs: Dict[Hashable, Dict[Hashable, None]] = {v: {} for v in graph}
    for edge in graph.edges():
        if edge.source != edge.target:
            nbrs[edge.source][edge.target] = None
            nbrs[edge.target][edge.source] = None
    return nbrs


def k_core_decomposition(graph: Graph) -> KCoreResult:
    """
    Coreness of every vertex by repeatedly removing a minimum-degree vertex.

    Works on the simple undirected view: parallel edges count once and
    self-loops are ignored.

    Args:
        graph: Graph.

    Returns:
        KCoreResult.

    Complexity: O(E log V).

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([('A', 'B'), ('B', 'C'), ('C', 'A'), ('C', 'D')])
        >>> k_core_decomposition(G).coreness['D']
        1
    """
    nbrs = _simple_neighbors(graph)
    degree = {v: len(ns) for v, ns in nbrs.items()}
    pq = PriorityQueue()
    for v in graph:
        pq.push(v, degree[v])

    coreness: Dict[Hashable, int] = {}
    order: List[Hashable] = []
    k = 0
    while pq:
        u, d = pq.pop_min()
        k = max(k, int(d))
        coreness[u] = k
        order.append(u)
        for w in nbrs[u]:
            if w in pq:
                degree[w] -= 1
                pq.decrease_key(w, degree[w])

    ordered = {v: coreness[v] for v in graph}
    return KCoreResult(freeze(ordered), max(ordered.values(), default=0), tuple(order))


def k_core(graph: Graph, k: int) -> Graph:
    """
    Return the k-core as a new graph induced by vertices of coreness >= k.

    Raises:
        ConfigurationError: If k is negative.
    """
    if k < 0:
        raise ConfigurationError(f"k must be non-negative, got {k}")
    keep = set(k_core_decomposition(graph).core(k))
    sub = Graph(directed=graph.directed, weighted=graph.weighted)
    for v in graph:
        if v in keep:
            sub.add_vertex(v, **graph.vertex_attrs(v))
    for edge in graph.edges():
        if edge.source in keep and edge.target in keep:
            sub.add_edge(edge.source, edge.target, edge.weight, **edge.attrs)
    return sub


__all__ = [
    "KCoreResult",
    "SpectralResult",
    "graph_laplacian_matrix",
    "k_core",
    "k_core_decomposition",
    "spectral_clustering",
]
