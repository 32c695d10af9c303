"""
Compressed Sparse Row (CSR) snapshots of a Graph.

A CSR snapshot stores the outgoing adjacency of vertex i in
indices[offsets[i]:offsets[i + 1]] with parallel weights. Directed graphs also
carry a reverse (incoming) CSR, which bottom-up BFS scans. Arrays are numpy and
read-only; the snapshot keeps no reference to the source graph.

Conversion is a two-pass build: count per-vertex degree, prefix-sum into
offsets, then fill. Vertex indices follow graph insertion order, and each
vertex's range follows its adjacency insertion order, so converting the same
graph twice yields identical arrays.
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, List, Tuple

import numpy as np

from ..exceptions import ConversionError, UnknownVertexError
from ..graphs.core import Graph
from ..logging import get_logger

logger = get_logger(__name__)

# Index arrays are int64, but snapshots are capped at 32-bit addressable sizes.
MAX_VERTICES = 2**31 - 1
MAX_EDGES = 2**31 - 1


def _readonly(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class CSRGraph:
    """
    Immutable CSR representation of a graph.

    Attributes:
        vertices: Tuple mapping index -> vertex id.
        directed: Directedness of the source graph.
        weighted: Weightedness of the source graph.
        offsets: int64 array of length V+1.
        indices: int64 array of neighbor indices (E directed, 2E undirected).
        weights: float64 array parallel to indices (all 1.0 if unweighted).
        in_offsets, in_indices, in_weights: Reverse CSR with each range in
            ascending source order. For undirected graphs it holds the same
            entries as the forward CSR.
    """

    def __init__(
        self,
        vertices: Tuple[Hashable, ...],
        offsets: np.ndarray,
        indices: np.ndarray,
        weights: np.ndarray,
        in_offsets: np.ndarray,
        in_indices: np.ndarray,
        in_weights: np.ndarray,
        directed: bool,
        weighted: bool,
    ):
        self.vertices = tuple(vertices)
        self.offsets = _readonly(offsets)
        self.indices = _readonly(indices)
        self.weights = _readonly(weights)
        self.in_offsets = _readonly(in_offsets)
        self.in_indices = _readonly(in_indices)
        self.in_weights = _readonly(in_weights)
        self.directed = directed
        self.weighted = weighted
        self._index: Dict[Hashable, int] = {v: i for i, v in enumerate(self.vertices)}

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"CSRGraph({kind}, vertices={self.vertex_count()}, edges={self.edge_count()})"

    def __len__(self) -> int:
        return len(self.vertices)

    def vertex_count(self) -> int:
        """Return number of vertices."""
        return len(self.vertices)

    def edge_count(self) -> int:
        """Return number of adjacency entries (length of indices)."""
        return int(self.indices.shape[0])

    def _check(self, i: int) -> int:
        i = int(i)
        if not 0 <= i < len(self.vertices):
            raise IndexError(f"Vertex index {i} out of range [0, {len(self.vertices)})")
        return i

    def neighbor_indices(self, i: int) -> np.ndarray:
        """Return outgoing neighbor indices of vertex index i (read-only view)."""
        i = self._check(i)
        return self.indices[self.offsets[i] : self.offsets[i + 1]]

    def neighbor_weights(self, i: int) -> np.ndarray:
        """Return weights parallel to neighbor_indices(i)."""
        i = self._check(i)
        return self.weights[self.offsets[i] : self.offsets[i + 1]]

    def incoming_indices(self, i: int) -> np.ndarray:
        """Return incoming neighbor indices of vertex index i in ascending order."""
        i = self._check(i)
        return self.in_indices[self.in_offsets[i] : self.in_offsets[i + 1]]

    def out_degree(self, i: int) -> int:
        """Return number of outgoing adjacency entries of vertex index i."""
        i = self._check(i)
        return int(self.offsets[i + 1] - self.offsets[i])

    def in_degree(self, i: int) -> int:
        """Return number of incoming adjacency entries of vertex index i."""
        i = self._check(i)
        return int(self.in_offsets[i + 1] - self.in_offsets[i])

    def has_vertex(self, vertex: Hashable) -> bool:
        """Return True if vertex id is in the snapshot."""
        return vertex in self._index

    def index_of(self, vertex: Hashable) -> int:
        """
        Return the index of a vertex id.

        Raises:
            UnknownVertexError: If vertex is not in the snapshot.
        """
        try:
            return self._index[vertex]
        except KeyError:
            raise UnknownVertexError(vertex) from None

    def vertex_at(self, i: int) -> Hashable:
        """Return the vertex id at index i."""
        return self.vertices[self._check(i)]

    def neighbors(self, vertex: Hashable) -> List[Tuple[Hashable, float]]:
        """Return (neighbor id, weight) pairs of a vertex id."""
        i = self.index_of(vertex)
        start, end = self.offsets[i], self.offsets[i + 1]
        return [
            (self.vertices[j], float(w))
            for j, w in zip(self.indices[start:end], self.weights[start:end])
        ]

    def to_torch(self) -> Any:
        """
        Export the forward adjacency as a torch sparse CSR tensor.

        Parallel edges stay as separate stored entries.

        Returns:
            torch.Tensor with layout torch.sparse_csr and shape (V, V).
        """
        import torch

        n = self.vertex_count()
        # Snapshot arrays are read-only; torch wants writable buffers.
        return torch.sparse_csr_tensor(
            torch.from_numpy(self.offsets.copy()),
            torch.from_numpy(self.indices.copy()),
            torch.from_numpy(self.weights.copy()),
            size=(n, n),
        )


def is_csr_graph(obj: Any) -> bool:
    """Return True if obj is a CSRGraph snapshot."""
    return isinstance(obj, CSRGraph)


def _fill(
    n: int, rows: List[List[Tuple[int, float]]]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    degree = np.fromiter((len(r) for r in rows), dtype=np.int64, count=n)
    offsets = np.zeros(n + 1, dtype=np.int64)
    np.cumsum(degree, out=offsets[1:])

    total = int(offsets[-1])
    indices = np.empty(total, dtype=np.int64)
    weights = np.empty(total, dtype=np.float64)
    for i, row in enumerate(rows):
        start = offsets[i]
        for k, (j, w) in enumerate(row):
            indices[start + k] = j
            weights[start + k] = w
    return offsets, indices, weights


def to_csr(graph: Graph) -> CSRGraph:
    """
    Convert a Graph into a CSR snapshot.

    The graph is not modified. Weights are the effective edge weights, or 1.0
    everywhere for unweighted graphs.

    Args:
        graph: Graph to convert.

    Returns:
        CSRGraph snapshot.

    Raises:
        ConversionError: If the vertex count exceeds MAX_VERTICES or the number
            of adjacency entries exceeds MAX_EDGES.

    Complexity: O(V + E).

    Example:
        >>> G = Graph(directed=True)
        >>> G.add_edge('A', 'B')
        >>> csr = to_csr(G)
        >>> csr.offsets.tolist()
        [0, 1, 1]
    """
    n = graph.vertex_count()
    if n > MAX_VERTICES:
        raise ConversionError(
            f"Graph has {n} vertices; CSR supports at most {MAX_VERTICES}"
        )
    m = graph.edge_count()
    if m > MAX_EDGES:
        raise ConversionError(
            f"Graph has {m} adjacency entries; CSR supports at most {MAX_EDGES}"
        )

    vertices = tuple(graph.vertices())
    index = {v: i for i, v in enumerate(vertices)}
    weighted = graph.weighted

    # Pass 1: collect rows (degree counts); pass 2 in _fill writes the arrays.
    forward: List[List[Tuple[int, float]]] = []
    for v in vertices:
        forward.append(
            [(index[e.vertex], e.weight if weighted else 1.0) for e in graph.neighbors(v)]
        )
    offsets, indices, weights = _fill(n, forward)

    # Visiting sources in index order leaves each incoming range ascending.
    backward: List[List[Tuple[int, float]]] = [[] for _ in range(n)]
    for i, row in enumerate(forward):
        for j, w in row:
            backward[j].append((i, w))
    in_offsets, in_indices, in_weights = _fill(n, backward)

    logger.debug("Built CSR snapshot: %d vertices, %d adjacency entries", n, len(indices))
    return CSRGraph(
        vertices,
        offsets,
        indices,
        weights,
        in_offsets,
        in_indices,
        in_weights,
        directed=graph.directed,
        weighted=weighted,
    )


__all__ = ["CSRGraph", "MAX_EDGES", "MAX_VERTICES", "is_csr_graph", "to_csr"]
