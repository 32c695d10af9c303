"""
Minimum spanning tree algorithms: Kruskal and Prim.

Kruskal uses the union-find data structure. Prim uses the indexed priority
queue. Both treat directed graphs as undirected and return a spanning forest
when the graph is disconnected.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 23.1 (MST properties), 23.2 (Kruskal), 23.2 (Prim).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Tuple

from .core import Graph
from .structures import PriorityQueue, UnionFind

WeightedEdge = Tuple[Hashable, Hashable, float]


@dataclass(frozen=True)
class MSTResult:
    """
    Spanning forest edges and their total weight.

    Attributes:
        edges: (u, v, weight) tuples in the order the algorithm selected them.
        total_weight: Sum of the selected weights.
    """

    edges: Tuple[WeightedEdge, ...]
    total_weight: float

    def __len__(self) -> int:
        return len(self.edges)


def _effective(graph: Graph, weight: Optional[float]) -> float:
    if not graph.weighted or weight is None:
        return 1.0
    return weight


def kruskal_mst(graph: Graph) -> MSTResult:
    """
    Kruskal's algorithm for minimum spanning tree.

    Edges are scanned by weight; equal weights keep insertion order, so the
    result is deterministic. Self-loops never join the tree.

    Args:
        graph: Graph (edge direction is ignored).

    Returns:
        MSTResult. For disconnected graphs, the minimum spanning forest.

    Raises:
        MissingWeightError: If a weighted graph has an edge without a weight.

    Complexity: O(E log E) = O(E log V) for sorting and union-find operations.

    Example:
        >>> G = Graph(weighted=True)
        >>> G.add_edges_from([('A', 'B', 1.0), ('B', 'C', 2.0), ('A', 'C', 3.0)])
        >>> mst = kruskal_mst(G)
        >>> len(mst), mst.total_weight
        (2, 3.0)
    """
    graph.validate_weights()
    edges = sorted(graph.edges(), key=lambda e: (_effective(graph, e.weight), e.index))

    uf = UnionFind(graph.vertices())
    selected: List[WeightedEdge] = []
    target = max(graph.vertex_count() - 1, 0)

    for edge in edges:
        if uf.union(edge.source, edge.target):
            selected.append((edge.source, edge.target, _effective(graph, edge.weight)))
            if len(selected) == target:
                break

    return MSTResult(tuple(selected), float(sum(w for _, _, w in selected)))


def prim_mst(graph: Graph, start: Optional[Hashable] = None) -> MSTResult:
    """
    Prim's algorithm for minimum spanning tree.

    Grows a tree from start, always adding the cheapest edge to a new vertex.
    Remaining components are grown from their first vertex in insertion order.

    Args:
        graph: Graph (edge direction is ignored).
        start: Starting vertex (defaults to the first inserted vertex).

    Returns:
        MSTResult. For disconnected graphs, the minimum spanning forest.

    Raises:
        UnknownVertexError: If start is given and not in graph.
        MissingWeightError: If a weighted graph has an edge without a weight.

    Complexity: O(E log V) using binary heap.

    Example:
        >>> G = Graph(weighted=True)
        >>> G.add_edge('A', 'B', 1.0)
        >>> G.add_edge('B', 'C', 2.0)
        >>> prim_mst(G, 'A').edges
        (('A', 'B', 1.0), ('B', 'C', 2.0))
    """
    graph.validate_weights()
    if start is not None:
        graph.require_vertex(start)

    # Undirected view: out-edges plus in-edges.
    def incident(u: Hashable):
        if graph.directed:
            return graph.neighbors(u) + graph.predecessors(u)
        return graph.neighbors(u)

    order = graph.vertices()
    if start is not None:
        order.remove(start)
        order.insert(0, start)

    in_tree = set()
    selected: List[WeightedEdge] = []

    for root in order:
        if root in in_tree:
            continue
        best: Dict[Hashable, Tuple[Hashable, float]] = {}
        pq = PriorityQueue()
        pq.push(root, 0.0)

        while pq:
            u, _ = pq.pop_min()
            in_tree.add(u)
            if u in best:
                parent, weight = best[u]
                selected.append((parent, u, weight))

            for entry in incident(u):
                v = entry.vertex
                if v in in_tree:
                    continue
                weight = entry.weight if graph.weighted else 1.0
                if v not in pq:
                    best[v] = (u, weight)
                    pq.push(v, weight)
                elif weight < pq.priority(v):
                    best[v] = (u, weight)
                    pq.decrease_key(v, weight)

    return MSTResult(tuple(selected), float(sum(w for _, _, w in selected)))


__all__ = ["MSTResult", "kruskal_mst", "prim_mst"]
