"""
Link prediction by neighborhood similarity.

Scores a vertex pair (u, v) from the vertices between them: common neighbors
in undirected graphs, intermediates x with u -> x -> v in directed graphs.

- common neighbors: |C|
- Jaccard coefficient: |C| / |N(u) union N(v)|
- Adamic-Adar index: sum over x in C of 1 / log(deg(x)), where a degree-1
  intermediate contributes 1

References:
    - Liben-Nowell, D., Kleinberg, J. "The Link-Prediction Problem for Social
      Networks" (2007).
    - Adamic, L. A., Adar, E. "Friends and neighbors on the Web" (2003).
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Hashable, List, NamedTuple, Optional, Tuple

from ..exceptions import ConfigurationError
from .core import Graph


class LinkScore(NamedTuple):
    """Predicted link and its score."""

    source: Hashable
    target: Hashable
    score: float


def _out_set(graph: Graph, u: Hashable) -> Dict[Hashable, None]:
    return {n.vertex: None for n in graph.neighbors(u) if n.vertex != u}


def _in_set(graph: Graph, v: Hashable) -> Dict[Hashable, None]:
    return {n.vertex: None for n in graph.predecessors(v) if n.vertex != v}


def common_neighbors(graph: Graph, u: Hashable, v: Hashable) -> Tuple[Hashable, ...]:
    """
    Vertices adjacent to both u and v (u -> x -> v when directed).

    Args:
        graph: Graph.
        u: First vertex.
        v: Second vertex.

    Returns:
        Shared neighbors in u's adjacency order.

    Raises:
        UnknownVertexError: If u or v is not in graph.

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([('A', 'B'), ('B', 'C'), ('A', 'D'), ('D', 'C')])
        >>> common_neighbors(G, 'A', 'C')
        ('B', 'D')
    """
    graph.require_vertex(u)
    graph.require_vertex(v)
    right = _in_set(graph, v)
    return tuple(x for x in _out_set(graph, u) if x in right)


def jaccard_coefficient(graph: Graph, u: Hashable, v: Hashable) -> float:
    """
    Shared neighbors over the union of both neighborhoods (0.0 if both empty).

    Raises:
        UnknownVertexError: If u or v is not in graph.
    """
    shared = common_neighbors(graph, u, v)
    union = set(_out_set(graph, u)) | set(_in_set(graph, v))
    if not union:
        return 0.0
    return len(shared) / len(union)


def adamic_adar_index(graph: Graph, u: Hashable, v: Hashable) -> float:
    """
    Adamic-Adar index: shared neighbors weighted by inverse log degree.

    Rare intermediates count more than hubs. Degree is the plain degree for
    undirected graphs and the out-degree for directed graphs.

    Raises:
        UnknownVertexError: If u or v is not in graph.

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([('A', 'B'), ('B', 'C')])
        >>> round(adamic_adar_index(G, 'A', 'C'), 4)
        1.4427
    """
    score = 0.0
    for x in common_neighbors(graph, u, v):
        degree = graph.out_degree(x) if graph.directed else graph.degree(x)
        if degree > 1:
            score += 1.0 / math.log(degree)
        elif degree == 1:
            score += 1.0
    return score


_SCORERS: Dict[str, Callable[[Graph, Hashable, Hashable], float]] = {
    "common_neighbors": lambda g, u, v: float(len(common_neighbors(g, u, v))),
    "jaccard": jaccard_coefficient,
    "adamic_adar": adamic_adar_index,
}


def predict_links(
    graph: Graph,
    method: str = "adamic_adar",
    top_k: Optional[int] = None,
    include_existing: bool = False,
) -> Tuple[LinkScore, ...]:
    """
    Rank candidate links by score.

    Only pairs two hops apart can score above zero, so candidates are drawn
    from each vertex's two-hop neighborhood. Undirected pairs are reported
    once, with the earlier-inserted vertex as source.

    Args:
        graph: Graph.
        method: "adamic_adar", "jaccard" or "common_neighbors".
        top_k: Keep only the best k predictions.
        include_existing: Also score pairs that already share an edge.

    Returns:
        LinkScore tuples, highest score first; ties keep insertion order.

    Raises:
        ConfigurationError: If method is unknown or top_k < 1.
    """
    scorer = _SCORERS.get(method)
    if scorer is None:
        raise ConfigurationError(f"Unknown method {method!r}; expected one of {sorted(_SCORERS)}")
    if top_k is not None and top_k < 1:
        raise ConfigurationError(f"top_k must be at least 1, got {top_k}")

    position = {v: i for i, v in enumerate(graph.vertices())}
    scored: List[Tuple[float, int, int, LinkScore]] = []

    for u in graph:
        candidates: Dict[Hashable, None] = {}
        for x in _out_set(graph, u):
            for y in _out_set(graph, x):
                if y == u:
                    continue
                if not graph.directed and position[y] < position[u]:
                    continue
                candidates[y] = None

        for v in candidates:
            if not include_existing and (
                graph.has_edge(u, v) or (not graph.directed and graph.has_edge(v, u))
            ):
                continue
            score = scorer(graph, u, v)
            if score > 0:
                scored.append((-score, position[u], position[v], LinkScore(u, v, score)))

    scored.sort(key=lambda item: item[:3])
    ranked = tuple(item[3] for item in scored)
    return ranked[:top_k] if top_k is not None else ranked


__all__ = [
    "LinkScore",
    "adamic_adar_index",
    "common_neighbors",
    "jaccard_coefficient",
    "predict_links",
]
