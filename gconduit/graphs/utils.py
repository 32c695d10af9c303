"""
Utility functions for graph algorithms.

Provides helpers for vertex indexing, weight lookup, result freezing, and path
reconstruction.
"""

from __future__ import annotations

import concurrent.futures
from types import MappingProxyType
from typing import Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, TypeVar

from ..exceptions import ConfigurationError
from .core import Graph, Neighbor


def vertex_index_map(
    vertices: Iterable[Hashable],
) -> Tuple[Dict[Hashable, int], List[Hashable]]:
    """
    Create a mapping from vertices to indices 0..n-1 in iteration order.

    Args:
        vertices: Iterable of hashable vertices (duplicates are ignored).

    Returns:
        Tuple of (vertex_to_index dict, index_to_vertex list).

    Example:
        >>> to_idx, order = vertex_index_map(['c', 'a', 'b'])
        >>> to_idx
        {'c': 0, 'a': 1, 'b': 2}
    """
    vertex_to_index: Dict[Hashable, int] = {}
    order: List[Hashable] = []
    for vertex in vertices:
        if vertex not in vertex_to_index:
            vertex_to_index[vertex] = len(order)
            order.append(vertex)
    return vertex_to_index, order


def edge_weight(graph: Graph, entry: Neighbor) -> float:
    """Effective weight of an adjacency entry (1.0 on unweighted graphs)."""
    return entry.weight if graph.weighted else 1.0


def freeze(mapping: Mapping) -> Mapping:
    """Return a read-only view of a fresh copy of mapping."""
    return MappingProxyType(dict(mapping))


T = TypeVar("T")


def map_sources(
    fn: Callable[[Hashable], T], sources: List[Hashable], workers: Optional[int] = None
) -> List[T]:
    """
    Apply fn to every source, optionally on a thread pool.

    Results come back in source order whatever the worker count, so callers can
    merge them deterministically.

    Args:
        fn: Per-source computation. Must not mutate shared state.
        sources: Sources to process.
        workers: Thread count; None or 1 runs inline.

    Raises:
        ConfigurationError: If workers is less than 1.
    """
    if workers is not None and workers < 1:
        raise ConfigurationError(f"workers must be at least 1, got {workers}")
    if not workers or workers == 1 or len(sources) < 2:
        return [fn(s) for s in sources]

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(fn, sources))


def reconstruct_path(
    parent: Mapping[Hashable, Optional[Hashable]], target: Hashable
) -> Optional[List[Hashable]]:
    """
    Reconstruct path from source to target using parent map.

    The parent map should come from a search (BFS, Dijkstra, Bellman-Ford)
    where parent[v] is the previous vertex on the path, or None if v is the
    source or unreachable.

    Args:
        parent: Mapping vertex -> parent vertex (or None).
        target: Target vertex to reconstruct path to.

    Returns:
        List of vertices from source to target (inclusive), [target] when
        target is the source, or None if target is unreachable or the parent
        chain loops.

    Example:
        >>> parent = {'A': None, 'B': 'A', 'C': 'B'}
        >>> reconstruct_path(parent, 'C')
        ['A', 'B', 'C']
        >>> reconstruct_path(parent, 'D') is None
        True
    """
    if target not in parent:
        return None

    path = []
    seen = set()
    current = target
    while current is not None:
        if current in seen:
            # Parent chains can loop when a negative cycle was found.
            return None
        seen.add(current)
        path.append(current)
        current = parent.get(current)

    path.reverse()
    return path


__all__ = ["edge_weight", "freeze", "map_sources", "reconstruct_path", "vertex_index_map"]
