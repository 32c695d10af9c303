"""
Graph traversal algorithms: BFS, DFS, cycle detection and topological sort.

Provides breadth-first and depth-first search over the Graph ADT. Neighbors
are visited in adjacency insertion order for reproducible results. BFS can
delegate to the CSR + direction-optimized engine (see gconduit.config).

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 22.2 (BFS) and 22.3 (DFS).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, Hashable, List, Mapping, Optional, Tuple

from ..config import get_optimization_config
from ..exceptions import ConfigurationError, CycleError
from ..logging import get_logger
from ..optimized.bfs import direction_optimized_bfs
from ..optimized.csr import to_csr
from .core import Graph
from .utils import freeze

logger = get_logger(__name__)


@dataclass(frozen=True)
class TraversalResult:
    """
    Result of a breadth-first search.

    Attributes:
        source: Source vertex.
        order: Vertices in visitation order.
        distance: Hop distance of every reached vertex.
        parent: Parent of every reached vertex (None for the source).
    """

    source: Hashable
    order: Tuple[Hashable, ...]
    distance: Mapping[Hashable, int]
    parent: Mapping[Hashable, Optional[Hashable]]


@dataclass(frozen=True)
class DFSResult:
    """
    Result of a depth-first search.

    Attributes:
        source: Source vertex.
        preorder: Vertices in discovery order.
        postorder: Vertices in finish order.
        parent: Parent on the first-discovery edge (None for the source).
    """

    source: Hashable
    preorder: Tuple[Hashable, ...]
    postorder: Tuple[Hashable, ...]
    parent: Mapping[Hashable, Optional[Hashable]]


def bfs(graph: Graph, source: Hashable, optimized: Optional[bool] = None) -> TraversalResult:
    """
    Breadth-first search from a source vertex.

    Returns vertices in BFS visitation order, hop distances and the parent map
    for path reconstruction. Unreached vertices appear in neither map.

    With the optimized engine, vertices within a level are ordered by insertion
    index and each parent is the lowest-index vertex of the previous level with
    an edge to it. The queue engine orders a level by discovery.

    Args:
        graph: Graph to traverse.
        source: Source vertex to start BFS from.
        optimized: Use the CSR + direction-optimized engine. None reads the
            process-wide setting once at call entry.

    Returns:
        TraversalResult with order, distance and parent.

    Raises:
        UnknownVertexError: If source is not in graph.

    Complexity: O(V + E) where V is vertices and E is edges.

    Example:
        >>> G = Graph()
        >>> G.add_edge('A', 'B')
        >>> G.add_edge('A', 'C')
        >>> result = bfs(G, 'A')
        >>> result.order
        ('A', 'B', 'C')
        >>> result.distance['B']
        1
    """
    graph.require_vertex(source)
    config = get_optimization_config()
    if optimized is None:
        optimized = config.enabled

    if optimized:
        return _bfs_optimized(graph, source, config.alpha, config.beta)

    order: List[Hashable] = []
    distance: Dict[Hashable, int] = {source: 0}
    parent: Dict[Hashable, Optional[Hashable]] = {source: None}
    queue = deque([source])

    while queue:
        u = queue.popleft()
        order.append(u)

        for entry in graph.neighbors(u):
            v = entry.vertex
            if v not in distance:
                distance[v] = distance[u] + 1
                parent[v] = u
                queue.append(v)

    return TraversalResult(source, tuple(order), freeze(distance), freeze(parent))


def _bfs_optimized(graph: Graph, source: Hashable, alpha: float, beta: float) -> TraversalResult:
    csr = to_csr(graph)
    result = direction_optimized_bfs(csr, csr.index_of(source), alpha=alpha, beta=beta)
    logger.debug(
        "Optimized BFS from %r: %d levels, modes=%s",
        source,
        result.levels,
        [mode.value for mode in result.modes],
    )

    vertices = csr.vertices
    hops = result.distance.to_array()
    parents = result.parent
    order = tuple(vertices[i] for i in result.level_order().tolist())
    distance = {}
    parent: Dict[Hashable, Optional[Hashable]] = {}
    for i in result.visited.get_set_indices().tolist():
        distance[vertices[i]] = int(hops[i])
        parent[vertices[i]] = vertices[parents[i]] if parents[i] >= 0 else None
    return TraversalResult(source, order, freeze(distance), freeze(parent))


def dfs_recursive(graph: Graph, source: Hashable) -> DFSResult:
    """
    Depth-first search (recursive implementation).

    Returns pre-order and post-order visitation lists, plus parent map.
    Deep graphs can exceed the interpreter's recursion limit; use dfs() there.

    Args:
        graph: Graph to traverse.
        source: Source vertex to start DFS from.

    Raises:
        UnknownVertexError: If source is not in graph.

    Complexity: O(V + E) where V is vertices and E is edges.

    Example:
        >>> G = Graph()
        >>> G.add_edge('A', 'B')
        >>> G.add_edge('A', 'C')
        >>> dfs_recursive(G, 'A').preorder
        ('A', 'B', 'C')
    """
    graph.require_vertex(source)

    preorder: List[Hashable] = []
    postorder: List[Hashable] = []
    parent: Dict[Hashable, Optional[Hashable]] = {source: None}

    def dfs_visit(u: Hashable) -> None:
        preorder.append(u)
        for entry in graph.neighbors(u):
            v = entry.vertex
            if v not in parent:
                parent[v] = u
                dfs_visit(v)
        postorder.append(u)

    dfs_visit(source)
    return DFSResult(source, tuple(preorder), tuple(postorder), freeze(parent))


def dfs(graph: Graph, source: Hashable) -> DFSResult:
    """
    Depth-first search (iterative implementation using an explicit stack).

    Produces the same preorder, postorder and parent map as dfs_recursive,
    without recursion depth limits.

    Args:
        graph: Graph to traverse.
        source: Source vertex to start DFS from.

    Raises:
        UnknownVertexError: If source is not in graph.

    Complexity: O(V + E) where V is vertices and E is edges.
    """
    graph.require_vertex(source)

    preorder: List[Hashable] = [source]
    postorder: List[Hashable] = []
    parent: Dict[Hashable, Optional[Hashable]] = {source: None}
    # (vertex, adjacency entries, next position)
    stack = [(source, graph.neighbors(source), 0)]

    while stack:
        u, entries, pos = stack[-1]
        while pos < len(entries) and entries[pos].vertex in parent:
            pos += 1
        if pos == len(entries):
            stack.pop()
            postorder.append(u)
            continue

        stack[-1] = (u, entries, pos + 1)
        v = entries[pos].vertex
        parent[v] = u
        preorder.append(v)
        stack.append((v, graph.neighbors(v), 0))

    return DFSResult(source, tuple(preorder), tuple(postorder), freeze(parent))


_WHITE, _GRAY, _BLACK = 0, 1, 2


def _finish_order(graph: Graph) -> Tuple[List[Hashable], bool]:
    """Return (finish order over every vertex, True if a back edge was seen)."""
    color = dict.fromkeys(graph.vertices(), _WHITE)
    finish: List[Hashable] = []
    back_edge = False

    for root in graph:
        if color[root] != _WHITE:
            continue
        color[root] = _GRAY
        stack = [(root, graph.neighbors(root), 0)]
        while stack:
            u, entries, pos = stack[-1]
            if pos == len(entries):
                stack.pop()
                color[u] = _BLACK
                finish.append(u)
                continue
            stack[-1] = (u, entries, pos + 1)
            v = entries[pos].vertex
            if color[v] == _GRAY:
                back_edge = True
            elif color[v] == _WHITE:
                color[v] = _GRAY
                stack.append((v, graph.neighbors(v), 0))

    return finish, back_edge


def _undirected_has_cycle(graph: Graph) -> bool:
    seen = set()
    for root in graph:
        if root in seen:
            continue
        seen.add(root)
        # (vertex, arena index of the tree edge that reached it)
        stack = [(root, -1)]
        while stack:
            u, via = stack.pop()
            for entry in graph.neighbors(u):
                if entry.edge == via:
                    continue
                if entry.vertex in seen:
                    return True
                seen.add(entry.vertex)
                stack.append((entry.vertex, entry.edge))
    return False


def has_cycle(graph: Graph) -> bool:
    """
    Return True if the graph contains a cycle.

    Directed graphs look for a back edge during a depth-first search over
    every vertex. Undirected graphs report a cycle when an edge other than the
    one used to reach a vertex leads to an already seen vertex, so self-loops
    and parallel edges count as cycles.

    Complexity: O(V + E).

    Example:
        >>> G = Graph(directed=True)
        >>> G.add_edges_from([('A', 'B'), ('B', 'C')])
        >>> has_cycle(G)
        False
        >>> G.add_edge('C', 'A')
        >>> has_cycle(G)
        True
    """
    if graph.directed:
        return _finish_order(graph)[1]
    return _undirected_has_cycle(graph)


def topological_sort(graph: Graph) -> Tuple[Hashable, ...]:
    """
    Order the vertices of a directed acyclic graph so every edge points forward.

    The order is the reverse depth-first finish order, with roots and
    neighbors taken in insertion order.

    Args:
        graph: Directed graph.

    Returns:
        Every vertex exactly once.

    Raises:
        ConfigurationError: If graph is undirected.
        CycleError: If graph contains a directed cycle.

    Complexity: O(V + E).

    Example:
        >>> G = Graph(directed=True)
        >>> G.add_edges_from([('shirt', 'tie'), ('tie', 'jacket')])
        >>> topological_sort(G)
        ('shirt', 'tie', 'jacket')
    """
    if not graph.directed:
        raise ConfigurationError("Topological sort requires a directed graph")
    finish, back_edge = _finish_order(graph)
    if back_edge:
        raise CycleError("Graph contains a directed cycle; no topological order exists")
    return tuple(reversed(finish))


__all__ = [
    "DFSResult",
    "TraversalResult",
    "bfs",
    "dfs",
    "dfs_recursive",
    "has_cycle",
    "topological_sort",
]
