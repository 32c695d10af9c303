"""
Shortest path algorithms: Dijkstra, Bellman-Ford, A* and bidirectional Dijkstra.

Dijkstra's algorithm for non-negative edge weights.
Bellman-Ford algorithm for graphs with negative weights (detects negative cycles).
A* and bidirectional Dijkstra answer single source-target queries.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 24.3 (Dijkstra) and 24.1 (Bellman-Ford).
    - Hart, Nilsson, Raphael. "A Formal Basis for the Heuristic Determination
      of Minimum Cost Paths" (1968).
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Mapping, Optional, Tuple

from ..exceptions import ConfigurationError, NegativeWeightError
from ..logging import get_logger
from .core import Graph
from .structures import PriorityQueue
from .traversal import bfs
from .utils import edge_weight, freeze, reconstruct_path

logger = get_logger(__name__)


@dataclass(frozen=True)
class ShortestPathResult:
    """
    Single-source shortest path distances and predecessors.

    Attributes:
        source: Source vertex.
        distance: Shortest distance of every reached vertex.
        parent: Predecessor on a shortest path (None for the source).
    """

    source: Hashable
    distance: Mapping[Hashable, float]
    parent: Mapping[Hashable, Optional[Hashable]]

    def distance_to(self, target: Hashable) -> float:
        """Return distance to target, or inf if unreached."""
        return self.distance.get(target, math.inf)

    def path_to(self, target: Hashable) -> Optional[List[Hashable]]:
        """Return the path source -> target, or None if unreached."""
        return reconstruct_path(self.parent, target)


@dataclass(frozen=True)
class BellmanFordResult(ShortestPathResult):
    """
    Bellman-Ford result.

    Attributes:
        has_negative_cycle: True if an edge could still relax after V-1 rounds.
            Distances of affected vertices are then unreliable.
        affected: Vertices reachable from a still-relaxable edge, in insertion
            order.
    """

    has_negative_cycle: bool = False
    affected: Tuple[Hashable, ...] = ()


@dataclass(frozen=True)
class PathResult:
    """A single source-target path (None if unreachable) and its length."""

    path: Optional[Tuple[Hashable, ...]]
    distance: float


def dijkstra(graph: Graph, source: Hashable) -> ShortestPathResult:
    """
    Dijkstra's algorithm for single-source shortest paths.

    Computes shortest paths from source to all reachable vertices in a graph
    with non-negative edge weights. Weights are scanned before the search
    starts, so a bad weight fails before any result is produced. When two
    paths tie, the predecessor from the first relaxation is kept.

    Args:
        graph: Graph with non-negative edge weights.
        source: Source vertex.

    Returns:
        ShortestPathResult with distances and predecessors of reached vertices.

    Raises:
        UnknownVertexError: If source is not in graph.
        NegativeWeightError: If graph contains negative edge weights.
        MissingWeightError: If a weighted graph has an edge without a weight.

    Complexity: O(E log V) using binary heap priority queue.

    Example:
        >>> G = Graph(directed=True, weighted=True)
        >>> G.add_edge('A', 'B', 1.0)
        >>> G.add_edge('B', 'C', 2.0)
        >>> dijkstra(G, 'A').distance['C']
        3.0
    """
    graph.require_vertex(source)
    graph.validate_weights(non_negative=True)

    dist: Dict[Hashable, float] = {source: 0.0}
    parent: Dict[Hashable, Optional[Hashable]] = {source: None}
    settled = set()
    pq = PriorityQueue()
    pq.push(source, 0.0)

    while pq:
        u, d = pq.pop_min()
        settled.add(u)

        for entry in graph.neighbors(u):
            v = entry.vertex
            if v in settled:
                continue
            new_dist = d + edge_weight(graph, entry)
            if v not in dist:
                dist[v] = new_dist
                parent[v] = u
                pq.push(v, new_dist)
            elif new_dist < dist[v]:
                dist[v] = new_dist
                parent[v] = u
                pq.decrease_key(v, new_dist)

    return ShortestPathResult(source, freeze(dist), freeze(parent))


def bellman_ford(graph: Graph, source: Hashable) -> BellmanFordResult:
    """
    Bellman-Ford algorithm for single-source shortest paths.

    Computes shortest paths from source to all reachable vertices, allowing
    negative edge weights. Runs up to V-1 relaxation rounds (stopping early
    once a round changes nothing) and then one verification round. Undirected
    edges relax in both directions, so a negative undirected edge is itself a
    negative cycle.

    has_negative_cycle reports a negative cycle anywhere in the graph, even one
    the source cannot reach; affected only lists vertices whose distance from
    this source it corrupts.

    Args:
        graph: Graph (may have negative weights).
        source: Source vertex.

    Returns:
        BellmanFordResult. Check has_negative_cycle before trusting distances
        of the vertices listed in affected.

    Raises:
        UnknownVertexError: If source is not in graph.
        MissingWeightError: If a weighted graph has an edge without a weight.

    Complexity: O(VE) where V is vertices and E is edges.

    Example:
        >>> G = Graph(directed=True, weighted=True)
        >>> G.add_edge('A', 'B', 1.0)
        >>> G.add_edge('B', 'C', -2.0)
        >>> result = bellman_ford(G, 'A')
        >>> result.has_negative_cycle
        False
        >>> result.distance['C']
        -1.0
    """
    graph.require_vertex(source)
    graph.validate_weights()

    dist: Dict[Hashable, float] = {source: 0.0}
    parent: Dict[Hashable, Optional[Hashable]] = {source: None}
    arcs = list(graph.arcs())
    n = graph.vertex_count()

    rounds = 0
    for rounds in range(1, n):
        changed = False
        for u, v, weight in arcs:
            if u in dist and dist[u] + weight < dist.get(v, math.inf):
                dist[v] = dist[u] + weight
                parent[v] = u
                changed = True
        if not changed:
            break
    logger.debug("Bellman-Ford from %r: %d relaxation rounds", source, rounds)

    seeds = [
        v for u, v, weight in arcs if u in dist and dist[u] + weight < dist.get(v, math.inf)
    ]
    affected: Tuple[Hashable, ...] = ()
    if seeds:
        reached = set(seeds)
        queue = deque(seeds)
        while queue:
            u = queue.popleft()
            for entry in graph.neighbors(u):
                if entry.vertex not in reached:
                    reached.add(entry.vertex)
                    queue.append(entry.vertex)
        affected = tuple(v for v in graph.vertices() if v in reached)
        logger.debug("Negative cycle reachable from %r affects %d vertices", source, len(affected))

    return BellmanFordResult(
        source,
        freeze(dist),
        freeze(parent),
        has_negative_cycle=bool(seeds) or _has_negative_cycle(graph, arcs),
        affected=affected,
    )


def _has_negative_cycle(graph: Graph, arcs: List[Tuple[Hashable, Hashable, float]]) -> bool:
    # Every vertex starts at 0, as if joined to a virtual source.
    dist = dict.fromkeys(graph.vertices(), 0.0)
    for _ in range(graph.vertex_count()):
        changed = False
        for u, v, weight in arcs:
            if dist[u] + weight < dist[v]:
                dist[v] = dist[u] + weight
                changed = True
        if not changed:
            return False
    return True


_METHODS = ("auto", "bfs", "dijkstra", "bellman_ford")


def resolve_method(graph: Graph, method: str) -> str:
    """
    Resolve a shortest-path method name, turning "auto" into a concrete one.

    "auto" picks BFS on unweighted graphs, Bellman-Ford when a negative weight
    exists and Dijkstra otherwise.

    Raises:
        ConfigurationError: If method is unknown.
    """
    if method not in _METHODS:
        raise ConfigurationError(f"Unknown method {method!r}; expected one of {_METHODS}")
    if method != "auto":
        return method
    if not graph.weighted:
        return "bfs"
    if any(e.weight is not None and e.weight < 0 for e in graph.edges()):
        return "bellman_ford"
    return "dijkstra"


def shortest_path(
    graph: Graph, source: Hashable, target: Hashable, method: str = "auto"
) -> PathResult:
    """
    Shortest path between two vertices.

    Args:
        graph: Graph to search.
        source: Start vertex.
        target: End vertex.
        method: "bfs", "dijkstra", "bellman_ford", or "auto" (BFS on unweighted
            graphs, Bellman-Ford when a negative weight exists, else Dijkstra).

    Returns:
        PathResult; path is None and distance inf when target is unreachable.

    Raises:
        UnknownVertexError: If source or target is not in graph.
        ConfigurationError: If method is unknown.
        NegativeWeightError: If a negative cycle makes the target distance
            undefined, or Dijkstra is requested on negative weights.
    """
    method = resolve_method(graph, method)
    graph.require_vertex(source)
    graph.require_vertex(target)

    if method == "bfs":
        result = bfs(graph, source)
        distance = float(result.distance[target]) if target in result.distance else math.inf
        parent = result.parent
    elif method == "dijkstra":
        sp = dijkstra(graph, source)
        distance, parent = sp.distance_to(target), sp.parent
    else:
        bf = bellman_ford(graph, source)
        if target in bf.affected:
            raise NegativeWeightError(
                f"Negative cycle reachable from {source!r} makes the distance to "
                f"{target!r} undefined"
            )
        distance, parent = bf.distance_to(target), bf.parent

    path = reconstruct_path(parent, target)
    return PathResult(tuple(path) if path is not None else None, distance)


Heuristic = Callable[[Hashable, Hashable], float]


def _no_estimate(vertex: Hashable, target: Hashable) -> float:
    return 0.0


def astar(
    graph: Graph,
    source: Hashable,
    target: Hashable,
    heuristic: Optional[Heuristic] = None,
) -> PathResult:
    """
    A* search for a single source-target shortest path.

    Vertices are expanded in order of g + h, where g is the best known cost
    from source and h = heuristic(vertex, target). With an admissible
    heuristic (never above the true remaining cost) the returned path is
    optimal; a vertex whose cost improves after expansion is reopened, so
    inconsistent but admissible heuristics stay correct.

    Args:
        graph: Graph with non-negative edge weights.
        source: Start vertex.
        target: Goal vertex.
        heuristic: Callable (vertex, target) -> estimated remaining cost. None
            uses 0 everywhere, which makes the search Dijkstra's.

    Returns:
        PathResult; path is None and distance inf when target is unreachable.

    Raises:
        UnknownVertexError: If source or target is not in graph.
        NegativeWeightError: If graph contains negative edge weights.
        ConfigurationError: If the heuristic returns a negative estimate.

    Complexity: O(E log V) in the worst case; a good heuristic expands far
    fewer vertices.

    Example:
        >>> G = Graph(weighted=True)
        >>> G.add_edge((0, 0), (0, 1), 1.0)
        >>> G.add_edge((0, 1), (1, 1), 1.0)
        >>> manhattan = lambda v, t: abs(v[0] - t[0]) + abs(v[1] - t[1])
        >>> astar(G, (0, 0), (1, 1), manhattan).distance
        2.0
    """
    graph.require_vertex(source)
    graph.require_vertex(target)
    graph.validate_weights(non_negative=True)
    estimate = heuristic or _no_estimate

    def h(vertex: Hashable) -> float:
        value = estimate(vertex, target)
        if value < 0:
            raise ConfigurationError(
                f"Heuristic returned negative estimate {value} for {vertex!r}"
            )
        return value

    cost: Dict[Hashable, float] = {source: 0.0}
    parent: Dict[Hashable, Optional[Hashable]] = {source: None}
    closed = set()
    pq = PriorityQueue()
    pq.push(source, h(source))

    while pq:
        u, _ = pq.pop_min()
        if u == target:
            logger.debug("A* %r -> %r expanded %d vertices", source, target, len(closed))
            return PathResult(tuple(reconstruct_path(parent, target)), cost[target])
        closed.add(u)

        for entry in graph.neighbors(u):
            v = entry.vertex
            tentative = cost[u] + edge_weight(graph, entry)
            if tentative >= cost.get(v, math.inf):
                continue
            cost[v] = tentative
            parent[v] = u
            priority = tentative + h(v)
            if v in pq:
                pq.decrease_key(v, priority)
            else:
                closed.discard(v)
                pq.push(v, priority)

    return PathResult(None, math.inf)


def bidirectional_dijkstra(graph: Graph, source: Hashable, target: Hashable) -> PathResult:
    """
    Dijkstra's algorithm run from both ends at once.

    A forward search follows outgoing edges from source and a backward search
    follows incoming edges from target; each step expands the side with the
    smaller queue. The search stops once the two queue minima together reach
    the best meeting cost found so far.

    Args:
        graph: Graph with non-negative edge weights.
        source: Start vertex.
        target: End vertex.

    Returns:
        PathResult; path is None and distance inf when target is unreachable.

    Raises:
        UnknownVertexError: If source or target is not in graph.
        NegativeWeightError: If graph contains negative edge weights.

    Complexity: O(E log V); on large graphs usually settles far fewer vertices
    than a one-sided search.
    """
    graph.require_vertex(source)
    graph.require_vertex(target)
    graph.validate_weights(non_negative=True)
    if source == target:
        return PathResult((source,), 0.0)

    # Index 0 is the forward search, index 1 the backward one.
    dist: Tuple[Dict[Hashable, float], ...] = ({source: 0.0}, {target: 0.0})
    parent: Tuple[Dict[Hashable, Optional[Hashable]], ...] = ({source: None}, {target: None})
    settled = (set(), set())
    queues = (PriorityQueue(), PriorityQueue())
    queues[0].push(source, 0.0)
    queues[1].push(target, 0.0)
    expand = (graph.neighbors, graph.predecessors)

    best = math.inf
    meet: Optional[Hashable] = None
    while queues[0] and queues[1]:
        if queues[0].peek_min()[1] + queues[1].peek_min()[1] >= best:
            break
        side = 0 if len(queues[0]) <= len(queues[1]) else 1
        u, d = queues[side].pop_min()
        settled[side].add(u)
        seen, other = dist[side], dist[1 - side]

        for entry in expand[side](u):
            v = entry.vertex
            if v in settled[side]:
                continue
            nd = d + edge_weight(graph, entry)
            if v not in seen:
                seen[v] = nd
                parent[side][v] = u
                queues[side].push(v, nd)
            elif nd < seen[v]:
                seen[v] = nd
                parent[side][v] = u
                queues[side].decrease_key(v, nd)
            if v in other and seen[v] + other[v] < best:
                best = seen[v] + other[v]
                meet = v

    if meet is None:
        return PathResult(None, math.inf)
    logger.debug(
        "Bidirectional Dijkstra %r -> %r settled %d + %d vertices",
        source,
        target,
        len(settled[0]),
        len(settled[1]),
    )
    forward = reconstruct_path(parent[0], meet)
    backward = reconstruct_path(parent[1], meet)
    return PathResult(tuple(forward + backward[-2::-1]), best)


__all__ = [
    "BellmanFordResult",
    "Heuristic",
    "PathResult",
    "ShortestPathResult",
    "astar",
    "bellman_ford",
    "bidirectional_dijkstra",
    "dijkstra",
    "reconstruct_path",
    "resolve_method",
    "shortest_path",
]
