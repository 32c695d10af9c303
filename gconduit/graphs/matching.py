"""
Bipartite graphs: two-coloring and maximum matching.

Bipartiteness is tested by BFS two-coloring of every component. Maximum
matching grows augmenting paths from each left vertex (Kuhn's algorithm).
Edge direction is ignored.

References:
    - Kuhn, H. W. "The Hungarian method for the assignment problem" (1955).
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapter 26.3 (maximum bipartite matching).
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from .core import Graph


@dataclass(frozen=True)
class BipartiteResult:
    """
    Two-coloring outcome.

    Attributes:
        is_bipartite: True if a two-coloring exists.
        left: Vertices colored 0 (empty if not bipartite).
        right: Vertices colored 1 (empty if not bipartite).
        conflict: An edge (u, v) with both ends on the same side, if any.
    """

    is_bipartite: bool
    left: Tuple[Hashable, ...] = ()
    right: Tuple[Hashable, ...] = ()
    conflict: Optional[Tuple[Hashable, Hashable]] = None

    def __bool__(self) -> bool:
        return self.is_bipartite


def _incident(graph: Graph, u: Hashable) -> List[Hashable]:
    out = [n.vertex for n in graph.neighbors(u)]
    if graph.directed:
        out.extend(n.vertex for n in graph.predecessors(u))
    return out


def bipartite_sets(graph: Graph) -> BipartiteResult:
    """
    Try to split the vertices into two sides with no edge inside a side.

    Each component's first inserted vertex goes left. A self-loop makes the
    graph non-bipartite.

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([('A', 'x'), ('B', 'x'), ('B', 'y')])
        >>> result = bipartite_sets(G)
        >>> result.left, result.right
        (('A', 'B'), ('x', 'y'))
    """
    color: Dict[Hashable, int] = {}
    for root in graph:
        if root in color:
            continue
        color[root] = 0
        queue = deque([root])
        while queue:
            u = queue.popleft()
            for v in _incident(graph, u):
                if v not in color:
                    color[v] = 1 - color[u]
                    queue.append(v)
                elif color[v] == color[u]:
                    return BipartiteResult(False, conflict=(u, v))

    left = tuple(v for v in graph if color[v] == 0)
    right = tuple(v for v in graph if color[v] == 1)
    return BipartiteResult(True, left, right)


def is_bipartite(graph: Graph) -> bool:
    """Return True if graph admits a two-coloring."""
    return bipartite_sets(graph).is_bipartite


@dataclass(frozen=True)
class MatchingResult:
    """Matched (left, right) pairs in left insertion order."""

    pairs: Tuple[Tuple[Hashable, Hashable], ...]

    @property
    def size(self) -> int:
        return len(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def mate(self, vertex: Hashable) -> Optional[Hashable]:
        """Return the partner of vertex, or None if unmatched."""
        for u, v in self.pairs:
            if u == vertex:
                return v
            if v == vertex:
                return u
        return None


def maximum_bipartite_matching(
    graph: Graph, left: Optional[Iterable[Hashable]] = None
) -> MatchingResult:
    """
    Maximum cardinality matching of a bipartite graph.

    Args:
        graph: Bipartite graph.
        left: Vertices of one side. Defaults to the left side of
            bipartite_sets(graph).

    Returns:
        MatchingResult.

    Raises:
        ValueError: If left is omitted and graph is not bipartite, or an edge
            joins two vertices of left.
        UnknownVertexError: If left names a vertex not in graph.

    Complexity: O(V * E).

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([('A', 'x'), ('A', 'y'), ('B', 'x')])
        >>> maximum_bipartite_matching(G).pairs
        (('A', 'y'), ('B', 'x'))
    """
    if left is None:
        sides = bipartite_sets(graph)
        if not sides:
            raise ValueError(f"Graph is not bipartite (conflicting edge {sides.conflict!r})")
        left_side = list(sides.left)
    else:
        left_side = list(dict.fromkeys(left))
        for u in left_side:
            graph.require_vertex(u)

    left_set = set(left_side)
    adjacency: Dict[Hashable, List[Hashable]] = {}
    for u in left_side:
        nbrs = list(dict.fromkeys(_incident(graph, u)))
        for v in nbrs:
            if v in left_set:
                raise ValueError(f"Edge ({u!r}, {v!r}) joins two left vertices")
        adjacency[u] = nbrs

    match_left: Dict[Hashable, Hashable] = {}
    match_right: Dict[Hashable, Hashable] = {}

    for root in left_side:
        # Iterative augmenting-path search from root.
        parent_of: Dict[Hashable, Hashable] = {}
        stack = [(root, 0)]
        seen = set()
        end = None
        while stack and end is None:
            u, pos = stack.pop()
            nbrs = adjacency[u]
            while pos < len(nbrs) and nbrs[pos] in seen:
                pos += 1
            if pos == len(nbrs):
                continue
            stack.append((u, pos + 1))
            v = nbrs[pos]
            seen.add(v)
            parent_of[v] = u
            if v not in match_right:
                end = v
            else:
                stack.append((match_right[v], 0))

        # Flip the path back to root.
        while end is not None:
            u = parent_of[end]
            previous = match_left.get(u)
            match_left[u] = end
            match_right[end] = u
            end = previous

    pairs = tuple((u, match_left[u]) for u in left_side if u in match_left)
    return MatchingResult(pairs)


__all__ = [
    "BipartiteResult",
    "MatchingResult",
    "bipartite_sets",
    "is_bipartite",
    "maximum_bipartite_matching",
]
