"""
Connected components (union-find) and strongly connected components (Kosaraju).

Components are returned as tuples of vertices. Members of a component keep
graph insertion order.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 21.1 (connected components via disjoint sets) and 22.5
      (strongly connected components).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Mapping, Sequence, Tuple

from .core import Graph, Neighbor
from .structures import UnionFind
from .utils import freeze

Component = Tuple[Hashable, ...]


def connected_components(graph: Graph) -> Tuple[Component, ...]:
    """
    Connected components via union-find.

    Every edge unions its endpoints, then vertices are grouped by their
    representative. Directed graphs yield weakly connected components.

    Args:
        graph: Graph.

    Returns:
        Components ordered by their first vertex in insertion order.

    Complexity: O(V + E * alpha(V)).

    Example:
        >>> G = Graph()
        >>> G.add_edges_from([('A', 'B'), ('C', 'D')])
        >>> connected_components(G)
        (('A', 'B'), ('C', 'D'))
    """
    uf = UnionFind(graph.vertices())
    for edge in graph.edges():
        uf.union(edge.source, edge.target)
    return tuple(tuple(group) for group in uf.groups())


def number_connected_components(graph: Graph) -> int:
    """Return the number of (weakly) connected components."""
    return len(connected_components(graph))


def is_connected(graph: Graph) -> bool:
    """
    Return True if the graph has exactly one (weakly) connected component.

    The empty graph is not connected.
    """
    return number_connected_components(graph) == 1


def largest_connected_component(graph: Graph) -> Component:
    """Return the largest component; ties go to the earliest. Empty graph gives ()."""
    best: Component = ()
    for component in connected_components(graph):
        if len(component) > len(best):
            best = component
    return best


def _finish_order(
    vertices: Sequence[Hashable], edges_of: Callable[[Hashable], Tuple[Neighbor, ...]]
) -> List[List[Hashable]]:
    """
    Iterative DFS over vertices in the given order.

    Returns one list per DFS tree, each holding the tree's vertices in finish
    (post) order.
    """
    visited = set()
    trees: List[List[Hashable]] = []

    for root in vertices:
        if root in visited:
            continue
        visited.add(root)
        finished: List[Hashable] = []
        stack = [(root, edges_of(root), 0)]
        while stack:
            u, entries, pos = stack[-1]
            while pos < len(entries) and entries[pos].vertex in visited:
                pos += 1
            if pos == len(entries):
                stack.pop()
                finished.append(u)
                continue
            stack[-1] = (u, entries, pos + 1)
            v = entries[pos].vertex
            visited.add(v)
            stack.append((v, edges_of(v), 0))
        trees.append(finished)
    return trees


def strongly_connected_components(graph: Graph) -> Tuple[Component, ...]:
    """
    Strongly connected components via Kosaraju's two-pass algorithm.

    Pass one records DFS finish order on the graph. Pass two runs DFS on the
    transposed graph (following incoming edges) in reverse finish order; each
    DFS tree is one component. Both passes are iterative.

    Args:
        graph: Graph. Undirected graphs yield their connected components.

    Returns:
        Components in topological order of the condensation (a component
        comes before every component it has edges into). Members keep
        insertion order.

    Complexity: O(V + E).

    Example:
        >>> G = Graph(directed=True)
        >>> G.add_edges_from([('A', 'B'), ('B', 'A'), ('B', 'C')])
        >>> strongly_connected_components(G)
        (('A', 'B'), ('C',))
    """
    finish: List[Hashable] = []
    for tree in _finish_order(graph.vertices(), graph.neighbors):
        finish.extend(tree)
    finish.reverse()

    position = {v: i for i, v in enumerate(graph.vertices())}
    components = []
    for tree in _finish_order(finish, graph.predecessors):
        components.append(tuple(sorted(tree, key=position.__getitem__)))
    return tuple(components)


def is_strongly_connected(graph: Graph) -> bool:
    """Return True if every vertex reaches every other. The empty graph is not."""
    return len(strongly_connected_components(graph)) == 1


@dataclass(frozen=True)
class Condensation:
    """
    DAG of strongly connected components.

    Attributes:
        graph: Directed graph whose vertices are component indices 0..k-1,
            each with a ``members`` attribute. One edge per connected pair.
        components: Component member tuples, indexed like graph vertices.
        mapping: Original vertex -> component index.
    """

    graph: Graph
    components: Tuple[Component, ...]
    mapping: Mapping[Hashable, int]


def condensation(graph: Graph) -> Condensation:
    """
    Contract each strongly connected component into a single vertex.

    Args:
        graph: Graph.

    Returns:
        Condensation; its graph is acyclic for directed input.
    """
    components = strongly_connected_components(graph)
    mapping: Dict[Hashable, int] = {}
    dag = Graph(directed=True)
    for i, members in enumerate(components):
        dag.add_vertex(i, members=members)
        for v in members:
            mapping[v] = i

    seen = set()
    for edge in graph.edges():
        a, b = mapping[edge.source], mapping[edge.target]
        if a != b and (a, b) not in seen:
            seen.add((a, b))
            dag.add_edge(a, b)
    return Condensation(dag, components, freeze(mapping))


__all__ = [
    "Condensation",
    "condensation",
    "connected_components",
    "is_connected",
    "is_strongly_connected",
    "largest_connected_component",
    "number_connected_components",
    "strongly_connected_components",
]
