"""
Core graph data structure.

Provides the mutable Graph ADT: an insertion-ordered vertex map, an arena of
immutable edge records, and a per-vertex adjacency index that refers back into
the arena. Operations are O(1) amortized for adding vertices/edges.
Neighbors are returned in insertion order for deterministic behavior.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
)

from ..exceptions import MissingWeightError, NegativeWeightError, UnknownVertexError

_EMPTY: Tuple = ()


@dataclass(frozen=True)
class Edge:
    """
    Immutable edge record stored in the graph's edge arena.

    Attributes:
        source: Source vertex.
        target: Target vertex.
        weight: Explicit weight, or None when the caller omitted it.
        attrs: Read-only attribute mapping.
        index: Position of this record in the edge arena.
    """

    source: Hashable
    target: Hashable
    weight: Optional[float] = None
    attrs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    index: int = 0

    @property
    def value(self) -> float:
        """Effective weight: the explicit weight, or 1.0 when omitted."""
        return 1.0 if self.weight is None else self.weight


class Neighbor(NamedTuple):
    """Adjacency entry: neighbor vertex, effective weight, edge arena index."""

    vertex: Hashable
    weight: float
    edge: int


class Graph:
    """
    Directed or undirected graph with an adjacency-list representation.

    Vertices are any hashable values and keep insertion order. Every call to
    add_edge appends a separate record, so parallel edges and self-loops are
    kept as distinct edges and never merged.

    For undirected graphs each edge produces an adjacency entry at both
    endpoints (a self-loop produces two entries at the same vertex), so
    edge_count() is twice the number of edge records.

    Attributes:
        directed: If True, graph is directed; otherwise undirected.
        weighted: If True, algorithms read edge weights; otherwise every edge
            counts as 1.0.

    Complexity:
        - add_vertex: O(1) amortized
        - add_edge: O(1) amortized
        - neighbors: O(1) (returns a view of the adjacency list)
        - vertices: O(V)
        - edges: O(E)
    """

    def __init__(self, directed: bool = False, weighted: bool = False):
        """
        Initialize an empty graph.

        Args:
            directed: If True, graph is directed; otherwise undirected.
            weighted: If True, edge weights are meaningful to algorithms.
        """
        self.directed = bool(directed)
        self.weighted = bool(weighted)
        self._vertices: Dict[Hashable, Dict[str, Any]] = {}
        self._edges: List[Edge] = []
        self._adj: Dict[Hashable, List[Neighbor]] = {}
        # Incoming index; aliases _adj for undirected graphs.
        self._pred: Dict[Hashable, List[Neighbor]] = {} if self.directed else self._adj

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return (
            f"Graph({kind}, weighted={self.weighted}, "
            f"vertices={len(self._vertices)}, edges={len(self._edges)})"
        )

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: Hashable) -> bool:
        return vertex in self._vertices

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._vertices)

    # --- mutation ---------------------------------------------------------

    def add_vertex(self, vertex: Hashable, /, **attrs: Any) -> None:
        """
        Add a vertex, or merge attributes into an existing one.

        Args:
            vertex: Hashable vertex identifier (positional only, so any
                attribute name is accepted).
            **attrs: Attributes to set on the vertex.
        """
        existing = self._vertices.get(vertex)
        if existing is None:
            self._vertices[vertex] = dict(attrs)
            self._adj[vertex] = []
            if self.directed:
                self._pred[vertex] = []
        elif attrs:
            existing.update(attrs)

    def add_edge(
        self,
        source: Hashable,
        target: Hashable,
        /,
        weight: Optional[float] = None,
        **attrs: Any,
    ) -> Edge:
        """
        Append an edge from source to target.

        Unknown endpoints are created. For undirected graphs the edge is also
        visible from target's adjacency list.

        Args:
            source: Source vertex.
            target: Target vertex.
            weight: Optional edge weight (effective weight 1.0 if omitted).
                "weight" is therefore never stored as an attribute.
            **attrs: Edge attributes. source and target are positional only,
                so they may also be used as attribute names.

        Returns:
            The new Edge record.
        """
        if weight is not None:
            weight = float(weight)

        edge = Edge(
            source=source,
            target=target,
            weight=weight,
            attrs=MappingProxyType(dict(attrs)),
            index=len(self._edges),
        )
        forward = Neighbor(target, edge.value, edge.index)
        backward = Neighbor(source, edge.value, edge.index)

        # Everything is built before any index is touched.
        self.add_vertex(source)
        self.add_vertex(target)
        self._edges.append(edge)
        self._adj[source].append(forward)
        if self.directed:
            self._pred[target].append(backward)
        else:
            self._adj[target].append(backward)
        return edge

    def add_edges_from(self, edges: Iterable[Tuple]) -> List[Edge]:
        """
        Add edges from an iterable of (u, v) or (u, v, weight) tuples.

        Returns:
            The new Edge records in input order.
        """
        added = []
        for item in edges:
            if len(item) == 2:
                added.append(self.add_edge(item[0], item[1]))
            elif len(item) == 3:
                added.append(self.add_edge(item[0], item[1], item[2]))
            else:
                raise ValueError(f"Expected (u, v) or (u, v, weight), got {item!r}")
        return added

    # --- queries ----------------------------------------------------------

    def has_vertex(self, vertex: Hashable) -> bool:
        """Return True if vertex is in the graph."""
        return vertex in self._vertices

    def has_edge(self, source: Hashable, target: Hashable) -> bool:
        """Return True if at least one edge source->target exists."""
        return any(n.vertex == target for n in self._adj.get(source, _EMPTY))

    def require_vertex(self, vertex: Hashable) -> None:
        """
        Raise UnknownVertexError if vertex is not in the graph.

        Algorithms call this instead of creating vertices on demand.
        """
        if vertex not in self._vertices:
            raise UnknownVertexError(vertex)

    def vertex_count(self) -> int:
        """Return number of vertices."""
        return len(self._vertices)

    def edge_count(self) -> int:
        """
        Return number of adjacency entries.

        Equal to the number of edge records for directed graphs and twice
        that for undirected graphs.
        """
        if self.directed:
            return len(self._edges)
        return 2 * len(self._edges)

    def vertices(self) -> List[Hashable]:
        """Return list of vertices in insertion order."""
        return list(self._vertices)

    def vertex_attrs(self, vertex: Hashable) -> Mapping[str, Any]:
        """Return a read-only view of a vertex's attributes."""
        self.require_vertex(vertex)
        return MappingProxyType(self._vertices[vertex])

    def edges(self) -> List[Edge]:
        """Return all edge records in insertion order (each edge once)."""
        return list(self._edges)

    def edge(self, index: int) -> Edge:
        """Return the edge record at arena position index."""
        return self._edges[index]

    def neighbors(self, vertex: Hashable) -> Tuple[Neighbor, ...]:
        """
        Return outgoing adjacency entries of a vertex in insertion order.

        Unknown vertices have no neighbors; this never raises.
        """
        return tuple(self._adj.get(vertex, _EMPTY))

    def successors(self, vertex: Hashable) -> List[Hashable]:
        """Return outgoing neighbor vertices (with repeats for parallel edges)."""
        return [n.vertex for n in self._adj.get(vertex, _EMPTY)]

    def predecessors(self, vertex: Hashable) -> Tuple[Neighbor, ...]:
        """Return incoming adjacency entries (same as neighbors if undirected)."""
        return tuple(self._pred.get(vertex, _EMPTY))

    def out_degree(self, vertex: Hashable) -> int:
        """Return number of outgoing adjacency entries (0 for unknown)."""
        return len(self._adj.get(vertex, _EMPTY))

    def in_degree(self, vertex: Hashable) -> int:
        """Return number of incoming adjacency entries (0 for unknown)."""
        return len(self._pred.get(vertex, _EMPTY))

    def degree(self, vertex: Hashable) -> int:
        """
        Return degree of a vertex.

        For directed graphs this is in-degree plus out-degree.
        """
        if self.directed:
            return self.out_degree(vertex) + self.in_degree(vertex)
        return self.out_degree(vertex)

    def arcs(self) -> Iterator[Tuple[Hashable, Hashable, float]]:
        """
        Yield (u, v, weight) for every adjacency entry.

        Undirected edges appear in both directions; weight is 1.0 on
        unweighted graphs.
        """
        for u, entries in self._adj.items():
            for entry in entries:
                yield u, entry.vertex, entry.weight if self.weighted else 1.0

    def validate_weights(self, non_negative: bool = False) -> None:
        """
        Check edge weights before running a weight-reading algorithm.

        Unweighted graphs always pass: every edge counts as 1.0.

        Args:
            non_negative: Also reject negative weights.

        Raises:
            MissingWeightError: If a weighted graph holds an edge without a weight.
            NegativeWeightError: If non_negative and a weight is below zero.
        """
        if not self.weighted:
            return
        for edge in self._edges:
            if edge.weight is None:
                raise MissingWeightError(
                    f"Edge ({edge.source!r}, {edge.target!r}) has no weight "
                    f"but the graph is weighted"
                )
            if non_negative and edge.weight < 0:
                raise NegativeWeightError(
                    f"Found negative weight {edge.weight} on edge "
                    f"({edge.source!r}, {edge.target!r})"
                )

    # --- derived graphs ---------------------------------------------------

    def copy(self) -> "Graph":
        """Return an independent copy with the same vertices and edges."""
        other = Graph(directed=self.directed, weighted=self.weighted)
        for vertex, attrs in self._vertices.items():
            other.add_vertex(vertex, **attrs)
        for edge in self._edges:
            other.add_edge(edge.source, edge.target, edge.weight, **edge.attrs)
        return other

    def transpose(self) -> "Graph":
        """
        Return a new graph with every edge reversed.

        Undirected graphs are returned as a copy.
        """
        if not self.directed:
            return self.copy()
        other = Graph(directed=True, weighted=self.weighted)
        for vertex, attrs in self._vertices.items():
            other.add_vertex(vertex, **attrs)
        for edge in self._edges:
            other.add_edge(edge.target, edge.source, edge.weight, **edge.attrs)
        return other


__all__ = ["Edge", "Graph", "Neighbor"]
