"""
Direction-optimized breadth-first search over CSR snapshots.

Each level expands either top-down (scan the out-edges of the frontier) or
bottom-up (scan unvisited vertices for an in-neighbor in the frontier). The
engine starts top-down and switches per level:

    TOP_DOWN  -> BOTTOM_UP  when  frontier > unvisited / alpha
    BOTTOM_UP -> TOP_DOWN   when  frontier < vertex_count / beta

Both directions assign every newly reached vertex the lowest-index frontier
vertex with an edge to it as parent, so visited set, distances and parents do
not depend on which mode ran at which level.

References:
    - Beamer, Asanovic, Patterson. "Direction-Optimizing Breadth-First Search",
      SC 2012.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from ..config import DEFAULT_ALPHA, DEFAULT_BETA, validate_thresholds
from ..exceptions import ConfigurationError, InvalidSourceError
from ..logging import get_logger
from .bitset import CompactDistanceArray, GraphBitSet, VisitedBitArray
from .csr import CSRGraph

logger = get_logger(__name__)


class Direction(Enum):
    """Expansion direction used for one BFS level."""

    TOP_DOWN = "top_down"
    BOTTOM_UP = "bottom_up"


@dataclass(frozen=True)
class BFSResult:
    """
    Result of a BFS over a CSR snapshot.

    Attributes:
        source: Source vertex index.
        visited: Bit per vertex, set if reached.
        distance: Hop distance per vertex (unset if unreached).
        parent: int64 array of parent indices (-1 for the source and unreached).
        levels: Number of levels expanded after the source.
        modes: Direction used at each level.
    """

    source: int
    visited: VisitedBitArray
    distance: CompactDistanceArray
    parent: np.ndarray
    levels: int
    modes: Tuple[Direction, ...]

    def level_order(self) -> np.ndarray:
        """Return reached indices ordered by distance, then by index."""
        reached = self.visited.get_set_indices()
        hops = self.distance.to_array()[reached]
        return reached[np.argsort(hops, kind="stable")]


def _check_source(csr: CSRGraph, source: int) -> int:
    n = csr.vertex_count()
    if isinstance(source, (bool, np.bool_)) or not isinstance(source, (int, np.integer)):
        raise InvalidSourceError(f"Source must be a vertex index, got {source!r}")
    if not 0 <= source < n:
        raise InvalidSourceError(f"Source {source} outside vertex range [0, {n})")
    return int(source)


def _gather(
    offsets: np.ndarray, indices: np.ndarray, rows: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Return (owner row, neighbor) for every adjacency entry of rows, in row order."""
    starts = offsets[rows]
    counts = offsets[rows + 1] - starts
    total = int(counts.sum())
    if total == 0:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty
    owners = np.repeat(rows, counts)
    base = np.repeat(starts - (np.cumsum(counts) - counts), counts)
    return owners, indices[base + np.arange(total, dtype=np.int64)]


def _top_down_step(
    csr: CSRGraph, frontier: np.ndarray, visited: VisitedBitArray
) -> Tuple[np.ndarray, np.ndarray]:
    owners, targets = _gather(csr.offsets, csr.indices, frontier)
    if targets.size == 0:
        return targets, owners
    fresh = ~visited.test_many(targets)
    owners, targets = owners[fresh], targets[fresh]
    # frontier is ascending, so the first hit per target has the lowest parent.
    reached, first = np.unique(targets, return_index=True)
    return reached, owners[first]


def _bottom_up_step(
    csr: CSRGraph, frontier_bits: GraphBitSet, visited: VisitedBitArray
) -> Tuple[np.ndarray, np.ndarray]:
    candidates = np.flatnonzero(~visited.test_many(np.arange(csr.vertex_count())))
    owners, sources = _gather(csr.in_offsets, csr.in_indices, candidates)
    if sources.size == 0:
        return sources, owners
    hit = frontier_bits.test_many(sources)
    owners, sources = owners[hit], sources[hit]
    # Incoming ranges are ascending, so the first hit per owner is the lowest.
    reached, first = np.unique(owners, return_index=True)
    return reached, sources[first]


def _coerce_direction(mode: Union[Direction, str, None]) -> Optional[Direction]:
    if mode is None or isinstance(mode, Direction):
        return mode
    try:
        return Direction(mode)
    except ValueError:
        raise ConfigurationError(
            f"Unknown force_mode {mode!r}; expected 'top_down' or 'bottom_up'"
        ) from None


def direction_optimized_bfs(
    csr: CSRGraph,
    source: int,
    alpha: float = DEFAULT_ALPHA,
    beta: float = DEFAULT_BETA,
    force_mode: Union[Direction, str, None] = None,
) -> BFSResult:
    """
    Direction-optimized BFS from a source vertex index.

    Args:
        csr: CSR snapshot to traverse.
        source: Source vertex index in [0, vertex_count).
        alpha: Top-down to bottom-up threshold divisor.
        beta: Bottom-up to top-down threshold divisor.
        force_mode: Run every level in this direction instead of switching.

    Returns:
        BFSResult with visited bits, distances, parents and per-level modes.

    Raises:
        InvalidSourceError: If source is outside the vertex range.
        ConfigurationError: If alpha or beta is not positive, or force_mode is
            not a Direction.

    Complexity: O(V + E) per traversal; a bottom-up level costs O(V + E_in) of
    the unvisited part.

    Example:
        >>> from gconduit import Graph, to_csr
        >>> G = Graph()
        >>> G.add_edges_from([(0, 1), (1, 2)])
        >>> result = direction_optimized_bfs(to_csr(G), 0)
        >>> result.distance.to_array().tolist()
        [0, 1, 2]
    """
    source = _check_source(csr, source)
    validate_thresholds(alpha, beta)
    forced = _coerce_direction(force_mode)

    n = csr.vertex_count()
    visited = VisitedBitArray(n)
    distance = CompactDistanceArray(n)
    parent = np.full(n, -1, dtype=np.int64)
    frontier_bits = GraphBitSet(n)

    visited.set(source)
    distance.set(source, 0)
    frontier = np.array([source], dtype=np.int64)
    unvisited = n - 1
    mode = Direction.TOP_DOWN
    modes = []
    level = 0

    while frontier.size:
        if forced is not None:
            mode = forced
        elif mode is Direction.TOP_DOWN and frontier.size > unvisited / alpha:
            mode = Direction.BOTTOM_UP
            logger.debug(
                "Level %d: switching to bottom-up (frontier=%d, unvisited=%d)",
                level + 1,
                frontier.size,
                unvisited,
            )
        elif mode is Direction.BOTTOM_UP and frontier.size < n / beta:
            mode = Direction.TOP_DOWN
            logger.debug(
                "Level %d: switching to top-down (frontier=%d, vertices=%d)",
                level + 1,
                frontier.size,
                n,
            )

        if mode is Direction.TOP_DOWN:
            reached, parents = _top_down_step(csr, frontier, visited)
        else:
            frontier_bits.reset()
            frontier_bits.set_many(frontier)
            reached, parents = _bottom_up_step(csr, frontier_bits, visited)

        if reached.size == 0:
            break
        level += 1
        modes.append(mode)
        visited.set_many(reached)
        distance.set_many(reached, level)
        parent[reached] = parents
        unvisited -= reached.size
        frontier = reached

    return BFSResult(
        source=source,
        visited=visited,
        distance=distance,
        parent=parent,
        levels=level,
        modes=tuple(modes),
    )


def top_down_bfs(csr: CSRGraph, source: int) -> BFSResult:
    """
    Level-synchronous top-down BFS, one vertex at a time.

    Reference engine: each level's frontier is expanded in ascending index
    order and the first discoverer becomes the parent.

    Raises:
        InvalidSourceError: If source is outside the vertex range.
    """
    source = _check_source(csr, source)
    n = csr.vertex_count()
    visited = VisitedBitArray(n)
    distance = CompactDistanceArray(n)
    parent = np.full(n, -1, dtype=np.int64)

    visited.set(source)
    distance.set(source, 0)
    frontier = [source]
    level = 0
    offsets = csr.offsets.tolist()
    indices = csr.indices.tolist()

    while frontier:
        next_frontier = []
        for u in sorted(frontier):
            for v in indices[offsets[u] : offsets[u + 1]]:
                if not visited.get(v):
                    visited.set(v)
                    distance.set(v, level + 1)
                    parent[v] = u
                    next_frontier.append(v)
        if not next_frontier:
            break
        level += 1
        frontier = next_frontier

    return BFSResult(
        source=source,
        visited=visited,
        distance=distance,
        parent=parent,
        levels=level,
        modes=(Direction.TOP_DOWN,) * level,
    )


__all__ = ["BFSResult", "Direction", "direction_optimized_bfs", "top_down_bfs"]
