"""
Optimized traversal subsystem for gconduit.

This package provides:
- CSR snapshots of a Graph (to_csr, CSRGraph)
- Bit-packed vertex sets (GraphBitSet, VisitedBitArray, CompactDistanceArray)
- Direction-optimized BFS over CSR (direction_optimized_bfs, top_down_bfs)
"""

from .bfs import BFSResult, Direction, direction_optimized_bfs, top_down_bfs
from .bitset import CompactDistanceArray, GraphBitSet, VisitedBitArray
from .csr import MAX_EDGES, MAX_VERTICES, CSRGraph, is_csr_graph, to_csr

__all__ = [
    "BFSResult",
    "CSRGraph",
    "CompactDistanceArray",
    "Direction",
    "GraphBitSet",
    "MAX_EDGES",
    "MAX_VERTICES",
    "VisitedBitArray",
    "direction_optimized_bfs",
    "is_csr_graph",
    "to_csr",
    "top_down_bfs",
]
