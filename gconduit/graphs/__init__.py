"""
Graph algorithms package for gconduit.

This package provides textbook graph algorithms over an adjacency-list graph:
- Graph data structures (Graph, Edge, UnionFind, PriorityQueue)
- Traversal algorithms (BFS, DFS, cycle detection, topological sort)
- Shortest path algorithms (Dijkstra, Bellman-Ford, A*, bidirectional Dijkstra,
  auto-selecting shortest_path)
- All-pairs shortest paths (Floyd-Warshall, per-source fan-out)
- Minimum spanning trees (Kruskal, Prim)
- PageRank
- Centrality (degree, closeness, betweenness, HITS, Katz)
- Components (union-find, Kosaraju SCC, condensation)
- Community detection (Louvain, label propagation, Girvan-Newman, modularity)
- Clustering (Laplacian, spectral clustering, k-core)
- Link prediction and bipartite matching

All algorithms are deterministic: ties are broken by insertion order.
"""

from .allpairs import AllPairsResult, all_pairs_shortest_paths, floyd_warshall
from .centrality import (
    HITSResult,
    KatzResult,
    betweenness_centrality,
    closeness_centrality,
    degree_centrality,
    edge_betweenness_centrality,
    hits,
    katz_centrality,
)
from .clustering import (
    KCoreResult,
    SpectralResult,
    graph_laplacian_matrix,
    k_core,
    k_core_decomposition,
    spectral_clustering,
)
from .community import (
    CommunityResult,
    DendrogramLevel,
    GirvanNewmanResult,
    LabelPropagationResult,
    girvan_newman,
    label_propagation,
    louvain,
    modularity,
)
from .components import (
    Condensation,
    condensation,
    connected_components,
    is_connected,
    is_strongly_connected,
    largest_connected_component,
    number_connected_components,
    strongly_connected_components,
)
from .core import Edge, Graph, Neighbor
from .link_prediction import (
    LinkScore,
    adamic_adar_index,
    common_neighbors,
    jaccard_coefficient,
    predict_links,
)
from .matching import (
    BipartiteResult,
    MatchingResult,
    bipartite_sets,
    is_bipartite,
    maximum_bipartite_matching,
)
from .mst import MSTResult, kruskal_mst, prim_mst
from .pagerank import PageRankResult, pagerank
from .shortest import (
    BellmanFordResult,
    PathResult,
    ShortestPathResult,
    astar,
    bellman_ford,
    bidirectional_dijkstra,
    dijkstra,
    shortest_path,
)
from .structures import PriorityQueue, UnionFind
from .traversal import (
    DFSResult,
    TraversalResult,
    bfs,
    dfs,
    dfs_recursive,
    has_cycle,
    topological_sort,
)
from .utils import map_sources, reconstruct_path, vertex_index_map

__all__ = [
    # Core
    "Edge",
    "Graph",
    "Neighbor",
    "PriorityQueue",
    "UnionFind",
    # Traversal
    "DFSResult",
    "TraversalResult",
    "bfs",
    "dfs",
    "dfs_recursive",
    "has_cycle",
    "topological_sort",
    # Shortest paths
    "BellmanFordResult",
    "PathResult",
    "ShortestPathResult",
    "astar",
    "bellman_ford",
    "bidirectional_dijkstra",
    "dijkstra",
    "shortest_path",
    "AllPairsResult",
    "all_pairs_shortest_paths",
    "floyd_warshall",
    # Spanning trees
    "MSTResult",
    "kruskal_mst",
    "prim_mst",
    # Ranking and centrality
    "PageRankResult",
    "pagerank",
    "betweenness_centrality",
    "closeness_centrality",
    "degree_centrality",
    "edge_betweenness_centrality",
    "HITSResult",
    "KatzResult",
    "hits",
    "katz_centrality",
    # Components
    "Condensation",
    "condensation",
    "connected_components",
    "is_connected",
    "is_strongly_connected",
    "largest_connected_component",
    "number_connected_components",
    "strongly_connected_components",
    # Communities and clustering
    "CommunityResult",
    "DendrogramLevel",
    "GirvanNewmanResult",
    "LabelPropagationResult",
    "girvan_newman",
    "label_propagation",
    "louvain",
    "modularity",
    "KCoreResult",
    "SpectralResult",
    "graph_laplacian_matrix",
    "k_core",
    "k_core_decomposition",
    "spectral_clustering",
    # Link prediction and matching
    "LinkScore",
    "adamic_adar_index",
    "common_neighbors",
    "jaccard_coefficient",
    "predict_links",
    "BipartiteResult",
    "MatchingResult",
    "bipartite_sets",
    "is_bipartite",
    "maximum_bipartite_matching",
    # Utilities
    "map_sources",
    "reconstruct_path",
    "vertex_index_map",
]

# Example usage:
# from gconduit.graphs import Graph, dijkstra
#
# G = Graph(directed=True, weighted=True)
# G.add_edge('A', 'B', 1.0)
# G.add_edge('B', 'C', 2.0)
# result = dijkstra(G, 'A')
# result.path_to('C')  # ['A', 'B', 'C']
