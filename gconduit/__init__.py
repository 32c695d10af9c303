"""Graph Conduit - deterministic graph analytics on numpy."""

__version__ = "0.1.0"

# Optimization settings
from .config import (
    OptimizationConfig,
    configure_optimizations,
    get_optimization_config,
    optimization_context,
    reset_optimizations,
)

# Exceptions
from .exceptions import (
    ConfigurationError,
    ConversionError,
    CycleError,
    GraphError,
    InvalidSourceError,
    MissingWeightError,
    NegativeWeightError,
    UnknownVertexError,
)

# Graph algorithms
from .graphs import (
    AllPairsResult,
    BellmanFordResult,
    BipartiteResult,
    CommunityResult,
    Condensation,
    DendrogramLevel,
    DFSResult,
    Edge,
    GirvanNewmanResult,
    Graph,
    HITSResult,
    KatzResult,
    KCoreResult,
    LabelPropagationResult,
    LinkScore,
    MatchingResult,
    MSTResult,
    Neighbor,
    PageRankResult,
    PathResult,
    PriorityQueue,
    ShortestPathResult,
    SpectralResult,
    TraversalResult,
    UnionFind,
    adamic_adar_index,
    all_pairs_shortest_paths,
    astar,
    bellman_ford,
    betweenness_centrality,
    bfs,
    bidirectional_dijkstra,
    bipartite_sets,
    closeness_centrality,
    common_neighbors,
    condensation,
    connected_components,
    degree_centrality,
    dfs,
    dfs_recursive,
    dijkstra,
    edge_betweenness_centrality,
    floyd_warshall,
    girvan_newman,
    graph_laplacian_matrix,
    has_cycle,
    hits,
    is_bipartite,
    is_connected,
    is_strongly_connected,
    jaccard_coefficient,
    k_core,
    k_core_decomposition,
    katz_centrality,
    kruskal_mst,
    label_propagation,
    largest_connected_component,
    louvain,
    maximum_bipartite_matching,
    modularity,
    number_connected_components,
    pagerank,
    predict_links,
    prim_mst,
    reconstruct_path,
    shortest_path,
    spectral_clustering,
    strongly_connected_components,
    topological_sort,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Optimized traversal (imported after graphs, which it builds on)
from .optimized import (
    BFSResult,
    CompactDistanceArray,
    CSRGraph,
    Direction,
    GraphBitSet,
    VisitedBitArray,
    direction_optimized_bfs,
    is_csr_graph,
    to_csr,
    top_down_bfs,
)

__all__ = [
    "__version__",
    # Config
    "OptimizationConfig",
    "configure_optimizations",
    "get_optimization_config",
    "optimization_context",
    "reset_optimizations",
    # Exceptions
    "ConfigurationError",
    "ConversionError",
    "CycleError",
    "GraphError",
    "InvalidSourceError",
    "MissingWeightError",
    "NegativeWeightError",
    "UnknownVertexError",
    # Graphs
    "AllPairsResult",
    "BellmanFordResult",
    "BipartiteResult",
    "CommunityResult",
    "Condensation",
    "DendrogramLevel",
    "DFSResult",
    "Edge",
    "GirvanNewmanResult",
    "Graph",
    "HITSResult",
    "KatzResult",
    "KCoreResult",
    "LabelPropagationResult",
    "LinkScore",
    "MatchingResult",
    "MSTResult",
    "Neighbor",
    "PageRankResult",
    "PathResult",
    "PriorityQueue",
    "ShortestPathResult",
    "SpectralResult",
    "TraversalResult",
    "UnionFind",
    "adamic_adar_index",
    "all_pairs_shortest_paths",
    "astar",
    "bellman_ford",
    "betweenness_centrality",
    "bfs",
    "bidirectional_dijkstra",
    "bipartite_sets",
    "closeness_centrality",
    "common_neighbors",
    "condensation",
    "connected_components",
    "degree_centrality",
    "dfs",
    "dfs_recursive",
    "dijkstra",
    "edge_betweenness_centrality",
    "floyd_warshall",
    "girvan_newman",
    "graph_laplacian_matrix",
    "has_cycle",
    "hits",
    "is_bipartite",
    "is_connected",
    "is_strongly_connected",
    "jaccard_coefficient",
    "k_core",
    "k_core_decomposition",
    "katz_centrality",
    "kruskal_mst",
    "label_propagation",
    "largest_connected_component",
    "louvain",
    "maximum_bipartite_matching",
    "modularity",
    "number_connected_components",
    "pagerank",
    "predict_links",
    "prim_mst",
    "reconstruct_path",
    "shortest_path",
    "spectral_clustering",
    "strongly_connected_components",
    "topological_sort",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
    # Optimized
    "BFSResult",
    "CSRGraph",
    "CompactDistanceArray",
    "Direction",
    "GraphBitSet",
    "VisitedBitArray",
    "direction_optimized_bfs",
    "is_csr_graph",
    "to_csr",
    "top_down_bfs",
]
