"""Benchmark BFS engines on random graphs."""

import time
from typing import Dict

import numpy as np

import gconduit as gc


def random_graph(n_vertices: int, avg_degree: float, seed: int = 0) -> gc.Graph:
    """Undirected random graph with roughly avg_degree neighbors per vertex."""
    rng = np.random.default_rng(seed)
    n_edges = int(n_vertices * avg_degree / 2)
    graph = gc.Graph()
    for v in range(n_vertices):
        graph.add_vertex(v)
    for u, v in rng.integers(0, n_vertices, size=(n_edges, 2)).tolist():
        graph.add_edge(u, v)
    return graph


def benchmark_bfs(n_vertices: int, avg_degree: float = 16.0, repeats: int = 5) -> Dict[str, float]:
    """Time plain BFS, reference top-down CSR BFS and direction-optimized BFS.

    Args:
        n_vertices: Number of vertices.
        avg_degree: Average degree of the random graph.
        repeats: Runs per engine; the best time is kept.

    Returns:
        Dictionary with timing results.
    """
    graph = random_graph(n_vertices, avg_degree)

    start = time.perf_counter()
    csr = gc.to_csr(graph)
    convert_time = time.perf_counter() - start

    def best_of(fn) -> float:
        times = []
        for _ in range(repeats):
            start = time.perf_counter()
            fn()
            times.append(time.perf_counter() - start)
        return min(times)

    plain = best_of(lambda: gc.bfs(graph, 0, optimized=False))
    top_down = best_of(lambda: gc.top_down_bfs(csr, 0))
    optimized = best_of(lambda: gc.direction_optimized_bfs(csr, 0))

    return {
        "n_vertices": n_vertices,
        "n_entries": csr.edge_count(),
        "convert_time_sec": convert_time,
        "plain_bfs_sec": plain,
        "top_down_csr_sec": top_down,
        "direction_optimized_sec": optimized,
    }


if __name__ == "__main__":
    print("Benchmarking BFS...")

    for n in (1_000, 10_000, 100_000):
        results = benchmark_bfs(n_vertices=n)
        print(f"BFS ({n} vertices, {results['n_entries']} adjacency entries):")
        print(f"  CSR conversion: {results['convert_time_sec'] * 1e3:.2f} ms")
        print(f"  Plain BFS: {results['plain_bfs_sec'] * 1e3:.2f} ms")
        print(f"  Top-down CSR: {results['top_down_csr_sec'] * 1e3:.2f} ms")
        print(f"  Direction-optimized: {results['direction_optimized_sec'] * 1e3:.2f} ms")
