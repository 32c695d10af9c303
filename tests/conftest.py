"""Pytest configuration and shared fixtures for Graph Conduit tests.

This module provides:
- A deterministic numpy RNG fixture
- A random-graph factory built on that RNG
- Automatic reset of the process-wide optimization settings
"""

import os
from typing import Callable

import numpy as np
import pytest

from gconduit import Graph, reset_optimizations


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def random_graph(rng: np.random.Generator) -> Callable[..., Graph]:
    """Factory for Erdos-Renyi style random graphs.

    Vertices are the integers 0..n-1 in order; each ordered (directed) or
    unordered (undirected) pair gets an edge with probability p. Weighted
    graphs draw integer weights in [low, high] so sums stay exact.

    Example:
        >>> G = random_graph(20, 0.2, directed=True, weighted=True)
    """

    def make(
        n: int,
        p: float,
        directed: bool = False,
        weighted: bool = False,
        low: int = 1,
        high: int = 10,
    ) -> Graph:
        G = Graph(directed=directed, weighted=weighted)
        for v in range(n):
            G.add_vertex(v)
        for u in range(n):
            targets = range(n) if directed else range(u + 1, n)
            for v in targets:
                if u == v or rng.random() >= p:
                    continue
                if weighted:
                    G.add_edge(u, v, float(rng.integers(low, high + 1)))
                else:
                    G.add_edge(u, v)
        return G

    return make


@pytest.fixture(scope="function", autouse=True)
def clean_optimizations():
    """Auto-use fixture restoring default optimization settings around each test."""
    reset_optimizations()
    yield
    reset_optimizations()
