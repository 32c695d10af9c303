"""Performance benchmarks for Graph Conduit.

This package contains microbenchmarks for hot paths in the library,
currently CSR conversion and the BFS engines.
"""
