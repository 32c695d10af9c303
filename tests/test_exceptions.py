"""Tests for the exception hierarchy."""

import pytest

from gconduit.exceptions import (
    ConfigurationError,
    ConversionError,
    CycleError,
    GraphError,
    InvalidSourceError,
    MissingWeightError,
    NegativeWeightError,
    UnknownVertexError,
)
from gconduit.graphs import Graph, bfs, dijkstra


@pytest.mark.parametrize(
    "error,builtin",
    [
        (UnknownVertexError, KeyError),
        (InvalidSourceError, IndexError),
        (NegativeWeightError, ValueError),
        (MissingWeightError, ValueError),
        (ConversionError, ValueError),
        (ConfigurationError, ValueError),
        (CycleError, ValueError),
    ],
)
def test_dual_bases(error, builtin):
    """Test every error is both a GraphError and its conventional builtin."""
    assert issubclass(error, GraphError)
    assert issubclass(error, builtin)


def test_unknown_vertex_message():
    """Test the vertex is kept and the message is not repr-quoted."""
    err = UnknownVertexError("Z")
    assert err.vertex == "Z"
    assert str(err) == "Vertex 'Z' not in graph"
    assert str(UnknownVertexError(3, "custom")) == "custom"


def test_catch_as_builtin():
    """Test callers can catch library errors with builtin types."""
    G = Graph()
    G.add_vertex("A")
    with pytest.raises(KeyError):
        bfs(G, "missing")

    W = Graph(weighted=True)
    W.add_edge("A", "B", -1.0)
    with pytest.raises(ValueError):
        dijkstra(W, "A")


def test_catch_as_graph_error():
    """Test one except clause covers every library error."""
    G = Graph(weighted=True)
    G.add_edge("A", "B")
    with pytest.raises(GraphError):
        dijkstra(G, "A")
