"""Exception hierarchy for Graph Conduit.

Every error carries a builtin base as well as :class:`GraphError`, so callers
can catch either the library-wide type or the conventional Python one
(``KeyError`` for missing vertices, ``ValueError`` for bad input).
"""

from __future__ import annotations

from typing import Hashable


class GraphError(Exception):
    """Base class for all Graph Conduit errors."""


class UnknownVertexError(GraphError, KeyError):
    """An operation referenced a vertex that is not in the graph."""

    def __init__(self, vertex: Hashable, message: str | None = None):
        self.vertex = vertex
        super().__init__(message or f"Vertex {vertex!r} not in graph")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class InvalidSourceError(GraphError, IndexError):
    """A traversal source index lies outside the CSR vertex range."""


class NegativeWeightError(GraphError, ValueError):
    """An algorithm requiring non-negative weights found a negative one."""


class MissingWeightError(GraphError, ValueError):
    """A weighted graph holds an edge without an explicit weight."""


class ConversionError(GraphError, ValueError):
    """A CSR snapshot would exceed its addressable vertex/edge count."""


class ConfigurationError(GraphError, ValueError):
    """Invalid option value or option combination."""


class CycleError(GraphError, ValueError):
    """A directed cycle makes an ordering of the graph impossible."""


__all__ = [
    "GraphError",
    "UnknownVertexError",
    "InvalidSourceError",
    "NegativeWeightError",
    "MissingWeightError",
    "ConversionError",
    "ConfigurationError",
    "CycleError",
]
