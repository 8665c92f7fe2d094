"""Custom exception types used across :mod:`msdijkstra`."""

from __future__ import annotations

from typing import Optional, Tuple


class MSDijkstraError(Exception):
    """Base class for all package-specific errors."""


class InputError(MSDijkstraError, ValueError):
    """Raised for invalid user input such as malformed edges.

    Attributes:
        line: 1-based line number of the offending input, if known.
    """

    line: Optional[int] = None

    def at_line(self, line: int) -> "InputError":
        """Attach ``line`` to the error and prefix it to the message."""
        self.line = line
        if self.args:
            self.args = (f"line {line}: {self.args[0]}",) + self.args[1:]
        return self


class ParseError(InputError):
    """Raised when parsing a graph description or source list fails."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        if line is not None:
            self.at_line(line)


class VertexOutOfRange(InputError, IndexError):
    """Raised when a vertex id falls outside ``[0, n)``."""

    def __init__(self, vertex: int, n: int) -> None:
        self.vertex = vertex
        self.n = n
        super().__init__(f"vertex {vertex} out of range [0, {n})")


class NegativeWeight(InputError):
    """Raised when an edge carries a negative (or NaN) weight."""

    def __init__(self, edge: Tuple[int, int, float]) -> None:
        self.edge = edge
        u, v, w = edge
        super().__init__(f"negative weight {w} on edge ({u}, {v})")


class DuplicateEdge(InputError):
    """Raised when the same ordered pair is added twice."""

    def __init__(self, u: int, v: int) -> None:
        self.pair = (u, v)
        super().__init__(f"duplicate edge ({u}, {v})")


class InvalidSourceSet(InputError):
    """Raised for an empty source set or one with out-of-range vertices."""


class EdgeNotFound(MSDijkstraError, KeyError):
    """Raised when querying the weight of an edge that does not exist."""

    def __init__(self, u: int, v: int) -> None:
        self.pair = (u, v)
        super().__init__(f"no edge ({u}, {v})")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class ConfigError(MSDijkstraError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(MSDijkstraError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class QueueError(AlgorithmError):
    """Raised on misuse of the indexed priority queue."""


class QueueUnderflow(QueueError):
    """Raised when extracting from an empty queue or touching an absent entry."""


__all__ = [
    "MSDijkstraError",
    "InputError",
    "ParseError",
    "VertexOutOfRange",
    "NegativeWeight",
    "DuplicateEdge",
    "InvalidSourceSet",
    "EdgeNotFound",
    "ConfigError",
    "AlgorithmError",
    "QueueError",
    "QueueUnderflow",
]
