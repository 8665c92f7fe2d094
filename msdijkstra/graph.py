"""Immutable edge-weighted digraph over dense integer vertex ids."""

from __future__ import annotations

import numbers
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np
import numpy.typing as npt

from .exceptions import (
    ConfigError,
    DuplicateEdge,
    EdgeNotFound,
    InputError,
    NegativeWeight,
    VertexOutOfRange,
)

Vertex = int
Float = float
Edge = Tuple[Vertex, Vertex, Float]
DTypeLike = Union[str, npt.DTypeLike]

_SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


def resolve_dtype(dtype: DTypeLike) -> np.dtype:
    """Return ``dtype`` as a NumPy float dtype, rejecting anything else.

    Raises:
        ConfigError: If ``dtype`` is not ``float32`` or ``float64``.
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as exc:
        raise ConfigError(f"unsupported weight dtype {dtype!r}") from exc
    if dt not in _SUPPORTED_DTYPES:
        raise ConfigError(f"unsupported weight dtype {dtype!r}; use float32 or float64")
    return dt


class Digraph:
    """Directed graph with non-negative edge weights.

    The graph is built once from a vertex count, a declared edge count and an
    ordered stream of ``(source, target, weight)`` triples, and is never
    mutated afterwards. Construction is all-or-nothing: the first invalid edge
    raises and no graph object is produced.

    Weights are stored in single precision by default. Pass
    ``dtype="float64"`` for double precision.

    Args:
        n: Number of vertices in the range ``0`` .. ``n-1``.
        m: Declared number of edges, or ``None`` to accept however many
            the stream yields.
        edges: Iterable of ``(u, v, w)`` triples.
        dtype: Storage precision for weights.

    Raises:
        InputError: If ``n`` or ``m`` is invalid, a weight is not numeric,
            or the stream length does not match ``m``.
        VertexOutOfRange: If an edge references a vertex outside ``[0, n)``.
        NegativeWeight: If an edge weight is negative or NaN.
        DuplicateEdge: If the same ordered pair appears twice.

    Examples:
        ```python
        >>> g = Digraph(3, 2, [(0, 1, 1.5), (1, 2, 0.5)])
        >>> float(g.weight(0, 1))
        1.5
        >>> [v for v, _ in g.neighbors(1)]
        [2]
        ```
    """

    def __init__(
        self,
        n: int,
        m: Optional[int],
        edges: Iterable[Edge],
        dtype: DTypeLike = np.float32,
    ) -> None:
        if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 0:
            raise InputError("vertex count must be a non-negative integer.")
        if m is not None and (isinstance(m, bool) or not isinstance(m, numbers.Integral) or m < 0):
            raise InputError("edge count must be a non-negative integer.")
        n = int(n)
        dt = resolve_dtype(dtype)

        adj: List[Dict[Vertex, Float]] = [{} for _ in range(n)]
        count = 0
        for u, v, w in edges:
            self._check_vertex(u, n)
            self._check_vertex(v, n)
            if isinstance(w, bool) or not isinstance(w, numbers.Real):
                raise InputError(f"non-numeric weight {w!r} on edge ({u}, {v})")
            if not w >= 0:
                raise NegativeWeight((int(u), int(v), float(w)))
            targets = adj[u]
            if v in targets:
                raise DuplicateEdge(int(u), int(v))
            targets[int(v)] = dt.type(w)
            count += 1

        if m is not None and count != m:
            raise InputError(f"declared {m} edges but {count} were given")

        self._n = n
        self._m = count
        self._dtype = dt
        self._adj: Tuple[Mapping[Vertex, Float], ...] = tuple(MappingProxyType(t) for t in adj)
        # Ascending target order keeps relaxation order reproducible.
        self._out: Tuple[Tuple[Tuple[Vertex, Float], ...], ...] = tuple(
            tuple(sorted(t.items())) for t in adj
        )

    @staticmethod
    def _check_vertex(v: object, n: int) -> None:
        if isinstance(v, bool) or not isinstance(v, numbers.Integral):
            raise InputError(f"vertex id must be an integer, got {v!r}")
        if not 0 <= v < n:
            raise VertexOutOfRange(int(v), n)

    @classmethod
    def from_edges(
        cls, n: int, edges: Iterable[Edge], dtype: DTypeLike = np.float32
    ) -> "Digraph":
        """Create a graph from an iterable of edges without a declared count.

        Args:
            n: Number of vertices.
            edges: Iterable of ``(u, v, w)`` tuples.
            dtype: Storage precision for weights.

        Returns:
            A graph populated with the provided edges.
        """
        return cls(n, None, edges, dtype=dtype)

    # ---------- properties ------------------------------------------------

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        return self._n

    @property
    def edge_count(self) -> int:
        """Number of edges."""
        return self._m

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype used to store weights."""
        return self._dtype

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"Digraph(n={self._n}, m={self._m}, dtype={self._dtype.name})"

    # ---------- queries ---------------------------------------------------

    def adjacency(self, v: Vertex) -> FrozenSet[Tuple[Vertex, Float]]:
        """Return the outgoing edges of ``v`` as a set of ``(target, weight)``."""
        self._check_vertex(v, self._n)
        return frozenset(self._adj[v].items())

    def targets(self, v: Vertex) -> Mapping[Vertex, Float]:
        """Return a read-only ``target -> weight`` view of ``v``'s out-edges."""
        self._check_vertex(v, self._n)
        return self._adj[v]

    def neighbors(self, v: Vertex) -> Tuple[Tuple[Vertex, Float], ...]:
        """Return ``v``'s out-edges as ``(target, weight)`` pairs by ascending target."""
        self._check_vertex(v, self._n)
        return self._out[v]

    def weight(self, u: Vertex, v: Vertex) -> Float:
        """Return the weight of edge ``(u, v)``.

        Raises:
            VertexOutOfRange: If ``u`` or ``v`` is not a vertex id.
            EdgeNotFound: If there is no edge from ``u`` to ``v``.
        """
        self._check_vertex(u, self._n)
        self._check_vertex(v, self._n)
        try:
            return self._adj[u][v]
        except KeyError:
            raise EdgeNotFound(int(u), int(v)) from None

    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        """Return ``True`` if the edge ``(u, v)`` exists."""
        if not (0 <= u < self._n and 0 <= v < self._n):
            return False
        return v in self._adj[u]

    def out_degree(self, u: Vertex) -> int:
        """Return the out-degree of vertex ``u``."""
        self._check_vertex(u, self._n)
        return len(self._adj[u])

    def edges(self) -> Iterator[Edge]:
        """Iterate over all edges ordered by source, then target."""
        for u in range(self._n):
            for v, w in self._out[u]:
                yield u, v, w


__all__ = ["Digraph", "Edge", "Float", "Vertex", "resolve_dtype"]
