"""Multi-source Dijkstra engine and its result model."""

from __future__ import annotations

import enum
import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import ConfigError, InvalidSourceSet, VertexOutOfRange
from .graph import Digraph, Float, Vertex, resolve_dtype
from .logger import Logger, NoopLogger
from .pq import IndexedMinPQ


class VertexState(enum.IntEnum):
    """Lifecycle of a vertex during one run."""

    UNVISITED = 0
    FRONTIER = 1
    SETTLED = 2


@dataclass(frozen=True)
class EngineConfig:
    """Configuration knobs for the engine.

    Attributes:
        dtype: Precision used for the distance table, ``"float32"`` (the
            default, matching single-precision weights) or ``"float64"``.
            Single-precision sums above about ``3.4e38`` overflow to ``inf``
            (NumPy warns), leaving the vertex reported as unreachable; use
            ``"float64"`` (CLI ``--double``) for graphs with such distances.
        log_settles: Emit a debug event for every settled vertex.
    """

    dtype: str = "float32"
    log_settles: bool = False

    def __post_init__(self) -> None:
        """Validate the configured dtype."""
        try:
            resolve_dtype(self.dtype)
        except ConfigError as exc:
            raise ConfigError(f"EngineConfig.dtype: {exc}") from None


@dataclass(frozen=True, eq=False)
class ShortestPathResult:
    """Read-only distance and predecessor tables from one engine run.

    Attributes:
        distances: Distance from the nearest source, ``inf`` when unreachable.
            The array is not writeable.
        predecessors: Immediate predecessor on a shortest path, ``None`` for
            sources and unreachable vertices.
        sources: The source set the run started from.
    """

    distances: npt.NDArray[np.floating]
    predecessors: Tuple[Optional[Vertex], ...]
    sources: FrozenSet[Vertex] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Freeze the distance array."""
        self.distances.setflags(write=False)

    @property
    def vertex_count(self) -> int:
        """Number of vertices covered by the tables."""
        return len(self.predecessors)

    def _check(self, v: Vertex) -> None:
        if not 0 <= v < len(self.predecessors):
            raise VertexOutOfRange(v, len(self.predecessors))

    def distance(self, v: Vertex) -> Float:
        """Return the shortest distance to ``v`` as a Python float."""
        self._check(v)
        return float(self.distances[v])

    def predecessor(self, v: Vertex) -> Optional[Vertex]:
        """Return the vertex preceding ``v`` in the shortest-path forest."""
        self._check(v)
        return self.predecessors[v]

    def is_reachable(self, v: Vertex) -> bool:
        """Return ``True`` if some source reaches ``v``."""
        self._check(v)
        return bool(math.isfinite(self.distances[v]))

    def is_source(self, v: Vertex) -> bool:
        """Return ``True`` if ``v`` was one of the sources."""
        self._check(v)
        return v in self.sources

    def reachable(self) -> List[Vertex]:
        """Return the ids of all reachable vertices in ascending order."""
        return [int(v) for v in np.flatnonzero(np.isfinite(self.distances))]

    def tree_edges(self) -> List[Tuple[Vertex, Vertex]]:
        """Return the forest as ``(predecessor, vertex)`` pairs."""
        return [(p, v) for v, p in enumerate(self.predecessors) if p is not None]


@dataclass(frozen=True)
class EngineMetrics:
    """Counters and timing collected from an engine run."""

    n: int
    m: int
    sources: int
    dtype: str
    counters: Dict[str, int]
    wall_ms: float


def _normalize_sources(sources: Iterable[Vertex], n: int) -> List[Vertex]:
    """Validate ``sources`` and return them sorted without duplicates.

    Raises:
        InvalidSourceSet: If the set is empty or holds an invalid vertex id.
    """
    if isinstance(sources, numbers.Integral):
        sources = [sources]
    out = set()
    for s in sources:
        if isinstance(s, bool) or not isinstance(s, numbers.Integral):
            raise InvalidSourceSet(f"source {s!r} is not an integer vertex id")
        if not 0 <= s < n:
            raise InvalidSourceSet(f"source {s} out of range [0, {n})")
        out.add(int(s))
    if not out:
        raise InvalidSourceSet("source set is empty")
    return sorted(out)


class ShortestPathEngine:
    """Multi-source Dijkstra over a :class:`~msdijkstra.graph.Digraph`.

    All run state (distance table, predecessor table, vertex states and the
    priority queue) belongs to the engine instance and is rebuilt by every
    call to :meth:`run`. The graph is only read, so one graph may back any
    number of engines.

    Distances are accumulated in the configured dtype. In float32 a path
    longer than the largest finite float32 overflows to ``inf`` and its end
    vertex is reported unreachable; see :class:`EngineConfig`.

    Args:
        G: Input graph.
        sources: One or more source vertex ids. Duplicates are collapsed.
        config: Optional engine configuration.
        logger: Optional event logger.

    Raises:
        InvalidSourceSet: If ``sources`` is empty or references a vertex
            outside ``[0, n)``.
    """

    def __init__(
        self,
        G: Digraph,
        sources: Iterable[Vertex],
        config: Optional[EngineConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        self.G = G
        self.sources: List[Vertex] = _normalize_sources(sources, G.vertex_count)
        self.cfg = config or EngineConfig()
        self.logger = logger or NoopLogger()
        self._dtype = resolve_dtype(self.cfg.dtype)
        self._reset()

    def _reset(self) -> None:
        n = self.G.vertex_count
        self.dist: npt.NDArray[np.floating] = np.full(n, np.inf, dtype=self._dtype)
        self.pred: List[Optional[Vertex]] = [None] * n
        self.state: List[VertexState] = [VertexState.UNVISITED] * n
        self.counters: Dict[str, int] = {
            "settled": 0,
            "edges_relaxed": 0,
            "relaxations": 0,
            "inserts": 0,
            "decrease_keys": 0,
            "max_queue_size": 0,
        }

    # ---------- relax loop ------------------------------------------------

    def _relax(self, pq: IndexedMinPQ, u: Vertex) -> None:
        """Relax every out-edge of the freshly settled vertex ``u``."""
        dist = self.dist
        state = self.state
        to_dtype = self._dtype.type
        du = dist[u]
        for v, w in self.G.neighbors(u):
            self.counters["edges_relaxed"] += 1
            if state[v] is VertexState.SETTLED:
                continue
            cand = to_dtype(du + w)
            if cand < dist[v]:
                dist[v] = cand
                self.pred[v] = u
                self.counters["relaxations"] += 1
                if state[v] is VertexState.FRONTIER:
                    pq.decrease_key(v, cand)
                    self.counters["decrease_keys"] += 1
                else:
                    pq.insert(v, cand)
                    state[v] = VertexState.FRONTIER
                    self.counters["inserts"] += 1

    def run(self) -> ShortestPathResult:
        """Compute distances and predecessors from the source set.

        Returns:
            A read-only snapshot of the final tables.
        """
        self._reset()
        pq = IndexedMinPQ(self.G.vertex_count)
        zero = self._dtype.type(0)
        for s in self.sources:
            self.dist[s] = zero
            self.state[s] = VertexState.FRONTIER
            pq.insert(s, zero)
            self.counters["inserts"] += 1

        while pq:
            if len(pq) > self.counters["max_queue_size"]:
                self.counters["max_queue_size"] = len(pq)
            u = pq.extract_min()
            self.state[u] = VertexState.SETTLED
            self.counters["settled"] += 1
            if self.cfg.log_settles:
                self.logger.debug("settle", vertex=u, distance=self.dist[u], pred=self.pred[u])
            self._relax(pq, u)

        self.logger.info(
            "run",
            n=self.G.vertex_count,
            m=self.G.edge_count,
            sources=self.sources,
            **self.counters,
        )
        return ShortestPathResult(
            distances=self.dist.copy(),
            predecessors=tuple(self.pred),
            sources=frozenset(self.sources),
        )

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of the counters from the most recent run."""
        return dict(self.counters)

    def metrics(self, wall_ms: float) -> EngineMetrics:
        """Return run parameters and counters for the most recent run.

        Args:
            wall_ms: Wall-clock time spent in :meth:`run` in milliseconds.
        """
        return EngineMetrics(
            n=self.G.vertex_count,
            m=self.G.edge_count,
            sources=len(self.sources),
            dtype=self._dtype.name,
            counters=self.summary(),
            wall_ms=wall_ms,
        )


def shortest_paths(
    G: Digraph,
    sources: Iterable[Vertex],
    config: Optional[EngineConfig] = None,
    logger: Logger | None = None,
) -> ShortestPathResult:
    """Run a fresh :class:`ShortestPathEngine` and return its result."""
    return ShortestPathEngine(G, sources, config=config, logger=logger).run()


__all__ = [
    "EngineConfig",
    "EngineMetrics",
    "ShortestPathEngine",
    "ShortestPathResult",
    "VertexState",
    "shortest_paths",
]
