"""Lazy-deletion heap Dijkstra used as an oracle in tests and benchmarks."""

from __future__ import annotations

import heapq
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .engine import ShortestPathResult, _normalize_sources
from .graph import Digraph, Float, Vertex


def dijkstra_reference(G: Digraph, sources: Iterable[Vertex]) -> ShortestPathResult:
    """Run textbook Dijkstra with :mod:`heapq` and stale-entry skipping.

    Distances are accumulated in double precision and stored with the
    graph's weight dtype, so results match the engine on exactly
    representable inputs.

    Args:
        G: Input graph with non-negative edge weights.
        sources: Iterable of source vertex identifiers.

    Returns:
        Distances and predecessors from running Dijkstra.
    """
    srcs = _normalize_sources(sources, G.vertex_count)
    n = G.vertex_count
    dist: List[Float] = [float("inf")] * n
    pred: List[Optional[Vertex]] = [None] * n
    pq: List[Tuple[Float, Vertex]] = [(0.0, s) for s in srcs]
    for s in srcs:
        dist[s] = 0.0
    heapq.heapify(pq)
    seen = set()
    while pq:
        d, u = heapq.heappop(pq)
        if d != dist[u] or u in seen:
            continue
        seen.add(u)
        for v, w in G.neighbors(u):
            nd = d + float(w)
            if nd < dist[v]:
                dist[v] = nd
                pred[v] = u
                heapq.heappush(pq, (nd, v))
    return ShortestPathResult(
        distances=np.asarray(dist, dtype=G.dtype),
        predecessors=tuple(pred),
        sources=frozenset(srcs),
    )


__all__ = ["dijkstra_reference"]
