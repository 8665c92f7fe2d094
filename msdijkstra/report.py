"""Formatting and export of shortest-path forests."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from .engine import ShortestPathResult
from .graph import Digraph
from .io import format_weight

_ROW = "{0:<8} {1:<20} {2:<20} {3:<20}"


def format_spt(G: Digraph, result: ShortestPathResult) -> str:
    """Return the shortest-path forest as a fixed-width text table.

    One row per vertex with the tree edge that reaches it, that edge's
    weight and the total distance. Source rows read ``Source``; unreachable
    rows show ``-`` and ``inf``.
    """
    lines: List[str] = [_ROW.format("Vertex", "Edge", "Edge Weight", "Total Weight"), ""]
    for v in range(result.vertex_count):
        if result.is_source(v):
            lines.append(_ROW.format(v, "Source", "0.0", "0.0"))
            continue
        p = result.predecessor(v)
        if p is None:
            lines.append(_ROW.format(v, "-", "-", "inf"))
            continue
        lines.append(
            _ROW.format(
                v,
                f"{p}->{v}",
                format_weight(G.weight(p, v)),
                format_weight(result.distances[v]),
            )
        )
    return "\n".join(lines) + "\n"


def spt_to_dict(G: Digraph, result: ShortestPathResult) -> Dict[str, Any]:
    """Return a JSON-ready mapping with nodes and forest edges.

    Unreachable vertices carry ``"distance": null``.
    """
    nodes = []
    for v in range(result.vertex_count):
        nodes.append(
            {
                "id": v,
                "source": result.is_source(v),
                "distance": result.distance(v) if result.is_reachable(v) else None,
                "predecessor": result.predecessor(v),
            }
        )
    edges = [
        {"source": p, "target": v, "weight": float(G.weight(p, v))}
        for p, v in result.tree_edges()
    ]
    return {"sources": sorted(result.sources), "nodes": nodes, "edges": edges}


def export_spt_json(G: Digraph, result: ShortestPathResult) -> str:
    """Return :func:`spt_to_dict` serialized as a JSON string."""
    return json.dumps(spt_to_dict(G, result))


__all__ = ["export_spt_json", "format_spt", "spt_to_dict"]
