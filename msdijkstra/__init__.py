"""Public package exports for :mod:`msdijkstra`."""

from __future__ import annotations

from .engine import (
    EngineConfig,
    EngineMetrics,
    ShortestPathEngine,
    ShortestPathResult,
    VertexState,
    shortest_paths,
)
from .exceptions import (
    AlgorithmError,
    ConfigError,
    DuplicateEdge,
    EdgeNotFound,
    InputError,
    InvalidSourceSet,
    MSDijkstraError,
    NegativeWeight,
    ParseError,
    QueueError,
    QueueUnderflow,
    VertexOutOfRange,
)
from .graph import Digraph
from .io import parse_digraph, parse_sources, read_digraph, write_digraph
from .logger import Logger, NoopLogger, StdLogger
from .pq import IndexedMinPQ
from .reference import dijkstra_reference
from .report import export_spt_json, format_spt, spt_to_dict

__version__ = "0.1.0"

__all__ = [
    "Digraph",
    "IndexedMinPQ",
    "ShortestPathEngine",
    "ShortestPathResult",
    "EngineConfig",
    "EngineMetrics",
    "VertexState",
    "shortest_paths",
    "dijkstra_reference",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "parse_digraph",
    "parse_sources",
    "read_digraph",
    "write_digraph",
    "format_spt",
    "spt_to_dict",
    "export_spt_json",
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
