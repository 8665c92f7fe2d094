"""Graph input/output helpers.

The native format is the plain-text edge-weighted digraph layout::

    4
    5
    0 1 2.0
    0 2 5.0
    ...

Line 1 holds the vertex count, line 2 the edge count, and every following
non-blank line one ``<source> <target> <weight>`` triple. A comma- or
tab-separated ``u,v,w`` edge list is accepted as well.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .exceptions import InputError, InvalidSourceSet, ParseError
from .graph import Digraph, DTypeLike, Edge

Lines = Iterable[str]


def _parse_count(raw: Optional[str], lineno: int, what: str) -> int:
    """Parse a single non-negative integer count from ``raw``."""
    if raw is None:
        raise ParseError(f"missing {what}", line=lineno)
    token = raw.strip()
    try:
        value = int(token)
    except ValueError:
        raise ParseError(f"{what} must be an integer, got {token!r}", line=lineno) from None
    if value < 0:
        raise ParseError(f"{what} must be non-negative, got {value}", line=lineno)
    return value


def _parse_triple(fields: List[str], lineno: int) -> Edge:
    """Parse ``[u, v, w]`` tokens into an edge tuple."""
    if len(fields) != 3:
        raise ParseError(f"expected '<source> <target> <weight>', got {len(fields)} fields", line=lineno)
    try:
        u = int(fields[0])
        v = int(fields[1])
    except ValueError:
        raise ParseError(f"vertex ids must be integers: {' '.join(fields)!r}", line=lineno) from None
    try:
        w = float(fields[2])
    except ValueError:
        raise ParseError(f"weight must be a number, got {fields[2]!r}", line=lineno) from None
    return u, v, w


def _build(
    n: int,
    edges: Iterator[Tuple[int, Edge]],
    dtype: DTypeLike,
) -> Digraph:
    """Construct a :class:`Digraph`, tagging structural errors with a line number."""
    current: List[int] = []

    def stream() -> Iterator[Edge]:
        for lineno, edge in edges:
            current[:] = [lineno]
            yield edge

    try:
        return Digraph(n, None, stream(), dtype=dtype)
    except InputError as exc:
        if exc.line is None and current:
            raise exc.at_line(current[0])
        raise


def parse_digraph(lines: Lines, dtype: DTypeLike = np.float32) -> Digraph:
    """Parse the native text format into a :class:`Digraph`.

    Args:
        lines: Iterable of text lines, e.g. an open file.
        dtype: Storage precision for weights.

    Returns:
        The constructed graph.

    Raises:
        ParseError: If a count or edge line is malformed, or the number of
            edge lines differs from the declared edge count.
        VertexOutOfRange: If an edge references an unknown vertex.
        NegativeWeight: If an edge weight is negative.
        DuplicateEdge: If an ordered pair is repeated.
    """
    it = iter(enumerate(lines, start=1))
    first = next(it, None)
    n = _parse_count(first[1] if first else None, 1, "vertex count")
    second = next(it, None)
    m = _parse_count(second[1] if second else None, 2, "edge count")

    seen: List[int] = [0]

    def edges() -> Iterator[Tuple[int, Edge]]:
        for lineno, raw in it:
            fields = raw.split()
            if not fields:
                continue
            seen[0] += 1
            yield lineno, _parse_triple(fields, lineno)

    G = _build(n, edges(), dtype)
    if seen[0] != m:
        raise ParseError(f"declared {m} edges but found {seen[0]}", line=2)
    return G


def _parse_csv(lines: Lines, dtype: DTypeLike = np.float32) -> Digraph:
    """Parse a ``u,v,w`` edge list; the vertex count is ``max id + 1``.

    Lines that are blank or start with ``#`` are ignored.
    """
    parsed: List[Tuple[int, Edge]] = []
    max_id = -1
    for lineno, raw in enumerate(lines, start=1):
        row = raw.strip()
        if not row or row.startswith("#"):
            continue
        fields = [f.strip() for f in re.split(r"[,\t]", row)]
        u, v, w = _parse_triple(fields, lineno)
        parsed.append((lineno, (u, v, w)))
        max_id = max(max_id, u, v)
    if max_id < 0:
        raise ParseError("no edges parsed from input")
    return _build(max_id + 1, iter(parsed), dtype)


def _write_ewd(fh, G: Digraph) -> None:
    fh.write(f"{G.vertex_count}\n{G.edge_count}\n")
    for u, v, w in G.edges():
        fh.write(f"{u} {v} {format_weight(w)}\n")


def _write_csv(fh, G: Digraph) -> None:
    for u, v, w in G.edges():
        fh.write(f"{u},{v},{format_weight(w)}\n")


_FMT_READERS: Dict[str, Callable[..., Digraph]] = {
    "ewd": parse_digraph,
    "csv": _parse_csv,
}

_FMT_WRITERS = {
    "ewd": _write_ewd,
    "csv": _write_csv,
}


def _detect_format(path: Path) -> str:
    """Return ``"csv"`` for ``.csv``/``.tsv`` files and ``"ewd"`` otherwise."""
    if path.suffix.lower() in {".csv", ".tsv"}:
        return "csv"
    return "ewd"


def format_weight(w: float) -> str:
    """Return the shortest decimal string that round-trips ``w``.

    The result always contains a decimal point, e.g. ``2.0`` or ``0.35``.
    """
    if not np.isfinite(w):
        return str(float(w))
    return np.format_float_positional(w, unique=True, trim="0")


def _decode_lines(data: bytes) -> List[str]:
    """Split ``data`` into text lines, dropping a leading UTF-8 byte order mark.

    Raises:
        ParseError: If a line is not valid UTF-8.
    """
    lines: List[str] = []
    for lineno, raw in enumerate(data.splitlines(keepends=True), start=1):
        try:
            lines.append(raw.decode("utf-8-sig" if lineno == 1 else "utf-8"))
        except UnicodeDecodeError as exc:
            raise ParseError(f"invalid UTF-8 at byte {exc.start}", line=lineno) from None
    return lines


def read_digraph(path: str, fmt: Optional[str] = None, dtype: DTypeLike = np.float32) -> Digraph:
    """Read a graph file.

    Args:
        path: The path to the graph file.
        fmt: ``"ewd"`` or ``"csv"``; auto-detected from the extension if None.
        dtype: Storage precision for weights.

    Returns:
        The graph object constructed from the file.

    Raises:
        InputError: If the file does not exist or the format is unknown.
        ParseError: If the file content is malformed or not UTF-8.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt not in _FMT_READERS:
        raise InputError(f"unknown graph format {fmt!r}")
    if not p.is_file():
        raise InputError(f"graph file not found: {path}")
    return _FMT_READERS[fmt](_decode_lines(p.read_bytes()), dtype=dtype)


def write_digraph(G: Digraph, path: str, fmt: Optional[str] = None) -> None:
    """Write a graph to ``path`` in the native or CSV format.

    Raises:
        InputError: If the format is unknown.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt not in _FMT_WRITERS:
        raise InputError(f"unknown graph format {fmt!r}")
    with p.open("w", encoding="utf-8") as fh:
        _FMT_WRITERS[fmt](fh, G)


def parse_sources(text: str) -> List[int]:
    """Parse a whitespace- or comma-separated list of source vertex ids.

    Raises:
        ParseError: If a token is not an integer.
        InvalidSourceSet: If no ids are given.
    """
    sources: List[int] = []
    for token in re.split(r"[\s,]+", text.strip()):
        if not token:
            continue
        try:
            sources.append(int(token))
        except ValueError:
            raise ParseError(f"source {token!r} is not an integer") from None
    if not sources:
        raise InvalidSourceSet("no source vertices given")
    return sources


__all__ = ["format_weight", "parse_digraph", "parse_sources", "read_digraph", "write_digraph"]
