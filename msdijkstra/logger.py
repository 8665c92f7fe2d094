"""Structured event logging for engine runs and the command line."""

from __future__ import annotations

import json
import math
import sys
from typing import Any, Dict, Protocol, TextIO

import numpy as np


class Logger(Protocol):
    """Protocol for minimal event loggers."""

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


def _plain(value: Any) -> Any:
    """Convert NumPy scalars and non-finite floats into JSON-safe values."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return [_plain(v) for v in sorted(value)]
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class StdLogger:
    """Level-filtered logger writing ``key=value`` or JSON lines to a stream.

    Args:
        level: Minimum level to emit (``"debug"``, ``"info"`` or ``"warning"``).
        json_fmt: Emit one JSON object per event instead of ``key=value`` text.
        stream: Output stream, ``sys.stderr`` by default.
    """

    _levels: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        if level not in self._levels:
            raise ValueError(f"unknown log level {level!r}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        """Return ``True`` if events at ``level`` would be written."""
        return self._levels[level] >= self._levels[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit a log ``event`` at ``level`` with additional ``fields``."""
        if not self.enabled(level):
            return
        if self.json_fmt:
            obj: Dict[str, Any] = {"level": level, "event": event}
            obj.update({k: _plain(v) for k, v in fields.items()})
            self.stream.write(json.dumps(obj) + "\n")
        else:
            kv = " ".join(f"{k}={_plain(v)}" for k, v in fields.items())
            msg = f"{level} {event} {kv}".rstrip()
            self.stream.write(msg + "\n")

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)


__all__ = ["Logger", "NoopLogger", "StdLogger"]
