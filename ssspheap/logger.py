"""Structured event logging for loader, solver and CLI."""

from __future__ import annotations

import json
import math
import sys
from typing import Any, Dict, Protocol, TextIO

LEVELS: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}


class Logger(Protocol):
    """Protocol for event loggers accepted by the solver and loader."""

    def info(self, event: str, **fields: Any) -> None:
        ...

    def debug(self, event: str, **fields: Any) -> None:
        ...

    def warning(self, event: str, **fields: Any) -> None:
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


def _jsonable(value: Any) -> Any:
    # JSON has no infinity literal
    if isinstance(value, float) and math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


class StdLogger:
    """Write one line per event, as ``level event k=v`` or as JSON.

    Args:
        level: Minimum level to emit (``"debug"``, ``"info"`` or ``"warning"``).
        json_fmt: Emit one JSON object per line instead of ``k=v`` pairs.
        stream: Output stream, ``sys.stderr`` by default.
    """

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        if level not in LEVELS:
            raise ValueError(f"unknown log level {level!r}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        return LEVELS[level] >= LEVELS[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit ``event`` at ``level`` with additional ``fields``."""
        if not self.enabled(level):
            return
        if self.json_fmt:
            obj: Dict[str, Any] = {"level": level, "event": event}
            obj.update({k: _jsonable(v) for k, v in fields.items()})
            self.stream.write(json.dumps(obj) + "\n")
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            self.stream.write(f"{level} {event} {kv}".rstrip() + "\n")

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)


__all__ = ["LEVELS", "Logger", "NoopLogger", "StdLogger"]
