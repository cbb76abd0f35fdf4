"""Structured logging for the server process.

Every entry is an event name plus key/value context. Output goes to stderr
only: stdout carries the MCP stdio protocol.

Quick Start:
    >>> configure_logging(format="json", level="DEBUG")
    >>> log = get_logger("jira.client")
    >>> log.debug("api request", method="GET", url="https://jira/rest/api/2/myself")
    >>> log.bind(tool="jira_get_issue").info("tool call", input="{'issue_key': 'KP-1'}")
"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Final, Literal, Protocol, TextIO

import orjson

from jira_mcp.foundation.errors import JsonDict, JsonValue

LogFormat = Literal["console", "json", "none"]

LEVELS: Final[dict[str, int]] = {"debug": 10, "info": 20, "warning": 30, "error": 40}


@dataclass(slots=True, frozen=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """HH:MM:SS.mmm"""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """``12:00:01.250 info  jira.client  api response  status=200 duration_ms=84.1``

    ANSI colours are used only when the stream is a TTY (or ``colors=True``).
    """

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = bool(getattr(self.output, "isatty", None) and self.output.isatty())

    def _paint(self, text: str, code: str) -> str:
        return f"\033[{code}m{text}\033[0m" if self.colors else text

    def render(self, entry: LogEntry) -> None:
        context = dict(entry.context)
        logger = context.pop("logger", None)
        head = [
            self._paint(entry.ts_human, "2"),
            self._paint(f"{entry.level:<7}", _LEVEL_CODES.get(entry.level, "0")),
        ]
        if logger:
            head.append(self._paint(str(logger), "36"))
        head.append(self._paint(entry.event, "1"))
        pairs = " ".join(f"{k}={_console_value(v)}" for k, v in context.items())
        print("  ".join(head) + (f"  {pairs}" if pairs else ""), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """One JSON object per line: timestamp, level, event, then context."""

    output: TextIO = field(default_factory=lambda: sys.stderr)

    def render(self, entry: LogEntry) -> None:
        data = {"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(data, default=str).decode(), file=self.output)


class NoOpRenderer:
    def render(self, entry: LogEntry) -> None:
        pass


_LEVEL_CODES = {"debug": "2", "info": "32", "warning": "33", "error": "31"}


def _console_value(v: object) -> str:
    if isinstance(v, str):
        return f'"{v}"' if " " in v or not v else v
    if isinstance(v, bool) or v is None:
        return orjson.dumps(v).decode()
    if isinstance(v, (list, tuple)):
        return f"[{len(v)} items]"
    if isinstance(v, dict):
        return f"{{{len(v)} keys}}"
    return str(v)


# ─────────────────────────────────────────────────────────────────────────────
# Process configuration
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class _Config:
    renderer: LogRenderer = field(default_factory=ConsoleRenderer)
    level: int = LEVELS["info"]


_config = _Config()


def configure_logging(
    format: LogFormat = "console",  # noqa: A002 - matches JIRA_LOG_FORMAT
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Select the process renderer and minimum level.

    Loggers created before this call pick up the new settings on their next
    entry.

    Raises:
        ValueError: Unknown format or level
    """
    renderer: LogRenderer
    if format == "console":
        renderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
    elif format == "json":
        renderer = JsonRenderer(output=output or sys.stderr)
    elif format == "none":
        renderer = NoOpRenderer()
    else:
        raise ValueError(f"Unknown log format: {format!r}")
    try:
        _config.level = LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None
    _config.renderer = renderer
    return renderer


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class BoundLogger:
    """Logger carrying context that is merged into every entry.

    bind() returns a new logger; the original is unchanged.
    """

    context: JsonDict = field(default_factory=dict)

    def bind(self, **kw: JsonValue) -> BoundLogger:
        return BoundLogger({**self.context, **kw})

    def _emit(self, level: str, event: str, kw: JsonDict) -> None:
        if LEVELS[level] < _config.level:
            return
        _config.renderer.render(LogEntry(time.time(), level, event, {**self.context, **kw}))

    def debug(self, event: str, **kw: JsonValue) -> None:
        self._emit("debug", event, kw)

    def info(self, event: str, **kw: JsonValue) -> None:
        self._emit("info", event, kw)

    def warning(self, event: str, **kw: JsonValue) -> None:
        self._emit("warning", event, kw)

    def error(self, event: str, **kw: JsonValue) -> None:
        self._emit("error", event, kw)


def get_logger(name: str | None = None, **context: JsonValue) -> BoundLogger:
    """Logger with ``logger=name`` and any extra context bound."""
    return BoundLogger({"logger": name, **context} if name else dict(context))
