"""Observability: structured logging and tool call tracking."""

from .logging import (
    BoundLogger,
    ConsoleRenderer,
    JsonRenderer,
    LogEntry,
    LogFormat,
    LogRenderer,
    NoOpRenderer,
    configure_logging,
    get_logger,
)
from .tool_calls import ToolCall, sanitize_arguments, summarize_result

__all__ = [
    # Logging
    "BoundLogger",
    "ConsoleRenderer",
    "JsonRenderer",
    "LogEntry",
    "LogFormat",
    "LogRenderer",
    "NoOpRenderer",
    "configure_logging",
    "get_logger",
    # Tool calls
    "ToolCall",
    "sanitize_arguments",
    "summarize_result",
]
