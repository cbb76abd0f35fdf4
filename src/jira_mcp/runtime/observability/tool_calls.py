"""Tool call start/end/failure logging."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from jira_mcp.foundation.errors import JsonDict

from .logging import BoundLogger, get_logger

_SENSITIVE_KEYS: frozenset[str] = frozenset({"password"})
_MASK = "***"

log = get_logger("jira.tools")


def truncate(value: object, max_length: int = 200) -> str:
    text = value if isinstance(value, str) else repr(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text) - max_length} more chars)"
    return text


def sanitize_arguments(arguments: JsonDict) -> JsonDict:
    """Copy of tool arguments with secrets masked."""
    return {k: (_MASK if k in _SENSITIVE_KEYS else v) for k, v in arguments.items()}


def summarize_result(result: object) -> str:
    """One-line description of a tool result for the log."""
    if result is None:
        return "null"
    if isinstance(result, str):
        return truncate(result, 100)
    if isinstance(result, (list, tuple)):
        return f"list({len(result)})"
    if hasattr(result, "to_dict"):
        result = result.to_dict()  # type: ignore[union-attr]
    if isinstance(result, dict):
        if isinstance(result.get("issues"), list):
            return f"{len(result['issues'])} issues"
        if isinstance(result.get("total"), int):
            return f"total: {result['total']}"
        if "key" in result:
            return f"key: {result['key']}"
        if "id" in result:
            return f"id: {result['id']}"
        keys = list(result)
        return "{" + ", ".join(keys[:3]) + ("..." if len(keys) > 3 else "") + "}"
    return str(result)


@dataclass(slots=True)
class ToolCall:
    """An in-flight tool invocation.

    Example:
        >>> call = ToolCall.start("jira_get_issue", {"issue_key": "KP-1"})
        >>> call.end(issue)       # info: duration_ms, result summary
        >>> call.fail(error)      # error: duration_ms, error message
    """

    tool: str
    arguments: JsonDict
    started: float = field(default_factory=time.perf_counter)
    _log: BoundLogger = field(default_factory=lambda: log)

    @classmethod
    def start(cls, tool: str, arguments: JsonDict) -> ToolCall:
        call = cls(tool=tool, arguments=sanitize_arguments(arguments))
        call._log = log.bind(tool=tool)
        call._log.info("tool call", input=truncate(call.arguments))
        return call

    @property
    def duration_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 2)

    def end(self, result: object) -> None:
        self._log.info("tool completed", duration_ms=self.duration_ms, result=summarize_result(result))

    def fail(self, error: BaseException) -> None:
        self._log.error(
            "tool failed",
            duration_ms=self.duration_ms,
            error=getattr(error, "message", None) or str(error),
        )
