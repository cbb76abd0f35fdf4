"""Output formats for tool responses."""

from .response import ResponseFormat, format_response, to_json, to_plain, to_toon

__all__ = [
    "ResponseFormat",
    "format_response",
    "to_json",
    "to_plain",
    "to_toon",
]
