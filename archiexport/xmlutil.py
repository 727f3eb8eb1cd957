"""Shared XML text helpers for the serializers."""

from __future__ import annotations

from xml.sax.saxutils import escape

_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# XML 1.0 forbids most C0 control characters even when escaped.
_INVALID_CHARS = {c: None for c in range(0x20) if c not in (0x09, 0x0A, 0x0D)}


def escape_xml(value: object) -> str:
    """Escape ``& < > " '`` for use in XML text or attribute values."""
    if value is None:
        return ""
    return escape(str(value).translate(_INVALID_CHARS), _ENTITIES)


def truncate(text: str, limit: int) -> str:
    """Cut *text* to *limit* characters, ending with an ellipsis when shortened."""
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)] + "\u2026"
