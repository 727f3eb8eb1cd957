"""YAML front matter parsing for vault documents."""

from __future__ import annotations

import logging
import re

import yaml

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_LINE_RE = re.compile(r"^([A-Za-z0-9_][\w\-. ]*?)\s*:\s*(.*)$")


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Split a document into its front matter block and body.

    Returns (yaml_str, body). yaml_str is None if the text does not begin
    with a ``---`` fenced block.
    """
    m = _FENCE_RE.match(text)
    if not m:
        return None, text
    return m.group(1), text[m.end():]


def _strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _scalar(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        parts = [str(v).strip() for v in value if v is not None and not isinstance(v, dict)]
        joined = ", ".join(p for p in parts if p)
        return joined or None
    if isinstance(value, dict):
        return None
    text = str(value).strip()
    return text or None


def _parse_lines(block: str) -> dict[str, str]:
    """Line-wise ``key: value`` fallback for front matter YAML cannot read."""
    result: dict[str, str] = {}
    for line in block.splitlines():
        if not line.strip() or line.lstrip().startswith("#") or line[:1].isspace():
            continue
        m = _LINE_RE.match(line)
        if not m:
            continue
        value = _strip_quotes(m.group(2))
        if value:
            result[m.group(1).strip()] = value
    return result


def parse_front_matter(text: str) -> dict[str, str]:
    """Parse the leading ``---`` block into a flat string mapping.

    Values are read with YAML's BaseLoader so they stay strings (``1.0``
    is not turned into a float). Empty values are dropped, lists are joined
    with ``", "`` and nested mappings are ignored. Never raises.
    """
    block, _body = split_front_matter(text)
    if block is None:
        return {}

    try:
        data = yaml.load(block, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        logger.debug("front matter is not valid YAML, using line parser: %s", exc)
        return _parse_lines(block)

    if not isinstance(data, dict):
        return _parse_lines(block)

    result: dict[str, str] = {}
    for key, value in data.items():
        text_value = _scalar(value)
        if text_value is not None:
            result[str(key).strip()] = text_value
    return result
