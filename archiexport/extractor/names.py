"""Name normalization shared by extraction, linking and classification."""

from __future__ import annotations

import re

_NON_WORD_RE = re.compile(r"[\W_]+")
_WIKILINK_RE = re.compile(r"\[\[([^\]|#]+)(?:#[^\]|]*)?(?:\|[^\]]*)?\]\]")

_PLACEHOLDERS = frozenset({"", "-", "--", "–", "—", "n/a", "na", "none", "tbd", "..."})


def normalize_name(text: str) -> str:
    """Lowercase, turn punctuation into spaces, collapse whitespace.

    ``"API-Gateway"``, ``"api gateway"`` and ``" API  Gateway "`` all
    normalize to ``"api gateway"``.
    """
    return " ".join(_NON_WORD_RE.sub(" ", text.lower()).split())


def is_placeholder(value: str) -> bool:
    return value.strip().lower() in _PLACEHOLDERS


def strip_wikilinks(value: str) -> str:
    """``[[Target|Alias]]`` -> ``Target``."""
    return _WIKILINK_RE.sub(lambda m: m.group(1).strip(), value).strip()


def split_list(value: str) -> list[str]:
    """Split a comma/semicolon separated cell into clean, non-placeholder items."""
    items = []
    for part in re.split(r"[,;]", strip_wikilinks(value)):
        part = part.strip()
        if part and not is_placeholder(part):
            items.append(part)
    return items


def contains_phrase(haystack: str, needle: str) -> bool:
    """True when normalized *needle* occurs in normalized *haystack* on word boundaries."""
    h, n = normalize_name(haystack), normalize_name(needle)
    if not h or not n:
        return False
    return f" {n} " in f" {h} "
