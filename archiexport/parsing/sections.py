"""Heading-delimited sections of a Markdown document."""

from __future__ import annotations

import re
from dataclasses import dataclass

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")


@dataclass(frozen=True)
class Section:
    level: int
    title: str
    body: str


def parse_sections(text: str) -> list[Section]:
    """Split *text* at ATX headings. Text before the first heading is dropped."""
    sections: list[Section] = []
    current: tuple[int, str] | None = None
    body: list[str] = []
    in_fence = False

    for line in text.splitlines():
        if _FENCE_RE.match(line):
            in_fence = not in_fence
        m = None if in_fence else _HEADING_RE.match(line)
        if m:
            if current is not None:
                sections.append(Section(current[0], current[1], "\n".join(body).strip()))
            current = (len(m.group(1)), m.group(2).strip())
            body = []
        elif current is not None:
            body.append(line)

    if current is not None:
        sections.append(Section(current[0], current[1], "\n".join(body).strip()))
    return sections
