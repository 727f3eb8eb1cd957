"""Markdown pipe-table parsing."""

from __future__ import annotations

import re

from archiexport.parsing.models import ParsedTable, TableRow

_SEPARATOR_RE = re.compile(r"^\s*\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$")
_HEADING_RE = re.compile(r"^\s{0,3}(#{1,6})\s+(.+?)\s*#*\s*$")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")


def _is_pipe_row(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("|") and len(stripped) > 1


def split_row(line: str) -> list[str]:
    """Split one ``| a | b |`` line into stripped cells, honouring ``\\|`` escapes."""
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]

    cells: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(stripped):
        ch = stripped[i]
        if ch == "\\" and i + 1 < len(stripped) and stripped[i + 1] == "|":
            current.append("|")
            i += 2
            continue
        if ch == "|":
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    cells.append("".join(current).strip())
    return cells


def parse_tables(text: str) -> list[ParsedTable]:
    """Return every pipe table in *text*, in document order.

    A table is a header row, a ``|---|`` separator directly below it and at
    least one data row. Rows shorter than the header are padded with empty
    strings; surplus cells are dropped. Tables inside fenced code blocks are
    ignored. Never raises.
    """
    lines = text.splitlines()
    tables: list[ParsedTable] = []
    heading: str | None = None
    in_fence = False
    i = 0

    while i < len(lines):
        line = lines[i]

        if _FENCE_RE.match(line):
            in_fence = not in_fence
            i += 1
            continue
        if in_fence:
            i += 1
            continue

        hm = _HEADING_RE.match(line)
        if hm:
            heading = hm.group(2)
            i += 1
            continue

        if (
            _is_pipe_row(line)
            and i + 1 < len(lines)
            and _SEPARATOR_RE.match(lines[i + 1])
            and "-" in lines[i + 1]
        ):
            headers = tuple(split_row(line))
            rows: list[TableRow] = []
            j = i + 2
            while j < len(lines) and _is_pipe_row(lines[j]):
                cells = split_row(lines[j])
                padded = cells[: len(headers)] + [""] * (len(headers) - len(cells))
                rows.append(TableRow(cells=tuple(zip(headers, padded))))
                j += 1
            if rows:
                tables.append(ParsedTable(headers=headers, rows=tuple(rows), heading=heading))
            i = j
            continue

        i += 1

    return tables
