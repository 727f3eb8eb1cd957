"""Data models for parsed vault documents."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict


class Document(BaseModel):
    """One vault document: its file name and raw Markdown content."""

    model_config = ConfigDict(frozen=True)

    name: str
    content: str


def _norm_header(header: str) -> str:
    return " ".join(header.strip().lower().split())


@dataclass(frozen=True)
class TableRow:
    """One data row of a Markdown table.

    Cells are kept as ordered ``(header, value)`` pairs so duplicate and
    empty headers survive verbatim. Lookups go through :meth:`get` with a
    tuple of header aliases rather than raw dict keys.
    """

    cells: tuple[tuple[str, str], ...]

    @property
    def headers(self) -> list[str]:
        return [h for h, _ in self.cells]

    def get(self, aliases: tuple[str, ...] | str, default: str = "") -> str:
        """Return the first non-empty cell whose header matches an alias (case-insensitive)."""
        if isinstance(aliases, str):
            aliases = (aliases,)
        for alias in aliases:
            wanted = _norm_header(alias)
            for header, value in self.cells:
                if _norm_header(header) == wanted and value:
                    return value
        return default

    def has(self, aliases: tuple[str, ...] | str) -> bool:
        """True when any header matches one of the aliases, empty cell or not."""
        if isinstance(aliases, str):
            aliases = (aliases,)
        wanted = {_norm_header(a) for a in aliases}
        return any(_norm_header(h) in wanted for h, _ in self.cells)

    def column(self, header: str) -> str | None:
        """Exact (verbatim) header lookup for columns with no known alias."""
        for h, value in self.cells:
            if h == header:
                return value
        return None

    def as_dict(self) -> dict[str, str]:
        """Header -> value mapping; the first of duplicate headers wins."""
        out: dict[str, str] = {}
        for h, value in self.cells:
            out.setdefault(h, value)
        return out


@dataclass(frozen=True)
class ParsedTable:
    headers: tuple[str, ...]
    rows: tuple[TableRow, ...]
    heading: str | None = None

    def has_column(self, aliases: tuple[str, ...] | str) -> bool:
        if isinstance(aliases, str):
            aliases = (aliases,)
        wanted = {_norm_header(a) for a in aliases}
        return any(_norm_header(h) in wanted for h in self.headers)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)


@dataclass(frozen=True)
class GraphNode:
    id: str
    label: str
    subgraph: str | None = None


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    label: str | None = None


@dataclass
class ParsedGraph:
    direction: str | None = None
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node(self, node_id: str) -> GraphNode | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def label_of(self, node_id: str) -> str:
        n = self.node(node_id)
        return n.label if n else node_id
