"""Mermaid flowchart parsing.

Only ``graph`` / ``flowchart`` blocks are read. Sequence, class, state and
other diagram kinds yield nothing rather than a partial parse.
"""

from __future__ import annotations

import logging
import re

from archiexport.parsing.models import GraphEdge, GraphNode, ParsedGraph

logger = logging.getLogger(__name__)

_BLOCK_RE = re.compile(r"^[ \t]*```[ \t]*mermaid[^\n]*\n(.*?)^[ \t]*```", re.DOTALL | re.MULTILINE)
_HEADER_RE = re.compile(r"^(?:graph|flowchart)\b(?:\s+(TD|TB|LR|RL|BT))?\s*;?", re.IGNORECASE)

_NODE_RE = re.compile(
    r"""\s*(?P<id>\w+(?:-\w+)*)
    (?P<shape>
        \(\[.*?\]\) | \[\[.*?\]\] | \[\(.*?\)\] | \(\(.*?\)\) | \{\{.*?\}\}
      | \[".*?"\] | \(".*?"\) | \{".*?"\}
      | \[.*?\] | \(.*?\) | \{.*?\} | >.*?\]
    )?
    (?::::[\w-]+)?""",
    re.VERBOSE,
)

_EDGE_RE = re.compile(
    r"""\s*(?:
        (?P<op><-->|-\.->|-\.-|-->|---|==>|===|--[ox])(?:\s*\|(?P<pipe>[^|]*)\|)?
      | (?:--|==|-\.)\s*(?P<inline>[^|>\-][^>]*?)\s*(?:-->|==>|\.->|---|===)
    )\s*""",
    re.VERBOSE,
)

_AMP_RE = re.compile(r"\s*&\s*")

# (open, close) shape delimiters, longest first.
_DELIMITERS = (
    ("([", "])"), ("[[", "]]"), ("[(", ")]"), ("((", "))"), ("{{", "}}"),
    ("[", "]"), ("(", ")"), ("{", "}"), (">", "]"),
)

_SKIP_PREFIXES = ("classdef ", "class ", "style ", "click ", "linkstyle ", "direction ")


def _shape_label(shape: str) -> str:
    for open_, close in _DELIMITERS:
        if shape.startswith(open_) and shape.endswith(close) and len(shape) >= len(open_) + len(close):
            inner = shape[len(open_): len(shape) - len(close)]
            break
    else:
        inner = shape
    return _clean_text(inner)


def _clean_text(text: str) -> str:
    inner = text.strip()
    if len(inner) >= 2 and inner[0] == inner[-1] and inner[0] in ('"', "'"):
        inner = inner[1:-1]
    inner = re.sub(r"<br\s*/?>", " ", inner, flags=re.IGNORECASE)
    return " ".join(inner.split())


def _subgraph_title(rest: str) -> str:
    rest = rest.strip()
    m = re.match(r'^([\w\-]+)\s*\[\s*"?(.*?)"?\s*\]\s*$', rest)
    if m:
        return m.group(2).strip() or m.group(1)
    if len(rest) >= 2 and rest[0] == rest[-1] and rest[0] in ('"', "'"):
        rest = rest[1:-1]
    return rest.strip()


class _GraphBuilder:
    """Accumulates nodes and edges of one mermaid block."""

    def __init__(self, direction: str | None) -> None:
        self.direction = direction
        self._nodes: dict[str, dict] = {}
        self._edges: list[GraphEdge] = []
        self._subgraphs: list[str] = []

    def push_subgraph(self, title: str) -> None:
        self._subgraphs.append(title)

    def pop_subgraph(self) -> None:
        if self._subgraphs:
            self._subgraphs.pop()

    def _declare(self, node_id: str, shape: str | None) -> None:
        current = self._subgraphs[-1] if self._subgraphs else None
        entry = self._nodes.get(node_id)
        if entry is None:
            self._nodes[node_id] = {
                "label": _shape_label(shape) if shape else node_id,
                "labelled": bool(shape),
                "subgraph": current,
            }
            return
        if shape and not entry["labelled"]:
            entry["label"] = _shape_label(shape)
            entry["labelled"] = True
            if entry["subgraph"] is None:
                entry["subgraph"] = current

    def _parse_group(self, text: str, pos: int) -> tuple[list[str], int] | None:
        ids: list[str] = []
        while True:
            m = _NODE_RE.match(text, pos)
            if not m:
                return (ids, pos) if ids else None
            node_id = m.group("id")
            if node_id in ("end", "subgraph"):
                return (ids, pos) if ids else None
            self._declare(node_id, m.group("shape"))
            ids.append(node_id)
            pos = m.end()
            amp = _AMP_RE.match(text, pos)
            if not amp or amp.end() == pos:
                return ids, pos
            pos = amp.end()

    def statement(self, text: str) -> None:
        parsed = self._parse_group(text, 0)
        if parsed is None:
            return
        previous, pos = parsed
        while True:
            em = _EDGE_RE.match(text, pos)
            if not em:
                break
            nxt = self._parse_group(text, em.end())
            if nxt is None:
                break
            targets, pos = nxt
            label = em.group("pipe") if em.group("op") else em.group("inline")
            label = _clean_text(label) if label else None
            for src in previous:
                for tgt in targets:
                    self._edges.append(GraphEdge(source=src, target=tgt, label=label or None))
            previous = targets

    def build(self) -> ParsedGraph:
        nodes = [
            GraphNode(id=node_id, label=entry["label"], subgraph=entry["subgraph"])
            for node_id, entry in self._nodes.items()
        ]
        return ParsedGraph(direction=self.direction, nodes=nodes, edges=list(self._edges))


def _parse_block(body: str) -> ParsedGraph | None:
    lines = [ln.strip() for ln in body.splitlines()]
    lines = [ln for ln in lines if ln and not ln.startswith("%%")]
    if not lines:
        return None

    header = _HEADER_RE.match(lines[0])
    if not header:
        return None

    builder = _GraphBuilder(header.group(1).upper() if header.group(1) else None)
    remainder = lines[0][header.end():].strip()
    statements = ([remainder] if remainder else []) + lines[1:]

    for line in statements:
        for stmt in line.split(";"):
            stmt = stmt.strip()
            if not stmt or stmt.startswith("%%"):
                continue
            lowered = stmt.lower()
            if lowered == "end":
                builder.pop_subgraph()
            elif lowered.startswith("subgraph"):
                builder.push_subgraph(_subgraph_title(stmt[len("subgraph"):]))
            elif lowered.startswith(_SKIP_PREFIXES):
                continue
            else:
                builder.statement(stmt)

    graph = builder.build()
    if not graph.nodes and not graph.edges:
        return None
    return graph


def parse_graphs(text: str) -> list[ParsedGraph]:
    """Parse every mermaid flowchart block in *text*. Never raises."""
    graphs: list[ParsedGraph] = []
    for m in _BLOCK_RE.finditer(text):
        graph = _parse_block(m.group(1))
        if graph is not None:
            graphs.append(graph)
        else:
            logger.debug("skipping non-flowchart mermaid block")
    return graphs
