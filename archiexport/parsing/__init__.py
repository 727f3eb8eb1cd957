"""Total parsers for vault Markdown: front matter, tables, mermaid graphs."""

from archiexport.parsing.frontmatter import parse_front_matter, split_front_matter
from archiexport.parsing.graphs import parse_graphs
from archiexport.parsing.models import (
    Document,
    GraphEdge,
    GraphNode,
    ParsedGraph,
    ParsedTable,
    TableRow,
)
from archiexport.parsing.sections import Section, parse_sections
from archiexport.parsing.tables import parse_tables

__all__ = [
    "Document",
    "GraphEdge",
    "GraphNode",
    "ParsedGraph",
    "ParsedTable",
    "Section",
    "TableRow",
    "parse_front_matter",
    "parse_graphs",
    "parse_sections",
    "parse_tables",
    "split_front_matter",
]
