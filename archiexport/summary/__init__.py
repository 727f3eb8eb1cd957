"""Export summaries."""

from archiexport.summary.models import DiagramCounts, ExportSummary
from archiexport.summary.reporter import format_summary_markdown, generate_summary

__all__ = ["DiagramCounts", "ExportSummary", "format_summary_markdown", "generate_summary"]
