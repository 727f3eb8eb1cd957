"""Summary generation and Markdown rendering."""

from __future__ import annotations

import re
from collections import Counter

from archiexport.migration import ClassifiedModel
from archiexport.model import ArchiModel, Layer, MigrationStatus, RelationshipOrigin
from archiexport.summary.models import DiagramCounts, ExportSummary

_STATUS_ROWS = [
    (MigrationStatus.KEEP, "Keep", "Unchanged between As-Is and Target"),
    (MigrationStatus.ADD, "Add", "New in the Target Architecture"),
    (MigrationStatus.REMOVE, "Remove", "Retired from the As-Is Architecture"),
]


def _statuses(model: ArchiModel, classified: ClassifiedModel | None) -> list[MigrationStatus]:
    if classified is not None:
        return [el.migration_status for el in classified.elements]
    return [el.migration_status or MigrationStatus.KEEP for el in model.elements]


def generate_summary(model: ArchiModel, classified: ClassifiedModel | None = None) -> ExportSummary:
    """Count *model*; migration figures come from *classified* when given."""
    by_layer = {layer.value: 0 for layer in Layer}
    by_type: Counter[str] = Counter()
    for el in model.elements:
        by_layer[el.layer.value] += 1
        by_type[el.type.value] += 1

    statuses = _statuses(model, classified)
    by_status = {status.value: 0 for status in MigrationStatus}
    for status in statuses:
        by_status[status.value] += 1

    by_origin = {origin.value: 0 for origin in RelationshipOrigin}
    for rel in model.relationships:
        by_origin[rel.origin.value] += 1

    total = len(statuses)
    diagrams = DiagramCounts(
        as_is=total - by_status[MigrationStatus.ADD.value],
        target=total - by_status[MigrationStatus.REMOVE.value],
        migration=total,
    )

    return ExportSummary(
        model_name=model.name,
        total_elements=len(model.elements),
        total_relationships=len(model.relationships),
        total_views=len(model.views),
        by_layer=by_layer,
        by_type=dict(sorted(by_type.items(), key=lambda kv: (-kv[1], kv[0]))),
        by_migration_status=by_status,
        by_relationship_origin=by_origin,
        diagram_element_counts=diagrams,
        source_files=sorted({el.source for el in model.elements if el.source}),
    )


def _cell(text: str) -> str:
    """Escape pipes so *text* cannot split a table row."""
    return str(text).replace("|", "\\|")


def _code(text: str) -> str:
    """Inline code span, fenced longer than any backtick run inside *text*."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    fence = "`" * (longest + 1)
    pad = " " if text.startswith("`") or text.endswith("`") else ""
    return f"{fence}{pad}{text}{pad}{fence}"


def _count_table(title: str, header: str, rows: list[tuple[str, int]]) -> list[str]:
    lines = [f"\n### {title}\n", f"| {header} | Count |", "|------|------:|"]
    lines.extend(f"| {_cell(label)} | {count} |" for label, count in rows)
    return lines


def format_summary_markdown(summary: ExportSummary) -> str:
    """Markdown report with metrics, layer/type/status breakdowns and sources."""
    title = f"## Export Summary: {_cell(summary.model_name)}" if summary.model_name else "## Export Summary"
    lines = [
        f"{title}\n",
        "| Metric | Count |",
        "|--------|------:|",
        f"| Elements | {summary.total_elements} |",
        f"| Relationships | {summary.total_relationships} |",
        f"| Views | {summary.total_views} |",
    ]

    lines += _count_table(
        "By Layer", "Layer",
        sorted(summary.by_layer.items(), key=lambda kv: (-kv[1], kv[0])),
    )
    if summary.by_type:
        lines += _count_table("By Element Type", "Type", list(summary.by_type.items()))
    lines += _count_table(
        "By Relationship Origin", "Origin", list(summary.by_relationship_origin.items())
    )

    lines += [
        "\n### Migration Classification\n",
        "| Status | Elements | Description |",
        "|--------|---------:|-------------|",
    ]
    for status, label, description in _STATUS_ROWS:
        lines.append(f"| {label} | {summary.by_migration_status.get(status.value, 0)} | {description} |")

    counts = summary.diagram_element_counts
    lines += [
        "\n### Diagrams\n",
        f"1. **As-Is Architecture**: {counts.as_is} elements (keep + remove)",
        f"2. **Target Architecture**: {counts.target} elements (keep + add)",
        f"3. **Migration Architecture**: {counts.migration} elements, colour-coded by status",
    ]

    lines.append("\n### Source Files\n")
    if summary.source_files:
        lines.extend(f"- {_code(name)}" for name in summary.source_files)
    else:
        lines.append("_No source files contributed elements._")

    return "\n".join(lines)
