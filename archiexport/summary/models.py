"""Export summary model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DiagramCounts(BaseModel):
    as_is: int = 0
    target: int = 0
    migration: int = 0


class ExportSummary(BaseModel):
    """Element, relationship and view counts for one export.

    Every layer, migration status and relationship origin is present as a
    key, with zero when nothing falls under it.
    """

    model_name: str = ""
    total_elements: int = 0
    total_relationships: int = 0
    total_views: int = 0
    by_layer: dict[str, int] = Field(default_factory=dict)
    by_type: dict[str, int] = Field(default_factory=dict)
    by_migration_status: dict[str, int] = Field(default_factory=dict)
    by_relationship_origin: dict[str, int] = Field(default_factory=dict)
    diagram_element_counts: DiagramCounts = Field(default_factory=DiagramCounts)
    source_files: list[str] = Field(default_factory=list)
