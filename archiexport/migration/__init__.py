"""Baseline/target migration classification."""

from archiexport.migration.classifier import (
    MigrationSignals,
    classify_element,
    classify_migration,
    combine_statuses,
    status_from_marker,
)
from archiexport.migration.models import ClassifiedElement, ClassifiedModel, ClassifiedRelationship

__all__ = [
    "ClassifiedElement",
    "ClassifiedModel",
    "ClassifiedRelationship",
    "MigrationSignals",
    "classify_element",
    "classify_migration",
    "combine_statuses",
    "status_from_marker",
]
