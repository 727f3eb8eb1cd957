"""Output subsystem: writes and validates export documents."""

from archiexport.output.validator import ExportValidator, ValidationResult
from archiexport.output.writer import ExportKind, ExportWriter

__all__ = [
    "ExportKind",
    "ExportValidator",
    "ExportWriter",
    "ValidationResult",
]
