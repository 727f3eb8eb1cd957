"""End-to-end exports: documents in, serialized documents out."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from archiexport.config.models import ArchiExportConfig
from archiexport.drawio import DrawioDocuments, DrawioSerializer
from archiexport.exchange import serialize_model
from archiexport.extractor import ModelExtractor
from archiexport.migration import ClassifiedModel, classify_migration
from archiexport.model import ArchiModel
from archiexport.parsing import Document
from archiexport.summary import ExportSummary, generate_summary


class ArchimateExportResult(BaseModel):
    xml: str
    model: ArchiModel
    summary: ExportSummary


class DrawioExportResult(BaseModel):
    documents: DrawioDocuments
    model: ArchiModel
    classified: ClassifiedModel
    summary: ExportSummary


def export_archimate(
    documents: Iterable[Document],
    model_name: str | None = None,
    config: ArchiExportConfig | None = None,
    exported_at: str | None = None,
) -> ArchimateExportResult:
    config = config or ArchiExportConfig()
    model = ModelExtractor(config.extraction).extract(documents, model_name, exported_at=exported_at)
    return ArchimateExportResult(xml=serialize_model(model), model=model, summary=generate_summary(model))


def export_drawio(
    documents: Iterable[Document],
    model_name: str | None = None,
    config: ArchiExportConfig | None = None,
    exported_at: str | None = None,
) -> DrawioExportResult:
    """Extract, classify and render the As-Is, Target, Migration and combined diagrams."""
    config = config or ArchiExportConfig()
    documents = list(documents)
    model = ModelExtractor(config.extraction).extract(documents, model_name, exported_at=exported_at)
    classified = classify_migration(model, documents)
    rendered = DrawioSerializer(config.layout).render_all(classified, modified=model.metadata.exported_at)
    return DrawioExportResult(
        documents=rendered,
        model=model,
        classified=classified,
        summary=generate_summary(model, classified),
    )
