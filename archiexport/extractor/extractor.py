"""ModelExtractor: vault documents -> ArchiModel."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from archiexport import __version__
from archiexport.config.models import ExtractionConfig
from archiexport.extractor.builder import ModelBuilder
from archiexport.extractor.phases import detect_phase
from archiexport.extractor.relationships import (
    NameIndex,
    infer_cross_layer,
    link_diagram_edges,
    link_table_columns,
    resolve_realizations,
)
from archiexport.extractor.rules import PHASE_RULES, DocumentContext
from archiexport.model import ArchiModel, IdGenerator, ModelMetadata
from archiexport.parsing import Document, parse_front_matter, parse_graphs, parse_tables
from archiexport.views import generate_views

logger = logging.getLogger(__name__)


class ModelExtractor:
    """Builds an ArchiModel from an ordered list of documents.

    Each :meth:`extract` call draws a fresh id generator from *id_factory*,
    so repeated or concurrent runs never share a counter.
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        id_factory: Callable[[], IdGenerator] = IdGenerator,
    ) -> None:
        self.config = config or ExtractionConfig()
        self._id_factory = id_factory

    def extract(
        self,
        documents: Iterable[Document],
        model_name: str | None = None,
        exported_at: str | None = None,
    ) -> ArchiModel:
        documents = list(documents)
        name = model_name or self.config.default_model_name
        builder = ModelBuilder(self._id_factory())

        contexts: list[DocumentContext] = []
        for doc in documents:
            front_matter = parse_front_matter(doc.content)
            phase = detect_phase(doc.name, front_matter)
            ctx = DocumentContext(
                document=doc,
                front_matter=front_matter,
                tables=parse_tables(doc.content),
                graphs=parse_graphs(doc.content),
                builder=builder,
                phase=phase,
            )
            if phase is not None:
                before = len(builder.elements)
                PHASE_RULES[phase](ctx)
                logger.debug(
                    "%s: phase %s, %d new elements",
                    doc.name, phase.value, len(builder.elements) - before,
                )
            else:
                logger.debug("%s: no phase detected", doc.name)
            contexts.append(ctx)

        resolve_realizations(builder, contexts)
        link_table_columns(builder, contexts)
        link_diagram_edges(builder, contexts)
        if self.config.cross_layer_inference:
            index = NameIndex(
                builder.elements,
                min_token_length=self.config.min_token_length,
                stopwords=set(self.config.stopwords),
            )
            infer_cross_layer(builder, index)

        model = ArchiModel(
            name=name,
            documentation=f'Exported from TOGAF vault "{name}" by archiexport',
            elements=builder.elements,
            relationships=builder.relationships,
            metadata=ModelMetadata(
                exported_at=exported_at or datetime.now(timezone.utc).isoformat(),
                vault_file_count=len(documents),
                generator_version=__version__,
            ),
        )
        model.views = generate_views(model)

        logger.info(
            "extracted %d elements, %d relationships from %d documents",
            len(model.elements), len(model.relationships), len(documents),
        )
        return model


def extract_model(
    documents: Iterable[Document],
    model_name: str | None = None,
    *,
    config: ExtractionConfig | None = None,
    exported_at: str | None = None,
) -> ArchiModel:
    """Extract with a fresh :class:`ModelExtractor`."""
    return ModelExtractor(config).extract(documents, model_name, exported_at=exported_at)
