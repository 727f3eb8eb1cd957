"""Keep/add/remove classification of a model against its source documents.

Signals, strongest first:

1. Gap elements are always ``add``.
2. Explicit markers from the documents: gap cells (``add``) and
   Status/Lifecycle cells such as "Retire" or "Planned" next to a
   component name.
3. Names that appear only on the baseline side of a gap analysis row
   (``remove``) or only on the target side (``add``); the element's own
   ``status`` property can still override this.
4. Everything else is ``keep``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from archiexport.extractor import columns as col
from archiexport.extractor.names import contains_phrase, is_placeholder, normalize_name
from archiexport.migration.models import ClassifiedElement, ClassifiedModel, ClassifiedRelationship
from archiexport.model import ArchiModel, Element, ElementType, MigrationStatus
from archiexport.parsing import Document, parse_tables

logger = logging.getLogger(__name__)

REMOVE_MARKERS = re.compile(
    r"\b(?:retir\w*|decommission\w*|sunset\w*|phase[\s_-]?out|remov\w*|obsolete|deprecated)\b",
    re.IGNORECASE,
)
ADD_MARKERS = re.compile(r"\b(?:new|planned|proposed|emerging|future)\b", re.IGNORECASE)

_STATUS_NAME_COLUMNS = ("Component", "Application", "Name", "Platform", "SBB")


def status_from_marker(text: str) -> MigrationStatus | None:
    """Map a free-text status cell to add/remove, or None when it says neither."""
    if not text:
        return None
    if REMOVE_MARKERS.search(text):
        return MigrationStatus.REMOVE
    if ADD_MARKERS.search(text):
        return MigrationStatus.ADD
    return None


@dataclass
class MigrationSignals:
    """What the documents say about the baseline and target states."""

    explicit: dict[str, MigrationStatus] = field(default_factory=dict)
    baseline: list[str] = field(default_factory=list)
    target: list[str] = field(default_factory=list)

    @classmethod
    def from_documents(cls, documents: Iterable[Document]) -> MigrationSignals:
        signals = cls()
        for doc in documents:
            for table in parse_tables(doc.content):
                for row in table.rows:
                    signals._read_row(row)
        return signals

    def _read_row(self, row) -> None:
        baseline, target, gap = row.get(col.BASELINE), row.get(col.TARGET), row.get(col.GAP)
        if baseline and target and gap:
            if not is_placeholder(baseline):
                self._remember(self.baseline, baseline)
            if not is_placeholder(target):
                self._remember(self.target, target)
            if not is_placeholder(gap):
                self.explicit[normalize_name(gap)] = MigrationStatus.ADD

        name = row.get(_STATUS_NAME_COLUMNS)
        if name and not is_placeholder(name):
            status = status_from_marker(row.get(col.STATUS))
            if status is not None:
                self.explicit[normalize_name(name)] = status

    @staticmethod
    def _remember(bucket: list[str], name: str) -> None:
        if normalize_name(name) and name not in bucket:
            bucket.append(name)

    def mentions(self, bucket: list[str], name: str) -> bool:
        normalized = normalize_name(name)
        return any(normalize_name(b) == normalized or contains_phrase(name, b) for b in bucket)


def classify_element(element: Element, signals: MigrationSignals) -> MigrationStatus:
    if element.type == ElementType.GAP:
        return MigrationStatus.ADD

    explicit = signals.explicit.get(normalize_name(element.name))
    if explicit is not None:
        return explicit

    in_baseline = signals.mentions(signals.baseline, element.name)
    in_target = signals.mentions(signals.target, element.name)
    status = MigrationStatus.KEEP
    if in_baseline and not in_target:
        status = MigrationStatus.REMOVE
    elif in_target and not in_baseline:
        status = MigrationStatus.ADD

    own = status_from_marker(element.properties.get("status", ""))
    if own is not None:
        status = own
    elif element.migration_status is not None and status == MigrationStatus.KEEP:
        status = element.migration_status
    return status


def combine_statuses(source: MigrationStatus, target: MigrationStatus) -> MigrationStatus:
    """remove > add > keep."""
    if MigrationStatus.REMOVE in (source, target):
        return MigrationStatus.REMOVE
    if MigrationStatus.ADD in (source, target):
        return MigrationStatus.ADD
    return MigrationStatus.KEEP


def classify_migration(model: ArchiModel, documents: Iterable[Document]) -> ClassifiedModel:
    """Classify every element and relationship. Pure: same input, same output."""
    signals = MigrationSignals.from_documents(documents)

    elements = [
        ClassifiedElement(**el.model_dump(exclude={"migration_status"}), migration_status=classify_element(el, signals))
        for el in model.elements
    ]
    statuses = {el.id: el.migration_status for el in elements}

    relationships = [
        ClassifiedRelationship(
            **rel.model_dump(exclude={"migration_status"}),
            migration_status=combine_statuses(
                statuses.get(rel.source_id, MigrationStatus.KEEP),
                statuses.get(rel.target_id, MigrationStatus.KEEP),
            ),
        )
        for rel in model.relationships
    ]

    classified = ClassifiedModel(name=model.name, elements=elements, relationships=relationships)
    logger.debug("migration classes: %s", {k.value: v for k, v in classified.count_by_status().items()})
    return classified
