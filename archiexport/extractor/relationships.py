"""Relationship discovery passes, run after every document has been read.

1. explicit: SBB -> ABB realizations and "Depends On"-style table columns
2. diagram: mermaid edges between resolvable elements (``id-grel-*``)
3. cross-layer: name overlap between layers (``id-xrel-*``)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from archiexport.extractor.builder import ModelBuilder
from archiexport.extractor.names import normalize_name, split_list
from archiexport.extractor.rules import DocumentContext
from archiexport.model import (
    Element,
    ElementType,
    Layer,
    RelationshipOrigin,
    RelationshipType,
)

logger = logging.getLogger(__name__)

# (header aliases, relationship type, reversed). Reversed columns name the
# source of the relationship rather than its target.
_TARGET_COLUMNS: list[tuple[tuple[str, ...], RelationshipType, bool]] = [
    (("Depends On", "Dependencies", "Uses", "Calls"), RelationshipType.SERVING, True),
    (("Serves", "Supports"), RelationshipType.SERVING, False),
    (("Realizes", "Realises", "Implements"), RelationshipType.REALIZATION, False),
    (("Assigned To", "Performed By"), RelationshipType.ASSIGNMENT, True),
    (("Related To",), RelationshipType.ASSOCIATION, False),
    (("Triggers",), RelationshipType.TRIGGERING, False),
    (("Flows To",), RelationshipType.FLOW, False),
]

_NUMERIC_RE = re.compile(r"^\d+$")


# ---------------------------------------------------------------------------
# Explicit
# ---------------------------------------------------------------------------


def resolve_realizations(builder: ModelBuilder, contexts: list[DocumentContext]) -> None:
    """Link every SBB to its ABB, creating the ABB when no element carries its name."""
    for ctx in contexts:
        for pending in ctx.pending:
            exclude = {pending.sbb.id}
            abb = (
                builder.find(pending.abb_name, source=pending.source, exclude=exclude)
                or builder.find_containing(pending.abb_name, source=pending.source, exclude=exclude)
            )
            if abb is None:
                abb_type = ElementType.REQUIREMENT if pending.requirement_like else ElementType.DELIVERABLE
                abb = builder.add_element(
                    abb_type, pending.abb_name, source=pending.source, prefix="abb", namespace="abb"
                )
            if abb is None:
                continue
            builder.add_relationship(
                RelationshipType.REALIZATION,
                pending.sbb.id,
                abb.id,
                RelationshipOrigin.EXPLICIT,
                name=f"{pending.sbb.name} realizes {pending.abb_name}",
            )


def link_table_columns(builder: ModelBuilder, contexts: list[DocumentContext]) -> None:
    """Relationships named by target columns such as ``Depends On`` or ``Realizes``."""
    for ctx in contexts:
        for anchor, row in ctx.row_elements:
            for aliases, rel_type, reverse in _TARGET_COLUMNS:
                value = row.get(aliases)
                if not value:
                    continue
                for target_name in split_list(value):
                    target = builder.find(target_name, source=ctx.name, exclude={anchor.id})
                    if target is None:
                        logger.debug("%s: unresolved %r in %s row", ctx.name, target_name, anchor.name)
                        continue
                    source_id, target_id = (target.id, anchor.id) if reverse else (anchor.id, target.id)
                    builder.add_relationship(rel_type, source_id, target_id, RelationshipOrigin.EXPLICIT)


# ---------------------------------------------------------------------------
# Diagram-derived
# ---------------------------------------------------------------------------


def _resolve_endpoint(builder: ModelBuilder, ctx: DocumentContext, node_id: str, label: str) -> Element | None:
    for candidate in (label, node_id.replace("_", " "), node_id):
        element = builder.find(candidate, source=ctx.name)
        if element is not None:
            return element
    return None


def link_diagram_edges(builder: ModelBuilder, contexts: list[DocumentContext]) -> int:
    """Association per mermaid edge whose endpoints both resolve. Returns links added."""
    added = 0
    for ctx in contexts:
        for graph in ctx.graphs:
            for edge in graph.edges:
                source = _resolve_endpoint(builder, ctx, edge.source, graph.label_of(edge.source))
                target = _resolve_endpoint(builder, ctx, edge.target, graph.label_of(edge.target))
                if source is None or target is None:
                    logger.debug("%s: dropping edge %s -> %s", ctx.name, edge.source, edge.target)
                    continue
                if builder.add_relationship(
                    RelationshipType.ASSOCIATION,
                    source.id,
                    target.id,
                    RelationshipOrigin.DIAGRAM,
                    name=edge.label,
                ):
                    added += 1
    return added


# ---------------------------------------------------------------------------
# Cross-layer heuristic
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Entry:
    element: Element
    normalized: str
    tokens: frozenset[str]


class NameIndex:
    """Normalized names and significant tokens of every element, grouped by layer."""

    def __init__(
        self,
        elements: list[Element],
        *,
        min_token_length: int = 4,
        stopwords: frozenset[str] | set[str] = frozenset(),
    ) -> None:
        self.min_token_length = min_token_length
        self.stopwords = frozenset(stopwords)
        self.entries = [self._entry(el) for el in elements]
        self.by_layer: dict[Layer, list[_Entry]] = {layer: [] for layer in Layer}
        for entry in self.entries:
            self.by_layer[entry.element.layer].append(entry)

    def _entry(self, element: Element) -> _Entry:
        normalized = normalize_name(element.name)
        return _Entry(element, normalized, self.significant_tokens(normalized))

    def significant_tokens(self, normalized: str) -> frozenset[str]:
        return frozenset(
            t for t in normalized.split()
            if len(t) >= self.min_token_length and t not in self.stopwords and not _NUMERIC_RE.match(t)
        )

    def select(self, *, layer: Layer | None = None, types: frozenset[ElementType] | None = None) -> list[_Entry]:
        pool = self.by_layer[layer] if layer is not None else self.entries
        if types is None:
            return list(pool)
        return [e for e in pool if e.element.type in types]

    def match(self, a: _Entry, b: _Entry) -> bool:
        return self._match(a.normalized, a.tokens, b.normalized, b.tokens)

    def names_match(self, a: str, b: str) -> bool:
        na, nb = normalize_name(a), normalize_name(b)
        return self._match(na, self.significant_tokens(na), nb, self.significant_tokens(nb))

    def _match(self, na: str, tokens_a: frozenset[str], nb: str, tokens_b: frozenset[str]) -> bool:
        if not na or not nb:
            return False
        if na == nb:
            return True
        shorter, longer = sorted((na, nb), key=len)
        if len(shorter) >= self.min_token_length and f" {shorter} " in f" {longer} ":
            return True
        return bool(tokens_a & tokens_b)


def names_match(
    a: str,
    b: str,
    *,
    min_token_length: int = 4,
    stopwords: frozenset[str] | set[str] = frozenset(),
) -> bool:
    """Standalone form of :meth:`NameIndex.match` for two raw names."""
    index = NameIndex([], min_token_length=min_token_length, stopwords=stopwords)
    return index.names_match(a, b)


_APPLICATION_ACTIVE = frozenset({
    ElementType.APPLICATION_COMPONENT,
    ElementType.APPLICATION_INTERFACE,
    ElementType.APPLICATION_SERVICE,
    ElementType.APPLICATION_FUNCTION,
})
_BUSINESS_BEHAVIOUR = frozenset({
    ElementType.BUSINESS_ACTOR,
    ElementType.BUSINESS_ROLE,
    ElementType.BUSINESS_PROCESS,
    ElementType.BUSINESS_FUNCTION,
    ElementType.BUSINESS_SERVICE,
    ElementType.BUSINESS_EVENT,
})
_TECHNOLOGY_ACTIVE = frozenset({
    ElementType.NODE,
    ElementType.DEVICE,
    ElementType.SYSTEM_SOFTWARE,
    ElementType.TECHNOLOGY_SERVICE,
    ElementType.TECHNOLOGY_INTERFACE,
    ElementType.COMMUNICATION_NETWORK,
    ElementType.ARTIFACT,
})
_REQUIREMENTS = frozenset({ElementType.REQUIREMENT, ElementType.CONSTRAINT})
_PRINCIPLES = frozenset({ElementType.PRINCIPLE})


@dataclass(frozen=True)
class CrossLayerRule:
    source_types: frozenset[ElementType]
    target_types: frozenset[ElementType]
    rel_type: RelationshipType


CROSS_LAYER_RULES: list[CrossLayerRule] = [
    # application elements serve business behaviour
    CrossLayerRule(_APPLICATION_ACTIVE, _BUSINESS_BEHAVIOUR, RelationshipType.SERVING),
    # technology realizes application elements
    CrossLayerRule(_TECHNOLOGY_ACTIVE, _APPLICATION_ACTIVE, RelationshipType.REALIZATION),
    # requirements and constraints influence principles
    CrossLayerRule(_REQUIREMENTS, _PRINCIPLES, RelationshipType.INFLUENCE),
]


def infer_cross_layer(builder: ModelBuilder, index: NameIndex) -> int:
    """Add ``xrel`` relationships for name overlaps. Returns links added."""
    added = 0
    for rule in CROSS_LAYER_RULES:
        sources = index.select(types=rule.source_types)
        targets = index.select(types=rule.target_types)
        for src in sources:
            for tgt in targets:
                if src.element.id == tgt.element.id or not index.match(src, tgt):
                    continue
                if builder.add_relationship(
                    rule.rel_type,
                    src.element.id,
                    tgt.element.id,
                    RelationshipOrigin.INFERRED,
                ):
                    added += 1
    return added
