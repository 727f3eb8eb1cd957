"""Incremental construction of elements and relationships for one run."""

from __future__ import annotations

import logging

from archiexport.extractor.names import contains_phrase, is_placeholder, normalize_name
from archiexport.model import (
    ORIGIN_PREFIXES,
    Element,
    ElementType,
    IdGenerator,
    Layer,
    MigrationStatus,
    Relationship,
    RelationshipOrigin,
    RelationshipType,
)

logger = logging.getLogger(__name__)

# Short id prefix per element type, e.g. ``id-stkh-000001``.
_ID_PREFIXES: dict[ElementType, str] = {
    ElementType.BUSINESS_ACTOR: "bact",
    ElementType.BUSINESS_ROLE: "brol",
    ElementType.BUSINESS_PROCESS: "bprc",
    ElementType.BUSINESS_FUNCTION: "bfn",
    ElementType.BUSINESS_SERVICE: "bsvc",
    ElementType.BUSINESS_EVENT: "bscn",
    ElementType.BUSINESS_OBJECT: "bobj",
    ElementType.CAPABILITY: "bcap",
    ElementType.COURSE_OF_ACTION: "coa",
    ElementType.RESOURCE: "res",
    ElementType.APPLICATION_COMPONENT: "acomp",
    ElementType.APPLICATION_INTERFACE: "aifc",
    ElementType.APPLICATION_SERVICE: "asvc",
    ElementType.APPLICATION_FUNCTION: "afn",
    ElementType.DATA_OBJECT: "dobj",
    ElementType.NODE: "tnode",
    ElementType.DEVICE: "tdev",
    ElementType.SYSTEM_SOFTWARE: "tsw",
    ElementType.TECHNOLOGY_SERVICE: "tsvc",
    ElementType.TECHNOLOGY_INTERFACE: "tifc",
    ElementType.COMMUNICATION_NETWORK: "tnet",
    ElementType.ARTIFACT: "tart",
    ElementType.STAKEHOLDER: "stkh",
    ElementType.DRIVER: "drv",
    ElementType.GOAL: "goal",
    ElementType.PRINCIPLE: "prin",
    ElementType.REQUIREMENT: "req",
    ElementType.CONSTRAINT: "cons",
    ElementType.ASSESSMENT: "asmt",
    ElementType.VALUE: "val",
    ElementType.WORK_PACKAGE: "wp",
    ElementType.DELIVERABLE: "dlv",
    ElementType.PLATEAU: "plat",
    ElementType.GAP: "gap",
}


def _clean_properties(properties: dict[str, str] | None) -> dict[str, str]:
    if not properties:
        return {}
    return {k: v.strip() for k, v in properties.items() if v and v.strip()}


class ModelBuilder:
    """Collects elements and relationships while enforcing model invariants.

    - one element per (namespace, type, normalized name); repeats return the existing one
    - relationships only between known element ids, never duplicated
    """

    def __init__(self, ids: IdGenerator) -> None:
        self.ids = ids
        self.elements: list[Element] = []
        self.relationships: list[Relationship] = []
        self._by_id: dict[str, Element] = {}
        self._by_key: dict[tuple[str, ElementType, str], Element] = {}
        self._by_name: dict[str, list[Element]] = {}
        self._rel_keys: set[tuple[RelationshipType, str, str]] = set()

    # -- elements -----------------------------------------------------------

    def add_element(
        self,
        element_type: ElementType,
        name: str,
        *,
        source: str | None = None,
        documentation: str | None = None,
        properties: dict[str, str] | None = None,
        migration_status: MigrationStatus | None = None,
        prefix: str | None = None,
        namespace: str = "",
    ) -> Element | None:
        """Add an element, or return the existing one with the same key.

        Elements in different *namespaces* never merge, so a created ABB stays
        apart from a same-named SBB. Returns None when *name* is empty or a
        placeholder such as ``-``.
        """
        name = " ".join((name or "").split())
        normalized = normalize_name(name)
        if not normalized or is_placeholder(name):
            return None

        props = _clean_properties(properties)
        if element_type == ElementType.GAP:
            migration_status = MigrationStatus.ADD

        existing = self._by_key.get((namespace, element_type, normalized))
        if existing is not None:
            for key, value in props.items():
                existing.properties.setdefault(key, value)
            if documentation and not existing.documentation:
                existing.documentation = documentation
            return existing

        element = Element(
            id=self.ids.next(prefix or _ID_PREFIXES[element_type]),
            type=element_type,
            name=name,
            layer=element_type.layer,
            documentation=documentation or None,
            source=source,
            properties=props,
            migration_status=migration_status,
        )
        self.elements.append(element)
        self._by_id[element.id] = element
        self._by_key[(namespace, element_type, normalized)] = element
        self._by_name.setdefault(normalized, []).append(element)
        return element

    def get(self, element_id: str) -> Element | None:
        return self._by_id.get(element_id)

    def find(
        self,
        name: str,
        *,
        source: str | None = None,
        same_source_only: bool = False,
        exclude: set[str] | None = None,
        layers: set[Layer] | None = None,
    ) -> Element | None:
        """Exact normalized-name lookup, preferring elements from *source*."""
        candidates = [
            el for el in self._by_name.get(normalize_name(name), [])
            if (not exclude or el.id not in exclude) and (not layers or el.layer in layers)
        ]
        return self._pick(candidates, source, same_source_only)

    def find_containing(
        self,
        name: str,
        *,
        source: str | None = None,
        exclude: set[str] | None = None,
    ) -> Element | None:
        """First element whose name contains *name* on word boundaries."""
        candidates = [
            el for el in self.elements
            if (not exclude or el.id not in exclude) and contains_phrase(el.name, name)
        ]
        return self._pick(candidates, source, False)

    @staticmethod
    def _pick(candidates: list[Element], source: str | None, same_source_only: bool) -> Element | None:
        if source is not None:
            for el in candidates:
                if el.source == source:
                    return el
            if same_source_only:
                return None
        return candidates[0] if candidates else None

    # -- relationships ------------------------------------------------------

    def add_relationship(
        self,
        rel_type: RelationshipType,
        source_id: str,
        target_id: str,
        origin: RelationshipOrigin = RelationshipOrigin.EXPLICIT,
        *,
        name: str | None = None,
    ) -> Relationship | None:
        """Link two known elements. Self-loops and duplicates return None.

        Raises ValueError for unknown ids: that is a bug in the caller, not bad input.
        """
        for element_id in (source_id, target_id):
            if element_id not in self._by_id:
                raise ValueError(f"unknown element id {element_id!r}")
        if source_id == target_id:
            return None
        key = (rel_type, source_id, target_id)
        if key in self._rel_keys:
            return None

        rel = Relationship(
            id=self.ids.next(ORIGIN_PREFIXES[origin]),
            type=rel_type,
            source_id=source_id,
            target_id=target_id,
            origin=origin,
            name=name or None,
        )
        self._rel_keys.add(key)
        self.relationships.append(rel)
        logger.debug("linked %s %s -> %s", rel_type.xsi_type, source_id, target_id)
        return rel
