"""Per-phase extraction rules.

Each rule reads the tables (and, for the architecture phases, the mermaid
graphs) of one document and adds elements through the shared
:class:`ModelBuilder`. Rules never raise on odd row shapes: rows without a
usable name are skipped and missing cells read as empty strings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from archiexport.extractor import columns as col
from archiexport.extractor.builder import ModelBuilder
from archiexport.extractor.names import is_placeholder, normalize_name, split_list
from archiexport.extractor.phases import Phase
from archiexport.extractor.technology import infer_technology_type
from archiexport.model import Element, ElementType, RelationshipOrigin, RelationshipType
from archiexport.parsing import Document, ParsedGraph, ParsedTable, TableRow, parse_sections

logger = logging.getLogger(__name__)

_PRINCIPLE_HEADING_RE = re.compile(r"^#{2,4}\s+(P-\d+)[\s:]+(.+)$", re.MULTILINE)
_DECISION_TITLE_RE = re.compile(r"^((?:ADR|AD)-\d+)[\s:]+(.+)$", re.IGNORECASE)
_STATUS_RE = re.compile(r"\*\*Status:?\*\*\s*:?\s*([^\n*]+)", re.IGNORECASE)
_FR_ID_RE = re.compile(r"^FR[-_ ]?\d", re.IGNORECASE)
_NFR_ID_RE = re.compile(r"^NFR[-_ ]?\d", re.IGNORECASE)
_REQUIREMENT_ID_RE = re.compile(r"^(?:N?FR|REQ|BR|R)[-_ ]?\d", re.IGNORECASE)
_NFR_KINDS = frozenset({"nfr", "non-functional", "non functional", "nonfunctional", "quality", "constraint"})


@dataclass
class PendingRealization:
    """SBB -> ABB link resolved once every document has been read."""

    sbb: Element
    abb_name: str
    source: str
    requirement_like: bool = False


@dataclass
class DocumentContext:
    document: Document
    front_matter: dict[str, str]
    tables: list[ParsedTable]
    graphs: list[ParsedGraph]
    builder: ModelBuilder
    phase: Phase | None = None
    # (element, row) pairs whose extra columns may name related elements
    row_elements: list[tuple[Element, TableRow]] = field(default_factory=list)
    pending: list[PendingRealization] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.document.name

    def add(
        self,
        element_type: ElementType,
        name: str,
        row: TableRow | None = None,
        **kwargs,
    ) -> Element | None:
        element = self.builder.add_element(element_type, name, source=self.name, **kwargs)
        if element is not None and row is not None:
            self.row_elements.append((element, row))
        return element

    def rows(self):
        for table in self.tables:
            for row in table.rows:
                yield table, row


def _props(**values: str) -> dict[str, str]:
    return {k: v for k, v in values.items() if v}


def _labelled(identifier: str, name: str) -> str:
    if identifier and not normalize_name(name).startswith(normalize_name(identifier)):
        return f"{identifier}: {name}"
    return name


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _extract_gap(ctx: DocumentContext, row: TableRow) -> Element | None:
    """One Gap per distinct gap cell of a Baseline/Target/Gap row."""
    baseline, target, gap = row.get(col.BASELINE), row.get(col.TARGET), row.get(col.GAP)
    if not (baseline and target and gap):
        return None
    action = row.get(col.ACTION)
    return ctx.add(
        ElementType.GAP,
        gap,
        row,
        documentation=f"Baseline: {baseline} → Target: {target}. Action: {action or 'TBD'}",
        properties=_props(baseline=baseline, target=target, action=action),
    )


def _graph_nodes(
    ctx: DocumentContext,
    element_type: ElementType,
    group_property: str,
) -> None:
    """Add mermaid nodes not already named by an element of this document."""
    for graph in ctx.graphs:
        for node in graph.nodes:
            if ctx.builder.find(node.label, source=ctx.name, same_source_only=True):
                continue
            props = {group_property: node.subgraph} if node.subgraph else None
            ctx.add(element_type, node.label, properties=props)


# ---------------------------------------------------------------------------
# Phase rules
# ---------------------------------------------------------------------------


def extract_stakeholders(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        name = row.get(col.STAKEHOLDER)
        if not name:
            continue
        role, concern = row.get(col.ROLE), row.get(col.CONCERN)
        stakeholder = ctx.add(
            ElementType.STAKEHOLDER,
            name,
            row,
            documentation=f"Role: {role}" if role else None,
            properties=_props(
                interest=row.get(col.INTEREST),
                influence=row.get(col.INFLUENCE),
                concern=concern,
            ),
        )
        if stakeholder is None or not concern:
            continue
        # one Driver per distinct concern; repeats resolve to the same element
        driver = ctx.add(ElementType.DRIVER, concern)
        if driver is not None:
            ctx.builder.add_relationship(
                RelationshipType.ASSOCIATION,
                stakeholder.id,
                driver.id,
                RelationshipOrigin.EXPLICIT,
                name="has concern",
            )


def extract_principles(ctx: DocumentContext) -> None:
    seen_ids: set[str] = set()
    for _table, row in ctx.rows():
        name = row.get(col.PRINCIPLE)
        if not name:
            continue
        identifier = row.get(col.ID)
        element = ctx.add(
            ElementType.PRINCIPLE,
            _labelled(identifier, name),
            row,
            documentation=row.get(col.RATIONALE) or None,
            properties=_props(implications=row.get(col.IMPLICATIONS)),
        )
        if element is not None and identifier:
            seen_ids.add(identifier.upper())

    for m in _PRINCIPLE_HEADING_RE.finditer(ctx.document.content):
        identifier, title = m.group(1), m.group(2).strip()
        if identifier.upper() in seen_ids:
            continue
        if ctx.add(ElementType.PRINCIPLE, f"{identifier}: {title}") is not None:
            seen_ids.add(identifier.upper())


def extract_governance(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        name = row.get(col.CONTROL)
        if name:
            ctx.add(
                ElementType.CONSTRAINT,
                name,
                row,
                documentation=row.get(col.DESCRIPTION) or row.get(col.FREQUENCY) or None,
            )


# Business row kinds, tried in order; the first column present names the element.
_BUSINESS_KINDS: list[tuple[tuple[str, ...], ElementType]] = [
    (col.CAPABILITY, ElementType.CAPABILITY),
    (col.PROCESS, ElementType.BUSINESS_PROCESS),
    (col.FUNCTION, ElementType.BUSINESS_FUNCTION),
    (col.SCENARIO, ElementType.BUSINESS_EVENT),
    (col.BUSINESS_SERVICE, ElementType.BUSINESS_SERVICE),
    (col.BUSINESS_ACTOR, ElementType.BUSINESS_ACTOR),
    (col.BUSINESS_ROLE, ElementType.BUSINESS_ROLE),
]


def extract_business(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        for aliases, element_type in _BUSINESS_KINDS:
            name = row.get(aliases)
            if name:
                doc = row.get(col.DESCRIPTION)
                if element_type == ElementType.BUSINESS_EVENT:
                    doc = doc or row.get(col.OUTCOME)
                ctx.add(element_type, name, row, documentation=doc or None)
                break
        _extract_gap(ctx, row)

    _graph_nodes(ctx, ElementType.BUSINESS_PROCESS, "group")


def extract_application(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        component_name = row.get(col.COMPONENT)
        if component_name:
            component = ctx.add(
                ElementType.APPLICATION_COMPONENT,
                component_name,
                row,
                documentation=row.get(col.DESCRIPTION) or None,
                properties=_props(owner=row.get(col.OWNER), status=row.get(col.STATUS)),
            )
            if component is None:
                continue
            for interface_name in split_list(row.get(col.INTERFACES)):
                interface = ctx.add(ElementType.APPLICATION_INTERFACE, interface_name)
                if interface is not None:
                    ctx.builder.add_relationship(
                        RelationshipType.COMPOSITION,
                        component.id,
                        interface.id,
                        RelationshipOrigin.EXPLICIT,
                    )
            continue

        data_name = row.get(col.DATA_OBJECT)
        if data_name:
            ctx.add(ElementType.DATA_OBJECT, data_name, row, documentation=row.get(col.DESCRIPTION) or None)
            continue

        service_name = row.get(col.APPLICATION_SERVICE)
        if service_name:
            ctx.add(
                ElementType.APPLICATION_SERVICE,
                service_name,
                row,
                documentation=row.get(col.DESCRIPTION) or None,
            )
        _extract_gap(ctx, row)

    _graph_nodes(ctx, ElementType.APPLICATION_COMPONENT, "group")


def extract_technology(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        name = row.get(col.PLATFORM)
        technology = row.get(col.TECHNOLOGY)
        standard = row.get(col.STANDARD)

        if not name and standard:
            ctx.add(
                ElementType.CONSTRAINT,
                standard,
                row,
                documentation=row.get(col.RATIONALE) or None,
                properties=_props(technology=technology, status=row.get(col.STATUS)),
            )
            continue

        name = name or technology
        if name:
            element_type = infer_technology_type(name, technology)
            ctx.add(
                element_type,
                name,
                row,
                documentation=row.get(col.DESCRIPTION) or None,
                properties=_props(
                    technology=technology if technology != name else "",
                    environment=row.get(col.ENVIRONMENT),
                    scaling=row.get(col.SCALING),
                    sla=row.get(col.SLA),
                    status=row.get(col.STATUS),
                ),
            )
            continue

        _extract_gap(ctx, row)

    _graph_nodes(ctx, ElementType.NODE, "environment")


def extract_solutions(ctx: DocumentContext) -> None:
    for table, row in ctx.rows():
        abb_name, sbb_name = row.get(col.ABB), row.get(col.SBB)
        if abb_name and sbb_name:
            vendor = row.get(col.VENDOR)
            sbb = ctx.add(
                ElementType.DELIVERABLE,
                sbb_name,
                row,
                documentation=f"Vendor: {vendor}" if vendor else None,
                properties=_props(
                    acquisition=row.get(col.ACQUISITION),
                    status=row.get(col.STATUS),
                    vendor=vendor,
                ),
                prefix="sbb",
            )
            if sbb is not None and not is_placeholder(abb_name):
                ctx.pending.append(PendingRealization(
                    sbb=sbb,
                    abb_name=abb_name,
                    source=ctx.name,
                    requirement_like=bool(
                        _REQUIREMENT_ID_RE.match(abb_name) or table.has_column("Requirement")
                    ),
                ))
            continue

        option = row.get(col.OPTION)
        if option and row.get(col.OPTION_KIND):
            ctx.add(ElementType.COURSE_OF_ACTION, option, row, documentation=row.get(col.PROS) or None)


def _is_constraint(identifier: str, row: TableRow) -> bool:
    if _FR_ID_RE.match(identifier):
        return False
    if _NFR_ID_RE.match(identifier):
        return True
    kind = row.get(col.REQUIREMENT_KIND).strip().lower()
    return kind in _NFR_KINDS


def extract_requirements(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        name = row.get(col.REQUIREMENT)
        if not name:
            continue
        identifier = row.get(col.ID)
        element_type = ElementType.CONSTRAINT if _is_constraint(identifier, row) else ElementType.REQUIREMENT
        description = row.get(col.DESCRIPTION)
        documentation = row.get(col.REQUIREMENT_DETAIL) or (description if description != name else "")
        ctx.add(
            element_type,
            _labelled(identifier, name),
            row,
            documentation=documentation or None,
            properties=_props(
                priority=row.get(col.PRIORITY),
                status=row.get(col.STATUS),
                target=row.get(col.TARGET),
            ),
        )


def extract_decisions(ctx: DocumentContext) -> None:
    seen_ids: set[str] = set()
    for section in parse_sections(ctx.document.content):
        if section.level < 2:
            continue
        m = _DECISION_TITLE_RE.match(section.title)
        if not m:
            continue
        identifier, title = m.group(1).upper(), m.group(2).strip()
        status_match = _STATUS_RE.search(section.body)
        status = status_match.group(1).strip() if status_match else "Unknown"
        if ctx.add(
            ElementType.ASSESSMENT,
            f"{identifier}: {title}",
            documentation=f"Status: {status}",
            properties={"status": status},
            prefix="adr",
        ) is not None:
            seen_ids.add(identifier)

    for _table, row in ctx.rows():
        identifier, title = row.get(col.DECISION_ID), row.get(col.DECISION)
        if not identifier or not title or identifier.upper() in seen_ids:
            continue
        status = row.get(col.STATUS)
        if ctx.add(
            ElementType.ASSESSMENT,
            f"{identifier}: {title}",
            row,
            documentation=f"Status: {status}" if status else None,
            properties=_props(status=status),
            prefix="adr",
        ) is not None:
            seen_ids.add(identifier.upper())


def extract_risks(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        name = row.get(col.RISK)
        if not name:
            continue
        ctx.add(
            ElementType.ASSESSMENT,
            _labelled(row.get(col.RISK_ID), name),
            row,
            documentation=row.get(col.MITIGATION) or None,
            properties=_props(
                probability=row.get(col.PROBABILITY),
                impact=row.get(col.IMPACT),
                status=row.get(col.STATUS),
                owner=row.get(col.OWNER),
            ),
            prefix="risk",
        )


def extract_roadmap(ctx: DocumentContext) -> None:
    for _table, row in ctx.rows():
        name = row.get(col.WORK_PACKAGE)
        if name:
            ctx.add(
                ElementType.WORK_PACKAGE,
                name,
                row,
                documentation=row.get(col.DESCRIPTION) or None,
                properties=_props(
                    timeline=row.get(col.TIMELINE),
                    quarter=row.get(col.QUARTER),
                    start=row.get(col.START),
                    end=row.get(col.END),
                    status=row.get(col.STATUS),
                    priority=row.get(col.PRIORITY),
                    owner=row.get(col.OWNER),
                ),
            )
            continue
        _extract_gap(ctx, row)


PHASE_RULES: dict[Phase, Callable[[DocumentContext], None]] = {
    Phase.STAKEHOLDERS: extract_stakeholders,
    Phase.PRINCIPLES: extract_principles,
    Phase.GOVERNANCE: extract_governance,
    Phase.BUSINESS: extract_business,
    Phase.APPLICATION: extract_application,
    Phase.TECHNOLOGY: extract_technology,
    Phase.SOLUTIONS: extract_solutions,
    Phase.REQUIREMENTS: extract_requirements,
    Phase.DECISIONS: extract_decisions,
    Phase.RISKS: extract_risks,
    Phase.ROADMAP: extract_roadmap,
}
