"""Pydantic models for the extracted architecture model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class Layer(str, Enum):
    BUSINESS = "Business"
    APPLICATION = "Application"
    TECHNOLOGY = "Technology"
    MOTIVATION = "Motivation"


class ElementType(str, Enum):
    # Business
    BUSINESS_ACTOR = "BusinessActor"
    BUSINESS_ROLE = "BusinessRole"
    BUSINESS_PROCESS = "BusinessProcess"
    BUSINESS_FUNCTION = "BusinessFunction"
    BUSINESS_SERVICE = "BusinessService"
    BUSINESS_EVENT = "BusinessEvent"
    BUSINESS_OBJECT = "BusinessObject"
    CAPABILITY = "Capability"
    COURSE_OF_ACTION = "CourseOfAction"
    RESOURCE = "Resource"
    # Application
    APPLICATION_COMPONENT = "ApplicationComponent"
    APPLICATION_INTERFACE = "ApplicationInterface"
    APPLICATION_SERVICE = "ApplicationService"
    APPLICATION_FUNCTION = "ApplicationFunction"
    DATA_OBJECT = "DataObject"
    # Technology
    NODE = "Node"
    DEVICE = "Device"
    SYSTEM_SOFTWARE = "SystemSoftware"
    TECHNOLOGY_SERVICE = "TechnologyService"
    TECHNOLOGY_INTERFACE = "TechnologyInterface"
    COMMUNICATION_NETWORK = "CommunicationNetwork"
    ARTIFACT = "Artifact"
    # Motivation
    STAKEHOLDER = "Stakeholder"
    DRIVER = "Driver"
    GOAL = "Goal"
    PRINCIPLE = "Principle"
    REQUIREMENT = "Requirement"
    CONSTRAINT = "Constraint"
    ASSESSMENT = "Assessment"
    VALUE = "Value"
    # Implementation & migration
    WORK_PACKAGE = "WorkPackage"
    DELIVERABLE = "Deliverable"
    PLATEAU = "Plateau"
    GAP = "Gap"

    @property
    def layer(self) -> Layer:
        return ELEMENT_LAYERS[self]


_B, _A, _T, _M = Layer.BUSINESS, Layer.APPLICATION, Layer.TECHNOLOGY, Layer.MOTIVATION

# Every element type belongs to exactly one layer.
ELEMENT_LAYERS: dict[ElementType, Layer] = {
    ElementType.BUSINESS_ACTOR: _B,
    ElementType.BUSINESS_ROLE: _B,
    ElementType.BUSINESS_PROCESS: _B,
    ElementType.BUSINESS_FUNCTION: _B,
    ElementType.BUSINESS_SERVICE: _B,
    ElementType.BUSINESS_EVENT: _B,
    ElementType.BUSINESS_OBJECT: _B,
    ElementType.CAPABILITY: _B,
    ElementType.COURSE_OF_ACTION: _B,
    ElementType.RESOURCE: _B,
    ElementType.APPLICATION_COMPONENT: _A,
    ElementType.APPLICATION_INTERFACE: _A,
    ElementType.APPLICATION_SERVICE: _A,
    ElementType.APPLICATION_FUNCTION: _A,
    ElementType.DATA_OBJECT: _A,
    ElementType.NODE: _T,
    ElementType.DEVICE: _T,
    ElementType.SYSTEM_SOFTWARE: _T,
    ElementType.TECHNOLOGY_SERVICE: _T,
    ElementType.TECHNOLOGY_INTERFACE: _T,
    ElementType.COMMUNICATION_NETWORK: _T,
    ElementType.ARTIFACT: _T,
    ElementType.STAKEHOLDER: _M,
    ElementType.DRIVER: _M,
    ElementType.GOAL: _M,
    ElementType.PRINCIPLE: _M,
    ElementType.REQUIREMENT: _M,
    ElementType.CONSTRAINT: _M,
    ElementType.ASSESSMENT: _M,
    ElementType.VALUE: _M,
    ElementType.WORK_PACKAGE: _M,
    ElementType.DELIVERABLE: _M,
    ElementType.PLATEAU: _M,
    ElementType.GAP: _M,
}

IMPLEMENTATION_TYPES: frozenset[ElementType] = frozenset({
    ElementType.WORK_PACKAGE,
    ElementType.DELIVERABLE,
    ElementType.PLATEAU,
    ElementType.GAP,
})


class RelationshipType(str, Enum):
    COMPOSITION = "CompositionRelationship"
    AGGREGATION = "AggregationRelationship"
    ASSIGNMENT = "AssignmentRelationship"
    REALIZATION = "RealizationRelationship"
    SERVING = "ServingRelationship"
    ACCESS = "AccessRelationship"
    INFLUENCE = "InfluenceRelationship"
    TRIGGERING = "TriggeringRelationship"
    FLOW = "FlowRelationship"
    SPECIALIZATION = "SpecializationRelationship"
    ASSOCIATION = "AssociationRelationship"

    @property
    def xsi_type(self) -> str:
        """Exchange-format type name, e.g. ``Serving``."""
        return self.value.removesuffix("Relationship")


class RelationshipOrigin(str, Enum):
    EXPLICIT = "explicit"
    DIAGRAM = "diagram"
    INFERRED = "inferred"


# Id prefix per origin, so inferred links can be audited by id alone.
ORIGIN_PREFIXES: dict[RelationshipOrigin, str] = {
    RelationshipOrigin.EXPLICIT: "rel",
    RelationshipOrigin.DIAGRAM: "grel",
    RelationshipOrigin.INFERRED: "xrel",
}


class MigrationStatus(str, Enum):
    KEEP = "keep"
    ADD = "add"
    REMOVE = "remove"


class Element(BaseModel):
    """A typed node of the architecture model."""

    id: str
    type: ElementType
    name: str
    layer: Layer
    documentation: str | None = None
    source: str | None = None
    properties: dict[str, str] = Field(default_factory=dict)
    migration_status: MigrationStatus | None = None

    @model_validator(mode="after")
    def _layer_matches_type(self) -> Element:
        if self.layer != self.type.layer:
            raise ValueError(
                f"element {self.id!r}: layer {self.layer.value} does not match "
                f"type {self.type.value} ({self.type.layer.value})"
            )
        return self


class Relationship(BaseModel):
    """A typed directed edge between two elements."""

    id: str
    type: RelationshipType
    source_id: str
    target_id: str
    origin: RelationshipOrigin = RelationshipOrigin.EXPLICIT
    name: str | None = None
    migration_status: MigrationStatus | None = None


class View(BaseModel):
    id: str
    name: str
    viewpoint: str | None = None
    element_refs: list[str] = Field(default_factory=list)


class ModelMetadata(BaseModel):
    exported_at: str
    vault_file_count: int = 0
    generator_version: str = ""


class ArchiModel(BaseModel):
    """Aggregate root produced by one extraction run."""

    name: str
    documentation: str | None = None
    elements: list[Element] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    views: list[View] = Field(default_factory=list)
    metadata: ModelMetadata

    def element_by_id(self, element_id: str) -> Element | None:
        for el in self.elements:
            if el.id == element_id:
                return el
        return None

    def elements_of_type(self, element_type: ElementType) -> list[Element]:
        return [el for el in self.elements if el.type == element_type]
