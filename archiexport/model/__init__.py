"""Architecture model types shared by extraction, views and serializers."""

from archiexport.model.ids import IdGenerator
from archiexport.model.models import (
    ELEMENT_LAYERS,
    IMPLEMENTATION_TYPES,
    ORIGIN_PREFIXES,
    ArchiModel,
    Element,
    ElementType,
    Layer,
    MigrationStatus,
    ModelMetadata,
    Relationship,
    RelationshipOrigin,
    RelationshipType,
    View,
)

__all__ = [
    "ELEMENT_LAYERS",
    "IMPLEMENTATION_TYPES",
    "ORIGIN_PREFIXES",
    "ArchiModel",
    "Element",
    "ElementType",
    "IdGenerator",
    "Layer",
    "MigrationStatus",
    "ModelMetadata",
    "Relationship",
    "RelationshipOrigin",
    "RelationshipType",
    "View",
]
