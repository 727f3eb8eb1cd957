"""Models for migration-classified elements and relationships."""

from __future__ import annotations

from pydantic import BaseModel, Field

from archiexport.model import Element, MigrationStatus, Relationship


class ClassifiedElement(Element):
    migration_status: MigrationStatus


class ClassifiedRelationship(Relationship):
    migration_status: MigrationStatus


class ClassifiedModel(BaseModel):
    """A model whose every element and relationship carries keep/add/remove."""

    name: str
    elements: list[ClassifiedElement] = Field(default_factory=list)
    relationships: list[ClassifiedRelationship] = Field(default_factory=list)

    def count_by_status(self) -> dict[MigrationStatus, int]:
        counts = {status: 0 for status in MigrationStatus}
        for el in self.elements:
            counts[el.migration_status] += 1
        return counts

    def elements_with(self, *statuses: MigrationStatus) -> list[ClassifiedElement]:
        return [el for el in self.elements if el.migration_status in statuses]
