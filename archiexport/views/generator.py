"""Fixed views over an extracted model."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from archiexport.model import IMPLEMENTATION_TYPES, ArchiModel, Element, Layer, View


@dataclass(frozen=True)
class ViewDefinition:
    id: str
    name: str
    include: Callable[[Element], bool]
    viewpoint: str | None = None


VIEW_DEFINITIONS: list[ViewDefinition] = [
    ViewDefinition("view-full", "Full Layered View", lambda el: True, viewpoint="Layered"),
    ViewDefinition(
        "view-biz-motiv",
        "Business & Motivation",
        lambda el: el.layer in (Layer.BUSINESS, Layer.MOTIVATION) and el.type not in IMPLEMENTATION_TYPES,
    ),
    ViewDefinition("view-app", "Application Layer", lambda el: el.layer == Layer.APPLICATION),
    ViewDefinition("view-tech", "Technology Layer", lambda el: el.layer == Layer.TECHNOLOGY),
    ViewDefinition("view-impl", "Implementation & Migration", lambda el: el.type in IMPLEMENTATION_TYPES),
]


def generate_views(model: ArchiModel) -> list[View]:
    """The five fixed views, or none for an empty model.

    Views only reference element ids; they never add elements or relationships.
    """
    if not model.elements:
        return []
    return [
        View(
            id=definition.id,
            name=definition.name,
            viewpoint=definition.viewpoint,
            element_refs=[el.id for el in model.elements if definition.include(el)],
        )
        for definition in VIEW_DEFINITIONS
    ]
