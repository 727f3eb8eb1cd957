"""ArchiMate Open Exchange Format serializer.

Writes the model as ``<model xmlns="http://www.opengroup.org/xsd/archimate/3.0/">``
with children in schema order: name, documentation, elements,
relationships, organizations, propertyDefinitions, views.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from archiexport.model import IMPLEMENTATION_TYPES, ArchiModel, Element, Layer, View
from archiexport.xmlutil import escape_xml

ARCHIMATE_NS = "http://www.opengroup.org/xsd/archimate/3.0/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = (
    "http://www.opengroup.org/xsd/archimate/3.0/ "
    "http://www.opengroup.org/xsd/archimate/3.1/archimate3_Diagram.xsd"
)

# View placement
NODE_W = 160
NODE_H = 80
SPACING_X = 200
SPACING_Y = 120
MARGIN = 40
COLUMNS = 5

# Row bands of the layered view, top to bottom.
_LAYERED_BANDS: list[tuple[str, Callable[[Element], bool]]] = [
    ("Motivation", lambda el: el.layer == Layer.MOTIVATION and el.type not in IMPLEMENTATION_TYPES),
    ("Business", lambda el: el.layer == Layer.BUSINESS),
    ("Application", lambda el: el.layer == Layer.APPLICATION),
    ("Technology", lambda el: el.layer == Layer.TECHNOLOGY),
    ("Implementation", lambda el: el.type in IMPLEMENTATION_TYPES),
]

_FOLDER_ORDER = (Layer.MOTIVATION, Layer.BUSINESS, Layer.APPLICATION, Layer.TECHNOLOGY)


def _lang(tag: str, text: str, indent: str) -> str:
    return f'{indent}<{tag} xml:lang="en">{escape_xml(text)}</{tag}>'


def _property_definition_ids(model: ArchiModel) -> dict[str, str]:
    """Property key -> definition id, in first-seen order."""
    ids: dict[str, str] = {}
    used: set[str] = set()
    for el in model.elements:
        for key in el.properties:
            if key in ids:
                continue
            slug = re.sub(r"[^A-Za-z0-9_-]+", "-", key).strip("-") or "property"
            candidate, n = f"propdef-{slug}", 2
            while candidate in used:
                candidate, n = f"propdef-{slug}-{n}", n + 1
            ids[key] = candidate
            used.add(candidate)
    return ids


def _layered_positions(elements: list[Element]) -> dict[str, tuple[int, int]]:
    positions: dict[str, tuple[int, int]] = {}
    y = MARGIN
    for _band, include in _LAYERED_BANDS:
        band = [el for el in elements if include(el)]
        if not band:
            continue
        for i, el in enumerate(band):
            positions[el.id] = (MARGIN + (i % COLUMNS) * SPACING_X, y + (i // COLUMNS) * SPACING_Y)
        rows = (len(band) + COLUMNS - 1) // COLUMNS
        y += rows * SPACING_Y + MARGIN
    return positions


def _grid_positions(elements: list[Element]) -> dict[str, tuple[int, int]]:
    return {
        el.id: (MARGIN + (i % COLUMNS) * SPACING_X, MARGIN + (i // COLUMNS) * (SPACING_Y + 20))
        for i, el in enumerate(elements)
    }


class ExchangeSerializer:
    """Renders an ArchiModel as exchange-format XML."""

    def __init__(self, model_identifier: str = "model-archiexport") -> None:
        self.model_identifier = model_identifier

    def serialize(self, model: ArchiModel) -> str:
        lines: list[str] = ['<?xml version="1.0" encoding="UTF-8"?>']
        lines.append(
            f'<model xmlns="{ARCHIMATE_NS}"'
            f' xmlns:xsi="{XSI_NS}"'
            f' xsi:schemaLocation="{SCHEMA_LOCATION}"'
            f' identifier="{escape_xml(self.model_identifier)}">'
        )
        lines.append(_lang("name", model.name, "  "))
        if model.documentation:
            lines.append(_lang("documentation", model.documentation, "  "))

        prop_ids = _property_definition_ids(model)
        lines.extend(self._elements(model, prop_ids))
        lines.extend(self._relationships(model))
        if model.elements:
            lines.extend(self._organizations(model))
        if prop_ids:
            lines.extend(self._property_definitions(prop_ids))
        if model.views:
            lines.extend(self._views(model))

        lines.append("</model>")
        return "\n".join(lines)

    # -- sections -----------------------------------------------------------

    def _elements(self, model: ArchiModel, prop_ids: dict[str, str]) -> list[str]:
        lines = ["  <elements>"]
        for el in model.elements:
            lines.append(
                f'    <element identifier="{escape_xml(el.id)}" xsi:type="{el.type.value}">'
            )
            lines.append(_lang("name", el.name, "      "))
            if el.documentation:
                lines.append(_lang("documentation", el.documentation, "      "))
            if el.properties:
                lines.append("      <properties>")
                for key, value in el.properties.items():
                    lines.append(
                        f'        <property propertyDefinitionRef="{prop_ids[key]}">'
                        f'<value xml:lang="en">{escape_xml(value)}</value></property>'
                    )
                lines.append("      </properties>")
            lines.append("    </element>")
        lines.append("  </elements>")
        return lines

    def _relationships(self, model: ArchiModel) -> list[str]:
        lines = ["  <relationships>"]
        for rel in model.relationships:
            head = (
                f'    <relationship identifier="{escape_xml(rel.id)}"'
                f' xsi:type="{rel.type.xsi_type}"'
                f' source="{escape_xml(rel.source_id)}"'
                f' target="{escape_xml(rel.target_id)}"'
            )
            if rel.name:
                lines.append(head + ">")
                lines.append(_lang("name", rel.name, "      "))
                lines.append("    </relationship>")
            else:
                lines.append(head + " />")
        lines.append("  </relationships>")
        return lines

    def _organizations(self, model: ArchiModel) -> list[str]:
        lines = ["  <organizations>"]
        for layer in _FOLDER_ORDER:
            members = [el.id for el in model.elements if el.layer == layer]
            if members:
                lines.extend(self._folder(layer.value, members))
        if model.relationships:
            lines.extend(self._folder("Relations", [r.id for r in model.relationships]))
        if model.views:
            lines.extend(self._folder("Views", [v.id for v in model.views]))
        lines.append("  </organizations>")
        return lines

    @staticmethod
    def _folder(label: str, refs: list[str]) -> list[str]:
        lines = ["    <item>", _lang("label", label, "      ")]
        lines.extend(f'      <item identifierRef="{escape_xml(ref)}" />' for ref in refs)
        lines.append("    </item>")
        return lines

    @staticmethod
    def _property_definitions(prop_ids: dict[str, str]) -> list[str]:
        lines = ["  <propertyDefinitions>"]
        for key, def_id in prop_ids.items():
            lines.append(
                f'    <propertyDefinition identifier="{def_id}" type="string">'
                f'<name xml:lang="en">{escape_xml(key)}</name></propertyDefinition>'
            )
        lines.append("  </propertyDefinitions>")
        return lines

    def _views(self, model: ArchiModel) -> list[str]:
        lines = ["  <views>", "    <diagrams>"]
        for view in model.views:
            lines.extend(self._view(model, view))
        lines.extend(["    </diagrams>", "  </views>"])
        return lines

    def _view(self, model: ArchiModel, view: View) -> list[str]:
        refs = set(view.element_refs)
        members = [el for el in model.elements if el.id in refs]
        if view.viewpoint == "Layered":
            positions = _layered_positions(members)
        else:
            positions = _grid_positions(members)

        viewpoint = f' viewpoint="{escape_xml(view.viewpoint)}"' if view.viewpoint else ""
        lines = [
            f'      <view identifier="{escape_xml(view.id)}" xsi:type="Diagram"{viewpoint}>',
            _lang("name", view.name, "        "),
        ]
        for el in members:
            x, y = positions[el.id]
            lines.append(
                f'        <node identifier="{escape_xml(view.id)}-n-{escape_xml(el.id)}"'
                f' elementRef="{escape_xml(el.id)}" xsi:type="Element"'
                f' x="{x}" y="{y}" w="{NODE_W}" h="{NODE_H}" />'
            )
        for rel in model.relationships:
            if rel.source_id in refs and rel.target_id in refs:
                lines.append(
                    f'        <connection identifier="{escape_xml(view.id)}-c-{escape_xml(rel.id)}"'
                    f' relationshipRef="{escape_xml(rel.id)}" xsi:type="Relationship"'
                    f' source="{escape_xml(view.id)}-n-{escape_xml(rel.source_id)}"'
                    f' target="{escape_xml(view.id)}-n-{escape_xml(rel.target_id)}" />'
                )
        lines.append("      </view>")
        return lines


def serialize_model(model: ArchiModel) -> str:
    """Exchange-format XML for *model*. Always ends with ``</model>``."""
    return ExchangeSerializer().serialize(model)
