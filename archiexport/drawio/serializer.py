"""draw.io (``mxfile``) serializer for migration-classified models.

Cell ids are derived from model ids (``lane-<layer>``, ``cell-<element>``,
``edge-<relationship>``, ``legend-*``), so rendering the same model twice
produces the same bytes.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from archiexport.config.models import LayoutConfig
from archiexport.drawio.layout import (
    LANE_HEADER_HEIGHT,
    LEGEND_HEIGHT,
    LEGEND_WIDTH,
    DiagramLayout,
    DiagramMode,
    layout_diagram,
)
from archiexport.drawio.styles import (
    DEFAULT_PALETTE,
    LAYER_PALETTES,
    STATUS_PALETTES,
    STATUS_SUFFIXES,
    Palette,
    edge_style,
    lane_style,
    legend_entry_style,
    legend_style,
    node_style,
)
from archiexport.migration import ClassifiedElement, ClassifiedModel, ClassifiedRelationship
from archiexport.model import MigrationStatus
from archiexport.xmlutil import escape_xml, truncate

logger = logging.getLogger(__name__)

HOST = "archiexport"
MIN_PAGE_WIDTH = 800
MIN_PAGE_HEIGHT = 600

# (id suffix, label, palette, dashed, x, y) inside the legend container
_LEGEND_ENTRIES = [
    ("keep", "KEEP (unchanged)", STATUS_PALETTES[MigrationStatus.KEEP], False, 10, 34),
    ("add", "ADD (new)", STATUS_PALETTES[MigrationStatus.ADD], False, 130, 34),
    ("remove", "REMOVE (retire)", STATUS_PALETTES[MigrationStatus.REMOVE], False, 10, 74),
    (
        "removed-link",
        "Removed link (dashed)",
        Palette(DEFAULT_PALETTE.fill, STATUS_PALETTES[MigrationStatus.REMOVE].stroke),
        True,
        130,
        74,
    ),
]


class DrawioDocuments(BaseModel):
    """The four draw.io files of one export."""

    as_is: str
    target: str
    migration: str
    combined: str


def _geometry(x: int, y: int, width: int, height: int) -> str:
    return f'<mxGeometry x="{x}" y="{y}" width="{width}" height="{height}" as="geometry" />'


class DrawioSerializer:
    def __init__(self, layout: LayoutConfig | None = None) -> None:
        self.layout = layout or LayoutConfig()

    # -- public -----------------------------------------------------------

    def render(
        self,
        classified: ClassifiedModel,
        mode: DiagramMode | str,
        modified: str | None = None,
    ) -> str:
        """One single-page ``mxfile`` for *mode*."""
        mode = DiagramMode(mode)
        return self._mxfile([self._diagram(layout_diagram(classified, mode, self.layout))], modified)

    def render_all(self, classified: ClassifiedModel, modified: str | None = None) -> DrawioDocuments:
        layouts = {mode: layout_diagram(classified, mode, self.layout) for mode in DiagramMode}
        pages = {mode: self._diagram(layout) for mode, layout in layouts.items()}
        logger.debug(
            "draw.io pages: %s",
            {mode.value: layout.element_count for mode, layout in layouts.items()},
        )
        return DrawioDocuments(
            as_is=self._mxfile([pages[DiagramMode.AS_IS]], modified),
            target=self._mxfile([pages[DiagramMode.TARGET]], modified),
            migration=self._mxfile([pages[DiagramMode.MIGRATION]], modified),
            combined=self._mxfile([pages[mode] for mode in DiagramMode], modified),
        )

    # -- document ---------------------------------------------------------

    @staticmethod
    def _mxfile(diagrams: list[list[str]], modified: str | None) -> str:
        stamp = f' modified="{escape_xml(modified)}"' if modified else ""
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<mxfile host="{HOST}"{stamp} type="device">',
        ]
        for diagram in diagrams:
            lines.extend(diagram)
        lines.append("</mxfile>")
        return "\n".join(lines)

    def _diagram(self, layout: DiagramLayout) -> list[str]:
        lines = [
            f'  <diagram name="{escape_xml(layout.mode.page_name)}" id="diagram-{layout.mode.value}">',
            (
                '    <mxGraphModel dx="1024" dy="768" grid="1" gridSize="10" guides="1" tooltips="1" '
                'connect="1" arrows="1" fold="1" page="1" pageScale="1" '
                f'pageWidth="{max(layout.width, MIN_PAGE_WIDTH)}" '
                f'pageHeight="{max(layout.height, MIN_PAGE_HEIGHT)}">'
            ),
            "      <root>",
            '        <mxCell id="0" />',
            '        <mxCell id="1" parent="0" />',
        ]
        migration = layout.mode == DiagramMode.MIGRATION
        for lane in layout.lanes:
            lane_id = f"lane-{lane.layer.value.lower()}"
            lines.append(
                f'        <mxCell id="{lane_id}" value="{escape_xml(lane.layer.value)} Layer" '
                f'style="{lane_style(lane.layer, LANE_HEADER_HEIGHT)}" vertex="1" parent="1">'
                f"{_geometry(lane.x, lane.y, lane.width, lane.height)}</mxCell>"
            )
            for placed in lane.elements:
                lines.append(self._node(placed.element, lane_id, placed.x, placed.y, migration))
        for rel in layout.relationships:
            lines.append(self._edge(rel, migration))
        if layout.legend_origin is not None:
            lines.extend(self._legend(*layout.legend_origin))
        lines.extend([
            "      </root>",
            "    </mxGraphModel>",
            "  </diagram>",
        ])
        return lines

    # -- cells ------------------------------------------------------------

    def _node(self, el: ClassifiedElement, parent: str, x: int, y: int, migration: bool) -> str:
        if migration:
            palette = STATUS_PALETTES[el.migration_status]
            suffix = STATUS_SUFFIXES[el.migration_status]
        else:
            palette = LAYER_PALETTES.get(el.layer, DEFAULT_PALETTE)
            suffix = ""
        label = truncate(el.name, self.layout.label_max_chars) + suffix
        tooltip = el.documentation or f"{el.type.value} in the {el.layer.value} layer"
        return (
            f'        <object label="{escape_xml(label)}" tooltip="{escape_xml(tooltip)}" '
            f'archimateType="{el.type.value}" layer="{el.layer.value}" '
            f'migrationStatus="{el.migration_status.value}" id="cell-{escape_xml(el.id)}">'
            f'<mxCell style="{node_style(palette)}" vertex="1" parent="{parent}">'
            f"{_geometry(x, y, self.layout.node_width, self.layout.node_height)}</mxCell></object>"
        )

    def _edge(self, rel: ClassifiedRelationship, migration: bool) -> str:
        label = truncate(rel.name, self.layout.edge_label_max_chars) if rel.name else ""
        style = edge_style(rel.migration_status if migration else None)
        return (
            f'        <object label="{escape_xml(label)}" archimateType="{rel.type.xsi_type}" '
            f'migrationStatus="{rel.migration_status.value}" id="edge-{escape_xml(rel.id)}">'
            f'<mxCell style="{style}" edge="1" parent="1" '
            f'source="cell-{escape_xml(rel.source_id)}" target="cell-{escape_xml(rel.target_id)}">'
            '<mxGeometry relative="1" as="geometry" /></mxCell></object>'
        )

    @staticmethod
    def _legend(x: int, y: int) -> list[str]:
        lines = [
            f'        <mxCell id="legend" value="Legend" style="{legend_style()}" vertex="1" parent="1">'
            f"{_geometry(x, y, LEGEND_WIDTH, LEGEND_HEIGHT)}</mxCell>"
        ]
        for suffix, label, palette, dashed, ex, ey in _LEGEND_ENTRIES:
            lines.append(
                f'        <mxCell id="legend-{suffix}" value="{escape_xml(label)}" '
                f'style="{legend_entry_style(palette, dashed)}" vertex="1" parent="legend">'
                f"{_geometry(ex, ey, 110, 30)}</mxCell>"
            )
        return lines


def render_drawio(
    classified: ClassifiedModel,
    layout: LayoutConfig | None = None,
    modified: str | None = None,
) -> DrawioDocuments:
    return DrawioSerializer(layout).render_all(classified, modified)
