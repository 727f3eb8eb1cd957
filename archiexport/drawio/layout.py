"""Swimlane layout for draw.io pages.

One lane per non-empty layer, stacked top to bottom. Inside a lane,
elements fill a grid row by row in model order, wrapping after
``max_columns``. Coordinates of placed elements are relative to their lane.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from archiexport.config.models import LayoutConfig
from archiexport.migration import ClassifiedElement, ClassifiedModel, ClassifiedRelationship
from archiexport.model import Layer, MigrationStatus

LANE_ORDER = (Layer.MOTIVATION, Layer.BUSINESS, Layer.APPLICATION, Layer.TECHNOLOGY)

LANE_X = 20
LANE_INITIAL_Y = 20
LANE_PADDING = 20
LANE_HEADER_HEIGHT = 30
MIN_CONTENT_WIDTH = 600
CANVAS_MARGIN = 40

LEGEND_WIDTH = 260
LEGEND_HEIGHT = 140


class DiagramMode(str, Enum):
    AS_IS = "as-is"
    TARGET = "target"
    MIGRATION = "migration"

    @property
    def page_name(self) -> str:
        return _PAGE_NAMES[self]

    @property
    def hidden_status(self) -> MigrationStatus | None:
        """Status left out of this page: additions before, removals after."""
        return _HIDDEN[self]


_PAGE_NAMES = {
    DiagramMode.AS_IS: "As-Is Architecture",
    DiagramMode.TARGET: "Target Architecture",
    DiagramMode.MIGRATION: "Migration Architecture",
}

_HIDDEN = {
    DiagramMode.AS_IS: MigrationStatus.ADD,
    DiagramMode.TARGET: MigrationStatus.REMOVE,
    DiagramMode.MIGRATION: None,
}


@dataclass(frozen=True)
class PlacedElement:
    element: ClassifiedElement
    x: int
    y: int


@dataclass(frozen=True)
class Lane:
    layer: Layer
    x: int
    y: int
    width: int
    height: int
    elements: tuple[PlacedElement, ...]


@dataclass(frozen=True)
class DiagramLayout:
    mode: DiagramMode
    lanes: tuple[Lane, ...]
    relationships: tuple[ClassifiedRelationship, ...]
    width: int
    height: int
    legend_origin: tuple[int, int] | None = None

    @property
    def element_count(self) -> int:
        return sum(len(lane.elements) for lane in self.lanes)


def visible_elements(classified: ClassifiedModel, mode: DiagramMode) -> list[ClassifiedElement]:
    hidden = mode.hidden_status
    return [el for el in classified.elements if el.migration_status != hidden]


def layout_diagram(classified: ClassifiedModel, mode: DiagramMode, config: LayoutConfig) -> DiagramLayout:
    elements = visible_elements(classified, mode)
    visible_ids = {el.id for el in elements}

    by_layer: dict[Layer, list[ClassifiedElement]] = {layer: [] for layer in LANE_ORDER}
    for el in elements:
        by_layer[el.layer].append(el)

    step_x = config.node_width + config.horizontal_gap
    step_y = config.node_height + config.vertical_gap

    lanes: list[Lane] = []
    y = LANE_INITIAL_Y
    content_width = MIN_CONTENT_WIDTH
    for layer in LANE_ORDER:
        members = by_layer[layer]
        if not members:
            continue
        cols = max(1, min(config.max_columns, len(members)))
        rows = -(-len(members) // cols)
        width = cols * step_x + LANE_PADDING * 2
        height = rows * step_y + LANE_HEADER_HEIGHT + LANE_PADDING * 2
        placed = tuple(
            PlacedElement(
                element=el,
                x=LANE_PADDING + (idx % cols) * step_x,
                y=LANE_HEADER_HEIGHT + LANE_PADDING + (idx // cols) * step_y,
            )
            for idx, el in enumerate(members)
        )
        lanes.append(Lane(layer=layer, x=LANE_X, y=y, width=width, height=height, elements=placed))
        content_width = max(content_width, LANE_X + width)
        y += height + config.vertical_gap

    relationships = tuple(
        rel for rel in classified.relationships
        if rel.source_id in visible_ids and rel.target_id in visible_ids
    )

    width = content_width + CANVAS_MARGIN
    height = max(y, LANE_INITIAL_Y + LEGEND_HEIGHT) + CANVAS_MARGIN
    legend_origin = None
    if mode == DiagramMode.MIGRATION:
        # legend sits to the right of the widest lane
        legend_origin = (width, LANE_INITIAL_Y)
        width += LEGEND_WIDTH + CANVAS_MARGIN

    return DiagramLayout(
        mode=mode,
        lanes=tuple(lanes),
        relationships=relationships,
        width=width,
        height=height,
        legend_origin=legend_origin,
    )
