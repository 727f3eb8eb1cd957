"""Colours and mxCell style strings for draw.io diagrams."""

from __future__ import annotations

from dataclasses import dataclass

from archiexport.model import Layer, MigrationStatus

FONT_COLOR = "#333333"
EDGE_COLOR = "#666666"
DASH_PATTERN = "8 4"


@dataclass(frozen=True)
class Palette:
    fill: str
    stroke: str
    font: str = FONT_COLOR


STATUS_PALETTES: dict[MigrationStatus, Palette] = {
    MigrationStatus.KEEP: Palette("#dae8fc", "#6c8ebf"),
    MigrationStatus.ADD: Palette("#d5e8d4", "#82b366"),
    MigrationStatus.REMOVE: Palette("#f8cecc", "#b85450"),
}

LAYER_PALETTES: dict[Layer, Palette] = {
    Layer.MOTIVATION: Palette("#e1d5e7", "#9673a6"),
    Layer.BUSINESS: Palette("#fff2cc", "#d6b656"),
    Layer.APPLICATION: Palette("#dae8fc", "#6c8ebf"),
    Layer.TECHNOLOGY: Palette("#d5e8d4", "#82b366"),
}

DEFAULT_PALETTE = Palette("#f5f5f5", "#666666")

STATUS_SUFFIXES: dict[MigrationStatus, str] = {
    MigrationStatus.KEEP: "",
    MigrationStatus.ADD: " [NEW]",
    MigrationStatus.REMOVE: " [REMOVE]",
}


def style(*flags: str, **values: object) -> str:
    """Build ``flag;key=value;`` style text. Keys keep their given order."""
    parts = list(flags) + [f"{key}={value}" for key, value in values.items()]
    return "".join(f"{part};" for part in parts)


def lane_style(layer: Layer, header_height: int) -> str:
    palette = LAYER_PALETTES.get(layer, DEFAULT_PALETTE)
    return style(
        "swimlane",
        startSize=header_height,
        fillColor=palette.fill,
        strokeColor=palette.stroke,
        rounded=1,
        arcSize=8,
        fontStyle=1,
        fontSize=13,
    )


def node_style(palette: Palette) -> str:
    return style(
        rounded=1,
        whiteSpace="wrap",
        html=1,
        fillColor=palette.fill,
        strokeColor=palette.stroke,
        fontColor=palette.font,
        fontSize=11,
        arcSize=12,
    )


def edge_style(status: MigrationStatus | None) -> str:
    """Grey edges, or status-coloured ones (dashed when removed) on migration pages."""
    values: dict[str, object] = {"edgeStyle": "orthogonalEdgeStyle", "rounded": 1}
    if status is None:
        values["strokeColor"] = EDGE_COLOR
    else:
        values["strokeColor"] = STATUS_PALETTES[status].stroke
        if status == MigrationStatus.REMOVE:
            values["dashed"] = 1
            values["dashPattern"] = DASH_PATTERN
    values["fontSize"] = 9
    return style(**values)


def legend_style() -> str:
    return style(
        "swimlane",
        startSize=24,
        fillColor=DEFAULT_PALETTE.fill,
        strokeColor=DEFAULT_PALETTE.stroke,
        rounded=1,
        fontSize=12,
        fontStyle=1,
    )


def legend_entry_style(palette: Palette, dashed: bool = False) -> str:
    values: dict[str, object] = {
        "rounded": 1,
        "whiteSpace": "wrap",
        "html": 1,
        "fillColor": palette.fill,
        "strokeColor": palette.stroke,
    }
    if dashed:
        values["dashed"] = 1
        values["dashPattern"] = DASH_PATTERN
    values["fontSize"] = 10
    return style(**values)
