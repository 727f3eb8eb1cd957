"""draw.io diagrams: As-Is, Target, Migration and a combined multi-page file."""

from archiexport.drawio.layout import DiagramLayout, DiagramMode, Lane, layout_diagram, visible_elements
from archiexport.drawio.serializer import DrawioDocuments, DrawioSerializer, render_drawio

__all__ = [
    "DiagramLayout",
    "DiagramMode",
    "DrawioDocuments",
    "DrawioSerializer",
    "Lane",
    "layout_diagram",
    "render_drawio",
    "visible_elements",
]
