from archiexport.views.generator import VIEW_DEFINITIONS, ViewDefinition, generate_views

__all__ = ["VIEW_DEFINITIONS", "ViewDefinition", "generate_views"]
