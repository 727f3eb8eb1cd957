"""archiexport: TOGAF Markdown vaults to ArchiMate exchange XML and draw.io diagrams."""

__version__ = "0.5.0"
