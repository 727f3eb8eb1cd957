from .loader import load_config
from .models import (
    ArchiExportConfig,
    ExtractionConfig,
    LayoutConfig,
    OutputConfig,
)

__all__ = [
    "ArchiExportConfig",
    "ExtractionConfig",
    "LayoutConfig",
    "OutputConfig",
    "load_config",
]
