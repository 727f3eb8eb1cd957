from pydantic import BaseModel, Field, field_validator
from typing import Literal

# Words too generic to link two elements on their own.
DEFAULT_STOPWORDS: list[str] = [
    "the", "and", "for", "with", "from", "into", "over", "that", "this",
    "service", "services", "system", "systems", "platform", "management",
    "component", "components", "application", "layer", "data", "process",
]


class ExtractionConfig(BaseModel):
    default_model_name: str = "ArchiMate Export"
    cross_layer_inference: bool = True
    min_token_length: int = 4
    stopwords: list[str] = Field(default_factory=lambda: list(DEFAULT_STOPWORDS))

    @field_validator("min_token_length")
    @classmethod
    def _positive_token_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("min_token_length must be >= 1")
        return v

    @field_validator("stopwords")
    @classmethod
    def _lowercase_stopwords(cls, v: list[str]) -> list[str]:
        return [w.strip().lower() for w in v if w.strip()]


class LayoutConfig(BaseModel):
    node_width: int = 200
    node_height: int = 60
    horizontal_gap: int = 40
    vertical_gap: int = 30
    max_columns: int = 5
    label_max_chars: int = 40
    edge_label_max_chars: int = 30

    @field_validator(
        "node_width", "node_height", "horizontal_gap", "vertical_gap",
        "max_columns", "label_max_chars", "edge_label_max_chars",
    )
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("layout values must be positive")
        return v


class OutputConfig(BaseModel):
    base_dir: str = "exports"
    write_combined: bool = True
    write_individual: bool = True
    validation: Literal["strict", "warn", "off"] = "strict"


class ArchiExportConfig(BaseModel):
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
