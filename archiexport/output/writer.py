"""ExportWriter: writes exchange and draw.io documents to disk."""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path

from archiexport.config.models import OutputConfig
from archiexport.drawio import DrawioDocuments

logger = logging.getLogger(__name__)


class ExportKind(str, Enum):
    ARCHIMATE = "archimate"
    AS_IS = "as-is"
    TARGET = "target"
    MIGRATION = "migration"
    COMBINED = "combined"

    @property
    def suffix(self) -> str:
        return _SUFFIXES[self]


_SUFFIXES = {
    ExportKind.ARCHIMATE: ".archimate.xml",
    ExportKind.AS_IS: ".as-is.drawio",
    ExportKind.TARGET: ".target.drawio",
    ExportKind.MIGRATION: ".migration.drawio",
    ExportKind.COMBINED: ".drawio",
}


def _sanitize_model_name(model_name: str) -> str:
    """Make a model name safe for use as a filename stem.

    Path separators and ``..`` are dropped, whitespace becomes ``-`` and
    anything outside ``[A-Za-z0-9_.-]`` is removed.
    """
    name = model_name.replace("/", "-").replace("\\", "-").replace("..", "")
    name = re.sub(r"\s+", "-", name.strip())
    name = re.sub(r"[^\w\-.]", "", name, flags=re.ASCII)
    name = re.sub(r"-{2,}", "-", name).strip("-.")
    return name or "_unnamed"


class ExportWriter:
    """Writes export documents under ``OutputConfig.base_dir``.

    Handles filename sanitization, directory creation and dry-run mode.
    """

    def __init__(self, config: OutputConfig) -> None:
        self.config = config
        self.base_dir = Path(config.base_dir)

    def path_for(self, kind: ExportKind | str, model_name: str) -> Path:
        kind = ExportKind(kind)
        dest = self.base_dir / f"{_sanitize_model_name(model_name)}{kind.suffix}"
        if not dest.resolve().is_relative_to(self.base_dir.resolve()):
            raise ValueError(f"Refusing to write outside {self.base_dir}: {dest}")
        return dest

    def write(
        self,
        kind: ExportKind | str,
        model_name: str,
        content: str,
        dry_run: bool = False,
    ) -> Path:
        """Write one document. Returns the Path of the written (or would-be) file."""
        dest = self.path_for(kind, model_name)

        if dry_run:
            logger.debug("dry-run: would write %s", dest)
            return dest

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(content, encoding="utf-8")
        logger.info("wrote %s (%d bytes)", dest, len(content))
        return dest

    def write_drawio(self, documents: DrawioDocuments, model_name: str, *, dry_run: bool = False) -> list[Path]:
        """Write the per-page and combined files allowed by the config, in that order."""
        planned: list[tuple[ExportKind, str]] = []
        if self.config.write_individual:
            planned += [
                (ExportKind.AS_IS, documents.as_is),
                (ExportKind.TARGET, documents.target),
                (ExportKind.MIGRATION, documents.migration),
            ]
        if self.config.write_combined:
            planned.append((ExportKind.COMBINED, documents.combined))
        return [self.write(kind, model_name, content, dry_run=dry_run) for kind, content in planned]
