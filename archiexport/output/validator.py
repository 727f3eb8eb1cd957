"""Checks for generated XML documents and extracted models."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from pydantic import BaseModel, Field

from archiexport.model import ELEMENT_LAYERS, ArchiModel, ElementType, MigrationStatus

logger = logging.getLogger(__name__)

XML_DECLARATION = "<?xml"


class ValidationResult(BaseModel):
    """Result of validating one document or model."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    path: str = ""


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class ExportValidator:
    """Validates export output.

    Supports three modes via OutputConfig.validation:
      - "strict": structural problems → invalid
      - "warn": log warnings but still return valid
      - "off": skip validation, always return valid
    """

    def __init__(self, mode: str = "strict") -> None:
        if mode not in ("strict", "warn", "off"):
            raise ValueError(f"Unknown validation mode: {mode!r}")
        self.mode = mode

    def validate_xml(
        self,
        content: str,
        source: str = "<string>",
        expected_root: str | None = None,
    ) -> ValidationResult:
        """Well-formedness, XML declaration and (optionally) the root element name."""
        result = ValidationResult(path=source)
        if self.mode == "off":
            return result

        if not content.startswith(XML_DECLARATION):
            self._add_issue(result, "Missing XML declaration")

        try:
            root = ET.fromstring(content)
        except ET.ParseError as exc:
            self._add_issue(result, f"XML parse error: {exc}")
            return result

        root_name = _local_name(root.tag)
        if expected_root is not None and root_name != expected_root:
            self._add_issue(result, f"Root element should be <{expected_root}>, got <{root_name}>")
        if not content.rstrip().endswith(f"</{root_name}>"):
            self._add_issue(result, f"Document does not end with </{root_name}>", warning=True)
        return result

    def validate_model(self, model: ArchiModel, source: str = "<model>") -> ValidationResult:
        """Unique ids, resolvable endpoints, layer/type agreement and Gap ⇒ add."""
        result = ValidationResult(path=source)
        if self.mode == "off":
            return result

        seen: set[str] = set()
        for identifier in [el.id for el in model.elements] + [rel.id for rel in model.relationships]:
            if identifier in seen:
                self._add_issue(result, f"Duplicate identifier: {identifier}")
            seen.add(identifier)

        element_ids = {el.id for el in model.elements}
        for rel in model.relationships:
            for end, ref in (("source", rel.source_id), ("target", rel.target_id)):
                if ref not in element_ids:
                    self._add_issue(result, f"Relationship {rel.id} has unknown {end} {ref}")

        for el in model.elements:
            if ELEMENT_LAYERS[el.type] != el.layer:
                self._add_issue(
                    result,
                    f"Element {el.id} ({el.type.value}) is in layer {el.layer.value}, "
                    f"expected {ELEMENT_LAYERS[el.type].value}",
                )
            if el.type == ElementType.GAP and el.migration_status not in (None, MigrationStatus.ADD):
                self._add_issue(result, f"Gap {el.id} must be classified as add")

        for view in model.views:
            missing = [ref for ref in view.element_refs if ref not in element_ids]
            if missing:
                self._add_issue(result, f"View {view.id} references unknown elements: {', '.join(missing)}")

        linked = {rel.source_id for rel in model.relationships} | {rel.target_id for rel in model.relationships}
        orphans = len(element_ids - linked)
        if orphans:
            self._add_issue(result, f"{orphans} element(s) have no relationships", warning=True)

        return result

    def _add_issue(self, result: ValidationResult, message: str, *, warning: bool = False) -> None:
        """Add an error or warning depending on mode."""
        if self.mode == "strict":
            if warning:
                result.warnings.append(message)
            else:
                result.errors.append(message)
                result.valid = False
        elif self.mode == "warn":
            result.warnings.append(message)
            logger.warning("%s: %s", result.path, message)
