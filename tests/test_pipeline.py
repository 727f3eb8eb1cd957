"""End-to-end tests: documents in, exchange XML and draw.io out."""

import xml.etree.ElementTree as ET

from archiexport.config.models import ArchiExportConfig, ExtractionConfig
from archiexport.output import ExportValidator
from archiexport.pipeline import export_archimate, export_drawio

from conftest import EXPORTED_AT

NS = {"a": "http://www.opengroup.org/xsd/archimate/3.0/"}


class TestExportArchimate:
    def test_valid_exchange_xml(self, vault_documents):
        result = export_archimate(vault_documents, "Pipeline", exported_at=EXPORTED_AT)
        root = ET.fromstring(result.xml)
        assert root.tag == f"{{{NS['a']}}}model"
        assert len(root.findall("a:elements/a:element", NS)) == len(result.model.elements)
        assert result.summary.total_elements == len(result.model.elements)

    def test_model_passes_strict_validation(self, vault_documents):
        result = export_archimate(vault_documents, "Pipeline", exported_at=EXPORTED_AT)
        validator = ExportValidator(mode="strict")
        assert validator.validate_model(result.model, source="Pipeline").valid
        assert validator.validate_xml(result.xml, source="xml", expected_root="model").valid

    def test_deterministic(self, vault_documents):
        first = export_archimate(vault_documents, "Pipeline", exported_at=EXPORTED_AT)
        second = export_archimate(vault_documents, "Pipeline", exported_at=EXPORTED_AT)
        assert first.xml == second.xml

    def test_default_model_name(self, vault_documents):
        config = ArchiExportConfig(extraction=ExtractionConfig(default_model_name="Fallback"))
        result = export_archimate(vault_documents, config=config, exported_at=EXPORTED_AT)
        assert result.model.name == "Fallback"

    def test_inference_can_be_disabled(self, vault_documents):
        config = ArchiExportConfig(extraction=ExtractionConfig(cross_layer_inference=False))
        result = export_archimate(vault_documents, config=config, exported_at=EXPORTED_AT)
        assert result.summary.by_relationship_origin["inferred"] == 0

    def test_no_documents(self):
        result = export_archimate([], "Nothing", exported_at=EXPORTED_AT)
        assert result.model.elements == []
        assert ET.fromstring(result.xml) is not None


class TestExportDrawio:
    def test_documents_and_summary(self, migration_documents):
        result = export_drawio(migration_documents, "Migration", exported_at=EXPORTED_AT)
        for xml in (result.documents.as_is, result.documents.target, result.documents.migration):
            assert ET.fromstring(xml).get("modified") == EXPORTED_AT
        assert result.summary.by_migration_status["remove"] == 3
        assert result.classified.name == "Migration"

    def test_classified_matches_model(self, migration_documents):
        result = export_drawio(migration_documents, exported_at=EXPORTED_AT)
        assert [el.id for el in result.classified.elements] == [el.id for el in result.model.elements]

    def test_page_counts_match_summary(self, migration_documents):
        result = export_drawio(migration_documents, exported_at=EXPORTED_AT)
        counts = result.summary.diagram_element_counts
        for xml, expected in (
            (result.documents.as_is, counts.as_is),
            (result.documents.target, counts.target),
            (result.documents.migration, counts.migration),
        ):
            cells = [o for o in ET.fromstring(xml).iter("object") if o.get("id").startswith("cell-")]
            assert len(cells) == expected

    def test_layout_config_applied(self, migration_documents):
        config = ArchiExportConfig()
        config.layout.node_width = 321
        result = export_drawio(migration_documents, config=config, exported_at=EXPORTED_AT)
        assert 'width="321"' in result.documents.as_is
