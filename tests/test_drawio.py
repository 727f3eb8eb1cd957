"""Tests for draw.io layout and mxfile rendering."""

import xml.etree.ElementTree as ET

import pytest

from archiexport.config.models import LayoutConfig
from archiexport.drawio import DiagramMode, DrawioSerializer, layout_diagram, render_drawio, visible_elements
from archiexport.drawio.layout import LANE_HEADER_HEIGHT, LANE_PADDING, LEGEND_WIDTH
from archiexport.migration import ClassifiedElement, ClassifiedModel, ClassifiedRelationship
from archiexport.model import ElementType, Layer, MigrationStatus, RelationshipOrigin, RelationshipType

from conftest import EXPORTED_AT


def _objects(xml: str) -> dict[str, ET.Element]:
    root = ET.fromstring(xml)
    return {obj.get("id"): obj for obj in root.iter("object")}


def _node_labels(xml: str) -> set[str]:
    return {obj.get("label") for obj in ET.fromstring(xml).iter("object") if obj.get("id").startswith("cell-")}


def _element(el_id, name, el_type, status, **kwargs):
    return ClassifiedElement(
        id=el_id, type=el_type, name=name, layer=el_type.layer, migration_status=status, **kwargs
    )


@pytest.fixture
def docs(classified_migration):
    return render_drawio(classified_migration, modified=EXPORTED_AT)


@pytest.fixture
def small_model():
    elements = [
        _element("id-a", "Old Portal", ElementType.APPLICATION_COMPONENT, MigrationStatus.REMOVE),
        _element("id-b", "New Portal", ElementType.APPLICATION_COMPONENT, MigrationStatus.ADD),
        _element("id-c", "Billing", ElementType.BUSINESS_PROCESS, MigrationStatus.KEEP),
    ]
    relationships = [
        ClassifiedRelationship(
            id="rel-000001",
            type=RelationshipType.SERVING,
            source_id="id-a",
            target_id="id-c",
            origin=RelationshipOrigin.EXPLICIT,
            name="serves",
            migration_status=MigrationStatus.REMOVE,
        ),
        ClassifiedRelationship(
            id="rel-000002",
            type=RelationshipType.SERVING,
            source_id="id-b",
            target_id="id-c",
            origin=RelationshipOrigin.EXPLICIT,
            migration_status=MigrationStatus.ADD,
        ),
    ]
    return ClassifiedModel(name="Small", elements=elements, relationships=relationships)


class TestDocuments:
    def test_all_documents_parse(self, docs):
        for xml in (docs.as_is, docs.target, docs.migration, docs.combined):
            assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
            assert ET.fromstring(xml).tag == "mxfile"

    def test_modified_stamp(self, docs):
        assert ET.fromstring(docs.as_is).get("modified") == EXPORTED_AT

    def test_no_stamp_without_timestamp(self, classified_migration):
        xml = DrawioSerializer().render(classified_migration, DiagramMode.AS_IS)
        assert "modified=" not in xml
        assert ET.fromstring(xml).get("host") == "archiexport"

    def test_combined_has_three_pages_in_order(self, docs):
        diagrams = ET.fromstring(docs.combined).findall("diagram")
        assert [d.get("name") for d in diagrams] == [
            "As-Is Architecture",
            "Target Architecture",
            "Migration Architecture",
        ]
        assert [d.get("id") for d in diagrams] == ["diagram-as-is", "diagram-target", "diagram-migration"]

    def test_single_page_files(self, docs):
        for xml, name in (
            (docs.as_is, "As-Is Architecture"),
            (docs.target, "Target Architecture"),
            (docs.migration, "Migration Architecture"),
        ):
            diagrams = ET.fromstring(xml).findall("diagram")
            assert [d.get("name") for d in diagrams] == [name]

    def test_deterministic(self, classified_migration):
        first = render_drawio(classified_migration, modified=EXPORTED_AT)
        second = render_drawio(classified_migration, modified=EXPORTED_AT)
        assert first == second

    def test_root_cells_present(self, docs):
        root = ET.fromstring(docs.as_is)
        cell_ids = [c.get("id") for c in root.iter("mxCell") if c.get("id")]
        assert cell_ids[:2] == ["0", "1"]


class TestStateFiltering:
    def test_as_is_excludes_additions(self, docs, classified_migration):
        labels = _node_labels(docs.as_is)
        assert "AI Assistant" not in labels
        assert "Cloud CDN" not in labels
        assert "Legacy CRM" in labels
        assert "API Gateway" in labels

    def test_target_excludes_removals(self, docs):
        labels = _node_labels(docs.target)
        assert "Legacy CRM" not in labels
        assert "On-Prem Server" not in labels
        assert "AI Assistant" in labels
        assert "API Gateway" in labels

    def test_migration_shows_everything(self, docs, classified_migration):
        objects = _objects(docs.migration)
        cells = [k for k in objects if k.startswith("cell-")]
        assert len(cells) == len(classified_migration.elements)

    def test_edges_need_both_endpoints(self, docs):
        root = ET.fromstring(docs.as_is)
        node_ids = {obj.get("id") for obj in root.iter("object") if obj.get("id").startswith("cell-")}
        for obj in root.iter("object"):
            if obj.get("id").startswith("edge-"):
                cell = obj.find("mxCell")
                assert cell.get("source") in node_ids
                assert cell.get("target") in node_ids

    def test_visible_elements(self, classified_migration):
        as_is = visible_elements(classified_migration, DiagramMode.AS_IS)
        assert all(el.migration_status != MigrationStatus.ADD for el in as_is)
        target = visible_elements(classified_migration, DiagramMode.TARGET)
        assert all(el.migration_status != MigrationStatus.REMOVE for el in target)
        assert len(visible_elements(classified_migration, DiagramMode.MIGRATION)) == len(
            classified_migration.elements
        )


class TestMigrationPage:
    def test_status_suffixes(self, small_model):
        xml = DrawioSerializer().render(small_model, DiagramMode.MIGRATION)
        assert _node_labels(xml) == {"Old Portal [REMOVE]", "New Portal [NEW]", "Billing"}

    def test_no_suffixes_on_state_pages(self, small_model):
        xml = DrawioSerializer().render(small_model, DiagramMode.AS_IS)
        assert _node_labels(xml) == {"Old Portal", "Billing"}

    def test_status_colours(self, small_model):
        objects = _objects(DrawioSerializer().render(small_model, DiagramMode.MIGRATION))
        assert "fillColor=#f8cecc" in objects["cell-id-a"].find("mxCell").get("style")
        assert "fillColor=#d5e8d4" in objects["cell-id-b"].find("mxCell").get("style")
        assert "fillColor=#dae8fc" in objects["cell-id-c"].find("mxCell").get("style")

    def test_removed_edges_dashed(self, small_model):
        objects = _objects(DrawioSerializer().render(small_model, DiagramMode.MIGRATION))
        removed = objects["edge-rel-000001"].find("mxCell").get("style")
        added = objects["edge-rel-000002"].find("mxCell").get("style")
        assert "dashed=1" in removed
        assert "dashed=1" not in added
        assert objects["edge-rel-000001"].get("migrationStatus") == "remove"
        assert objects["edge-rel-000001"].get("label") == "serves"

    def test_legend(self, docs):
        root = ET.fromstring(docs.migration)
        cells = {c.get("id"): c for c in root.iter("mxCell") if c.get("id")}
        assert cells["legend"].get("value") == "Legend"
        assert cells["legend-keep"].get("value") == "KEEP (unchanged)"
        assert cells["legend-add"].get("value") == "ADD (new)"
        assert cells["legend-remove"].get("value") == "REMOVE (retire)"
        assert "dashed=1" in cells["legend-removed-link"].get("style")
        assert all(cells[f"legend-{s}"].get("parent") == "legend" for s in ("keep", "add", "remove"))

    def test_no_legend_on_state_pages(self, docs):
        assert 'id="legend"' not in docs.as_is
        assert 'id="legend"' not in docs.target

    def test_node_metadata(self, small_model):
        obj = _objects(DrawioSerializer().render(small_model, DiagramMode.MIGRATION))["cell-id-c"]
        assert obj.get("archimateType") == "BusinessProcess"
        assert obj.get("layer") == "Business"
        assert obj.get("migrationStatus") == "keep"
        assert obj.get("tooltip") == "BusinessProcess in the Business layer"
        assert obj.find("mxCell").get("parent") == "lane-business"


class TestLayout:
    def test_lane_order_skips_empty_layers(self, small_model):
        layout = layout_diagram(small_model, DiagramMode.MIGRATION, LayoutConfig())
        assert [lane.layer for lane in layout.lanes] == [Layer.BUSINESS, Layer.APPLICATION]
        assert layout.lanes[0].y < layout.lanes[1].y

    def test_grid_wraps_after_max_columns(self):
        elements = [
            _element(f"id-{i}", f"Component {i}", ElementType.APPLICATION_COMPONENT, MigrationStatus.KEEP)
            for i in range(7)
        ]
        config = LayoutConfig(max_columns=3)
        layout = layout_diagram(ClassifiedModel(name="Grid", elements=elements), DiagramMode.AS_IS, config)
        placed = layout.lanes[0].elements
        step_x = config.node_width + config.horizontal_gap
        step_y = config.node_height + config.vertical_gap
        assert (placed[0].x, placed[0].y) == (LANE_PADDING, LANE_HEADER_HEIGHT + LANE_PADDING)
        assert placed[2].x == LANE_PADDING + 2 * step_x
        assert placed[3].x == LANE_PADDING
        assert placed[3].y == LANE_HEADER_HEIGHT + LANE_PADDING + step_y
        assert placed[6].y == LANE_HEADER_HEIGHT + LANE_PADDING + 2 * step_y

    def test_legend_right_of_lanes(self, small_model):
        layout = layout_diagram(small_model, DiagramMode.MIGRATION, LayoutConfig())
        legend_x, _ = layout.legend_origin
        assert all(lane.x + lane.width <= legend_x for lane in layout.lanes)
        assert layout.width >= legend_x + LEGEND_WIDTH

    def test_element_count(self, small_model):
        assert layout_diagram(small_model, DiagramMode.AS_IS, LayoutConfig()).element_count == 2
        assert layout_diagram(small_model, DiagramMode.TARGET, LayoutConfig()).element_count == 2
        assert layout_diagram(small_model, DiagramMode.MIGRATION, LayoutConfig()).element_count == 3


class TestEdgeCases:
    def test_empty_model(self):
        docs = render_drawio(ClassifiedModel(name="Empty"))
        for xml in (docs.as_is, docs.target, docs.migration, docs.combined):
            root = ET.fromstring(xml)
            assert not [o for o in root.iter("object")]

    def test_long_labels_truncated(self):
        name = "A very long application component name that keeps going and going"
        model = ClassifiedModel(
            name="Long",
            elements=[_element("id-x", name, ElementType.APPLICATION_COMPONENT, MigrationStatus.KEEP)],
        )
        xml = DrawioSerializer(LayoutConfig(label_max_chars=20)).render(model, DiagramMode.AS_IS)
        (label,) = _node_labels(xml)
        assert len(label) <= 20
        assert label.endswith("…")

    def test_special_characters_escaped(self):
        model = ClassifiedModel(
            name="Esc",
            elements=[
                _element(
                    "id-x",
                    'R&D <Core> "Hub"',
                    ElementType.APPLICATION_COMPONENT,
                    MigrationStatus.KEEP,
                    documentation="Uses <tags> & 'quotes'",
                )
            ],
        )
        xml = DrawioSerializer().render(model, DiagramMode.AS_IS)
        obj = _objects(xml)["cell-id-x"]
        assert obj.get("label") == 'R&D <Core> "Hub"'
        assert obj.get("tooltip") == "Uses <tags> & 'quotes'"
