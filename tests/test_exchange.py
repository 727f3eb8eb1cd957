"""Tests for the ArchiMate exchange-format serializer."""

import xml.etree.ElementTree as ET

from archiexport.exchange import ARCHIMATE_NS, ExchangeSerializer, serialize_model
from archiexport.model import (
    ArchiModel,
    Element,
    ElementType,
    ModelMetadata,
    Relationship,
    RelationshipType,
)
from archiexport.views import generate_views

NS = {"a": ARCHIMATE_NS}
XSI_TYPE = "{http://www.w3.org/2001/XMLSchema-instance}type"


def _empty_model(name="Empty"):
    return ArchiModel(name=name, metadata=ModelMetadata(exported_at="2026-01-01T00:00:00+00:00"))


class TestEmptyModel:
    def test_structure(self):
        xml = serialize_model(_empty_model())
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert f'xmlns="{ARCHIMATE_NS}"' in xml
        assert "<elements>" in xml
        assert "<relationships>" in xml
        assert "<organizations>" not in xml
        assert "<propertyDefinitions>" not in xml
        assert "<views>" not in xml
        assert xml.endswith("</model>")

    def test_well_formed(self):
        root = ET.fromstring(serialize_model(_empty_model()))
        assert root.tag == f"{{{ARCHIMATE_NS}}}model"
        assert root.find("a:name", NS).text == "Empty"


class TestVaultModel:
    def test_all_elements_and_relationships_serialized(self, vault_model):
        root = ET.fromstring(serialize_model(vault_model))
        elements = root.findall("a:elements/a:element", NS)
        relationships = root.findall("a:relationships/a:relationship", NS)
        assert len(elements) == len(vault_model.elements)
        assert len(relationships) == len(vault_model.relationships)

    def test_element_types(self, vault_model):
        root = ET.fromstring(serialize_model(vault_model))
        types = {el.get(XSI_TYPE) for el in root.findall("a:elements/a:element", NS)}
        assert {"Stakeholder", "ApplicationComponent", "SystemSoftware", "Gap"} <= types

    def test_relationship_types_drop_suffix(self, vault_model):
        root = ET.fromstring(serialize_model(vault_model))
        types = {r.get(XSI_TYPE) for r in root.findall("a:relationships/a:relationship", NS)}
        assert "Composition" in types
        assert not any(t.endswith("Relationship") for t in types)

    def test_organizations_group_by_layer(self, vault_model):
        root = ET.fromstring(serialize_model(vault_model))
        labels = [item.find("a:label", NS).text for item in root.findall("a:organizations/a:item", NS)]
        assert labels == ["Motivation", "Business", "Application", "Technology", "Relations", "Views"]

    def test_property_definitions_referenced(self, vault_model):
        root = ET.fromstring(serialize_model(vault_model))
        defined = {d.get("identifier") for d in root.findall("a:propertyDefinitions/a:propertyDefinition", NS)}
        used = {p.get("propertyDefinitionRef") for p in root.iter(f"{{{ARCHIMATE_NS}}}property")}
        assert used and used <= defined
        assert "propdef-owner" in defined

    def test_views_have_nodes_and_connections(self, vault_model):
        root = ET.fromstring(serialize_model(vault_model))
        views = root.findall("a:views/a:diagrams/a:view", NS)
        assert [v.get("identifier") for v in views] == [v.id for v in vault_model.views]
        full = views[0]
        assert full.get(XSI_TYPE) == "Diagram"
        assert len(full.findall("a:node", NS)) == len(vault_model.elements)
        assert len(full.findall("a:connection", NS)) == len(vault_model.relationships)
        node_ids = {n.get("identifier") for n in full.findall("a:node", NS)}
        for conn in full.findall("a:connection", NS):
            assert conn.get("source") in node_ids
            assert conn.get("target") in node_ids

    def test_custom_model_identifier(self, vault_model):
        xml = ExchangeSerializer(model_identifier="model-42").serialize(vault_model)
        assert ET.fromstring(xml).get("identifier") == "model-42"


class TestEscaping:
    def test_special_characters_round_trip(self):
        tricky = "R&D <Core> \"Ops\" 'Team'"
        model = _empty_model(name=tricky)
        model.documentation = tricky
        model.elements = [
            Element(
                id="id-acomp-000001",
                type=ElementType.APPLICATION_COMPONENT,
                name=tricky,
                layer=ElementType.APPLICATION_COMPONENT.layer,
                documentation=tricky,
                properties={"owner & lead": tricky},
            ),
            Element(
                id="id-tnode-000002",
                type=ElementType.NODE,
                name="Host",
                layer=ElementType.NODE.layer,
            ),
        ]
        model.relationships = [
            Relationship(
                id="id-xrel-000003",
                type=RelationshipType.REALIZATION,
                source_id="id-tnode-000002",
                target_id="id-acomp-000001",
                name=tricky,
            )
        ]
        model.views = generate_views(model)

        xml = serialize_model(model)
        assert "R&D" not in xml
        root = ET.fromstring(xml)
        assert root.find("a:name", NS).text == tricky
        element = root.find("a:elements/a:element", NS)
        assert element.find("a:name", NS).text == tricky
        assert element.find("a:properties/a:property/a:value", NS).text == tricky
        rel = root.find("a:relationships/a:relationship", NS)
        assert rel.find("a:name", NS).text == tricky
