"""Tests for type invariant enforcement across the model and config types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from archiexport.config.models import ExtractionConfig, LayoutConfig
from archiexport.migration import ClassifiedElement
from archiexport.model import (
    ELEMENT_LAYERS,
    ORIGIN_PREFIXES,
    Element,
    ElementType,
    IdGenerator,
    Layer,
    RelationshipOrigin,
    RelationshipType,
)


# ── Every element type has exactly one layer ──────────────────────────


class TestElementLayers:
    def test_mapping_is_total(self):
        assert set(ELEMENT_LAYERS) == set(ElementType)

    @pytest.mark.parametrize("element_type", list(ElementType))
    def test_property_agrees_with_mapping(self, element_type):
        assert element_type.layer == ELEMENT_LAYERS[element_type]

    def test_spot_checks(self):
        assert ElementType.STAKEHOLDER.layer == Layer.MOTIVATION
        assert ElementType.BUSINESS_PROCESS.layer == Layer.BUSINESS
        assert ElementType.DATA_OBJECT.layer == Layer.APPLICATION
        assert ElementType.DEVICE.layer == Layer.TECHNOLOGY
        assert ElementType.GAP.layer == Layer.MOTIVATION


# ── Element layer must match its type ─────────────────────────────────


class TestElementLayerMismatch:
    def test_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="does not match"):
            Element(id="id-x", type=ElementType.NODE, name="Server", layer=Layer.BUSINESS)

    def test_classified_element_also_checked(self):
        with pytest.raises(ValidationError):
            ClassifiedElement(
                id="id-x",
                type=ElementType.NODE,
                name="Server",
                layer=Layer.APPLICATION,
                migration_status="keep",
            )

    def test_classified_element_requires_status(self):
        with pytest.raises(ValidationError):
            ClassifiedElement(id="id-x", type=ElementType.NODE, name="Server", layer=Layer.TECHNOLOGY)

    def test_properties_not_shared(self):
        a = Element(id="id-a", type=ElementType.NODE, name="A", layer=Layer.TECHNOLOGY)
        b = Element(id="id-b", type=ElementType.NODE, name="B", layer=Layer.TECHNOLOGY)
        a.properties["k"] = "v"
        assert b.properties == {}


# ── Ids ───────────────────────────────────────────────────────────────


class TestIdGenerator:
    def test_sequential_across_prefixes(self):
        ids = IdGenerator()
        assert ids.next("stkh") == "id-stkh-000001"
        assert ids.next("rel") == "id-rel-000002"
        assert ids.issued == 2

    def test_reset(self):
        ids = IdGenerator()
        ids.next("a")
        ids.reset()
        assert ids.next("a") == "id-a-000001"

    def test_independent_generators(self):
        a, b = IdGenerator(), IdGenerator()
        a.next("x")
        assert b.next("x") == "id-x-000001"

    def test_base36_counter(self):
        ids = IdGenerator()
        for _ in range(35):
            ids.next("n")
        assert ids.next("n") == "id-n-000010"

    def test_origin_prefixes_total(self):
        assert set(ORIGIN_PREFIXES) == set(RelationshipOrigin)
        assert len(set(ORIGIN_PREFIXES.values())) == len(ORIGIN_PREFIXES)


class TestRelationshipType:
    def test_xsi_type_strips_suffix(self):
        assert RelationshipType.SERVING.xsi_type == "Serving"
        assert RelationshipType.ASSOCIATION.xsi_type == "Association"


# ── Config invariants ─────────────────────────────────────────────────


class TestConfigInvariants:
    def test_layout_values_positive(self):
        with pytest.raises(ValidationError):
            LayoutConfig(node_height=-1)

    def test_token_length_positive(self):
        with pytest.raises(ValidationError):
            ExtractionConfig(min_token_length=0)
