"""
Tests for mapping integrity validation (integrity/validator.py).
"""

import pytest

from compgraph.integrity import MappingIntegrityValidator, group_mappings_by_target, validate_mappings
from compgraph.models import Mapping


def _errors(errors):
    return [(e.component_id, e.error) for e in errors]


@pytest.mark.unit
class TestValidateMappings:
    def test_consistent_collection(self, order_components):
        assert validate_mappings(order_components) == []

    def test_unknown_target_not_consumed(self, make_component):
        components = [
            make_component("a", mappings=[
                {"target_component_id": "ghost", "target_field": "f", "source_field": "g"},
            ]),
        ]

        assert _errors(validate_mappings(components)) == [
            ("a", "Invalid target component ID in mappings: ghost"),
            ("a", "Target component ID ghost not in consumes array"),
        ]

    def test_target_not_consumed(self, make_component):
        components = [
            make_component("a", mappings=[
                {"target_component_id": "b", "target_field": "f", "source_field": "g"},
            ]),
            make_component("b"),
        ]

        errors = validate_mappings(components)

        assert _errors(errors) == [("a", "Target component ID b not in consumes array")]
        assert errors[0].target_id == "b"
        assert errors[0].component == "A"

    def test_incomplete_mapping(self, make_component):
        components = [
            make_component("a", consumes=["b"], mappings=[
                {"target_component_id": "b", "target_field": "f"},
            ]),
            make_component("b"),
        ]

        errors = validate_mappings(components)

        assert _errors(errors) == [("a", "Mapping must have both target_field and source_field")]
        assert errors[0].mapping == Mapping(target_component_id="b", target_field="f")

    def test_unknown_source_component(self, make_component):
        components = [
            make_component("a", consumes=["b"], mappings=[
                {
                    "target_component_id": "b",
                    "target_field": "f",
                    "source_field": "g",
                    "source_component_id": "gone",
                },
            ]),
            make_component("b"),
        ]

        assert _errors(validate_mappings(components)) == [
            ("a", "Invalid source_component_id: gone")
        ]

    def test_legacy_keyed_shape(self, make_component):
        components = [
            make_component("a", consumes=["b"], mappings={
                "b": [{"target_field": "f", "source_field": "g"}],
                "c": [{"target_field": "h", "source_field": "i"}],
            }),
            make_component("b"),
        ]

        assert _errors(validate_mappings(components)) == [
            ("a", "Invalid target component ID in mappings: c"),
            ("a", "Target component ID c not in consumes array"),
        ]

    def test_consumes_checks(self, make_component):
        components = [make_component("a", consumes=["a", "ghost"])]

        assert _errors(validate_mappings(components)) == [
            ("a", "Component consumes itself"),
            ("a", "Invalid consumed component ID: ghost"),
        ]

    def test_class_and_function_agree(self, make_component):
        components = [make_component("a", consumes=["ghost"])]
        assert MappingIntegrityValidator().validate(components) == validate_mappings(components)


@pytest.mark.unit
class TestGroupMappingsByTarget:
    def test_groups_in_first_seen_order(self):
        mappings = [
            Mapping(target_component_id="b", target_field="1", source_field="x"),
            Mapping(target_component_id="c", target_field="2", source_field="x"),
            Mapping(target_component_id="b", target_field="3", source_field="x"),
        ]

        grouped = group_mappings_by_target(mappings)

        assert list(grouped) == ["b", "c"]
        assert [m.target_field for m in grouped["b"]] == ["1", "3"]
