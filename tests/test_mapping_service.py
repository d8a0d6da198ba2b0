"""
Tests for the mapping editing service (mapping/service.py).
"""

import pytest

from compgraph.dependency import get_all_missing_mappings
from compgraph.mapping import FieldOption, MappingService, RequiredField, group_missing_by_component
from compgraph.models import Mapping


@pytest.fixture
def service():
    return MappingService()


@pytest.fixture
def components(make_component):
    return [
        make_component("a", name="Orders", input={"order_id": 1}, output={"status": "ok"},
                       consumes=["b", "c"]),
        make_component("b", name="Billing", input={"amount": 1}, output={"invoice": "i"}),
        make_component("c", name="Pricing", output={"total": 2}),
    ]


@pytest.mark.unit
class TestValidateMappingInputs:
    def test_valid(self, service, components):
        result = service.validate_mapping_inputs(
            "amount", "Billing", FieldOption(field="total", source="Pricing"), components, "a"
        )

        assert result.is_valid
        assert result.target_component.id == "b"
        assert result.source_field == "total"
        assert result.source_component_name == "Pricing"

    @pytest.mark.parametrize(
        "target_field,target_name,selected,current_id,error",
        [
            (None, "Billing", FieldOption(field="x", source="Orders"), "a", "Missing target field"),
            ("amount", "", FieldOption(field="x", source="Orders"), "a",
             "Missing target component name"),
            ("amount", "Billing", None, "a", "Invalid selected field object"),
            ("amount", "Billing", FieldOption(field="x", source="Orders"), None,
             "Current component ID is required"),
            ("amount", "Billing", FieldOption(field="", source="Orders"), "a",
             "Missing field property in selected field object"),
            ("amount", "Billing", FieldOption(field="x", source=""), "a",
             "Missing source property in selected field object"),
        ],
    )
    def test_invalid(self, service, components, target_field, target_name, selected,
                     current_id, error):
        result = service.validate_mapping_inputs(
            target_field, target_name, selected, components, current_id
        )

        assert not result.is_valid
        assert result.error == error

    def test_unknown_target_lists_available(self, service, components):
        result = service.validate_mapping_inputs(
            "amount", "Nope", FieldOption(field="x", source="Orders"), components, "a"
        )

        assert result.error == "Target component not found: Nope"
        assert result.available_components == ["Orders", "Billing", "Pricing"]


@pytest.mark.unit
class TestCreateFieldMapping:
    def test_own_input_mapping(self, service, components):
        mapping = service.create_field_mapping(
            "amount", "Billing", FieldOption(field="order_id", source="Orders"),
            components, "a", "Orders",
        )

        assert mapping == Mapping(
            target_component_id="b", target_field="amount", source_field="order_id"
        )

    def test_cross_component_mapping(self, service, components):
        mapping = service.create_field_mapping(
            "amount", "Billing", FieldOption(field="total", source="Pricing"),
            components, "a", "Orders",
        )

        assert mapping.source_component_id == "c"
        assert mapping.is_cross_component

    def test_unknown_source(self, service, components):
        assert service.create_field_mapping(
            "amount", "Billing", FieldOption(field="total", source="Ghost"),
            components, "a", "Orders",
        ) is None

    def test_invalid_inputs(self, service, components):
        assert service.create_field_mapping(
            None, "Billing", None, components, "a", "Orders"
        ) is None


@pytest.mark.unit
class TestEditingMappings:
    def test_add_notifies(self, components):
        changes = []
        service = MappingService(on_mapping_changed=changes.append)
        new = Mapping(target_component_id="b", target_field="amount", source_field="order_id")

        updated = service.add_mapping([], new)

        assert updated == [new]
        assert changes == [[new]]

    def test_add_none_is_ignored(self, service):
        existing = [Mapping(target_component_id="b", target_field="f", source_field="g")]
        assert service.add_mapping(existing, None) is existing

    def test_remove_first_match(self):
        changes = []
        service = MappingService()
        service.set_on_mapping_changed(changes.append)
        first = Mapping(target_component_id="b", target_field="f", source_field="g")
        other = Mapping(target_component_id="b", target_field="h", source_field="g")

        updated = service.remove_mapping([first, other, first], first)

        assert updated == [other, first]
        assert len(changes) == 1

    def test_remove_missing(self, service):
        existing = [Mapping(target_component_id="b", target_field="f", source_field="g")]
        missing = Mapping(target_component_id="x", target_field="f", source_field="g")
        assert service.remove_mapping(existing, missing) is existing

    def test_cleanup_deleted_field(self, service):
        mappings = [
            Mapping(target_component_id="b", target_field="f", source_field="g"),
            Mapping(target_component_id="b", target_field="h", source_field="f"),
            Mapping(target_component_id="b", target_field="k", source_field="l"),
        ]

        updated = service.cleanup_mappings_for_deleted_field(mappings, "f")

        assert [m.target_field for m in updated] == ["k"]

    def test_queries(self, service):
        mappings = [
            Mapping(target_component_id="b", target_field="f", source_field="g"),
            Mapping(target_component_id="c", target_field="h", source_field="v",
                    source_component_id="d"),
        ]

        assert service.has_mapping(mappings, "b", "f")
        assert not service.has_mapping(mappings, "c", "f")
        assert service.get_mappings_for_component(mappings, "c") == [mappings[1]]
        assert service.get_mappings_for_component(mappings, "d", side="source") == [mappings[1]]

    def test_completeness(self, service):
        mappings = [Mapping(target_component_id="b", target_field="f", source_field="g")]
        required = [
            RequiredField(component_id="b", field="f"),
            RequiredField(component_id="b", field="h"),
        ]

        result = service.validate_mapping_completeness(mappings, required)

        assert not result.is_complete
        assert result.total_required == 2
        assert result.total_mapped == 1
        assert result.missing_mappings == [required[1]]


@pytest.mark.unit
class TestFieldDiscovery:
    def test_available_fields(self, service, components):
        options = service.get_available_fields_for_mapping("a", "Billing", components)

        assert [o.display for o in options] == [
            "order_id (from Orders)",
            "status (from Orders)",
            "total (from Pricing)",
        ]

    def test_available_fields_unknown_component(self, service, components):
        assert service.get_available_fields_for_mapping("zzz", "Billing", components) == []

    def test_field_usage(self, service, make_component):
        components = [
            make_component("a", consumes=["b"], mappings=[
                {"target_component_id": "b", "target_field": "f", "source_field": "total",
                 "source_component_id": "c"},
                {"target_component_id": "b", "target_field": "g", "source_field": "gone",
                 "source_component_id": "c"},
            ]),
            make_component("b", input={"f": 1, "g": 1}),
            make_component("c", output={"total": 1}),
        ]

        usages = service.find_field_usage_in_other_components("c", components)

        assert [(u.field, u.used_by_component_id, u.mapped_to_field) for u in usages] == [
            ("total", "a", "f")
        ]


@pytest.mark.unit
class TestGroupMissingByComponent:
    def test_groups_rows(self, make_component):
        components = [
            make_component("a", input={}, consumes=["b"]),
            make_component("b", input={"x": 1, "y": 1}),
        ]

        grouped = group_missing_by_component(get_all_missing_mappings(components))

        assert list(grouped) == ["a"]
        assert [r.missing_field for r in grouped["a"]] == ["x", "y"]
