"""
Tests for cross-dependency field availability (dependency/availability.py).
"""

import pytest

from compgraph.dependency import is_field_available_in_consumed_components


@pytest.fixture
def components(make_component):
    return [
        make_component("a", input={"x": 1}, consumes=["b", "c", "d"]),
        make_component("b", input={"user_id": "u", "name": "n"}),
        make_component("c", input={"user_id": "u", "empty": None}),
        make_component("d"),
    ]


@pytest.mark.unit
class TestIsFieldAvailableInConsumedComponents:
    def test_field_in_other_consumed_component(self, components):
        assert is_field_available_in_consumed_components(
            "user_id", "b", ["b", "c", "d"], components
        )

    def test_excluded_component_does_not_count(self, components):
        assert not is_field_available_in_consumed_components(
            "name", "b", ["b", "c", "d"], components
        )

    def test_empty_value_is_not_available(self, components):
        assert not is_field_available_in_consumed_components(
            "empty", "b", ["b", "c"], components
        )

    def test_unknown_and_empty_components_are_skipped(self, components):
        assert not is_field_available_in_consumed_components(
            "user_id", "b", ["ghost", "d"], components
        )

    def test_no_exclusion(self, components):
        assert is_field_available_in_consumed_components("name", None, ["b"], components)

    def test_nested_path(self, make_component):
        components = [make_component("b", input={"profile": {"id": 3}})]
        assert is_field_available_in_consumed_components("profile.id", "x", ["b"], components)
