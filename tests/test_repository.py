"""
Tests for the database reader, writer and repository (store/).
"""

import json

import pytest
import yaml

from compgraph.errors import (
    ComponentNotFoundError,
    ComponentValidationError,
    IntegrityValidationError,
)
from compgraph.models import Component, ComponentCollection
from compgraph.store import ComponentRepository, DatabaseReader, DatabaseWriter


@pytest.fixture
def database(tmp_path, order_components):
    path = tmp_path / "database.json"
    DatabaseWriter().write_collection(ComponentCollection(components=order_components), path)
    return path


@pytest.mark.unit
class TestDatabaseReader:
    def test_missing_file_is_empty(self, tmp_path):
        collection = DatabaseReader().read_collection(tmp_path / "missing.json")
        assert collection.components == []

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "database.json"
        path.write_text("{not json", encoding="utf-8")

        assert DatabaseReader().read_collection(path).components == []

    def test_non_utf8_file_is_empty(self, tmp_path):
        path = tmp_path / "database.json"
        path.write_bytes(b'{"components": [{"name": "\xff\xfe"}]}')

        assert DatabaseReader().read_collection(path).components == []

    def test_invalid_format(self):
        assert DatabaseReader().parse_collection({"items": []}).components == []
        assert DatabaseReader().parse_collection([]).components == []

    def test_skips_invalid_components(self):
        collection = DatabaseReader().parse_collection(
            {"components": [{"id": "a", "name": "A"}, {"id": "b"}, "junk"]}
        )
        assert [c.id for c in collection.components] == ["a"]

    def test_yaml_database(self, tmp_path):
        path = tmp_path / "database.yaml"
        path.write_text(
            yaml.safe_dump({"components": [{"id": "a", "name": "A", "input": {"x": None}}]}),
            encoding="utf-8",
        )

        collection = DatabaseReader().read_collection(path)

        assert collection.components[0].input == {"x": None}


@pytest.mark.unit
class TestDatabaseWriter:
    def test_json_keeps_nulls_and_enum_values(self, make_component):
        collection = ComponentCollection(
            components=[make_component("t", type="database_table", input={"x": None})]
        )

        data = json.loads(DatabaseWriter().write_json_str(collection))

        assert data["components"][0]["type"] == "database_table"
        assert data["components"][0]["input"] == {"x": None}

    def test_yaml_written_by_suffix(self, tmp_path, order_components):
        path = tmp_path / "out" / "database.yml"

        DatabaseWriter().write_collection(ComponentCollection(components=order_components), path)

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert [c["id"] for c in data["components"]] == [c.id for c in order_components]


@pytest.mark.unit
class TestComponentRepository:
    def test_load_and_get(self, database):
        repository = ComponentRepository(database)

        assert len(repository.get_components()) == 4
        assert repository.get_component("payment").name == "Payment"
        assert repository.get_component(name="Pricing").id == "pricing"

    def test_get_unknown(self, database):
        with pytest.raises(ComponentNotFoundError):
            ComponentRepository(database).get_component("ghost")

    def test_validate_database(self, database, tmp_path):
        assert ComponentRepository(database).validate_database().is_valid

        broken = tmp_path / "broken.json"
        broken.write_text(
            json.dumps({"components": [{"id": "a", "name": "A", "consumes": ["ghost"]}]}),
            encoding="utf-8",
        )
        result = ComponentRepository(broken).validate_database()
        assert not result.is_valid
        assert result.errors[0].error == "Invalid consumed component ID: ghost"

    def test_strict_save_refuses_inconsistent_collection(self, tmp_path, make_component):
        repository = ComponentRepository(tmp_path / "db.json")
        collection = ComponentCollection(components=[make_component("a", consumes=["ghost"])])

        with pytest.raises(IntegrityValidationError) as exc_info:
            repository.save_database(collection)

        assert len(exc_info.value.errors) == 1
        assert not repository.path.exists()

    def test_lenient_save(self, tmp_path, make_component):
        repository = ComponentRepository(tmp_path / "db.json", strict=False)
        collection = ComponentCollection(components=[make_component("a", consumes=["ghost"])])

        repository.save_database(collection)

        assert repository.load().components[0].consumes == ["ghost"]

    def test_add_component(self, tmp_path):
        repository = ComponentRepository(tmp_path / "db.json")

        component = repository.add_component({"name": "Orders"})

        assert component.id
        assert component.color
        assert repository.load().get(component.id).name == "Orders"

    def test_update_component(self, database):
        repository = ComponentRepository(database)

        assert repository.update_component({"id": "payment", "name": "Payments"})
        assert repository.get_component("payment").name == "Payments"
        assert not repository.update_component({"id": "ghost", "name": "X"})

    def test_delete_component_cleans_references(self, database):
        repository = ComponentRepository(database)

        assert repository.delete_component("pricing")

        collection = repository.load()
        assert "pricing" not in collection.ids()
        assert collection.get("checkout").mappings == []
        assert not repository.delete_component("pricing")

    def test_clone_component(self, database):
        repository = ComponentRepository(database)

        cloned = repository.clone_component("payment")

        assert cloned.name == "Payment (Copy)"
        assert cloned.id != "payment"
        assert len(repository.load().components) == 5
        assert repository.clone_component("ghost") is None

    def test_import_database(self, database):
        repository = ComponentRepository(database)

        collection = repository.import_database(
            {
                "components": [
                    {"id": "payment", "name": "Payment v2", "input": {"amount": 1}},
                    {"id": "brand-new", "name": "Shipping"},
                ]
            }
        )

        names = sorted(c.name for c in collection.components)
        assert names == ["Payment v2", "Shipping"]
        assert "brand-new" not in collection.ids()

    def test_import_rejects_bad_format(self, database):
        with pytest.raises(ValueError, match="Invalid data format"):
            ComponentRepository(database).import_database({"components": "nope"})

    def test_import_rejects_non_object_item_before_writing(self, database):
        repository = ComponentRepository(database)

        with pytest.raises(ValueError, match="Invalid component at index 1"):
            repository.import_database({"components": [{"id": "payment", "name": "P"}, "junk"]})

        assert len(repository.load().components) == 4

    def test_import_validates_every_item_before_deleting(self, database):
        repository = ComponentRepository(database)

        with pytest.raises(ComponentValidationError):
            repository.import_database(
                {"components": [{"id": "payment", "name": "Payment"}, {"type": "endpoint"}]}
            )

        assert repository.load().ids() == {"checkout", "payment", "customers", "pricing"}


@pytest.mark.unit
def test_component_round_trip_through_repository(tmp_path):
    repository = ComponentRepository(tmp_path / "db.json")
    added = repository.add_component(
        {"name": "Orders", "mappings": {"b": [{"target_field": "f", "source_field": "g"}]}}
    )

    stored = repository.get_component(added.id)

    assert isinstance(stored, Component)
    assert stored.mappings[0].target_component_id == "b"
