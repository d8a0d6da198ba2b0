"""Load the component collection into DuckDB."""

import logging

import duckdb

from ..models import Component, ComponentCollection
from ..schema import get_field_paths

logger = logging.getLogger(__name__)

# Relation types stored in the relations table
RELATION_CONSUMES = "consumes"
RELATION_MAPS_FROM = "mapsFrom"


class GraphLoader:
    """Load components, their edges and their mapping records into DuckDB."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    def load_collection(self, collection: ComponentCollection) -> None:
        """Replace the database contents with a collection snapshot.

        Components without an id are not part of the graph; for duplicate
        ids the first component wins.
        """
        for table in ("relations", "mappings", "components"):
            self.conn.execute(f"DELETE FROM {table}")
        self.conn.execute("DROP SEQUENCE IF EXISTS relations_id_seq")
        self.conn.execute("CREATE SEQUENCE relations_id_seq START 1")

        loaded: list[Component] = []
        seen: set[str] = set()
        for component in collection.components:
            if not component.id:
                continue
            if component.id in seen:
                logger.debug(f"Skipping duplicate component id: {component.id}")
                continue
            seen.add(component.id)
            loaded.append(component)
            self._insert_component(component)
            self._insert_mappings(component)

        self._insert_relations(self._collect_relations(loaded))

    def _insert_component(self, component: Component) -> None:
        self.conn.execute(
            """
            INSERT INTO components (
                id, name, type, color, input_fields, output_fields, raw_json
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                component.id,
                component.name,
                component.type.value,
                component.color,
                get_field_paths(component.input),
                get_field_paths(component.output),
                component.model_dump_json(),
            ],
        )

    def _insert_mappings(self, component: Component) -> None:
        for position, mapping in enumerate(component.mappings):
            self.conn.execute(
                "INSERT INTO mappings VALUES (?, ?, ?, ?, ?, ?)",
                [
                    component.id,
                    position,
                    mapping.target_component_id,
                    mapping.target_field,
                    mapping.source_field,
                    mapping.source_component_id,
                ],
            )

    @staticmethod
    def _collect_relations(components: list[Component]) -> list[tuple[str, str, str]]:
        """Derive the deduplicated, sorted edge list."""
        relations: set[tuple[str, str, str]] = set()
        for component in components:
            for consumed_id in component.consumes:
                relations.add((component.id, consumed_id, RELATION_CONSUMES))
            for mapping in component.mappings:
                if mapping.is_cross_component:
                    relations.add(
                        (component.id, mapping.source_component_id, RELATION_MAPS_FROM)
                    )
        return sorted(relations)

    def _insert_relations(self, relations: list[tuple[str, str, str]]) -> None:
        for source_id, target_id, relation_type in relations:
            self.conn.execute(
                """
                INSERT INTO relations (id, source_id, target_id, relation_type)
                VALUES (nextval('relations_id_seq'), ?, ?, ?)
                """,
                [source_id, target_id, relation_type],
            )
