"""Analyze component dependencies using DuckDB."""

from typing import Any

import duckdb

from .loader import RELATION_CONSUMES, RELATION_MAPS_FROM

# (start column, next column) for each walking direction
_DOWNSTREAM = ("source_id", "target_id")
_UPSTREAM = ("target_id", "source_id")


class DependencyAnalyzer:
    """Query the consumes and mapsFrom edges of a loaded collection.

    "Dependencies" follow edges from a component to what it consumes (or
    sources mapped fields from); "dependents" follow them backwards.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        self.conn = conn

    def _neighbors(
        self, component_id: str, relation_type: str, direction: tuple[str, str]
    ) -> list[str]:
        start, step = direction
        rows = self.conn.execute(
            f"""
            SELECT {step} FROM relations
            WHERE {start} = ? AND relation_type = ?
            ORDER BY {step}
            """,
            [component_id, relation_type],
        ).fetchall()
        return [row[0] for row in rows]

    def get_dependencies(
        self, component_id: str, relation_type: str = RELATION_CONSUMES
    ) -> list[str]:
        """Get direct dependencies of a component."""
        return self._neighbors(component_id, relation_type, _DOWNSTREAM)

    def get_dependents(
        self, component_id: str, relation_type: str = RELATION_CONSUMES
    ) -> list[str]:
        """Get components that depend on this component."""
        return self._neighbors(component_id, relation_type, _UPSTREAM)

    def _closure(
        self,
        component_id: str,
        relation_type: str,
        max_depth: int,
        direction: tuple[str, str],
    ) -> list[dict[str, Any]]:
        """Walk edges with a recursive CTE, keeping the shortest depth per node."""
        start, step = direction
        rows = self.conn.execute(
            f"""
            WITH RECURSIVE walk AS (
                SELECT {step} AS node_id, 1 AS depth
                FROM relations
                WHERE {start} = ? AND relation_type = ?

                UNION

                SELECT r.{step}, w.depth + 1
                FROM relations r
                JOIN walk w ON r.{start} = w.node_id
                WHERE r.relation_type = ? AND w.depth < ?
            )
            SELECT node_id, MIN(depth) AS depth
            FROM walk
            WHERE node_id <> ?
            GROUP BY node_id
            ORDER BY depth, node_id
            """,
            [component_id, relation_type, relation_type, max_depth, component_id],
        ).fetchall()
        return [{"component_id": row[0], "depth": row[1]} for row in rows]

    def find_all_dependencies(
        self,
        component_id: str,
        relation_type: str = RELATION_CONSUMES,
        max_depth: int = 10,
    ) -> list[dict[str, Any]]:
        """Find transitive dependencies, nearest first."""
        return self._closure(component_id, relation_type, max_depth, _DOWNSTREAM)

    def find_all_dependents(
        self,
        component_id: str,
        relation_type: str = RELATION_CONSUMES,
        max_depth: int = 10,
    ) -> list[dict[str, Any]]:
        """Find all components that transitively depend on this component."""
        return self._closure(component_id, relation_type, max_depth, _UPSTREAM)

    def detect_cycles(self, relation_type: str = RELATION_CONSUMES) -> list[list[str]]:
        """Group the components that can reach themselves.

        Each group is a set of components that all reach each other (a
        component consuming itself forms a group of one). Groups and their
        members are sorted.
        """
        rows = self.conn.execute(
            """
            WITH RECURSIVE reach AS (
                SELECT source_id AS start_id, target_id AS node_id
                FROM relations
                WHERE relation_type = ?

                UNION

                SELECT r.start_id, e.target_id
                FROM reach r
                JOIN relations e ON e.source_id = r.node_id
                WHERE e.relation_type = ?
            )
            SELECT start_id, node_id FROM reach
            """,
            [relation_type, relation_type],
        ).fetchall()

        reachable: dict[str, set[str]] = {}
        for start_id, node_id in rows:
            reachable.setdefault(start_id, set()).add(node_id)

        cycles: list[list[str]] = []
        grouped: set[str] = set()
        for component_id in sorted(reachable):
            if component_id in grouped or component_id not in reachable[component_id]:
                continue
            members = {component_id} | {
                other
                for other in reachable[component_id]
                if component_id in reachable.get(other, set())
            }
            grouped |= members
            cycles.append(sorted(members))

        return sorted(cycles, key=lambda members: (len(members), members))

    def find_mapping_sources(self, component_id: str) -> list[dict[str, Any]]:
        """List the mapping records that read fields from this component's output."""
        rows = self.conn.execute(
            """
            SELECT component_id, target_component_id, target_field, source_field
            FROM mappings
            WHERE source_component_id = ?
            ORDER BY component_id, position
            """,
            [component_id],
        ).fetchall()
        return [
            {
                "component_id": row[0],
                "target_component_id": row[1],
                "target_field": row[2],
                "source_field": row[3],
            }
            for row in rows
        ]

    def get_dependency_graph(
        self,
        relation_types: list[str] | None = None,
        type_filter: list[str] | None = None,
    ) -> dict[str, Any]:
        """Export the graph as nodes and edges.

        Args:
            relation_types: Relation types to include. Defaults to
                ["consumes", "mapsFrom"].
            type_filter: Component types to include. If None, all types are included.

        Returns:
            Dict with "nodes" and "edges" lists. Edges whose ends are not
            both among the nodes are left out.
        """
        if relation_types is None:
            relation_types = [RELATION_CONSUMES, RELATION_MAPS_FROM]

        query = """
            SELECT id, name, type, color, len(input_fields), len(output_fields)
            FROM components
        """
        params: list[Any] = []
        if type_filter:
            query += f" WHERE type IN ({', '.join(['?'] * len(type_filter))})"
            params.extend(type_filter)
        query += " ORDER BY name, id"

        nodes = [
            {
                "id": row[0],
                "name": row[1],
                "type": row[2],
                "color": row[3],
                "input_count": row[4],
                "output_count": row[5],
            }
            for row in self.conn.execute(query, params).fetchall()
        ]
        node_ids = {node["id"] for node in nodes}

        relations = self.conn.execute(
            f"""
            SELECT source_id, target_id, relation_type
            FROM relations
            WHERE relation_type IN ({', '.join(['?'] * len(relation_types))})
            ORDER BY id
            """,
            relation_types,
        ).fetchall()
        edges = [
            {"source": source_id, "target": target_id, "type": relation_type}
            for source_id, target_id, relation_type in relations
            if source_id in node_ids and target_id in node_ids
        ]

        return {"nodes": nodes, "edges": edges}

    def get_impact_analysis(self, component_id: str) -> dict[str, Any]:
        """Summarize what breaks when a component is changed or deleted.

        Consumers lose a dependency; components whose cross-component
        mappings read from it lose those mappings.
        """
        direct_consumers = self.get_dependents(component_id, RELATION_CONSUMES)
        transitive = self.find_all_dependents(component_id, RELATION_CONSUMES)

        return {
            "component_id": component_id,
            "direct_consumers": direct_consumers,
            "direct_count": len(direct_consumers),
            "mapping_dependents": self.get_dependents(component_id, RELATION_MAPS_FROM),
            "mapped_fields": self.find_mapping_sources(component_id),
            "transitive_consumers": [d["component_id"] for d in transitive],
            "transitive_count": len(transitive),
            "impact_depth": max((d["depth"] for d in transitive), default=0),
        }
