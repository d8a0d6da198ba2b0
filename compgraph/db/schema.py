"""DuckDB schema definitions."""

import duckdb


def get_connection(path: str = ":memory:") -> duckdb.DuckDBPyConnection:
    """Get a DuckDB connection."""
    return duckdb.connect(path)


def create_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Create DuckDB tables for the component graph."""

    conn.execute("""
        CREATE TABLE IF NOT EXISTS components (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL,
            type VARCHAR NOT NULL,
            color VARCHAR,
            input_fields VARCHAR[],
            output_fields VARCHAR[],
            raw_json JSON
        )
    """)

    # Graph edges: consumes and cross-component mapping sources
    conn.execute("""
        CREATE TABLE IF NOT EXISTS relations (
            id INTEGER PRIMARY KEY,
            source_id VARCHAR NOT NULL,
            target_id VARCHAR NOT NULL,
            relation_type VARCHAR NOT NULL
        )
    """)

    conn.execute("CREATE SEQUENCE IF NOT EXISTS relations_id_seq START 1")

    # One row per mapping record, in component order
    conn.execute("""
        CREATE TABLE IF NOT EXISTS mappings (
            component_id VARCHAR NOT NULL,
            position INTEGER NOT NULL,
            target_component_id VARCHAR,
            target_field VARCHAR,
            source_field VARCHAR,
            source_component_id VARCHAR
        )
    """)

    conn.execute("CREATE INDEX IF NOT EXISTS idx_components_type ON components(type)")
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_relations_source ON relations(source_id)"
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_relations_target ON relations(target_id)"
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_mappings_source ON mappings(source_component_id)"
    )
