"""DuckDB data layer for component graph analysis."""

from ..models import ComponentCollection
from .graph_analysis import DependencyAnalyzer
from .loader import RELATION_CONSUMES, RELATION_MAPS_FROM, GraphLoader
from .schema import create_schema, get_connection


def load_graph(collection: ComponentCollection, path: str = ":memory:") -> DependencyAnalyzer:
    """Load a collection into a fresh DuckDB database and return its analyzer."""
    conn = get_connection(path)
    create_schema(conn)
    GraphLoader(conn).load_collection(collection)
    return DependencyAnalyzer(conn)


__all__ = [
    "create_schema",
    "get_connection",
    "load_graph",
    "DependencyAnalyzer",
    "GraphLoader",
    "RELATION_CONSUMES",
    "RELATION_MAPS_FROM",
]
