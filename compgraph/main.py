"""Entry point for the compgraph command line."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigLoader
from .db import load_graph
from .dependency import check_component_dependencies, get_all_missing_mappings
from .errors import CompgraphError
from .integrity import validate_mappings
from .store import ComponentRepository


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compgraph",
        description="Check field dependencies and mapping integrity of a component database.",
    )
    parser.add_argument(
        "database",
        nargs="?",
        help="Database file; defaults to the configured database_path",
    )
    parser.add_argument(
        "--project",
        default=None,
        help="Directory holding compgraph.yaml (default: current directory)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--validate", action="store_true", help="Only report mapping integrity errors"
    )
    mode.add_argument(
        "--component", metavar="ID", help="Report missing fields of one component"
    )
    mode.add_argument(
        "--impact", metavar="ID", help="Show which components depend on a component"
    )
    return parser


def _print_integrity(repository: ComponentRepository) -> int:
    components = repository.load().components
    errors = validate_mappings(components)
    if not errors:
        print(f"{repository.path}: no integrity errors")
        return 0
    for error in errors:
        print(f"{error.component} ({error.component_id}): {error.error}")
    return 1


def _print_missing(repository: ComponentRepository) -> int:
    rows = get_all_missing_mappings(repository.load().components)
    if not rows:
        print("All endpoint dependencies are resolved")
        return 0
    for row in rows:
        line = f"{row.component_name}: {row.missing_field} (from {row.from_component})"
        if row.message:
            line += f" - {row.message}"
        print(line)
    return 1


def _print_component(repository: ComponentRepository, component_id: str) -> int:
    report = check_component_dependencies(component_id, repository.load().components)
    for missing in report.missing_fields:
        line = f"{missing.path} (from {missing.from_id})"
        if missing.message:
            line += f" - {missing.message}"
        print(line)
    return 1 if report.has_missing_dependencies else 0


def _print_impact(repository: ComponentRepository, component_id: str) -> int:
    analyzer = load_graph(repository.load())
    impact = analyzer.get_impact_analysis(component_id)
    print(f"Direct consumers: {', '.join(impact['direct_consumers']) or '-'}")
    print(f"Mapping dependents: {', '.join(impact['mapping_dependents']) or '-'}")
    for mapped in impact["mapped_fields"]:
        print(
            f"  {mapped['source_field']} -> {mapped['component_id']}: "
            f"{mapped['target_component_id']}.{mapped['target_field']}"
        )
    print(f"Transitive consumers ({impact['transitive_count']}): "
          f"{', '.join(impact['transitive_consumers']) or '-'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the compgraph command line."""
    args = build_parser().parse_args(argv)

    project_path = Path(args.project).resolve() if args.project else Path.cwd()
    config_loader = ConfigLoader(project_path)
    config = config_loader.load()

    logging.basicConfig(
        level=getattr(logging, config.settings.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.database:
        database_path = Path(args.database).resolve()
    else:
        database_path = config_loader.resolve_database_path(config)

    repository = ComponentRepository(database_path, strict=config.settings.strict_save)

    try:
        if args.validate:
            return _print_integrity(repository)
        if args.component:
            return _print_component(repository, args.component)
        if args.impact:
            return _print_impact(repository, args.impact)
        return max(_print_integrity(repository), _print_missing(repository))
    except CompgraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
