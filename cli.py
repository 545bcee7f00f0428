#!/usr/bin/env python3
"""
Entity Metadata Toolkit CLI

Command-line interface for inspecting, comparing and rewriting entity
metadata documents exported from a metadata store.
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from config import settings
from metamodel import (
    CanonicalSerializer,
    DiffConfig,
    DiffEngine,
    MetadataError,
    SerializerConfig,
    compare_documents,
    load_entity_file,
    load_version_listing,
    version_compare
)
from services.reporting import render_comparison_report
from services.selection import MetadataScope, entity_name_filter, select_version
from services.sync import apply_scope, prepare_entity

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT
    )


def build_serializer() -> CanonicalSerializer:
    return CanonicalSerializer(SerializerConfig(
        indent=settings.CANONICAL_INDENT,
        line_terminator=settings.CANONICAL_LINE_TERMINATOR,
        key_separator=settings.CANONICAL_KEY_SEPARATOR
    ))


def build_diff_engine() -> DiffEngine:
    return DiffEngine(DiffConfig(array_order_insignificant=settings.DIFF_ARRAY_ORDER_INSIGNIFICANT))


def _load(path: str):
    return load_entity_file(path, serializer=build_serializer(), diff_engine=build_diff_engine())


def compare_files(before_path: str, after_path: str, scope: MetadataScope, as_json: bool = False) -> int:
    """Compare two entity files and print differences. Returns 1 if they differ."""
    before = _load(before_path)
    after = _load(after_path)

    before_doc, after_doc = before.json, after.json
    old_doc = {section: before_doc[section] for section in scope.paths}
    new_doc = {section: after_doc[section] for section in scope.paths}

    result = compare_documents(old_doc, new_doc, engine=build_diff_engine(), serializer=build_serializer())

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_comparison_report(f"{before_path} ({before})", f"{after_path} ({after})", result))

    return 0 if result.is_identical else 1


def print_canonical(path: str, part: str) -> int:
    """Print the canonical text of an entity or one of its sections."""
    entity = _load(path)
    if part == "entityInfo":
        print(entity.entity_info_text)
    elif part == "schema":
        print(entity.schema_text)
    else:
        print(entity.text)
    return 0


def rewrite_file(
    path: str,
    version: Optional[str],
    changelog: Optional[str],
    access_anyone: bool,
    replace_paths: List[str],
    source_path: Optional[str],
    scope: Optional[MetadataScope],
    output: Optional[str]
) -> int:
    """Apply edits to an entity and print (or write) the canonical result."""
    entity = _load(path)

    if replace_paths or scope:
        if not source_path:
            print("Error: --source is required with --replace-path or --scope", file=sys.stderr)
            return 2
        source = _load(source_path)
        if scope:
            entity = apply_scope(entity, source, scope)
        for replace_path in replace_paths:
            entity = entity.with_replaced_path(replace_path, source)

    entity = prepare_entity(entity, version=version, changelog=changelog, access_anyone=access_anyone)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(entity.text + "\n")
        print(f"Wrote {entity} to {output}")
    else:
        print(entity.text)
    return 0


def select_listing_version(path: str, selector: str) -> int:
    """Print the version picked from a version listing file."""
    versions = load_version_listing(path)
    selected = select_version(versions, selector)

    if selected is None:
        print(f"No version matches '{selector}'", file=sys.stderr)
        return 1

    print(selected.version)
    return 0


def compare_versions(v1: str, v2: str) -> int:
    result = version_compare(v1, v2)
    symbol = {-1: "<", 0: "==", 1: ">"}[result]
    print(f"{v1} {symbol} {v2}")
    return 0


def filter_names(pattern: str, names: List[str]) -> int:
    """Print the entity names that match the pattern."""
    for name in names:
        if entity_name_filter(name, pattern):
            print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{settings.APP_NAME} CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")
    scopes = [s.value for s in MetadataScope]

    # compare
    compare_parser = subparsers.add_parser("compare", help="Compare two entity files")
    compare_parser.add_argument("before", help="Before/baseline entity file")
    compare_parser.add_argument("after", help="After/new entity file")
    compare_parser.add_argument("--scope", choices=scopes, default=MetadataScope.BOTH.value,
                                help="Section(s) to compare")
    compare_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # canonical
    canonical_parser = subparsers.add_parser("canonical", help="Print the canonical form of an entity")
    canonical_parser.add_argument("file", help="Entity file")
    canonical_parser.add_argument("--part", choices=["all", "entityInfo", "schema"], default="all",
                                  help="Section to print")

    # rewrite
    rewrite_parser = subparsers.add_parser("rewrite", help="Apply edits to an entity")
    rewrite_parser.add_argument("file", help="Entity file")
    rewrite_parser.add_argument("--version", dest="new_version", help="New schema version")
    rewrite_parser.add_argument("--changelog", help="Changelog message")
    rewrite_parser.add_argument("--access-anyone", action="store_true", help="Open all access roles to anyone")
    rewrite_parser.add_argument("--replace-path", action="append", default=[],
                                help="Dotted path to copy from --source (repeatable)")
    rewrite_parser.add_argument("--scope", choices=scopes, help="Section(s) to copy from --source")
    rewrite_parser.add_argument("--source", help="Entity file to copy paths from")
    rewrite_parser.add_argument("--output", "-o", help="Write the result to this file")

    # select-version
    select_parser = subparsers.add_parser("select-version", help="Pick a version from a version listing")
    select_parser.add_argument("listing", help="JSON file with the version listing")
    select_parser.add_argument("selector", help="'newest', 'default' or an explicit version")

    # version-compare
    version_parser = subparsers.add_parser("version-compare", help="Compare two version strings")
    version_parser.add_argument("v1")
    version_parser.add_argument("v2")

    # filter
    filter_parser = subparsers.add_parser("filter", help="Filter entity names by pattern")
    filter_parser.add_argument("pattern", help="'$all', '/regex/' or an exact name")
    filter_parser.add_argument("names", nargs="+", help="Entity names")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging()

    try:
        if args.command == "compare":
            return compare_files(args.before, args.after, MetadataScope(args.scope), args.json)
        elif args.command == "canonical":
            return print_canonical(args.file, args.part)
        elif args.command == "rewrite":
            return rewrite_file(
                args.file,
                version=args.new_version,
                changelog=args.changelog,
                access_anyone=args.access_anyone,
                replace_paths=args.replace_path,
                source_path=args.source,
                scope=MetadataScope(args.scope) if args.scope else None,
                output=args.output
            )
        elif args.command == "select-version":
            return select_listing_version(args.listing, args.selector)
        elif args.command == "version-compare":
            return compare_versions(args.v1, args.v2)
        elif args.command == "filter":
            return filter_names(args.pattern, args.names)
    except (MetadataError, FileNotFoundError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
