# entity-metadata v0.3.0
"""
Services package for the Entity Metadata Toolkit.
Contains entity selection, publishing and reporting workflows.
"""
from services.selection import MetadataScope, entity_name_filter, select_version
from services.sync import apply_scope, prepare_entity
from services.reporting import (
    render_comparison_report,
    format_value_compact,
    group_changes_by_signature
)

__all__ = [
    "MetadataScope",
    "entity_name_filter",
    "select_version",
    "apply_scope",
    "prepare_entity",
    "render_comparison_report",
    "format_value_compact",
    "group_changes_by_signature"
]
