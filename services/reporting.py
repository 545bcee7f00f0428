"""
Plain-text reports of entity comparisons.
"""
import json
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from config import settings
from metamodel.diff import ChangeType, ComparisonResult, Delta


def format_value_compact(value: Any) -> str:
    """Format a value for display in a compact way."""
    if value is None:
        return "null"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(',', ':'))
    return str(value)


def group_changes_by_signature(changes_with_entities: Iterable[Tuple[str, Delta]]) -> Dict[str, dict]:
    """
    Group changes across multiple entities by their signature.

    Args:
        changes_with_entities: (entity_name, Delta) pairs

    Returns:
        Dict mapping signature to {change: Delta, entities: [entity names]}
    """
    grouped = {}

    for entity_name, change in changes_with_entities:
        sig = change.signature
        if sig not in grouped:
            grouped[sig] = {
                "change": change,
                "entities": []
            }
        grouped[sig]["entities"].append(entity_name)

    return grouped


def render_comparison_report(
    before_label: str,
    after_label: str,
    result: ComparisonResult,
    generated_at: Optional[datetime] = None
) -> str:
    """Generate a text report for a comparison of two entities."""
    generated_at = generated_at or datetime.now(timezone.utc)

    lines = [
        "=" * 70,
        "ENTITY METADATA COMPARISON REPORT",
        f"{settings.APP_NAME} v{settings.APP_VERSION}",
        "=" * 70,
        "",
        f"Timestamp:        {generated_at.isoformat()}",
        f"Before:           {before_label}",
        f"After:            {after_label}",
        "",
    ]

    if result.is_identical:
        lines.extend([
            "-" * 40,
            "RESULT: NO DIFFERENCES FOUND",
            "-" * 40,
            "",
            "The two entities are identical.",
        ])
    else:
        lines.extend([
            "-" * 40,
            f"RESULT: {result.change_count} DIFFERENCE(S) FOUND",
            "-" * 40,
            "",
        ])

        for i, change in enumerate(result.changes, 1):
            lines.extend([
                f"Change #{i}",
                f"  Field:       {change.path}",
                f"  Type:        {change.change_type.value.upper()}",
            ])
            if change.change_type != ChangeType.ADDED:
                lines.append(f"  Old Value:   {json.dumps(change.old_value)}")
            if change.change_type != ChangeType.REMOVED:
                lines.append(f"  New Value:   {json.dumps(change.new_value)}")
            lines.append("")

    lines.extend([
        "=" * 70,
        "END OF REPORT",
        "=" * 70,
    ])

    return "\n".join(lines)
