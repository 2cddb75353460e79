"""
Shape normalization: arbitrary JSON payload -> ordered group/row model.
"""

from typing import Any, List

from metaview.logger import get_logger
from metaview.meta.models import GroupMap, RawPayload, Row, ValueKind, classify_value
from metaview.meta.stringify import stringify_value

logger = get_logger(__name__)

ROOT_COMPONENT = "(root)"


def _group_rows(group_value: Any) -> List[Row]:
    if classify_value(group_value) is ValueKind.OBJECT:
        return [
            Row(component=str(key), identifier=stringify_value(value))
            for key, value in group_value.items()
        ]
    # Scalars, nulls and arrays still get one row so the group stays visible
    return [Row(component=ROOT_COMPONENT, identifier=stringify_value(group_value))]


def normalize(raw: RawPayload) -> GroupMap:
    """
    Normalize a raw payload into a mapping of group name -> rows.

    Only a top-level object produces groups; anything else yields an empty
    mapping. Every top-level key becomes a group, in source order. Object
    values expand into one row per entry; any other value (arrays included)
    becomes a single "(root)" row.

    Args:
        raw: Decoded JSON payload of unknown shape

    Returns:
        Ordered GroupMap
    """
    if classify_value(raw) is not ValueKind.OBJECT:
        return {}
    groups: GroupMap = {}
    for group, value in raw.items():
        name = str(group)
        # Distinct Python keys can share a display name ({1: ..., "1": ...}); first one wins
        if name in groups:
            logger.warning(f"Duplicate group name {name!r} after string coercion; keeping the first")
            continue
        groups[name] = _group_rows(value)
    return groups


def total_rows(groups: GroupMap) -> int:
    """Sum of row counts across all groups."""
    return sum(len(rows) for rows in groups.values())
