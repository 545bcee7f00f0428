"""
Selecting which entities and which revisions to operate on.
"""
import logging
import re
from enum import Enum
from typing import Iterable, Optional, Tuple

from metamodel.versions import EntityVersion, default, explicit, newest

logger = logging.getLogger(__name__)

ALL_ENTITIES = "$all"
NEWEST = "newest"
DEFAULT = "default"

_REGEX_PATTERN = re.compile(r"^/(.*?)/$")


class MetadataScope(str, Enum):
    """Which sections of an entity an operation covers."""
    SCHEMA = "schema"
    ENTITYINFO = "entityInfo"
    BOTH = "both"

    @property
    def paths(self) -> Tuple[str, ...]:
        if self == MetadataScope.SCHEMA:
            return ("schema",)
        if self == MetadataScope.ENTITYINFO:
            return ("entityInfo",)
        return ("entityInfo", "schema")


def entity_name_filter(entity: str, pattern: str) -> bool:
    """
    Match an entity name against a pattern.

    "$all" matches every entity, "/regex/" matches the whole name against
    the regex, anything else must equal the name.
    """
    if pattern == ALL_ENTITIES:
        logger.debug("Matching with $all")
        return True

    match = _REGEX_PATTERN.match(pattern)
    if match:
        logger.debug(f"Matching entity {entity} against '{match.group(1)}' pattern")
        return re.fullmatch(match.group(1), entity) is not None

    logger.debug(f"Matching {entity} == {pattern}")
    return entity == pattern


def select_version(versions: Iterable[EntityVersion], selector: str) -> Optional[EntityVersion]:
    """Pick a version by "newest", "default" or an explicit version string."""
    versions = list(versions)
    if selector == NEWEST:
        return newest(versions)
    if selector == DEFAULT:
        return default(versions)
    return explicit(versions, selector)
