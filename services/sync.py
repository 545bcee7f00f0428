"""
Preparing entity revisions for publishing.

These helpers only chain Entity edits; fetching and storing entities is
left to the caller.
"""
import logging
from typing import Optional

from metamodel.entity import Entity
from services.selection import MetadataScope

logger = logging.getLogger(__name__)


def apply_scope(target: Entity, source: Entity, scope: MetadataScope) -> Entity:
    """Copy the sections covered by `scope` from `source` into `target`."""
    logger.info(f"Applying {scope.value} of {source} onto {target}")

    result = target
    for path in scope.paths:
        result = result.with_replaced_path(path, source)
    return result


def prepare_entity(
    entity: Entity,
    version: Optional[str] = None,
    changelog: Optional[str] = None,
    access_anyone: bool = False
) -> Entity:
    """
    Apply the usual publishing edits to an entity.

    Args:
        version: new schema version (also moves entityInfo.defaultVersion if set)
        changelog: changelog message of the new revision
        access_anyone: open every access role to "anyone"
    """
    result = entity
    if version is not None:
        result = result.with_version(version)
    if changelog is not None:
        result = result.with_changelog(changelog)
    if access_anyone:
        result = result.with_access_anyone()

    if result is not entity:
        logger.info(f"Prepared {result} from {entity}")
    return result
