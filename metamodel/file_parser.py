"""
Loading entity documents and version listings.

Entities arrive as JSON text, either as files exported from a metadata
store or as payloads fetched by other tooling.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from metamodel.canonical import CanonicalSerializer
from metamodel.diff import DiffEngine
from metamodel.entity import Entity
from metamodel.errors import MalformedInput
from metamodel.versions import EntityVersion, parse_version_listing

logger = logging.getLogger(__name__)


def parse_entity_content(
    content: Union[str, bytes],
    source: str = "<string>",
    serializer: Optional[CanonicalSerializer] = None,
    diff_engine: Optional[DiffEngine] = None
) -> Entity:
    """
    Parse JSON content into an Entity.

    Args:
        content: JSON text (bytes are decoded as UTF-8)
        source: label used in error messages, usually the file name

    Raises:
        MalformedInput: if the content is not a valid entity document
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInput(f"{source}: not UTF-8 encoded: {e}") from e

    try:
        return Entity.from_json(content, serializer=serializer, diff_engine=diff_engine)
    except MalformedInput as e:
        raise MalformedInput(f"{source}: {e}") from e


def load_entity_file(
    file_path: Union[str, Path],
    serializer: Optional[CanonicalSerializer] = None,
    diff_engine: Optional[DiffEngine] = None
) -> Entity:
    """
    Load an entity from a JSON file.

    Raises:
        FileNotFoundError: if the file does not exist
        MalformedInput: if the file is not a valid entity document
    """
    path = Path(file_path)
    logger.debug(f"Loading entity from {path}")

    content = path.read_text(encoding="utf-8")
    entity = parse_entity_content(content, path.name, serializer, diff_engine)

    logger.info(f"Loaded entity {entity} from {path.name}")
    return entity


def load_version_listing(file_path: Union[str, Path]) -> List[EntityVersion]:
    """Load a version listing (JSON array of version records) from a file."""
    path = Path(file_path)
    content = path.read_text(encoding="utf-8")

    try:
        versions = parse_version_listing(content)
    except MalformedInput as e:
        raise MalformedInput(f"{path.name}: {e}") from e

    logger.debug(f"Loaded {len(versions)} version(s) from {path.name}")
    return versions
