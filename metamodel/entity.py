"""
Entity metadata document.

An Entity wraps a JSON object with two required members, "entityInfo" and
"schema". It is immutable: every with_* method deep-copies the backing tree,
applies one edit and returns a new Entity. Construction strips the "_id"
members that the metadata store adds to both sections.
"""
import copy
import json
import logging
from typing import Any, Callable, List, Optional

from metamodel.canonical import CanonicalSerializer, DEFAULT_SERIALIZER
from metamodel.diff import DEFAULT_DIFF_ENGINE, Delta, DiffEngine
from metamodel.errors import MalformedInput, PathNotFound
from metamodel.paths import ABSENT, get_path, parse_path, put_path

logger = logging.getLogger(__name__)

ENTITY_INFO = "entityInfo"
SCHEMA = "schema"
ACCESS_ANYONE = "anyone"


def _normalize(root: Any) -> dict:
    """Validate the document shape and strip store-generated ids, in place."""
    if not isinstance(root, dict):
        raise MalformedInput("Entity document must be a JSON object")

    for member in (ENTITY_INFO, SCHEMA):
        if not isinstance(root.get(member), dict):
            raise MalformedInput(f"Entity document is missing the '{member}' object")

    if not isinstance(root[SCHEMA].get("version"), dict):
        raise MalformedInput("Entity document is missing the 'schema.version' object")

    root[SCHEMA].pop("_id", None)
    root[ENTITY_INFO].pop("_id", None)
    return root


class Entity:
    """
    Immutable entity metadata (entityInfo + schema).

    Args:
        document: parsed JSON object; it is copied, the caller keeps no
            reference into the entity
        serializer: canonical text writer used for the *_text accessors
        diff_engine: engine used by compare_to
    """

    __slots__ = ("_root", "_serializer", "_diff_engine")

    def __init__(
        self,
        document: dict,
        serializer: Optional[CanonicalSerializer] = None,
        diff_engine: Optional[DiffEngine] = None
    ):
        self._root = _normalize(copy.deepcopy(document))
        self._serializer = serializer or DEFAULT_SERIALIZER
        self._diff_engine = diff_engine or DEFAULT_DIFF_ENGINE

    @classmethod
    def from_json(
        cls,
        text: str,
        serializer: Optional[CanonicalSerializer] = None,
        diff_engine: Optional[DiffEngine] = None
    ) -> "Entity":
        """Parse an entity from JSON text."""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedInput(f"Entity is not valid JSON: {e}") from e
        return cls._adopt(document, serializer, diff_engine)

    @classmethod
    def _adopt(cls, root: Any, serializer, diff_engine) -> "Entity":
        """Wrap a tree nobody else references, without copying it again."""
        entity = cls.__new__(cls)
        entity._root = _normalize(root)
        entity._serializer = serializer or DEFAULT_SERIALIZER
        entity._diff_engine = diff_engine or DEFAULT_DIFF_ENGINE
        return entity

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def json(self) -> dict:
        """A copy of the whole document."""
        return copy.deepcopy(self._root)

    @property
    def entity_info_json(self) -> dict:
        return copy.deepcopy(self._root[ENTITY_INFO])

    @property
    def schema_json(self) -> dict:
        return copy.deepcopy(self._root[SCHEMA])

    @property
    def name(self) -> Optional[str]:
        return self._root[ENTITY_INFO].get("name")

    @property
    def version(self) -> Optional[str]:
        return self._root[SCHEMA]["version"].get("value")

    @property
    def changelog(self) -> Optional[str]:
        return self._root[SCHEMA]["version"].get("changelog")

    @property
    def default_version(self) -> Optional[str]:
        return self._root[ENTITY_INFO].get("defaultVersion")

    @property
    def text(self) -> str:
        return self._serializer.canonical(self._root)

    @property
    def entity_info_text(self) -> str:
        return self._serializer.canonical(self._root[ENTITY_INFO])

    @property
    def schema_text(self) -> str:
        return self._serializer.canonical(self._root[SCHEMA])

    # ------------------------------------------------------------------
    # Copy-producing edits
    # ------------------------------------------------------------------

    def with_access_anyone(self) -> "Entity":
        """Set every role in schema.access to ["anyone"]."""
        logger.debug(f"Opening access to anyone for {self}")

        def edit(root: dict):
            access = get_path(root, "schema.access")
            if not isinstance(access, dict):
                raise PathNotFound("schema.access", "access")
            for role in access:
                access[role] = [ACCESS_ANYONE]

        return self._modify_copy(edit)

    def with_replaced_path(self, path: str, source: "Entity") -> "Entity":
        """Copy the node at `path` in `source` into this entity at the same path."""
        logger.debug(f"Replacing {path}")

        segments = parse_path(path)

        def edit(root: dict):
            node = get_path(source._root, segments)
            logger.debug(f"Replacing with {node!r}")
            # a member missing in the source is written as null
            put_path(root, None if node is ABSENT else copy.deepcopy(node), segments)

        return self._modify_copy(edit)

    def with_changelog(self, message: str) -> "Entity":
        logger.debug(f"Setting changelog to {message}")

        def edit(root: dict):
            put_path(root, message, "schema.version.changelog")

        return self._modify_copy(edit)

    def with_version(self, version: str) -> "Entity":
        """Set schema.version.value, keeping entityInfo.defaultVersion in sync if present."""
        logger.debug(f"Setting version to {version}")

        def edit(root: dict):
            put_path(root, version, "schema.version.value")
            if "defaultVersion" in root[ENTITY_INFO]:
                put_path(root, version, "entityInfo.defaultVersion")

        return self._modify_copy(edit)

    def _modify_copy(self, edit: Callable[[dict], None]) -> "Entity":
        root = copy.deepcopy(self._root)
        edit(root)
        return Entity._adopt(root, self._serializer, self._diff_engine)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare_to(self, other: "Entity") -> List[Delta]:
        """Leaf changes turning this entity into `other`."""
        return self._diff_engine.diff(self._root, other._root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return f"{self.name}|{self.version}"

    def __repr__(self) -> str:
        return f"Entity({self})"
