"""
Version ordering for entity metadata revisions.

Version strings are dotted integers with an optional trailing "-SNAPSHOT"
marker for pre-release builds, e.g. "1.2.3" or "2.0-SNAPSHOT".
The ordering is used to pick the current, newest or default revision
of an entity out of a version listing.
"""
import json
import re
from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from metamodel.errors import MalformedInput, VersionFormatError

SNAPSHOT_SUFFIX = "-SNAPSHOT"

_SEGMENT_RE = re.compile(r"[0-9]+")


def _split_version(version: str) -> Tuple[List[int], bool]:
    """Strip the snapshot marker and parse the numeric segments."""
    is_snapshot = version.endswith(SNAPSHOT_SUFFIX)
    core = version[:-len(SNAPSHOT_SUFFIX)] if is_snapshot else version

    segments = []
    for segment in core.split("."):
        if not _SEGMENT_RE.fullmatch(segment):
            raise VersionFormatError(version, segment)
        segments.append(int(segment))

    return segments, is_snapshot


def version_compare(v1: str, v2: str) -> int:
    """
    Compare two version strings.

    Returns -1, 0 or 1. Segments are compared numerically; when one version
    is a prefix of the other the shorter one sorts first ("1.2" < "1.2.3");
    a snapshot sorts before the release with the same segments
    ("1.0-SNAPSHOT" < "1.0").

    Raises:
        VersionFormatError: if either version has a non-numeric segment
    """
    vals1, v1_snapshot = _split_version(v1)
    vals2, v2_snapshot = _split_version(v2)

    for a, b in zip(vals1, vals2):
        if a != b:
            return -1 if a < b else 1

    if len(vals1) != len(vals2):
        return -1 if len(vals1) < len(vals2) else 1

    if v1_snapshot and not v2_snapshot:
        return -1
    if v2_snapshot and not v1_snapshot:
        return 1
    return 0


version_sort_key = cmp_to_key(version_compare)


class EntityVersion(BaseModel):
    """One entry of an entity's version listing."""
    version: str
    changelog: str
    status: str
    default_version: bool = Field(alias="defaultVersion")

    class Config:
        extra = "ignore"
        frozen = True
        populate_by_name = True

    @classmethod
    def from_json(cls, text: str) -> "EntityVersion":
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise MalformedInput(f"Invalid entity version record: {e}") from e


def parse_version_listing(text: str) -> List[EntityVersion]:
    """
    Decode a JSON array of version records.

    Raises:
        MalformedInput: if the text is not JSON, not an array, or a record
            is missing a required field
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"Version listing is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedInput("Version listing must be a JSON array")

    try:
        return [EntityVersion.model_validate(item) for item in data]
    except ValidationError as e:
        raise MalformedInput(f"Invalid entity version record: {e}") from e


def newest(versions: Iterable[EntityVersion]) -> Optional[EntityVersion]:
    """The highest version, or None for an empty listing."""
    versions = list(versions)
    if not versions:
        return None
    return max(versions, key=lambda v: version_sort_key(v.version))


def default(versions: Iterable[EntityVersion]) -> Optional[EntityVersion]:
    """The version flagged as default, or None."""
    return next((v for v in versions if v.default_version), None)


def explicit(versions: Iterable[EntityVersion], version: str) -> Optional[EntityVersion]:
    """The version whose string is exactly `version`, or None."""
    return next((v for v in versions if v.version == version), None)
