# entity-metadata v0.3.0
"""
Entity metadata model.
Contains the immutable Entity document, canonical serialization,
leaf-level diffing, dotted-path access and version ordering.
"""
from metamodel.errors import (
    MetadataError,
    MalformedInput,
    PathNotFound,
    InvalidPath,
    VersionFormatError
)
from metamodel.versions import (
    version_compare,
    version_sort_key,
    EntityVersion,
    parse_version_listing,
    newest,
    default,
    explicit
)
from metamodel.canonical import (
    canonical,
    CanonicalSerializer,
    SerializerConfig
)
from metamodel.paths import (
    ABSENT,
    parse_path,
    get_path,
    put_path
)
from metamodel.diff import (
    compare_documents,
    ChangeType,
    ComparisonResult,
    Delta,
    DiffConfig,
    DiffEngine
)
from metamodel.entity import Entity
from metamodel.file_parser import (
    load_entity_file,
    load_version_listing,
    parse_entity_content
)

__all__ = [
    "MetadataError",
    "MalformedInput",
    "PathNotFound",
    "InvalidPath",
    "VersionFormatError",
    "version_compare",
    "version_sort_key",
    "EntityVersion",
    "parse_version_listing",
    "newest",
    "default",
    "explicit",
    "canonical",
    "CanonicalSerializer",
    "SerializerConfig",
    "ABSENT",
    "parse_path",
    "get_path",
    "put_path",
    "compare_documents",
    "ChangeType",
    "ComparisonResult",
    "Delta",
    "DiffConfig",
    "DiffEngine",
    "Entity",
    "load_entity_file",
    "load_version_listing",
    "parse_entity_content"
]
