"""
Exceptions raised by the entity metadata model.

Every error here is deterministic: the input is either well formed and the
operation succeeds, or it fails with one of these and nothing is retried.
"""
from typing import Optional


class MetadataError(Exception):
    """Base class for all metadata model errors."""


class MalformedInput(MetadataError, ValueError):
    """The document is not valid JSON or lacks a required member."""


class PathNotFound(MetadataError, KeyError):
    """An intermediate segment of a dotted path does not resolve."""

    def __init__(self, path: str, segment: Optional[str] = None, message: Optional[str] = None):
        self.path = path
        self.segment = segment
        if message is None:
            message = f"Path segment '{segment}' not found while resolving '{path}'"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class InvalidPath(PathNotFound):
    """A dotted path that cannot be parsed (e.g. an empty segment)."""

    def __init__(self, path: str):
        super().__init__(path, message=f"Invalid path '{path}': empty segment")


class VersionFormatError(MetadataError, ValueError):
    """A version string has a segment that is not an integer."""

    def __init__(self, version: str, segment: Optional[str] = None):
        self.version = version
        self.segment = segment
        super().__init__(f"Invalid version '{version}': segment '{segment}' is not numeric")
