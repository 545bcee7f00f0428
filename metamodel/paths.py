"""
Dotted-path access into JSON object trees.

A path such as "schema.version.value" addresses object members only;
there are no array index segments. Reading a missing final member is not
an error and yields ABSENT, while a missing intermediate member raises
PathNotFound. Writing never creates intermediate objects.
"""
from typing import Any, Sequence, Tuple, Union

from metamodel.errors import InvalidPath, PathNotFound

Path = Union[str, Sequence[str]]


class _Absent:
    """Marker for a member that does not exist (as opposed to JSON null)."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def parse_path(path: Path) -> Tuple[str, ...]:
    """Split a dotted path into its segments."""
    if isinstance(path, str):
        segments = tuple(path.split("."))
        label = path
    else:
        segments = tuple(path)
        label = ".".join(segments)

    if not segments or any(not s for s in segments):
        raise InvalidPath(label)
    return segments


def _descend(root: Any, segments: Tuple[str, ...]) -> Any:
    """Walk every segment except the last and return the parent node."""
    label = ".".join(segments)
    node = root
    for segment in segments[:-1]:
        if not isinstance(node, dict) or segment not in node:
            raise PathNotFound(label, segment)
        node = node[segment]
    return node


def get_path(root: Any, path: Path) -> Any:
    """
    Return the node stored at `path`, or ABSENT if the final member is missing.

    Raises:
        PathNotFound: if an intermediate segment does not resolve
    """
    segments = parse_path(path)
    parent = _descend(root, segments)
    if not isinstance(parent, dict):
        return ABSENT
    return parent.get(segments[-1], ABSENT)


def put_path(root: Any, value: Any, path: Path):
    """
    Set the member at `path` to `value`, in place.

    Callers are responsible for passing a tree they own.

    Raises:
        PathNotFound: if an intermediate segment does not resolve or the
            parent of the final member is not an object
    """
    segments = parse_path(path)
    parent = _descend(root, segments)
    if not isinstance(parent, dict):
        label = ".".join(segments)
        raise PathNotFound(label, segments[-1], f"Cannot set '{segments[-1]}' in '{label}': parent is not an object")
    parent[segments[-1]] = value
