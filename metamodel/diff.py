"""
Leaf-level structural diff of JSON documents.

Every change record names the full dotted path of a single leaf value that
was added, removed or modified; subtree additions and removals are expanded
into the leaves they contain. Arrays are compared as multisets, so
reordering the members of an access list or tag list is not a change.

The dotted `path` is for display: a key containing "." or made of digits
reads the same as a nested member or an array index. `segments` holds the
unambiguous path.
"""
import hashlib
import json
from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Iterator, List, Optional, Tuple

from metamodel.canonical import CanonicalSerializer, DEFAULT_SERIALIZER


class ChangeType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass
class Delta:
    """A single leaf change between two documents."""
    path: str
    change_type: ChangeType
    old_value: Any = None
    new_value: Any = None

    # Computed signature for grouping identical changes
    signature: str = ""

    # Path as member names and array indexes
    segments: Tuple[str, ...] = field(default=(), repr=False)

    def __post_init__(self):
        if not self.signature:
            self.signature = self.compute_signature()

    @property
    def value(self) -> Any:
        """The value the change introduces, or the removed value."""
        if self.change_type == ChangeType.REMOVED:
            return self.old_value
        return self.new_value

    def compute_signature(self) -> str:
        """
        Compute a signature for grouping identical changes across entities.
        Two deltas with the same signature describe the same edit.
        """
        sig_parts = [
            self.path,
            self.change_type.value,
            json.dumps(self.old_value, sort_keys=True),
            json.dumps(self.new_value, sort_keys=True)
        ]
        sig_str = "|".join(sig_parts)
        return hashlib.sha256(sig_str.encode()).hexdigest()[:16]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "path": self.path,
            "change_type": self.change_type.value,
            "signature": self.signature
        }
        if self.change_type != ChangeType.ADDED:
            result["old_value"] = self.old_value
        if self.change_type != ChangeType.REMOVED:
            result["new_value"] = self.new_value
        return result


@dataclass(frozen=True)
class DiffConfig:
    """Options of the diff engine."""
    array_order_insignificant: bool = True


def _element_key(obj: Any) -> str:
    """
    Order-insensitive key of a value, used to match array elements.
    Nested objects are key-sorted and nested arrays are sorted. Numbers key
    by value (1 and 1.0 match), booleans never match numbers.
    """
    if isinstance(obj, dict):
        parts = [f"{json.dumps(key)}:{_element_key(obj[key])}" for key in sorted(obj)]
        return "{" + ",".join(parts) + "}"
    if isinstance(obj, list):
        return "[" + ",".join(sorted(_element_key(item) for item in obj)) + "]"
    if isinstance(obj, float) and obj.is_integer():
        return json.dumps(int(obj))
    return json.dumps(obj)


def _scalars_equal(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    return type(a) is type(b) and a == b


def _leaves(node: Any, path: Tuple[str, ...]) -> Iterator[Tuple[Tuple[str, ...], Any]]:
    """Yield (path, value) for every leaf below `node`; empty containers are leaves."""
    if isinstance(node, dict) and node:
        for key in sorted(node):
            yield from _leaves(node[key], path + (key,))
    elif isinstance(node, list) and node:
        for i, item in enumerate(node):
            yield from _leaves(item, path + (str(i),))
    else:
        yield path, node


class DiffEngine:
    """Computes the ordered list of leaf changes turning `a` into `b`."""

    def __init__(self, config: DiffConfig = DiffConfig()):
        self.config = config

    def diff(self, a: Any, b: Any) -> List[Delta]:
        changes: List[Delta] = []
        self._diff(a, b, (), changes)
        return changes

    def _diff(self, old: Any, new: Any, path: Tuple[str, ...], out: List[Delta]):
        if isinstance(old, dict) and isinstance(new, dict):
            for key in sorted(set(old) | set(new)):
                key_path = path + (key,)
                if key not in old:
                    self._added(new[key], key_path, out)
                elif key not in new:
                    self._removed(old[key], key_path, out)
                else:
                    self._diff(old[key], new[key], key_path, out)
            return

        if isinstance(old, list) and isinstance(new, list):
            if self.config.array_order_insignificant:
                self._diff_unordered(old, new, path, out)
            else:
                self._diff_ordered(old, new, path, out)
            return

        old_is_container = isinstance(old, (dict, list))
        new_is_container = isinstance(new, (dict, list))
        if old_is_container or new_is_container:
            # Type change: the old leaves go away and the new ones appear
            self._removed(old, path, out)
            self._added(new, path, out)
            return

        if not _scalars_equal(old, new):
            out.append(Delta(
                path=".".join(path),
                segments=path,
                change_type=ChangeType.MODIFIED,
                old_value=old,
                new_value=new
            ))

    def _diff_ordered(self, old: list, new: list, path: Tuple[str, ...], out: List[Delta]):
        for i in range(max(len(old), len(new))):
            item_path = path + (str(i),)
            if i >= len(new):
                self._removed(old[i], item_path, out)
            elif i >= len(old):
                self._added(new[i], item_path, out)
            else:
                self._diff(old[i], new[i], item_path, out)

    def _diff_unordered(self, old: list, new: list, path: Tuple[str, ...], out: List[Delta]):
        """
        Match equal elements first, then pair the leftovers by position.

        Paired leftovers are diffed recursively and reported under the index
        of the old element; unpaired old elements are removed, unpaired new
        elements are added under their own index.
        """
        pool: Dict[str, Deque[int]] = defaultdict(deque)
        for i, item in enumerate(old):
            pool[_element_key(item)].append(i)

        matched_old = set()
        unmatched_new = []
        for j, item in enumerate(new):
            candidates = pool.get(_element_key(item))
            if candidates:
                matched_old.add(candidates.popleft())
            else:
                unmatched_new.append(j)

        unmatched_old = [i for i in range(len(old)) if i not in matched_old]

        for i, j in zip(unmatched_old, unmatched_new):
            self._diff(old[i], new[j], path + (str(i),), out)
        for i in unmatched_old[len(unmatched_new):]:
            self._removed(old[i], path + (str(i),), out)
        for j in unmatched_new[len(unmatched_old):]:
            self._added(new[j], path + (str(j),), out)

    def _added(self, node: Any, path: Tuple[str, ...], out: List[Delta]):
        for leaf_path, value in _leaves(node, path):
            out.append(Delta(path=".".join(leaf_path), change_type=ChangeType.ADDED, new_value=value, segments=leaf_path))

    def _removed(self, node: Any, path: Tuple[str, ...], out: List[Delta]):
        for leaf_path, value in _leaves(node, path):
            out.append(Delta(path=".".join(leaf_path), change_type=ChangeType.REMOVED, old_value=value, segments=leaf_path))


DEFAULT_DIFF_ENGINE = DiffEngine()


@dataclass
class ComparisonResult:
    """Result of comparing two documents."""
    changes: List[Delta] = field(default_factory=list)
    old_hash: str = ""
    new_hash: str = ""
    is_identical: bool = True

    @property
    def change_count(self) -> int:
        return len(self.changes)

    @property
    def changes_by_signature(self) -> Dict[str, Delta]:
        """Group changes by signature for bulk operations."""
        return {c.signature: c for c in self.changes}

    def to_dict(self) -> dict:
        return {
            "is_identical": self.is_identical,
            "change_count": self.change_count,
            "old_hash": self.old_hash,
            "new_hash": self.new_hash,
            "changes": [c.to_dict() for c in self.changes]
        }


def compare_documents(
    old_doc: Any,
    new_doc: Any,
    engine: Optional[DiffEngine] = None,
    serializer: Optional[CanonicalSerializer] = None
) -> ComparisonResult:
    """
    Compare two JSON documents.

    Documents with the same canonical hash are identical and are not walked.
    Note that reordered arrays hash differently but still produce no changes.
    """
    engine = engine or DEFAULT_DIFF_ENGINE
    serializer = serializer or DEFAULT_SERIALIZER

    old_hash = serializer.digest(old_doc)
    new_hash = serializer.digest(new_doc)

    if old_hash == new_hash:
        return ComparisonResult(changes=[], old_hash=old_hash, new_hash=new_hash, is_identical=True)

    changes = engine.diff(old_doc, new_doc)

    return ComparisonResult(
        changes=changes,
        old_hash=old_hash,
        new_hash=new_hash,
        is_identical=len(changes) == 0
    )
