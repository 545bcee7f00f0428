"""
Canonical text form of JSON values.

Two structurally equal values always render to the same text: object keys
are sorted at every nesting level, arrays keep their order and indentation
is fixed per level. The canonical text is what gets compared, shown in
diffs and hashed.
"""
import hashlib
import json
from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class SerializerConfig:
    """Layout of the canonical text."""
    indent: str = "    "
    line_terminator: str = "\n"
    key_separator: str = " : "


class CanonicalSerializer:
    """Renders JSON values (dict/list/str/int/float/bool/None) canonically."""

    def __init__(self, config: SerializerConfig = SerializerConfig()):
        self.config = config

    def canonical(self, node: Any) -> str:
        parts: List[str] = []
        self._write(node, 0, parts)
        return "".join(parts)

    def digest(self, node: Any) -> str:
        """SHA-256 of the canonical text."""
        return hashlib.sha256(self.canonical(node).encode("utf-8")).hexdigest()

    def _newline(self, level: int) -> str:
        return self.config.line_terminator + self.config.indent * level

    def _write(self, node: Any, level: int, out: List[str]):
        if isinstance(node, dict):
            if not node:
                out.append("{ }")
                return
            out.append("{")
            for i, key in enumerate(sorted(node)):
                if not isinstance(key, str):
                    raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
                if i:
                    out.append(",")
                out.append(self._newline(level + 1))
                out.append(_scalar(key))
                out.append(self.config.key_separator)
                self._write(node[key], level + 1, out)
            out.append(self._newline(level))
            out.append("}")
        elif isinstance(node, list):
            if not node:
                out.append("[ ]")
                return
            out.append("[")
            for i, item in enumerate(node):
                if i:
                    out.append(",")
                out.append(self._newline(level + 1))
                self._write(item, level + 1, out)
            out.append(self._newline(level))
            out.append("]")
        else:
            out.append(_scalar(node))


def _scalar(value: Any) -> str:
    if value is None or isinstance(value, (str, bool, int, float)):
        return json.dumps(value, ensure_ascii=False)
    raise TypeError(f"Value of type {type(value).__name__} is not JSON serializable")


DEFAULT_SERIALIZER = CanonicalSerializer()


def canonical(node: Any) -> str:
    """Canonical text using the default layout."""
    return DEFAULT_SERIALIZER.canonical(node)
