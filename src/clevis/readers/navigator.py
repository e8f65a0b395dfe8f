#!/usr/bin/env python3
"""
CLEVIS NAVIGATOR - Structured Value Walker
------------------------------------------
Walks a parsed document along a list of PathSegments down to a scalar leaf.

The walk knows nothing about TOML or YAML. Each format supplies a TreeAdapter
describing how its tree looks (what is a mapping, what is a sequence, what is
a scalar, how to stringify a leaf), and the same algorithm drives both.
"""

from typing import Any, List, Optional

from clevis.core.errors import KeyNotFoundError
from clevis.core.models import PathSegment
from clevis.readers.stringify import stringify_scalar


class TreeAdapter:
    """
    Capability set the Navigator needs from a document tree.

    The defaults fit any tree built from plain dicts, lists and scalars;
    format adapters override only where their tree differs.
    """

    format_name = "structured"
    scalar_types: tuple = (str, int, float, bool)

    def is_mapping(self, node: Any) -> bool:
        return isinstance(node, dict)

    def is_sequence(self, node: Any) -> bool:
        return isinstance(node, list)

    def is_scalar(self, node: Any) -> bool:
        return isinstance(node, self.scalar_types)

    def has_key(self, node: Any, key: str) -> bool:
        return key in node

    def get_key(self, node: Any, key: str) -> Any:
        return node[key]

    def get_index(self, node: Any, index: int) -> Any:
        return node[index]

    def length(self, node: Any) -> int:
        return len(node)

    def stringify(self, node: Any) -> str:
        return stringify_scalar(node)


class Navigator:
    """
    Resolves PathSegments against one document root.

    A Navigator is bound to a single file so that every KeyNotFoundError it
    raises names that file and the dotted path walked so far.
    """

    def __init__(self, adapter: TreeAdapter, file_path: str):
        self.adapter = adapter
        self.file_path = file_path

    def _missing(self, walked: str, reason: Optional[str] = None) -> KeyNotFoundError:
        return KeyNotFoundError(walked, self.file_path, reason=reason)

    def _lookup_key(self, node: Any, name: str, walked: str) -> Any:
        if not self.adapter.is_mapping(node):
            raise self._missing(walked, "parent is not a table")
        if not self.adapter.has_key(node, name):
            raise self._missing(walked)
        return self.adapter.get_key(node, name)

    def _lookup_index(self, node: Any, index: int, walked: str) -> Any:
        if not self.adapter.is_sequence(node):
            raise self._missing(walked, "value is not an array")
        size = self.adapter.length(node)
        if index >= size:
            raise self._missing(walked, f"index out of bounds for array of length {size}")
        return self.adapter.get_index(node, index)

    def resolve(self, root: Any, segments: List[PathSegment]) -> Any:
        """Returns the raw node reached by following every segment."""
        node = root
        walked = ""
        for segment in segments:
            walked = f"{walked}.{segment.name}" if walked else segment.name
            node = self._lookup_key(node, segment.name, walked)
            if segment.index is not None:
                walked = f"{walked}[{segment.index}]"
                node = self._lookup_index(node, segment.index, walked)
        return node

    def read(self, root: Any, segments: List[PathSegment]) -> str:
        """
        Resolves the path and stringifies the leaf.

        Raises:
            KeyNotFoundError: any step fails, or the leaf is an array or table.
        """
        leaf = self.resolve(root, segments)
        full_path = ".".join(str(s) for s in segments)

        if self.adapter.is_sequence(leaf):
            raise self._missing(full_path, "array requires index")
        if self.adapter.is_mapping(leaf):
            raise self._missing(full_path, "table requires key")
        if not self.adapter.is_scalar(leaf):
            raise self._missing(full_path, f"unsupported {self.adapter.format_name} value "
                                           f"of type {type(leaf).__name__}")
        return self.adapter.stringify(leaf)
