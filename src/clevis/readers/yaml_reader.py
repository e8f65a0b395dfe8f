#!/usr/bin/env python3
"""
CLEVIS YAML READER
------------------
Reads a value out of a YAML document by dotted key path, e.g.
`server.port` or `spec.containers[0].image`.

Only the first document of a multi-document stream is navigated. A bare
document without a leading `---` is treated as if it had one.
Timestamps are not interpreted: `2024-01-15 10:00:00` reads back exactly as
written.
"""

import logging
from dataclasses import dataclass
from typing import Any, List

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

from clevis.core.errors import ParseError
from clevis.readers.key_path import parse_key_path
from clevis.readers.navigator import Navigator, TreeAdapter
from clevis.readers.source import read_source
from clevis.readers.stringify import stringify_scalar

logger = logging.getLogger("clevis.readers")

_MISSING = object()


class YamlTree(TreeAdapter):
    """
    Mappings are dicts, sequences are lists, and `~`/`null` is a valid leaf.

    YAML allows non-string keys (`200: OK`, `true: yes`); a path segment
    matches such a key when the key's canonical string equals the segment.
    """

    format_name = "YAML"
    scalar_types = (str, int, float, bool, type(None))

    def _find_key(self, node: dict, key: str) -> Any:
        if key in node:
            return node[key]
        for candidate, value in node.items():
            if isinstance(candidate, str) or not self.is_scalar(candidate):
                continue
            if stringify_scalar(candidate) == key:
                return value
        return _MISSING

    def has_key(self, node: Any, key: str) -> bool:
        return self._find_key(node, key) is not _MISSING

    def get_key(self, node: Any, key: str) -> Any:
        return self._find_key(node, key)


class TextTimestampConstructor(SafeConstructor):
    """Safe constructor that leaves timestamps as the text they were written as."""


TextTimestampConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp", SafeConstructor.construct_yaml_str
)


def ensure_document_marker(text: str) -> str:
    """
    Prefixes `---` unless the first significant line already opens a document
    or a directive. Leading comments and blank lines are not significant.
    """
    for line in text.split('\n'):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        if stripped == "---" or stripped.startswith(("--- ", "---\t", "%")):
            return text
        break
    return f"---\n{text}"


def load_yaml_documents(text: str, file_path: str) -> List[Any]:
    yaml_parser = YAML(typ='safe')
    yaml_parser.Constructor = TextTimestampConstructor
    try:
        return list(yaml_parser.load_all(ensure_document_marker(text)))
    except YAMLError as e:
        raise ParseError("YAML", file_path, str(e)) from e


@dataclass(frozen=True)
class YamlReader:
    file_path: str
    key_path: str

    def read(self) -> str:
        segments = parse_key_path(self.key_path, self.file_path)
        documents = load_yaml_documents(read_source(self.file_path), self.file_path)
        if not documents:
            raise ParseError("YAML", self.file_path, "No YAML documents found")

        logger.debug(f"Resolving '{self.key_path}' in YAML file {self.file_path} "
                     f"({len(documents)} document(s))")
        return Navigator(YamlTree(), self.file_path).read(documents[0], segments)

    def describe(self) -> str:
        return f"yaml {self.file_path} @ {self.key_path}"
