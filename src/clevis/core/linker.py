#!/usr/bin/env python3
"""
CLEVIS LINKER
-------------
The Accessor wraps exactly one reader and the Linker compares two Accessors.

The reader kinds form a closed set: every AccessorKind maps to exactly one
reader class in _READER_TYPES, and an Accessor refuses a reader that does
not match its kind.

Author: Clevis Team
"""

import enum
import logging
from dataclasses import dataclass
from typing import Tuple, Union

from clevis.core.errors import ConfigError
from clevis.readers.query_reader import QueryReader
from clevis.readers.span_reader import SpanReader
from clevis.readers.toml_reader import TomlReader
from clevis.readers.yaml_reader import YamlReader

logger = logging.getLogger("clevis.linker")

Reader = Union[SpanReader, TomlReader, YamlReader, QueryReader]


class AccessorKind(str, enum.Enum):
    SPAN = "span"
    TOML = "toml"
    YAML = "yaml"
    QUERY = "query"


_READER_TYPES = {
    AccessorKind.SPAN: SpanReader,
    AccessorKind.TOML: TomlReader,
    AccessorKind.YAML: YamlReader,
    AccessorKind.QUERY: QueryReader,
}


@dataclass(frozen=True)
class Accessor:
    """
    A named way to obtain a string value: one kind tag plus its reader.
    """
    kind: AccessorKind
    reader: Reader

    def __post_init__(self):
        expected = _READER_TYPES[self.kind]
        if not isinstance(self.reader, expected):
            raise ConfigError(
                f"Accessor of kind '{self.kind.value}' needs a {expected.__name__}, "
                f"got {type(self.reader).__name__}"
            )

    @classmethod
    def span(cls, reader: SpanReader) -> "Accessor":
        return cls(AccessorKind.SPAN, reader)

    @classmethod
    def toml(cls, reader: TomlReader) -> "Accessor":
        return cls(AccessorKind.TOML, reader)

    @classmethod
    def yaml(cls, reader: YamlReader) -> "Accessor":
        return cls(AccessorKind.YAML, reader)

    @classmethod
    def query(cls, reader: QueryReader) -> "Accessor":
        return cls(AccessorKind.QUERY, reader)

    @property
    def file_path(self) -> str:
        return self.reader.file_path

    def read(self) -> str:
        """Returns the active reader's value unchanged, or raises its error."""
        # kind and reader type were matched in __post_init__
        return self.reader.read()

    def describe(self) -> str:
        return self.reader.describe()


@dataclass(frozen=True)
class Linker:
    """
    Two Accessors whose values must be equal.

    Equality is exact: no trimming, no case folding, no numeric comparison.
    A failed read is never a mismatch; the error propagates and `b` is not
    read when `a` already failed.
    """
    a: Accessor
    b: Accessor

    def compare(self) -> Tuple[bool, str, str]:
        """Reads both sides once and returns `(matched, value_a, value_b)`."""
        value_a = self.a.read()
        value_b = self.b.read()
        matched = value_a == value_b
        logger.debug(f"{self.a.describe()} vs {self.b.describe()}: "
                     f"{'match' if matched else 'mismatch'}")
        return matched, value_a, value_b

    def check(self) -> bool:
        return self.compare()[0]
