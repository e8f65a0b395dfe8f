#!/usr/bin/env python3
"""
CLEVIS TOML READER
------------------
Reads a value out of a TOML document by dotted key path, e.g.
`package.version` or `workspace.members[0]`.
"""

import datetime
import logging
import tomllib
from dataclasses import dataclass
from typing import Any

from clevis.core.errors import ParseError
from clevis.readers.key_path import parse_key_path
from clevis.readers.navigator import Navigator, TreeAdapter
from clevis.readers.source import read_source

logger = logging.getLogger("clevis.readers")


class TomlTree(TreeAdapter):
    """Tables are dicts, arrays are lists; TOML has no null."""

    format_name = "TOML"
    scalar_types = (str, int, float, bool, datetime.datetime, datetime.date, datetime.time)


def load_toml(text: str, file_path: str) -> Any:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ParseError("TOML", file_path, str(e)) from e


@dataclass(frozen=True)
class TomlReader:
    file_path: str
    key_path: str

    def read(self) -> str:
        segments = parse_key_path(self.key_path, self.file_path)
        document = load_toml(read_source(self.file_path), self.file_path)
        logger.debug(f"Resolving '{self.key_path}' in TOML file {self.file_path}")
        return Navigator(TomlTree(), self.file_path).read(document, segments)

    def describe(self) -> str:
        return f"toml {self.file_path} @ {self.key_path}"
