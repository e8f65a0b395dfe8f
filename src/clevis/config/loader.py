#!/usr/bin/env python3
"""
CLEVIS CONFIG LOADER
--------------------
Reads `clevis.toml` and turns every `[links.<key>]` table into a Linker.

    [links.version.a]
    kind = "toml"
    file_path = "Cargo.toml"
    key_path = "package.version"

    [links.version.b]
    kind = "span"
    file_path = "README.md"
    start = { line = 3, column = 12 }
    end = { line = 3, column = 16 }

Relative file paths resolve against the directory holding the config file.

Author: Clevis Team
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from clevis.core.errors import ConfigError, KeyNotFoundError, ParseError
from clevis.core.linker import Accessor, AccessorKind, Linker
from clevis.core.models import Cursor
from clevis.readers.query_reader import QueryReader
from clevis.readers.source import read_source
from clevis.readers.span_reader import SpanReader
from clevis.readers.toml_reader import TomlReader
from clevis.readers.yaml_reader import YamlReader

logger = logging.getLogger("clevis.config")

DEFAULT_CONFIG_PATH = "./clevis.toml"


def resolve_path(file_path: str, config_dir: Path) -> str:
    """Keeps absolute paths, expands `~`, and anchors the rest at `config_dir`."""
    path = Path(file_path).expanduser()
    if path.is_absolute():
        return str(path)
    return str(config_dir / path)


def _require_str(record: Dict[str, Any], key: str, label: str) -> str:
    value = record.get(key)
    if value is None:
        raise ConfigError(f"Missing '{key}' in link '{label}'")
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' in link '{label}' must be a string")
    return value


def _require_cursor(record: Dict[str, Any], key: str, label: str) -> Cursor:
    table = record.get(key)
    if table is None:
        raise ConfigError(f"Missing '{key}' in link '{label}'")
    if not isinstance(table, dict):
        raise ConfigError(f"'{key}' in link '{label}' must be a table with 'line' and 'column'")

    coordinates = []
    for part in ("line", "column"):
        value = table.get(part)
        if value is None:
            raise ConfigError(f"Missing '{key}.{part}' in link '{label}'")
        # bool is an int subclass; `line = true` is still a typo
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"'{key}.{part}' in link '{label}' must be an integer")
        if value < 0:
            raise ConfigError(f"'{key}.{part}' in link '{label}' must not be negative")
        coordinates.append(value)
    return Cursor(line=coordinates[0], column=coordinates[1])


def build_accessor(record: Any, config_dir: Path, label: str) -> Accessor:
    """
    Builds one side of a link from its config record.

    Args:
        record: The `{kind, file_path, ...}` table.
        config_dir: Directory relative file paths are anchored at.
        label: `<link>.<side>`, quoted in every error message.
    """
    if not isinstance(record, dict):
        raise ConfigError(f"Link side '{label}' must be a table")

    kind_name = _require_str(record, "kind", label)
    try:
        kind = AccessorKind(kind_name)
    except ValueError:
        raise ConfigError(f"Unknown kind '{kind_name}' in link '{label}'") from None

    file_path = resolve_path(_require_str(record, "file_path", label), config_dir)

    if kind is AccessorKind.SPAN:
        return Accessor.span(SpanReader(
            file_path=file_path,
            start=_require_cursor(record, "start", label),
            end=_require_cursor(record, "end", label),
        ))
    if kind is AccessorKind.TOML:
        return Accessor.toml(TomlReader(file_path, _require_str(record, "key_path", label)))
    if kind is AccessorKind.YAML:
        return Accessor.yaml(YamlReader(file_path, _require_str(record, "key_path", label)))
    return Accessor.query(QueryReader(file_path, _require_str(record, "query", label)))


@dataclass
class Config:
    """Every link declared in one config file, in declaration order."""
    links: Dict[str, Linker] = field(default_factory=dict)
    source: Optional[str] = None

    @classmethod
    def load(cls, path: str) -> "Config":
        """
        Reads and parses a config file.

        Raises:
            FileOperationError: the file cannot be read.
            ParseError: the file is not valid TOML.
            ConfigError: a link is malformed.
        """
        config_path = Path(path).expanduser()
        content = read_source(str(config_path))
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ParseError("TOML", str(config_path), str(e)) from e

        config = cls.from_dict(data, config_path.parent)
        config.source = str(config_path)
        logger.debug(f"Loaded {len(config.links)} link(s) from {config_path}")
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_dir: Path) -> "Config":
        links_table = data.get("links")
        if links_table is None:
            return cls()
        if not isinstance(links_table, dict):
            raise ConfigError("'links' must be a table of link definitions")

        links: Dict[str, Linker] = {}
        for link_key, link_value in links_table.items():
            if not isinstance(link_value, dict):
                raise ConfigError(f"Link '{link_key}' must be a table with 'a' and 'b'")
            for side in ("a", "b"):
                if side not in link_value:
                    raise ConfigError(f"Missing '{side}' in link '{link_key}'")
            links[link_key] = Linker(
                a=build_accessor(link_value["a"], config_dir, f"{link_key}.a"),
                b=build_accessor(link_value["b"], config_dir, f"{link_key}.b"),
            )
        return cls(links=links)

    def keys(self) -> List[str]:
        return list(self.links)

    def get_linker(self, link_key: str) -> Linker:
        try:
            return self.links[link_key]
        except KeyError:
            raise KeyNotFoundError(link_key, "config") from None

    def check(self, link_key: str) -> bool:
        return self.get_linker(link_key).check()
