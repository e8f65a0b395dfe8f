import os
import tomllib
from pathlib import Path

import pytest

from clevis.config.loader import Config, build_accessor, resolve_path
from clevis.core.errors import ConfigError, FileOperationError, KeyNotFoundError, ParseError
from clevis.core.linker import AccessorKind
from clevis.core.models import Cursor

FULL_CONFIG = """\
[links.port.a]
kind = "toml"
file_path = "sample.toml"
key_path = "server.port"

[links.port.b]
kind = "yaml"
file_path = "sample.yaml"
key_path = "server.port"

[links.banner.a]
kind = "span"
file_path = "lines.txt"
start = { line = 2, column = 1 }
end = { line = 2, column = 4 }

[links.banner.b]
kind = "query"
file_path = "lines.txt"
query = "line"
"""


@pytest.fixture
def config_file(write_file, toml_file, yaml_file, lines_file):
    return write_file("clevis.toml", FULL_CONFIG)


def test_load_builds_linkers_in_declaration_order(config_file):
    config = Config.load(config_file)
    assert config.keys() == ["port", "banner"]
    assert config.source == config_file

    port = config.get_linker("port")
    assert port.a.kind is AccessorKind.TOML
    assert port.b.kind is AccessorKind.YAML

    banner = config.get_linker("banner")
    assert banner.a.reader.start == Cursor(2, 1)
    assert banner.a.reader.end == Cursor(2, 4)
    assert banner.b.reader.query == "line"


def test_relative_paths_resolve_against_config_dir(config_file, tmp_path):
    config = Config.load(config_file)
    assert config.get_linker("port").a.file_path == str(tmp_path / "sample.toml")


def test_check_by_key(config_file):
    config = Config.load(config_file)
    assert config.check("port") is True
    assert config.check("banner") is True


def test_unknown_link_key(config_file):
    config = Config.load(config_file)
    with pytest.raises(KeyNotFoundError) as excinfo:
        config.get_linker("nope")
    assert excinfo.value.file_path == "config"


def test_resolve_path():
    config_dir = Path("/config/dir")
    assert resolve_path("/path/to/file.txt", config_dir) == "/path/to/file.txt"
    assert resolve_path("relative/file.txt", config_dir) == str(config_dir / "relative/file.txt")
    assert resolve_path("~/notes.txt", config_dir) == os.path.expanduser("~/notes.txt")


def test_missing_links_table_is_empty(write_file):
    config = Config.load(write_file("clevis.toml", "title = 'nothing'\n"))
    assert config.keys() == []


@pytest.mark.parametrize("content, message", [
    ("links = 5\n", "'links' must be a table"),
    ("[links]\nfoo = 1\n", "Link 'foo' must be a table"),
    ("[links.foo.a]\nkind = 'query'\nfile_path = 'x'\nquery = 'q'\n", "Missing 'b' in link 'foo'"),
    ("[links.foo.a]\nfile_path = 'x'\n[links.foo.b]\nkind = 'query'\nfile_path = 'x'\nquery = 'q'\n",
     "Missing 'kind' in link 'foo.a'"),
    ("[links.foo.a]\nkind = 'unknown'\nfile_path = 'x'\n[links.foo.b]\nkind = 'query'\nfile_path = 'x'\nquery = 'q'\n",
     "Unknown kind 'unknown' in link 'foo.a'"),
    ("[links.foo.a]\nkind = 'toml'\nkey_path = 'k'\n[links.foo.b]\nkind = 'query'\nfile_path = 'x'\nquery = 'q'\n",
     "Missing 'file_path' in link 'foo.a'"),
    ("[links.foo.a]\nkind = 'query'\nfile_path = 'x'\nquery = 'q'\n[links.foo.b]\nkind = 'yaml'\nfile_path = 'x'\n",
     "Missing 'key_path' in link 'foo.b'"),
    ("[links.foo.a]\nkind = 'query'\nfile_path = 'x'\nquery = 3\n[links.foo.b]\nkind = 'query'\nfile_path = 'x'\nquery = 'q'\n",
     "'query' in link 'foo.a' must be a string"),
])
def test_malformed_links_are_config_errors(write_file, content, message):
    with pytest.raises(ConfigError) as excinfo:
        Config.load(write_file("clevis.toml", content))
    assert message in str(excinfo.value)


@pytest.mark.parametrize("start, message", [
    (None, "Missing 'start' in link 'foo.a'"),
    ("start = 3", "'start' in link 'foo.a' must be a table"),
    ("start = { line = 1 }", "Missing 'start.column' in link 'foo.a'"),
    ("start = { line = -1, column = 1 }", "'start.line' in link 'foo.a' must not be negative"),
    ("start = { line = '1', column = 1 }", "'start.line' in link 'foo.a' must be an integer"),
    ("start = { line = true, column = 1 }", "'start.line' in link 'foo.a' must be an integer"),
])
def test_span_cursor_validation(tmp_path, start, message):
    record = {"kind": "span", "file_path": "x.txt", "end": {"line": 1, "column": 1}}
    if start is not None:
        record.update(tomllib.loads(start))
    with pytest.raises(ConfigError) as excinfo:
        build_accessor(record, tmp_path, "foo.a")
    assert message in str(excinfo.value)


def test_zero_cursor_is_accepted_at_load_and_rejected_at_read(write_file, lines_file, tmp_path):
    accessor = build_accessor(
        {"kind": "span", "file_path": "lines.txt",
         "start": {"line": 0, "column": 1}, "end": {"line": 1, "column": 1}},
        tmp_path, "zero.a",
    )
    with pytest.raises(KeyNotFoundError):
        accessor.read()


def test_invalid_toml_config(write_file):
    with pytest.raises(ParseError):
        Config.load(write_file("clevis.toml", "[links.foo\n"))


def test_missing_config_file(tmp_path):
    with pytest.raises(FileOperationError):
        Config.load(str(tmp_path / "clevis.toml"))
