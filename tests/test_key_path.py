import pytest

from clevis.core.errors import ConfigError, KeyNotFoundError
from clevis.core.models import PathSegment
from clevis.readers.key_path import join_segments, parse_key_path
from clevis.readers.navigator import Navigator, TreeAdapter


def test_parse_plain_and_indexed_segments():
    assert parse_key_path("package.authors[2].name") == [
        PathSegment("package"),
        PathSegment("authors", 2),
        PathSegment("name"),
    ]


def test_join_segments_round_trips_for_diagnostics():
    assert join_segments(parse_key_path("a.b[10].c")) == "a.b[10].c"


@pytest.mark.parametrize("key_path", ["a.b[2", "a.b[2]x", "[0]", "a..b", "", "a."])
def test_malformed_paths_are_config_errors(key_path):
    with pytest.raises(ConfigError):
        parse_key_path(key_path)


def test_malformed_bracket_names_the_segment():
    with pytest.raises(ConfigError) as excinfo:
        parse_key_path("arrays.numbers[1")
    assert "numbers[1" in str(excinfo.value)


@pytest.mark.parametrize("key_path, walked", [
    ("a.b[x]", "a.b[x]"),
    ("a[-1]", "a[-1]"),
    ("a.b[]", "a.b[]"),
    ("a[1][2]", "a[1][2]"),
])
def test_non_integer_index_is_key_not_found(key_path, walked):
    with pytest.raises(KeyNotFoundError) as excinfo:
        parse_key_path(key_path, "data.toml")
    assert excinfo.value.key_path == walked
    assert excinfo.value.file_path == "data.toml"


# --- Navigator over plain Python trees ---

DOCUMENT = {
    "arrays": {"numbers": [1, 2, 3], "nested": [{"id": "x"}, {"id": "y"}]},
    "flag": False,
}


def navigate(key_path):
    return Navigator(TreeAdapter(), "memory").read(DOCUMENT, parse_key_path(key_path))


def test_navigator_walks_keys_and_indices():
    assert navigate("arrays.numbers[2]") == "3"
    assert navigate("arrays.nested[1].id") == "y"
    assert navigate("flag") == "false"


def test_navigator_reports_path_walked_so_far():
    with pytest.raises(KeyNotFoundError) as excinfo:
        navigate("arrays.missing.deeper")
    assert excinfo.value.key_path == "arrays.missing"


def test_navigator_index_out_of_bounds():
    with pytest.raises(KeyNotFoundError) as excinfo:
        navigate("arrays.numbers[3]")
    assert excinfo.value.key_path == "arrays.numbers[3]"
    assert "out of bounds" in str(excinfo.value)


def test_navigator_rejects_composite_leaves():
    with pytest.raises(KeyNotFoundError, match="array requires index"):
        navigate("arrays.numbers")
    with pytest.raises(KeyNotFoundError, match="table requires key"):
        navigate("arrays")


def test_navigator_index_on_scalar():
    with pytest.raises(KeyNotFoundError, match="not an array"):
        navigate("flag[0]")
