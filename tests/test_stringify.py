import datetime

import pytest

from clevis.readers.stringify import format_float, stringify_scalar


@pytest.mark.parametrize("value, expected", [
    (1.5, "1.5"),
    (3.0, "3"),
    (100.0, "100"),
    (-0.0, "-0"),
    (0.1, "0.1"),
    (1e20, "100000000000000000000"),
    (1.5e-7, "0.00000015"),
    (float("inf"), "inf"),
    (float("-inf"), "-inf"),
    (float("nan"), "NaN"),
])
def test_format_float(value, expected):
    assert format_float(value) == expected


@pytest.mark.parametrize("value, expected", [
    ("text", "text"),
    ("", ""),
    (8080, "8080"),
    (-42, "-42"),
    (True, "true"),
    (False, "false"),
    (None, "null"),
    (datetime.date(2024, 1, 15), "2024-01-15"),
    (datetime.time(7, 32), "07:32:00"),
    (datetime.datetime(1979, 5, 27, 7, 32), "1979-05-27T07:32:00"),
    (datetime.datetime(1979, 5, 27, 7, 32, tzinfo=datetime.timezone.utc), "1979-05-27T07:32:00Z"),
    (datetime.datetime(1979, 5, 27, 0, 32,
                       tzinfo=datetime.timezone(datetime.timedelta(hours=-7))),
     "1979-05-27T00:32:00-07:00"),
    (datetime.datetime(1979, 5, 27, 7, 32, 0, 500000, tzinfo=datetime.timezone.utc),
     "1979-05-27T07:32:00.5Z"),
    (datetime.datetime(1979, 5, 27, 0, 32, 0, 999999,
                       tzinfo=datetime.timezone(datetime.timedelta(hours=-7))),
     "1979-05-27T00:32:00.999999-07:00"),
    (datetime.time(7, 32, 0, 120000), "07:32:00.12"),
])
def test_stringify_scalar(value, expected):
    assert stringify_scalar(value) == expected


def test_stringify_rejects_composites():
    with pytest.raises(TypeError):
        stringify_scalar([1, 2])
    with pytest.raises(TypeError):
        stringify_scalar({"a": 1})
