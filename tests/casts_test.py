from collections import deque
from dataclasses import dataclass
from types import SimpleNamespace

import pytest

from reggie_values.casts import CastKind, cast


@dataclass
class Point:
    x: int
    y: int


class Dumpable:
    def to_dict(self):
        return {"dumped": True}


@pytest.mark.parametrize(
    "kind, expected",
    [
        (CastKind.INT, CastKind.INT),
        ("int", CastKind.INT),
        (" Int ", CastKind.INT),
        ("bool", CastKind.BOOLEAN),
        ("boolean", CastKind.BOOLEAN),
        ("STRING", CastKind.STRING),
        (str, CastKind.STRING),
        (list, CastKind.ARRAY),
        (object, CastKind.OBJECT),
        ("unknown", None),
        ("", None),
        (None, None),
        (dict, None),
        (3, None),
    ],
)
def test_parse(kind, expected):
    assert CastKind.parse(kind) is expected


@pytest.mark.parametrize(
    "value, kind, expected",
    [
        ("123", CastKind.INT, 123),
        (" 123 ", CastKind.INT, 123),
        ("12.5", CastKind.INT, 12),
        (3.9, CastKind.INT, 3),
        (True, CastKind.INT, 1),
        ("123", CastKind.FLOAT, 123.0),
        (2, CastKind.FLOAT, 2.0),
        (12, CastKind.STRING, "12"),
        (None, CastKind.STRING, "None"),
        (1, CastKind.BOOLEAN, True),
        (0, CastKind.BOOLEAN, False),
        ("", CastKind.BOOLEAN, False),
        ([], CastKind.BOOLEAN, False),
    ],
)
def test_scalar_casts(value, kind, expected):
    result = cast(value, kind)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ([1, 2], [1, 2]),
        ({"x": 1}, {"x": 1}),
        ((1, 2), [1, 2]),
        (deque([1]), [1]),
        ("abc", ["abc"]),
        (5, [5]),
        (Point(1, 2), {"x": 1, "y": 2}),
        (Dumpable(), {"dumped": True}),
    ],
)
def test_array_cast(value, expected):
    assert cast(value, CastKind.ARRAY) == expected


def test_array_cast_keeps_same_list():
    items = [1, 2]
    assert cast(items, "array") is items


def test_object_cast_from_mapping():
    result = cast({"x": 1, 2: "two"}, CastKind.OBJECT)
    assert isinstance(result, SimpleNamespace)
    assert result.x == 1
    assert getattr(result, "2") == "two"


def test_object_cast_from_sequence():
    result = cast(["a", "b"], CastKind.OBJECT)
    assert getattr(result, "0") == "a"
    assert getattr(result, "1") == "b"


def test_object_cast_from_scalar_and_none():
    assert cast(5, CastKind.OBJECT) == SimpleNamespace(scalar=5)
    assert cast(None, CastKind.OBJECT) == SimpleNamespace()


def test_object_cast_keeps_objects():
    point = Point(1, 2)
    assert cast(point, CastKind.OBJECT) is point


def test_unknown_kind_returns_value():
    marker = object()
    assert cast(marker, "unknown-type") is marker


@pytest.mark.parametrize(
    "value, kind",
    [
        ("abc", CastKind.INT),
        ("abc", CastKind.FLOAT),
        (None, CastKind.INT),
        (float("inf"), CastKind.INT),
        (object(), CastKind.FLOAT),
    ],
)
def test_failed_cast_returns_value(value, kind):
    assert cast(value, kind) is value
