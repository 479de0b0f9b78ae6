"""Best effort conversion of values into a closed set of primitive kinds."""

from array import array
from collections import deque
from collections.abc import Mapping
from enum import Enum
from types import SimpleNamespace
from typing import Any

from reggie_values import logs

LOG = logs.logger(__name__)

_DUMP_ATTRS = ["model_dump", "as_dict", "to_dict", "asDict", "toDict"]
_COLLECTION_TYPES = (list, tuple, set, dict, frozenset, deque, array, range)
_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)


class CastKind(str, Enum):
    """Target representation for ``cast``."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "bool"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def parse(cls, kind: Any) -> "CastKind | None":
        """
        Resolve a kind specifier to a member.

        Accepts
        - a CastKind member
        - a string matching a member value or name, case insensitive
          ("int", "INT", "bool", "boolean")
        - one of the builtin types int, float, str, bool, list, object

        Returns None when nothing matches.
        """
        if isinstance(kind, CastKind):
            return kind
        if isinstance(kind, type):
            return _TYPE_KINDS.get(kind, None)
        if not isinstance(kind, str):
            return None
        key = kind.strip().casefold()
        if not key:
            return None
        for member in cls:
            if key in (member.value, member.name.casefold()):
                return member
        return None


_TYPE_KINDS = {
    int: CastKind.INT,
    float: CastKind.FLOAT,
    str: CastKind.STRING,
    bool: CastKind.BOOLEAN,
    list: CastKind.ARRAY,
    object: CastKind.OBJECT,
}


def cast(value: Any, kind: Any) -> Any:
    """
    Convert value to the representation named by kind.

    Unknown kinds and failed conversions return value unchanged, so this
    function never raises for ordinary errors.

    Args:
        value: Value to convert
        kind: CastKind member, member value/name string, or builtin type

    Returns:
        The converted value or the original value
    """
    cast_kind = CastKind.parse(kind)
    if cast_kind is None:
        LOG.debug("cast skipped - kind:%r", kind)
        return value
    try:
        return _CASTS[cast_kind](value)
    except Exception as e:
        LOG.debug("cast failed - kind:%s value:%r error:%s", cast_kind.value, value, e)
        return value


def _to_int(value: Any) -> int:
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return int(float(text))
    return int(value)


def _to_array(value: Any) -> list | dict:
    if value is None:
        return []
    if isinstance(value, (list, dict)):
        return value
    if isinstance(value, _COLLECTION_TYPES):
        return list(value)
    if not isinstance(value, _SCALAR_TYPES):
        if (fields := _fields(value)) is not None:
            return fields
    return [value]


def _to_object(value: Any) -> Any:
    if value is None:
        return SimpleNamespace()
    if isinstance(value, Mapping):
        return SimpleNamespace(**{str(k): v for k, v in value.items()})
    if isinstance(value, _COLLECTION_TYPES):
        return SimpleNamespace(**{str(i): v for i, v in enumerate(value)})
    if isinstance(value, _SCALAR_TYPES):
        return SimpleNamespace(scalar=value)
    return value


def _fields(obj: Any) -> dict | None:
    """Return a field dictionary from common dump methods or ``__dict__``."""
    for attr in _DUMP_ATTRS:
        dump_attr = getattr(obj, attr, None)
        if callable(dump_attr):
            if isinstance(fields := dump_attr(), dict):
                return fields
    if isinstance(fields := getattr(obj, "__dict__", None), dict):
        return dict(fields)
    return None


_CASTS = {
    CastKind.INT: _to_int,
    CastKind.FLOAT: float,
    CastKind.STRING: str,
    CastKind.BOOLEAN: bool,
    CastKind.ARRAY: _to_array,
    CastKind.OBJECT: _to_object,
}
