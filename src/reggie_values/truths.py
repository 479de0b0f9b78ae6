"""
Exception safe conversion of arbitrary values to booleans.

Non strict checks accept booleans as is, numbers when non zero, and anything
equivalent to an entry of the active truthy list. Trimmed strings also match
string entries case insensitively. Strict checks accept only True, 1,
"1" and "true".

Example:
    >>> is_truthy("on")
    True
    >>> is_truthy("off")
    False
    >>> is_truthy("yes", strict=True)
    False
"""

import numbers
import threading
from array import array
from collections import deque
from collections.abc import Iterable
from enum import Enum, auto
from typing import Any

from reggie_values import casts, logs, values

LOG = logs.logger(__name__)

DEFAULT_TRUTHY_VALUES: tuple[Any, ...] = (
    1,
    True,
    "1",
    "true",
    "on",
    "yes",
    "y",
    "+",
    "yep",
    "ok",
    "==",
    "===",
    "active",
    "enable",
    "enabled",
    "check",
    "checked",
    "selected",
    "accept",
    "accepted",
    "agree",
    "allow",
    "allowed",
    "valid",
    "ready",
)

_STRICT_TRUTHY_STRS = ("1", "true")
_COLLECTION_TYPES = (list, tuple, set, dict, frozenset, deque, array, range)


class _Kind(Enum):
    NONE = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    SCALAR = auto()
    COLLECTION = auto()
    CLASS = auto()
    OBJECT = auto()


_SCALAR_KINDS = (_Kind.BOOLEAN, _Kind.NUMBER, _Kind.STRING, _Kind.SCALAR)
_NAMED_KINDS = (_Kind.CLASS, _Kind.OBJECT)


class TruthConfig:
    """
    Holder of a truthy list shared by non strict checks.

    The list is stored as a tuple and replaced as a whole, so readers always
    see a complete snapshot. Writers are serialized by a lock.
    """

    def __init__(self, truthy_values: Iterable[Any] | None = None):
        self._lock = threading.Lock()
        self._truthy_values: tuple[Any, ...] = DEFAULT_TRUTHY_VALUES
        if truthy_values is not None:
            self.configure(truthy_values)

    @property
    def truthy_values(self) -> tuple[Any, ...]:
        return self._truthy_values

    def configure(
        self, truthy_values: Iterable[Any] | None = None, merge: bool = False
    ) -> None:
        """
        Replace the truthy list, or extend it when merge is True.

        None entries are dropped. Entries already present (same type, equal
        value) are skipped when merging. A missing or empty argument leaves the
        list unchanged.
        """
        if truthy_values is None:
            return
        truthy_values = _as_tuple(truthy_values)
        if not truthy_values:
            return
        filtered = tuple(v for v in truthy_values if v is not None)
        with self._lock:
            if merge:
                merged = list(self._truthy_values)
                for value in filtered:
                    if not any(_same(value, existing) for existing in merged):
                        merged.append(value)
                filtered = tuple(merged)
            self._truthy_values = filtered
        LOG.debug("truthy values configured - merge:%s values:%s", merge, filtered)

    def reset(self) -> None:
        """Restore ``DEFAULT_TRUTHY_VALUES``."""
        with self._lock:
            self._truthy_values = DEFAULT_TRUTHY_VALUES

    def is_truthy(
        self,
        value: Any,
        strict: bool = False,
        truthy_values: Iterable[Any] | None = None,
    ) -> bool:
        """
        Convert value to a boolean without raising.

        value may be a producer, which is invoked first; a producer that fails
        or returns None is falsy.

        Args:
            value: Value or producer to convert
            strict: Only accept True, 1, "1" and "true"
            truthy_values: Truthy list used for this call instead of the configured one

        Returns:
            The boolean interpretation of value
        """
        return values.resolve(
            value,
            False,
            lambda v: self._convert(v, strict, truthy_values),
            casts.CastKind.BOOLEAN,
        )

    def _convert(
        self, value: Any, strict: bool, truthy_values: Iterable[Any] | None
    ) -> bool:
        try:
            if strict:
                return (
                    value is True
                    or (type(value) is int and value == 1)
                    or (type(value) is str and value in _STRICT_TRUTHY_STRS)
                )
            kind = _kind(value)
            if kind is _Kind.NONE:
                return False
            elif kind is _Kind.BOOLEAN:
                return value
            elif kind is _Kind.NUMBER:
                return value != 0
            if truthy_values is None:
                active = self._truthy_values
            else:
                active = tuple(v for v in _as_tuple(truthy_values) if v is not None)
            if any(_equivalent(value, truthy) for truthy in active):
                return True
            if kind is _Kind.STRING:
                normalized = _normalize(value)
                return any(
                    isinstance(truthy, str) and truthy.casefold() == normalized
                    for truthy in active
                )
            return False
        except Exception as e:
            LOG.debug("truthy conversion failed - value:%r error:%r", value, e)
            return False


_config_default = TruthConfig()


def default_config() -> TruthConfig:
    """Return the process wide ``TruthConfig`` used by the module functions."""
    return _config_default


def get_truthy_values() -> tuple[Any, ...]:
    return _config_default.truthy_values


def configure(truthy_values: Iterable[Any] | None = None, merge: bool = False) -> None:
    """Update the process wide truthy list. See ``TruthConfig.configure``."""
    _config_default.configure(truthy_values, merge)


def reset_to_default() -> None:
    _config_default.reset()


def is_truthy(
    value: Any,
    strict: bool = False,
    truthy_values: Iterable[Any] | None = None,
    config: TruthConfig | None = None,
) -> bool:
    """
    Convert value to a boolean using the process wide or the given config.

    Examples:
        >>> is_truthy(1), is_truthy(0), is_truthy(-0.0)
        (True, False, False)
        >>> is_truthy(" Enabled ")
        True
        >>> is_truthy("aye", truthy_values=["aye"])
        True
    """
    return (config or _config_default).is_truthy(value, strict, truthy_values)


of = is_truthy


def _kind(value: Any) -> _Kind:
    if value is None:
        return _Kind.NONE
    elif isinstance(value, bool):
        return _Kind.BOOLEAN
    elif isinstance(value, numbers.Number):
        return _Kind.NUMBER
    elif isinstance(value, str):
        return _Kind.STRING
    elif isinstance(value, (bytes, bytearray)):
        return _Kind.SCALAR
    elif isinstance(value, _COLLECTION_TYPES):
        return _Kind.COLLECTION
    elif isinstance(value, type):
        return _Kind.CLASS
    return _Kind.OBJECT


def _equivalent(a: Any, b: Any) -> bool:
    """
    Compare a candidate against a truthy entry.

    Rules, in order:
    - two objects: same reference, or same concrete type
    - two classes: same class
    - object or class and string: the string names the class, case insensitive
    - two scalars: equal values when types match, else equal ``str`` forms
    - two collections of the same type: equal values
    """
    a_kind, b_kind = _kind(a), _kind(b)
    if a_kind is _Kind.OBJECT and b_kind is _Kind.OBJECT:
        return a is b or type(a) is type(b)
    elif a_kind is _Kind.CLASS and b_kind is _Kind.CLASS:
        return a is b
    elif a_kind in _NAMED_KINDS and b_kind is _Kind.STRING:
        return _is_class_name(a, b)
    elif a_kind is _Kind.STRING and b_kind in _NAMED_KINDS:
        return _is_class_name(b, a)
    elif a_kind in _SCALAR_KINDS and b_kind in _SCALAR_KINDS:
        if type(a) is type(b):
            return a == b
        return str(a) == str(b)
    elif a_kind is _Kind.COLLECTION and b_kind is _Kind.COLLECTION:
        return type(a) is type(b) and a == b
    return False


def _same(a: Any, b: Any) -> bool:
    return a is b or (type(a) is type(b) and a == b)


def _is_class_name(obj: Any, name: str) -> bool:
    cls = obj if isinstance(obj, type) else type(obj)
    names = (cls.__name__, cls.__qualname__, f"{cls.__module__}.{cls.__qualname__}")
    name = name.casefold()
    return any(n.casefold() == name for n in names)


def _as_tuple(truthy_values: Iterable[Any]) -> tuple[Any, ...]:
    if isinstance(truthy_values, (str, bytes)):
        return (truthy_values,)
    return tuple(truthy_values)


def _normalize(value: str) -> str:
    return value.strip().casefold()
