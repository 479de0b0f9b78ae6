"""
Safe value access with fallback, transformation and casting.

A slot is either a literal ``Value`` or a zero argument ``Producer``. Plain
arguments are classified when evaluated: callables other than classes become
producers, everything else is a literal. Wrap a callable in ``Value`` to pass
it through without invoking it.

Example:
    >>> data = {"known": " value "}
    >>> resolve(data.get("known"), "default", str.strip)
    'value'
    >>> resolve(data.get("unknown"), "default", str.strip)
    'default'
    >>> resolve(lambda: data["unknown"], lambda: "lazy default")
    'lazy default'
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from reggie_values import casts, logs

LOG = logs.logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Value(Generic[T]):
    """Literal slot, returned as is."""

    value: T


@dataclass(frozen=True)
class Producer(Generic[T]):
    """Lazy slot, invoked once with no arguments."""

    fn: Callable[[], T]


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of evaluating a slot."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def slot(value: Any) -> Value | Producer:
    """Classify an argument as a ``Value`` or ``Producer``."""
    if isinstance(value, (Value, Producer)):
        return value
    if callable(value) and not isinstance(value, type):
        return Producer(value)
    return Value(value)


def evaluate(value: Any) -> Result:
    """Evaluate a slot, capturing any exception raised by a producer."""
    match slot(value):
        case Value(value=literal):
            return Result(literal)
        case Producer(fn=fn):
            try:
                return Result(fn())
            except Exception as e:
                return Result(error=e)


def resolve(
    value: Any,
    default: Any = None,
    transform: Callable[[Any], Any] | None = None,
    cast: casts.CastKind | str | type | None = None,
) -> Any:
    """
    Return value, or default when value is None or its producer fails.

    Steps, in order:
    1) Evaluate value, invoking it when it is a producer
    2) On None or failure, evaluate default the same way; a failing default yields None
    3) Apply transform only when the result came from value; a failing
       transform leaves the result untouched
    4) Cast the result when cast is given

    Args:
        value: Primary value or producer
        default: Fallback value or producer
        transform: Callable applied to a successful primary result
        cast: CastKind member, member value/name string, or builtin type

    Returns:
        The resolved, transformed and cast value. Never raises for ordinary errors.
    """
    result = evaluate(value)
    if not result.ok:
        LOG.debug("value failed - error:%r", result.error)
    if result.value is None or not result.ok:
        result = evaluate(default)
        if not result.ok:
            LOG.debug("default failed - error:%r", result.error)
            result = Result()
    elif transform is not None:
        transformed = evaluate(Producer(lambda: transform(result.value)))
        if transformed.ok:
            result = transformed
        else:
            LOG.debug("transform failed - error:%r", transformed.error)
    if cast is not None:
        return casts.cast(result.value, cast)
    return result.value


get = resolve
