"""Builtin functions callable from formulas."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any


def _flatten(args: Sequence[Any]) -> list[Any]:
    """Accept either a single list argument or varargs."""
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return list(args[0])
    return list(args)


def _null_safe(func: Callable[..., Any]) -> Callable[..., Any]:
    def wrapper(*args: Any) -> Any:
        if any(arg is None for arg in args):
            return None
        return func(*args)

    wrapper.__name__ = func.__name__
    return wrapper


def _min(*args: Any) -> Any:
    values = _flatten(args)
    return min(values) if values else None


def _max(*args: Any) -> Any:
    values = _flatten(args)
    return max(values) if values else None


def _sum(*args: Any) -> Any:
    return sum(_flatten(args))


def _count(*args: Any) -> int:
    return len(_flatten(args))


def _string(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _number(value: Any) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _not(value: Any) -> bool | None:
    if not isinstance(value, bool):
        return None
    return not value


BUILTIN_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "abs": _null_safe(abs),
    "min": _min,
    "max": _max,
    "sum": _sum,
    "count": _count,
    "length": _null_safe(len),
    "upper": _null_safe(str.upper),
    "lower": _null_safe(str.lower),
    "contains": _null_safe(lambda text, part: part in text),
    "startswith": _null_safe(str.startswith),
    "endswith": _null_safe(str.endswith),
    "floor": _null_safe(math.floor),
    "ceiling": _null_safe(math.ceil),
    "string": _string,
    "number": _number,
    "not": _not,
}
