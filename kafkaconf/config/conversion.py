"""Type conversion for configuration values.

Covers the value kinds that appear in property sources: strings, numbers,
booleans, enums, paths, flat sequences of those, and durations.
"""

import re
from collections.abc import Callable
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any

_SCALAR_TYPES: tuple[type, ...] = (str, bool, int, float, Decimal, Enum, PurePath)
_SEQUENCE_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)
_UNORDERED_TYPES: tuple[type, ...] = (set, frozenset)

_DURATION_UNITS: dict[str, float] = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
    "d": 86400.0,
}
_SIMPLE_DURATION = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(ms|s|m|h|d)?\s*$", re.IGNORECASE)
_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T(?=\d)(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    return str(value)


def _to_str(value: Any) -> str | None:
    if isinstance(value, _SEQUENCE_TYPES):
        if not all(isinstance(item, _SCALAR_TYPES) for item in value):
            return None
        items = [_scalar_to_str(item) for item in value]
        if isinstance(value, _UNORDERED_TYPES):
            items.sort()
        return ",".join(items)
    if isinstance(value, _SCALAR_TYPES):
        return _scalar_to_str(value)
    return None


def _make_timedelta(**parts: float) -> timedelta | None:
    try:
        return timedelta(**parts)
    except (OverflowError, ValueError):
        # Beyond timedelta.max, or NaN
        return None


def parse_duration(text: str) -> timedelta | None:
    """Parse '500ms', '10s', '2m', '1h', '1d', a bare number of seconds, or 'PT10S'."""
    match = _SIMPLE_DURATION.match(text)
    if match:
        amount, unit = match.groups()
        return _make_timedelta(seconds=float(amount) * _DURATION_UNITS[(unit or "s").lower()])

    match = _ISO_DURATION.match(text.strip())
    if match:
        parts = {name: float(v) for name, v in match.groupdict().items() if v}
        if parts:
            return _make_timedelta(**parts)

    return None


def _to_timedelta(value: Any) -> timedelta | None:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            seconds = float(value)
        except OverflowError:
            return None
        return _make_timedelta(seconds=seconds)
    if isinstance(value, str):
        return parse_duration(value)
    return None


class ConversionService:
    """Converts configuration values to a requested target type.

    Unlike a general coercion framework this knows a fixed set of targets;
    `can_convert` answers by source type and `convert` returns None when a
    particular value cannot be converted.
    """

    def __init__(self) -> None:
        self._converters: dict[type, tuple[tuple[type, ...], Callable[[Any], Any]]] = {
            str: (_SCALAR_TYPES + _SEQUENCE_TYPES, _to_str),
            timedelta: ((timedelta, str, int, float, Decimal), _to_timedelta),
        }

    def can_convert(self, source_type: type, target_type: type) -> bool:
        entry = self._converters.get(target_type)
        if entry is None:
            return False
        return issubclass(source_type, entry[0])

    def convert(self, value: Any, target_type: type) -> Any | None:
        """Convert value to target_type, or return None if it cannot be."""
        if value is None or not self.can_convert(type(value), target_type):
            return None
        return self._converters[target_type][1](value)


DEFAULT_CONVERSION_SERVICE = ConversionService()
