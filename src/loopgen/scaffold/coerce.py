"""Default-value coercion for model properties.

Turns the raw string a developer typed at the "Default value" prompt
into a typed JSON default (or a defaultFn token) according to the
declared property type.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from rich.console import Console
from rich.markup import escape

from loopgen.errors import UnsupportedPropertyTypeError
from loopgen.models.property import SUPPORTED_TYPES, PropertyDefinition

console = Console(stderr=True)

_SEPARATORS = re.compile(r"[\s,]+")
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_EPOCH_MILLIS = re.compile(r"[+-]?\d+")
_YEAR_ONLY = re.compile(r"\d{4}")
_YEAR_MONTH = re.compile(r"\d{4}-\d{2}")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Largest magnitude below which every integer is exactly representable
# as a double.
_MAX_SAFE_INTEGER = 2**53


def _warn(message: str) -> None:
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]", soft_wrap=True)


def split_list(value: str) -> list[str]:
    """Split on runs of whitespace and/or commas, dropping empty edges."""
    return [part for part in _SEPARATORS.split(value) if part]


def parse_number(value: str) -> int | float | None:
    """Parse a decimal numeral with double-precision semantics.

    Integral results that a double represents exactly come back as int
    so they serialize without a trailing ``.0``. Anything that is not a
    finite decimal numeral yields None (JSON ``null``).
    """
    text = value.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) < _MAX_SAFE_INTEGER:
        return int(number)
    return number


def parse_boolean(value: str) -> bool:
    return value in ("true", "1", "t")


def format_timestamp(moment: datetime) -> str:
    """Format as ISO-8601 in UTC with millisecond precision and a Z suffix."""
    utc = moment.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 string or epoch milliseconds into an aware datetime.

    Reduced forms ``YYYY`` and ``YYYY-MM`` are accepted. Values without
    an offset are taken as UTC. Returns None when the value is neither.
    """
    text = value.strip()
    try:
        if _EPOCH_MILLIS.fullmatch(text) and not _YEAR_ONLY.fullmatch(text):
            return _EPOCH + timedelta(milliseconds=int(text))
        if _YEAR_ONLY.fullmatch(text):
            text += "-01-01"
        elif _YEAR_MONTH.fullmatch(text):
            text += "-01"
        moment = datetime.fromisoformat(text)
    except (ValueError, OverflowError):
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _coerce_string(value: str) -> dict[str, Any]:
    if value in ("uuid", "guid"):
        return {"defaultFn": value}
    return {"default": value}


def _coerce_number(value: str) -> dict[str, Any]:
    return {"default": parse_number(value)}


def _coerce_boolean(value: str) -> dict[str, Any]:
    return {"default": parse_boolean(value)}


def loads_strict(value: str) -> Any:
    """Parse JSON, rejecting the NaN and Infinity tokens json.loads allows."""

    def _reject_constant(name: str) -> Any:
        raise json.JSONDecodeError(
            f"Non-standard JSON constant {name}", value, max(value.find(name), 0)
        )

    return json.loads(value, parse_constant=_reject_constant)


def _coerce_object(value: str) -> dict[str, Any]:
    return {"default": loads_strict(value)}


def _coerce_array(value: str) -> dict[str, Any]:
    return {"default": split_list(value)}


def _coerce_date(value: str) -> dict[str, Any]:
    if value.lower() == "now":
        return {"defaultFn": "now"}
    moment = parse_timestamp(value)
    if moment is None:
        _warn(f"property default value {value!r} is not a valid date, stored as null")
        return {"default": None}
    _warn("property default value was converted from string using ISO formatting")
    return {"default": format_timestamp(moment)}


def _coerce_geopoint(value: str) -> dict[str, Any]:
    if "lat" in value and "lng" in value:
        try:
            parsed = loads_strict(value)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict) and "lat" in parsed and "lng" in parsed:
            return {"default": parsed}
    parts = split_list(value)
    lat = parse_number(parts[0]) if len(parts) > 0 else None
    lng = parse_number(parts[1]) if len(parts) > 1 else None
    return {"default": {"lat": lat, "lng": lng}}


def _coerce_buffer(value: str) -> dict[str, Any]:
    _warn("property default value was converted from string using UTF8 encoding")
    return {"default": value.encode("utf-8")}


def _coerce_any(value: str) -> dict[str, Any]:
    _warn("property default value was stored as string")
    return {"default": value}


_COERCERS: dict[str, Callable[[str], dict[str, Any]]] = {
    "string": _coerce_string,
    "number": _coerce_number,
    "boolean": _coerce_boolean,
    "object": _coerce_object,
    "array": _coerce_array,
    "date": _coerce_date,
    "geopoint": _coerce_geopoint,
    "buffer": _coerce_buffer,
    "any": _coerce_any,
}

# Item types whose array elements get converted from strings.
_ITEM_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "number": parse_number,
    "boolean": parse_boolean,
}


def coerce(property_type: str | list[str], value: str) -> dict[str, Any]:
    """Coerce a raw default string for the given property type.

    Args:
        property_type: A supported type name, or a one-element list
            naming the item type of a typed array.
        value: The non-empty string the user typed.

    Returns:
        ``{"default": <value>}`` or ``{"defaultFn": <token>}``, never both.

    Raises:
        UnsupportedPropertyTypeError: If the type, or the item type of a
            typed array, is not in the supported set.
        json.JSONDecodeError: For malformed ``object`` input, including
            the NaN and Infinity constants.
    """
    item_type: str | None = None
    if isinstance(property_type, list):
        if len(property_type) != 1:
            raise UnsupportedPropertyTypeError(property_type)
        item_type = property_type[0]
        type_name = "array"
    else:
        type_name = property_type

    if type_name not in SUPPORTED_TYPES:
        raise UnsupportedPropertyTypeError(property_type)
    if item_type is not None and item_type not in SUPPORTED_TYPES:
        raise UnsupportedPropertyTypeError(property_type)

    result = _COERCERS[type_name](value)

    converter = _ITEM_CONVERTERS.get(item_type) if item_type else None
    if converter is not None:
        result["default"] = [converter(item) for item in result["default"]]
    return result


def coerce_default(definition: PropertyDefinition, value: str) -> PropertyDefinition:
    """Return a copy of definition carrying the coerced default for value."""
    result = coerce(definition.type, value)
    if "defaultFn" in result:
        return definition.with_default_fn(result["defaultFn"])
    return definition.with_default(result["default"])
