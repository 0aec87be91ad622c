"""Rule parameter coercion.

Tag parameters arrive as raw strings; each rule converts them to the numeric
family of the field it checks. Any conversion failure is a BadParameterError.
"""

import re

from ..errors import BadParameterError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_LEGACY_OCTAL = re.compile(r"^[+-]?0[0-7_]+$")
_HEX_FLOAT = re.compile(r"^[+-]?0[xX]")


def _parse_integer(param: str) -> int:
    text = param.strip()
    if not text or text != param:
        raise BadParameterError()
    try:
        if _LEGACY_OCTAL.match(text):
            return int(text, 8)
        return int(text, 0)
    except ValueError:
        raise BadParameterError() from None


def as_int(param: str) -> int:
    """Parse a signed 64-bit integer with base prefix support."""
    value = _parse_integer(param)
    if not INT64_MIN <= value <= INT64_MAX:
        raise BadParameterError()
    return value


def as_uint(param: str) -> int:
    """Parse an unsigned 64-bit integer; signs are not accepted."""
    if param[:1] in ("+", "-"):
        raise BadParameterError()
    value = _parse_integer(param)
    if not 0 <= value <= UINT64_MAX:
        raise BadParameterError()
    return value


def as_float(param: str) -> float:
    """Parse a float, accepting hex-float notation."""
    text = param.strip()
    if not text or text != param or "_" in text:
        raise BadParameterError()
    try:
        if _HEX_FLOAT.match(text):
            return float.fromhex(text)
        return float(text)
    except ValueError:
        raise BadParameterError() from None


def as_string_list(param: str) -> list[str]:
    """Split on commas and trim every entry."""
    return [item.strip() for item in param.split(",")]


def as_int_list(param: str) -> list[int]:
    return [as_int(item) for item in as_string_list(param)]


def as_uint_list(param: str) -> list[int]:
    return [as_uint(item) for item in as_string_list(param)]


def as_float_list(param: str) -> list[float]:
    return [as_float(item) for item in as_string_list(param)]
