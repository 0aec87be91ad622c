"""Built-in rule functions.

Each rule takes the inspected field value and the raw tag parameter. It
returns None when the value passes and raises a FieldError otherwise.
"""

import logging
import re
from collections.abc import Callable

from ..errors import (
    BadParameterError,
    EnumError,
    LengthError,
    MaxError,
    MinError,
    NilValueError,
    RegexpError,
    UnsupportedTypeError,
    ZeroValueError,
)
from .params import (
    as_float,
    as_float_list,
    as_int,
    as_int_list,
    as_string_list,
    as_uint,
    as_uint_list,
)
from .values import FieldValue, Kind

logger = logging.getLogger(__name__)

RuleFunction = Callable[[FieldValue, str], None]


def nonzero(value: FieldValue, param: str) -> None:
    """Reject the zero value of the field's kind.

    Structs always pass; a non-nil pointer passes whatever it points to.
    """
    kind = value.kind
    if kind is Kind.STRING or kind is Kind.COLLECTION:
        valid = value.size() != 0
    elif kind is Kind.POINTER:
        valid = not value.is_nil
    elif kind is Kind.SIGNED_INT or kind is Kind.UNSIGNED_INT:
        valid = value.as_int() != 0
    elif kind is Kind.FLOAT:
        valid = value.as_float() != 0
    elif kind is Kind.BOOLEAN:
        valid = bool(value.raw)
    elif kind is Kind.INVALID:
        valid = False
    else:
        valid = True

    if not valid:
        raise ZeroValueError()


def _measure(value: FieldValue, param: str) -> tuple[int | float, int | float]:
    """Return (measured, bound) for the size-style rules.

    Strings and collections are measured by size against an int parameter;
    numbers are measured by value against a parameter of their own family.
    """
    kind = value.kind
    if kind is Kind.STRING or kind is Kind.COLLECTION:
        return value.size(), as_int(param)
    if kind is Kind.SIGNED_INT:
        return value.as_int(), as_int(param)
    if kind is Kind.UNSIGNED_INT:
        return value.as_int(), as_uint(param)
    if kind is Kind.FLOAT:
        return value.as_float(), as_float(param)
    raise UnsupportedTypeError()


def length(value: FieldValue, param: str) -> None:
    """Exact length for strings and collections, exact value for numbers."""
    target = value.deref()
    if target is None:
        return
    measured, expected = _measure(target, param)
    if measured != expected:
        raise LengthError()


def min_rule(value: FieldValue, param: str) -> None:
    """Inclusive lower bound on size or value."""
    target = value.deref()
    if target is None:
        return
    measured, bound = _measure(target, param)
    if measured < bound:
        raise MinError()


def max_rule(value: FieldValue, param: str) -> None:
    """Inclusive upper bound on size or value."""
    target = value.deref()
    if target is None:
        return
    measured, bound = _measure(target, param)
    if measured > bound:
        raise MaxError()


def regex(value: FieldValue, param: str) -> None:
    """Search the string value for the pattern given as parameter.

    Only strings and pointers to strings are supported; a nil pointer passes.
    """
    target = value.deref()
    if target is None:
        return
    if target.kind is not Kind.STRING:
        raise UnsupportedTypeError()

    try:
        pattern = re.compile(param)
    except re.error as e:
        logger.debug(f"Invalid pattern {param!r}: {e}")
        raise BadParameterError() from e

    if not pattern.search(target.as_str()):
        raise RegexpError()


def nonnil(value: FieldValue, param: str) -> None:
    """Reject nil pointers and absent values; everything else passes."""
    if value.is_nil or value.kind is Kind.INVALID:
        raise NilValueError()


def enum(value: FieldValue, param: str) -> None:
    """Require membership in the comma separated parameter list."""
    target = value.deref()
    if target is None:
        return

    kind = target.kind
    if kind is Kind.STRING:
        allowed, actual = as_string_list(param), target.as_str()
    elif kind is Kind.SIGNED_INT:
        allowed, actual = as_int_list(param), target.as_int()
    elif kind is Kind.UNSIGNED_INT:
        allowed, actual = as_uint_list(param), target.as_int()
    elif kind is Kind.FLOAT:
        allowed, actual = as_float_list(param), target.as_float()
    else:
        raise UnsupportedTypeError()

    if actual not in allowed:
        raise EnumError()


BUILTIN_RULES: dict[str, RuleFunction] = {
    "nonzero": nonzero,
    "len": length,
    "min": min_rule,
    "max": max_rule,
    "regex": regex,
    "nonnil": nonnil,
    "enum": enum,
}
