"""tagvalidator - Declarative field validation driven by tag strings.

Fields of a dataclass or pydantic model carry a tag such as
``nonzero;len=7;regex=^[a-z]+$``. validate() evaluates the rules in order and
reports the first failing rule of every field.
"""

__version__ = "0.1.0"
__description__ = "Declarative field validation driven by tag strings"

from collections.abc import Iterable
from typing import Any

from tagvalidator.config import ErrorOverride, ValidatorConfig, load_config
from tagvalidator.errors import FieldError, TagValidatorError, UnsupportedRecordError
from tagvalidator.validation import (
    FieldValue,
    Kind,
    RuleFunction,
    RuleRegistry,
    UInt,
    Unsigned,
    ValidationResult,
    Validator,
    tagged,
)

_default_validator: Validator | None = None


def default_validator() -> Validator:
    """Process-wide validator used by the module-level functions."""
    global _default_validator
    if _default_validator is None:
        _default_validator = Validator()
    return _default_validator


def reset_default_validator() -> None:
    """Drop all registrations and overrides made on the default validator."""
    global _default_validator
    _default_validator = None


def set_tag_name(tag_name: str) -> None:
    default_validator().set_tag_name(tag_name)


def set_rule(name: str, fn: RuleFunction | None) -> None:
    default_validator().set_rule(name, fn)


def set_overrides(entries: Iterable[Any]) -> None:
    default_validator().set_overrides(entries)


def validate(record: Any) -> ValidationResult:
    return default_validator().validate(record)


__all__ = [
    "__version__",
    "__description__",
    "ErrorOverride",
    "ValidatorConfig",
    "load_config",
    "FieldError",
    "TagValidatorError",
    "UnsupportedRecordError",
    "FieldValue",
    "Kind",
    "RuleFunction",
    "RuleRegistry",
    "UInt",
    "Unsigned",
    "ValidationResult",
    "Validator",
    "tagged",
    "default_validator",
    "reset_default_validator",
    "set_tag_name",
    "set_rule",
    "set_overrides",
    "validate",
]
