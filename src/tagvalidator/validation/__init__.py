"""Tag-driven field validation.

Records declare rules per field in a compact tag string
(``nonzero;len=7;regex=^[a-z]+$``). The Validator parses tags, resolves rule
names from a RuleRegistry and reports the first failing rule of each field.
"""

from .framework import ValidationResult, Validator
from .overrides import OverrideTable, render_template
from .records import RecordField, iter_fields, tagged
from .registry import RuleRegistry
from .rules import BUILTIN_RULES, RuleFunction
from .tags import RuleSpec, parse_tag
from .values import FieldValue, Kind, UInt, Unsigned

__all__ = [
    "Validator",
    "ValidationResult",
    "OverrideTable",
    "render_template",
    "RecordField",
    "iter_fields",
    "tagged",
    "RuleRegistry",
    "BUILTIN_RULES",
    "RuleFunction",
    "RuleSpec",
    "parse_tag",
    "FieldValue",
    "Kind",
    "UInt",
    "Unsigned",
]
