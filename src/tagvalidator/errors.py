"""Exception hierarchy for tagvalidator.

Two classes of failure exist: a system error raised when the input is not a
record at all, and per-field errors that rule functions raise and the
validator collects into a ValidationResult.
"""


class TagValidatorError(Exception):
    """Root of all tagvalidator errors."""

    default_message = "validation error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UnsupportedRecordError(TagValidatorError):
    """Input is not struct-shaped (dataclass instance or pydantic model)."""

    default_message = "unsupported validate type"


class FieldError(TagValidatorError):
    """A single field failed a rule.

    Rule functions raise subclasses of this. Custom rules may raise it
    directly with their own message.
    """


class ZeroValueError(FieldError):
    default_message = "not allowed zero"


class NilValueError(ZeroValueError):
    default_message = "not allowed nil"


class LengthError(FieldError):
    default_message = "invalid length"


class MinError(FieldError):
    default_message = "less than min"


class MaxError(FieldError):
    default_message = "greater than max"


class RegexpError(FieldError):
    default_message = "regular expression mismatch"


class EnumError(FieldError):
    default_message = "not allowed out of enum value"


class UnsupportedTypeError(FieldError):
    default_message = "unsupported type"


class BadParameterError(FieldError):
    """Rule parameter could not be coerced to what the rule needs."""

    default_message = "bad parameter"


class OverrideMessageError(FieldError):
    """Failure reported with a caller-supplied message.

    The rule's own failure is kept as ``__cause__``.
    """

    def __init__(self, message: str, field: str, rule: str, param: str = ""):
        super().__init__(message)
        self.field = field
        self.rule = rule
        self.param = param
