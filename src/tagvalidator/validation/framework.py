"""Core validation engine.

The Validator walks a record's fields in declaration order, parses each
field's tag, resolves every rule from its registry and records the first
failure per field, rewritten by the override table when a custom message
is configured.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_TAG_NAME, ValidatorConfig
from ..errors import FieldError, OverrideMessageError
from .overrides import OverrideTable
from .records import RecordField, iter_fields
from .registry import RuleRegistry
from .rules import RuleFunction
from .tags import parse_tag

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Per-field errors of one validation run.

    Only failing fields have an entry, at most one error each.
    """
    errors: dict[str, FieldError] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def messages(self) -> dict[str, str]:
        return {name: str(error) for name, error in self.errors.items()}

    def get(self, name: str, default: FieldError | None = None) -> FieldError | None:
        return self.errors.get(name, default)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.valid,
            "errors": [
                {
                    "field": name,
                    "error": type(error).__name__,
                    "message": str(error),
                }
                for name, error in self.errors.items()
            ]
        }

    def __getitem__(self, name: str) -> FieldError:
        return self.errors[name]

    def __contains__(self, name: object) -> bool:
        return name in self.errors

    def __iter__(self) -> Iterator[str]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class Validator:
    """Tag-driven record validator.

    Each instance owns its registry and override table, so isolated
    validators can be configured independently of the process-wide default.
    Mutating a validator while another thread validates with it is not safe.
    """

    def __init__(
        self,
        tag_name: str = DEFAULT_TAG_NAME,
        registry: RuleRegistry | None = None,
        overrides: OverrideTable | None = None,
        warn_on_unknown_rules: bool = False,
    ):
        self.tag_name = tag_name or DEFAULT_TAG_NAME
        self.registry = registry if registry is not None else RuleRegistry.with_builtins()
        self.overrides = overrides if overrides is not None else OverrideTable()
        self.warn_on_unknown_rules = warn_on_unknown_rules

    @classmethod
    def from_config(cls, config: ValidatorConfig) -> "Validator":
        return cls(
            tag_name=config.tag_name,
            overrides=OverrideTable(config.overrides),
            warn_on_unknown_rules=config.warn_on_unknown_rules,
        )

    def set_tag_name(self, tag_name: str) -> None:
        """Change the metadata key tags are read from; empty names are ignored."""
        if tag_name:
            self.tag_name = tag_name

    def set_rule(self, name: str, fn: RuleFunction | None) -> None:
        """Register, override or (with ``fn=None``) remove a rule."""
        self.registry.register(name, fn)

    def set_overrides(self, entries: Iterable[Any]) -> None:
        """Merge custom messages into the override table."""
        self.overrides.update(entries)

    def copy(self) -> "Validator":
        return Validator(
            tag_name=self.tag_name,
            registry=self.registry.copy(),
            overrides=self.overrides.copy(),
            warn_on_unknown_rules=self.warn_on_unknown_rules,
        )

    def validate(self, record: Any) -> ValidationResult:
        """Validate every tagged field of a record.

        Args:
            record: Dataclass or pydantic model instance

        Returns:
            ValidationResult holding the first error of each failing field

        Raises:
            UnsupportedRecordError: If record is not struct-shaped
        """
        fields = iter_fields(record, self.tag_name)
        result = ValidationResult()

        for record_field in fields:
            error = self.validate_field(record_field)
            if error is not None:
                result.errors[record_field.name] = error

        logger.debug(f"Validated {type(record).__name__}: {len(result)} failing field(s)")
        return result

    def validate_field(self, record_field: RecordField) -> FieldError | None:
        """Run a field's rules in order and return its first error, if any."""
        for spec in parse_tag(record_field.tag):
            fn = self.registry.resolve(spec.name)
            if fn is None:
                if self.warn_on_unknown_rules:
                    logger.warning(f"Unknown rule '{spec.name}' on field {record_field.name}, skipping")
                continue

            try:
                fn(record_field.value, spec.param)
            except FieldError as e:
                logger.debug(f"Field {record_field.name} failed rule {spec.name}: {e}")
                message = self.overrides.render(record_field.name, spec.name, spec.param)
                if message is None:
                    return e
                override = OverrideMessageError(message, record_field.name, spec.name, spec.param)
                override.__cause__ = e
                return override

        return None
