"""Custom error messages keyed by (field, rule)."""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..config import ErrorOverride

logger = logging.getLogger(__name__)

# %v / %s receive the parameter, %% is a literal percent sign
_PLACEHOLDER = re.compile(r"%([vs%])")


def render_template(template: str, param: str) -> str:
    """Substitute the rule parameter into the first placeholder.

    Templates without a ``%`` are returned verbatim. Placeholders after the
    first are left as written.
    """
    if "%" not in template:
        return template

    substituted = False

    def replace(match: re.Match) -> str:
        nonlocal substituted
        if match.group(1) == "%":
            return "%"
        if substituted:
            return match.group(0)
        substituted = True
        return param

    return _PLACEHOLDER.sub(replace, template)


def _coerce(entry: Any) -> ErrorOverride:
    if isinstance(entry, ErrorOverride):
        return entry
    if isinstance(entry, Mapping):
        return ErrorOverride.model_validate(entry)
    field, rule, message = entry
    return ErrorOverride(field=field, rule=rule, message=message)


class OverrideTable:
    """Message templates indexed by field name, then rule name."""

    def __init__(self, entries: Iterable[Any] = ()):
        self._templates: dict[str, dict[str, str]] = {}
        self.update(entries)

    def set(self, field: str, rule: str, template: str) -> None:
        self._templates.setdefault(field, {})[rule] = template
        logger.debug(f"Override set for {field}.{rule}")

    def update(self, entries: Iterable[Any]) -> None:
        """Merge entries in order; later entries win for the same key.

        Entries may be ErrorOverride models, mappings with field/rule/message
        keys, or (field, rule, message) tuples.
        """
        for entry in entries:
            override = _coerce(entry)
            self.set(override.field, override.rule, override.message)

    def lookup(self, field: str, rule: str) -> str | None:
        return self._templates.get(field, {}).get(rule)

    def render(self, field: str, rule: str, param: str) -> str | None:
        """Rendered message for (field, rule), or None when no override exists."""
        template = self.lookup(field, rule)
        if template is None:
            return None
        return render_template(template, param)

    def entries(self) -> list[ErrorOverride]:
        return [
            ErrorOverride(field=field, rule=rule, message=template)
            for field, rules in self._templates.items()
            for rule, template in rules.items()
        ]

    def copy(self) -> "OverrideTable":
        return OverrideTable(self.entries())

    def clear(self) -> None:
        self._templates.clear()

    def __len__(self) -> int:
        return sum(len(rules) for rules in self._templates.values())
