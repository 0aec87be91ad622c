"""Rule name to rule function mapping."""

import logging

from .rules import BUILTIN_RULES, RuleFunction

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Mutable table of named rule functions.

    Names are matched exactly. Resolving an unknown name returns None; the
    validator treats that as "skip this rule".
    """

    def __init__(self, rules: dict[str, RuleFunction] | None = None):
        self._rules: dict[str, RuleFunction] = dict(rules or {})

    @classmethod
    def with_builtins(cls) -> "RuleRegistry":
        """Registry seeded with the seven built-in rules."""
        return cls(BUILTIN_RULES)

    def register(self, name: str, fn: RuleFunction | None) -> None:
        """Add or replace a rule; ``fn=None`` removes it. Empty names are ignored."""
        if not name:
            return
        if fn is None:
            if self._rules.pop(name, None) is not None:
                logger.debug(f"Removed rule: {name}")
            return
        if name in self._rules:
            logger.debug(f"Overriding rule: {name}")
        else:
            logger.debug(f"Registering rule: {name}")
        self._rules[name] = fn

    def resolve(self, name: str) -> RuleFunction | None:
        return self._rules.get(name)

    def names(self) -> list[str]:
        return list(self._rules)

    def copy(self) -> "RuleRegistry":
        return RuleRegistry(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)
