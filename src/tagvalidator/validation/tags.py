"""Tag string parsing.

A tag is ``rule[=param](;rule[=param])*``. Parsing is purely syntactic and
never fails: unknown rule names are resolved (and skipped) later.
"""

from typing import NamedTuple

RULE_SEPARATOR = ";"
PARAM_SEPARATOR = "="


class RuleSpec(NamedTuple):
    """One rule reference from a tag, in source order."""
    name: str
    param: str = ""

    def __str__(self) -> str:
        if self.param:
            return f"{self.name}{PARAM_SEPARATOR}{self.param}"
        return self.name


def parse_tag(tag: str | None) -> list[RuleSpec]:
    """Split a tag into ordered rule specs.

    Empty segments are dropped. Each segment is split once on the first
    ``=`` so parameters (regex patterns in particular) may contain ``=``.
    """
    specs: list[RuleSpec] = []
    if not tag:
        return specs

    for segment in tag.split(RULE_SEPARATOR):
        segment = segment.strip()
        if not segment:
            continue
        name, _, param = segment.partition(PARAM_SEPARATOR)
        specs.append(RuleSpec(name.strip(), param.strip()))

    return specs


def format_tag(specs: list[RuleSpec]) -> str:
    """Inverse of parse_tag for specs that came from it."""
    return RULE_SEPARATOR.join(str(spec) for spec in specs)
