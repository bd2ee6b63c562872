"""Judge whether a free-text description says more than its type name."""

from __future__ import annotations

import re
from typing import Protocol

from Levenshtein import distance as levenshtein

from docprune.redundancy.rules import DEFAULT_RULES, RedundancyRules


class DescriptionHeuristic(Protocol):
    def is_useful(self, description: str, type_: str | None, name: str | None) -> bool: ...


def _strip_suffix(type_: str, suffix: str) -> str:
    if suffix and type_.endswith(suffix):
        return type_[: -len(suffix)]
    return type_


def _dummy_pattern(type_: str, rules: RedundancyRules) -> re.Pattern[str]:
    separator = re.escape(rules.namespace_separator)
    suffix = re.escape(rules.interface_suffix)
    return re.compile(
        rf"^(A|An|The|the) ({separator})?{re.escape(type_)}({suffix})?( instance)?$",
        re.IGNORECASE,
    )


def is_dummy_description(
    description: str, type_: str, rules: RedundancyRules = DEFAULT_RULES
) -> bool:
    # "A Foo", "the \Foo instance", "Foo" with a typo...
    if _dummy_pattern(type_, rules).match(description):
        return True
    return levenshtein(type_, description) < rules.dummy_distance


def is_description_useful(
    description: str | None,
    type_: str | None,
    name: str | None = None,
    rules: RedundancyRules = DEFAULT_RULES,
) -> bool:
    if not description or type_ is None:
        return False
    type_ = _strip_suffix(type_, rules.interface_suffix)
    if rules.collection_marker and type_.endswith(rules.collection_marker):
        return True
    if is_dummy_description(description, type_, rules):
        return False
    if name is not None and levenshtein(name, description) < rules.dummy_distance:
        return False
    return True


class EditDistanceHeuristic:
    """Default heuristic: regex for stock phrasings plus edit distance."""

    def __init__(self, rules: RedundancyRules = DEFAULT_RULES) -> None:
        self.rules = rules

    def is_useful(self, description: str, type_: str | None, name: str | None) -> bool:
        return is_description_useful(description, type_, name, self.rules)
