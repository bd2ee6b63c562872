"""Decide whether a documented type says nothing the declared type does not."""

from __future__ import annotations

from docprune.redundancy.model import TypeExpression
from docprune.redundancy.rules import DEFAULT_RULES, RedundancyRules


def same_union(declared: TypeExpression, documented: TypeExpression) -> bool:
    if not (declared.is_union and documented.is_union):
        return False
    return sorted(declared.alternatives) == sorted(documented.alternatives)


def is_qualified_match(
    qualified: TypeExpression,
    short: TypeExpression,
    rules: RedundancyRules = DEFAULT_RULES,
) -> bool:
    """``app.models.Foo`` against ``Foo``; the short side must be non-empty."""
    if not qualified.raw_text or not short.raw_text:
        return False
    return qualified.raw_text.endswith(rules.namespace_separator + short.raw_text)


def is_alias_match(
    declared: TypeExpression,
    documented: TypeExpression,
    rules: RedundancyRules = DEFAULT_RULES,
) -> bool:
    target = rules.aliases.get(documented.raw_text)
    return target is not None and target == declared.raw_text


def types_are_redundant(
    declared: TypeExpression | None,
    documented: TypeExpression | None,
    rules: RedundancyRules = DEFAULT_RULES,
) -> bool:
    if declared is None or documented is None:
        return False
    if declared.raw_text == documented.raw_text:
        return True
    if declared.is_union and documented.is_union:
        return same_union(declared, documented)
    if is_qualified_match(declared, documented, rules):
        return True
    return is_alias_match(declared, documented, rules)
