"""Walk one function's return and parameter annotations and drop redundant ones.

The coordinator only reads the signature and only mutates the documentation
through ``remove_return_type`` and ``remove_param_type``. Missing pieces on
either side always resolve to keeping the documentation as written.
"""

from __future__ import annotations

from docprune.redundancy.equivalence import is_alias_match, is_qualified_match, same_union
from docprune.redundancy.heuristic import DescriptionHeuristic, EditDistanceHeuristic
from docprune.redundancy.model import (
    AnnotationField,
    Decision,
    DocumentationView,
    ParameterView,
    SignatureView,
    parse_type,
)
from docprune.redundancy.rules import DEFAULT_RULES, RedundancyRules


def return_field(doc: DocumentationView, rules: RedundancyRules = DEFAULT_RULES) -> AnnotationField:
    return AnnotationField(
        documented_type=parse_type(doc.return_type, rules.union_separator),
        description=doc.return_description,
    )


def param_field(
    doc: DocumentationView, name: str, rules: RedundancyRules = DEFAULT_RULES
) -> AnnotationField | None:
    if not doc.has_param(name):
        return None
    return AnnotationField(
        documented_type=parse_type(doc.param_type(name), rules.union_separator),
        description=doc.param_description(name),
    )


def decide_return(
    signature: SignatureView,
    doc: DocumentationView,
    rules: RedundancyRules = DEFAULT_RULES,
) -> Decision:
    declared = parse_type(signature.return_type, rules.union_separator)
    field = return_field(doc, rules)
    documented, description = field.documented_type, field.description
    if declared is None or documented is None:
        return Decision.KEEP
    if declared.raw_text == documented.raw_text:
        return Decision.KEEP if description else Decision.REMOVE
    if same_union(declared, documented) and not description:
        return Decision.REMOVE
    # A qualified declared name wins even over a written description.
    if is_qualified_match(declared, documented, rules):
        return Decision.REMOVE
    if is_alias_match(declared, documented, rules):
        return Decision.REMOVE
    return Decision.KEEP


def decide_param(
    parameter: ParameterView,
    doc: DocumentationView,
    *,
    rules: RedundancyRules = DEFAULT_RULES,
    heuristic: DescriptionHeuristic | None = None,
) -> tuple[Decision, bool]:
    """Return the decision and whether the remaining parameters must be skipped."""
    name = parameter.name
    field = param_field(doc, name, rules)
    if field is None:
        return Decision.KEEP, False
    documented, description = field.documented_type, field.description
    # ":param str name: str" style, the type slot repeats the description.
    if doc.param_type(name) == description:
        return Decision.REMOVE, False
    if documented is None or description is None:
        return Decision.KEEP, False

    heuristic = heuristic or EditDistanceHeuristic(rules)
    useful = heuristic.is_useful(description, documented.raw_text, name)

    declared = parse_type(parameter.type, rules.union_separator)
    if declared is None:
        return Decision.KEEP, False
    if documented.raw_text == declared.raw_text:
        return (Decision.KEEP if useful else Decision.REMOVE), False
    if is_qualified_match(documented, declared, rules) or is_qualified_match(
        declared, documented, rules
    ):
        if useful:
            return Decision.KEEP, False
        return Decision.REMOVE, rules.stop_after_qualified_param_match
    if is_alias_match(declared, documented, rules):
        return Decision.REMOVE, False
    return Decision.KEEP, False


def process(
    signature: SignatureView,
    doc: DocumentationView,
    *,
    rules: RedundancyRules = DEFAULT_RULES,
    heuristic: DescriptionHeuristic | None = None,
) -> None:
    if decide_return(signature, doc, rules) is Decision.REMOVE:
        doc.remove_return_type()

    heuristic = heuristic or EditDistanceHeuristic(rules)
    for parameter in signature.parameters:
        decision, stop = decide_param(parameter, doc, rules=rules, heuristic=heuristic)
        if decision is Decision.REMOVE:
            doc.remove_param_type(parameter.name)
        if stop:
            # Stops at the first qualified-name removal; see
            # RedundancyRules.stop_after_qualified_param_match.
            return
