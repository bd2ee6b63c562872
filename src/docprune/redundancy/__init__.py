from docprune.redundancy.coordinator import decide_param, decide_return, process
from docprune.redundancy.docstring import SphinxDocstring
from docprune.redundancy.engine import DocstringFixer, FixerEngine, is_candidate, iter_python_files
from docprune.redundancy.equivalence import types_are_redundant
from docprune.redundancy.heuristic import (
    DescriptionHeuristic,
    EditDistanceHeuristic,
    is_description_useful,
    levenshtein,
)
from docprune.redundancy.model import (
    AnnotationField,
    Decision,
    FixPlan,
    FixRecord,
    FixRequest,
    FunctionSignature,
    ParameterSignature,
    TextEdit,
    TypeExpression,
)
from docprune.redundancy.rules import DEFAULT_ALIASES, DEFAULT_RULES, RedundancyRules
from docprune.redundancy.signature import signature_from_function

__all__ = [
    "AnnotationField",
    "DEFAULT_ALIASES",
    "DEFAULT_RULES",
    "Decision",
    "DescriptionHeuristic",
    "DocstringFixer",
    "EditDistanceHeuristic",
    "FixPlan",
    "FixRecord",
    "FixRequest",
    "FixerEngine",
    "FunctionSignature",
    "ParameterSignature",
    "RedundancyRules",
    "SphinxDocstring",
    "TextEdit",
    "TypeExpression",
    "decide_param",
    "decide_return",
    "is_candidate",
    "is_description_useful",
    "iter_python_files",
    "levenshtein",
    "process",
    "signature_from_function",
    "types_are_redundant",
]
