from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Sequence

import libcst as cst

from docprune.logging import get_logger
from docprune.redundancy.coordinator import process
from docprune.redundancy.docstring import FIELD_MARKERS, SphinxDocstring
from docprune.redundancy.heuristic import DescriptionHeuristic, EditDistanceHeuristic
from docprune.redundancy.model import FixPlan, FixRecord, FixRequest, TextEdit
from docprune.redundancy.rules import DEFAULT_RULES, RedundancyRules
from docprune.redundancy.signature import signature_from_function

_LOGGER = get_logger("engine")

DEFINITION = "Docstrings should only carry type information the signature does not."

CODE_SAMPLE_BEFORE = '''def get_count(self) -> int:
    """Count the widgets.

    :rtype: int
    """
'''

CODE_SAMPLE_AFTER = '''def get_count(self) -> int:
    """Count the widgets."""
'''


def is_candidate(source: str) -> bool:
    if "def " not in source:
        return False
    return any(marker in source for marker in FIELD_MARKERS)


def _docstring_statement(body: cst.BaseSuite) -> tuple[cst.SimpleStatementLine, cst.SimpleString] | None:
    if not isinstance(body, cst.IndentedBlock) or not body.body:
        return None
    stmt = body.body[0]
    if not isinstance(stmt, cst.SimpleStatementLine) or len(stmt.body) != 1:
        return None
    expr = stmt.body[0]
    if not isinstance(expr, cst.Expr) or not isinstance(expr.value, cst.SimpleString):
        return None
    return stmt, expr.value


def _split_literal(literal: cst.SimpleString) -> tuple[str, str, str]:
    prefix = literal.prefix
    quote = literal.quote
    inner = literal.value[len(prefix) + len(quote) : -len(quote)]
    return prefix, quote, inner


class DocstringFixer(cst.CSTTransformer):
    def __init__(
        self,
        *,
        rules: RedundancyRules = DEFAULT_RULES,
        heuristic: DescriptionHeuristic | None = None,
    ) -> None:
        self.rules = rules
        self.heuristic = heuristic or EditDistanceHeuristic(rules)
        self.records: list[FixRecord] = []
        self._stack: list[str] = []

    def visit_ClassDef(self, node: cst.ClassDef) -> bool:
        self._stack.append(node.name.value)
        return True

    def leave_ClassDef(
        self, original_node: cst.ClassDef, updated_node: cst.ClassDef
    ) -> cst.CSTNode:
        if self._stack:
            self._stack.pop()
        return updated_node

    def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
        self._stack.append(node.name.value)
        return True

    def leave_FunctionDef(
        self, original_node: cst.FunctionDef, updated_node: cst.FunctionDef
    ) -> cst.CSTNode:
        qualname = ".".join(self._stack)
        updated = self._maybe_rewrite_docstring(qualname, updated_node)
        if self._stack:
            self._stack.pop()
        return updated

    def _maybe_rewrite_docstring(self, qualname: str, node: cst.FunctionDef) -> cst.FunctionDef:
        found = _docstring_statement(node.body)
        if found is None:
            return node
        stmt, literal = found
        prefix, quote, inner = _split_literal(literal)
        doc = SphinxDocstring.parse(inner)
        process(signature_from_function(node), doc, rules=self.rules, heuristic=self.heuristic)
        if not doc.changed:
            return node
        self.records.append(FixRecord(qualname=qualname, removed=tuple(doc.removed)))
        _LOGGER.debug("%s: removed %s", qualname, ", ".join(doc.removed))

        body = list(node.body.body)
        if doc.is_blank():
            if len(body) > 1:
                new_first = body[1]
                leading = [
                    *stmt.leading_lines,
                    *(line for line in new_first.leading_lines if line.comment is not None),
                ]
                body = [new_first.with_changes(leading_lines=leading), *body[2:]]
            else:
                body = [stmt.with_changes(body=[cst.Pass()])]
        else:
            new_literal = literal.with_changes(value=f"{prefix}{quote}{doc.render()}{quote}")
            body[0] = stmt.with_changes(body=[stmt.body[0].with_changes(value=new_literal)])
        return node.with_changes(body=node.body.with_changes(body=body))


class FixerEngine:
    def __init__(
        self,
        project_root: Path | None = None,
        *,
        rules: RedundancyRules = DEFAULT_RULES,
        heuristic: DescriptionHeuristic | None = None,
    ) -> None:
        self.project_root = project_root
        self.rules = rules
        self.heuristic = heuristic

    def fix_source(self, source: str) -> tuple[str, list[FixRecord]]:
        """Rewrite ``source``; raises ``libcst.ParserSyntaxError`` on bad input."""
        if not is_candidate(source):
            return source, []
        module = cst.parse_module(source)
        fixer = DocstringFixer(rules=self.rules, heuristic=self.heuristic)
        new_module = module.visit(fixer)
        return new_module.code, fixer.records

    def plan_fix(self, request: FixRequest) -> FixPlan:
        path = Path(request.target_path)
        if self.project_root and not path.is_absolute():
            path = self.project_root / path
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("Failed to read %s: %s", path, exc)
            return FixPlan(errors=[f"Failed to read {path}: {exc}"])
        try:
            new_source, records = self.fix_source(source)
        except cst.ParserSyntaxError as exc:
            _LOGGER.warning("LibCST parse failed for %s", path)
            return FixPlan(
                original_source=source,
                new_source=source,
                errors=[f"LibCST parse failed for {path}: {exc}"],
            )
        plan = FixPlan(original_source=source, new_source=new_source, records=records)
        if new_source == source:
            return plan
        end_line = len(source.splitlines())
        plan.edits.append(
            TextEdit(
                path=str(path),
                start=(0, 0),
                end=(end_line, 0),
                replacement=new_source,
            )
        )
        return plan


def _is_excluded(path: Path, exclude: Sequence[str]) -> bool:
    posix = path.as_posix()
    return any(fnmatch(posix, pattern) or fnmatch(path.name, pattern) for pattern in exclude)


def iter_python_files(paths: Iterable[Path], exclude: Sequence[str] = ()) -> list[Path]:
    found: set[Path] = set()
    for path in paths:
        if path.is_dir():
            for candidate in path.rglob("*.py"):
                if candidate.is_file() and not _is_excluded(candidate, exclude):
                    found.add(candidate)
        elif path.suffix == ".py" and not _is_excluded(path, exclude):
            found.add(path)
    return sorted(found)
