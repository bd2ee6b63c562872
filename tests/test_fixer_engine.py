from __future__ import annotations

import textwrap
from pathlib import Path

from docprune.redundancy.engine import FixerEngine, is_candidate, iter_python_files
from docprune.redundancy.model import FixRequest
from docprune.redundancy.rules import RedundancyRules


def _fix(source: str, **kwargs) -> tuple[str, list]:
    return FixerEngine(**kwargs).fix_source(textwrap.dedent(source))


def test_is_candidate_requires_function_and_field() -> None:
    assert is_candidate("def f():\n    ':rtype: int'\n")
    assert not is_candidate("def f():\n    'plain'\n")
    assert not is_candidate("x = ':rtype: int'\n")


def test_redundant_return_is_removed_and_docstring_tidied() -> None:
    new_source, records = _fix(
        '''
        class Widgets:
            def get_count(self) -> int:
                """Count the widgets.

                :rtype: int
                """
                return 3
        '''
    )
    assert new_source == textwrap.dedent(
        '''
        class Widgets:
            def get_count(self) -> int:
                """Count the widgets."""
                return 3
        '''
    )
    assert [(r.qualname, r.removed) for r in records] == [("Widgets.get_count", ("return",))]


def test_useful_descriptions_survive() -> None:
    source = '''
    def retry(retries: int, flag: bool) -> bool:
        """Retry things.

        :param int retries: Number of retries before giving up
        :param boolean flag: flag
        :returns: whether it worked
        :rtype: bool
        """
    '''
    new_source, records = _fix(source)
    assert ":param int retries: Number of retries before giving up" in new_source
    assert ":param boolean flag" not in new_source
    assert ":rtype: bool" in new_source
    assert records[0].removed == ("param:flag",)


def test_docstring_emptied_entirely_is_dropped() -> None:
    new_source, _ = _fix(
        '''
        def total(values: list[int]) -> int:
            """:rtype: int"""

            return sum(values)
        '''
    )
    assert new_source == textwrap.dedent(
        '''
        def total(values: list[int]) -> int:
            return sum(values)
        '''
    )


def test_docstring_only_body_becomes_pass() -> None:
    new_source, _ = _fix(
        '''
        def stub() -> str:
            """
            :rtype: str
            """
        '''
    )
    assert new_source == textwrap.dedent(
        '''
        def stub() -> str:
            pass
        '''
    )


def test_nested_functions_and_quotes_are_preserved() -> None:
    new_source, records = _fix(
        """
        def outer() -> None:
            def inner(name: str) -> str:
                r'''Echo.

                :param str name:
                '''
                return name
        """
    )
    assert "r'''Echo.'''" in new_source
    assert ":param str name:" not in new_source
    assert [r.qualname for r in records] == ["outer.inner"]


def test_non_candidate_source_is_returned_untouched() -> None:
    source = "def f(x):\n    return x\n"
    assert FixerEngine().fix_source(source) == (source, [])


def test_rules_reach_the_transformer() -> None:
    source = '''
    def load(path: str) -> app.Config:
        """Load.

        :rtype: Config
        """
    '''
    changed, _ = _fix(source)
    assert ":rtype: Config" not in changed
    unchanged, records = _fix(source, rules=RedundancyRules(namespace_separator="\\"))
    assert ":rtype: Config" in unchanged
    assert records == []


def test_plan_fix_produces_whole_file_edit(tmp_path: Path) -> None:
    target = tmp_path / "mod.py"
    target.write_text(
        'def f(a: int) -> int:\n    """Do it.\n\n    :param int a:\n    """\n    return a\n',
        encoding="utf-8",
    )
    plan = FixerEngine(project_root=tmp_path).plan_fix(FixRequest(target_path="mod.py"))
    assert plan.changed
    assert not plan.errors
    assert plan.edits[0].path == str(target)
    assert plan.edits[0].replacement == 'def f(a: int) -> int:\n    """Do it."""\n    return a\n'
    assert plan.new_source == plan.edits[0].replacement


def test_plan_fix_reports_missing_file(tmp_path: Path) -> None:
    plan = FixerEngine(project_root=tmp_path).plan_fix(FixRequest(target_path="missing.py"))
    assert plan.errors
    assert not plan.changed


def test_plan_fix_reports_parse_error(tmp_path: Path) -> None:
    target = tmp_path / "bad.py"
    target.write_text("def broken(:\n    ':rtype: int'\n", encoding="utf-8")
    plan = FixerEngine().plan_fix(FixRequest(target_path=str(target)))
    assert plan.errors
    assert "LibCST parse failed" in plan.errors[0]


def test_plan_fix_without_changes_has_no_edits(tmp_path: Path) -> None:
    target = tmp_path / "ok.py"
    target.write_text('def f(a: int) -> str:\n    """:rtype: int"""\n', encoding="utf-8")
    plan = FixerEngine().plan_fix(FixRequest(target_path=str(target)))
    assert not plan.changed
    assert plan.new_source == plan.original_source


def test_iter_python_files_expands_directories(tmp_path: Path) -> None:
    (tmp_path / "pkg" / "build").mkdir(parents=True)
    (tmp_path / "pkg" / "a.py").write_text("", encoding="utf-8")
    (tmp_path / "pkg" / "notes.txt").write_text("", encoding="utf-8")
    (tmp_path / "pkg" / "build" / "b.py").write_text("", encoding="utf-8")
    (tmp_path / "top.py").write_text("", encoding="utf-8")
    found = iter_python_files([tmp_path / "pkg", tmp_path / "top.py"], exclude=["*/build/*"])
    assert found == [tmp_path / "pkg" / "a.py", tmp_path / "top.py"]


def test_closing_quotes_join_the_summary_when_all_fields_go() -> None:
    source = 'def f(x: int) -> int:\n    """Do.\n\n    :param int x:\n    :rtype: int\n    """\n    return x\n'
    new_source, records = FixerEngine().fix_source(source)
    assert new_source == 'def f(x: int) -> int:\n    """Do."""\n    return x\n'
    assert records[0].removed == ("return", "param:x")


def test_closing_quotes_join_the_last_kept_field_in_a_method() -> None:
    new_source, _ = _fix(
        '''
        class A:
            def f(self, x: int) -> int:
                """Do.

                :param int x: the starting offset
                :rtype: int
                """
                return x
        '''
    )
    assert new_source == textwrap.dedent(
        '''
        class A:
            def f(self, x: int) -> int:
                """Do.

                :param int x: the starting offset"""
                return x
        '''
    )
