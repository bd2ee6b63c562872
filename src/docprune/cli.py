from __future__ import annotations

import difflib
from pathlib import Path
from typing import List, Optional

import typer

from docprune.config import (
    exclude_patterns,
    files_defaults,
    merge_payload,
    redundancy_defaults,
    rules_from_config,
)
from docprune.exceptions import ConfigError
from docprune.logging import configure_logging, get_logger
from docprune.redundancy.engine import (
    CODE_SAMPLE_AFTER,
    CODE_SAMPLE_BEFORE,
    DEFINITION,
    FixerEngine,
    iter_python_files,
)
from docprune.redundancy.model import FixPlan, FixRequest

app = typer.Typer(add_completion=False, help="Strip docstring type annotations the signature already states.")

_LOGGER = get_logger("cli")

EXIT_OK = 0
EXIT_CHANGES = 1
EXIT_ERRORS = 2


def _unified_diff(path: Path, plan: FixPlan) -> str:
    return "".join(
        difflib.unified_diff(
            plan.original_source.splitlines(keepends=True),
            plan.new_source.splitlines(keepends=True),
            fromfile=f"a/{path.as_posix()}",
            tofile=f"b/{path.as_posix()}",
        )
    )


def _build_engine(
    *,
    root: Path,
    config: Optional[Path],
    namespace_separator: Optional[str],
    stop_after_qualified_match: Optional[bool],
) -> FixerEngine:
    section = merge_payload(
        {
            "namespace_separator": namespace_separator,
            "stop_after_qualified_param_match": stop_after_qualified_match,
        },
        redundancy_defaults(root=root, config_path=config),
    )
    try:
        rules = rules_from_config(section)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    return FixerEngine(rules=rules)


@app.command()
def fix(
    paths: List[Path] = typer.Argument(..., help="Files or directories to process."),
    check: bool = typer.Option(False, "--check", help="Exit 1 when any file would change; write nothing."),
    diff: bool = typer.Option(False, "--diff", help="Print a unified diff instead of writing."),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    namespace_separator: Optional[str] = typer.Option(None, "--namespace-separator"),
    stop_after_qualified_match: Optional[bool] = typer.Option(
        None,
        "--stop-after-qualified-match/--no-stop-after-qualified-match",
        help="Skip a function's remaining parameters after a qualified-name removal.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Remove docstring types that duplicate the function signature."""
    configure_logging(verbose=verbose)
    engine = _build_engine(
        root=root,
        config=config,
        namespace_separator=namespace_separator,
        stop_after_qualified_match=stop_after_qualified_match,
    )
    exclude = exclude_patterns(files_defaults(root=root, config_path=config))
    changed: list[Path] = []
    failed = False
    for path in iter_python_files(paths, exclude):
        plan = engine.plan_fix(FixRequest(target_path=str(path)))
        for error in plan.errors:
            typer.echo(error, err=True)
            failed = True
        if not plan.changed:
            continue
        changed.append(path)
        for record in plan.records:
            _LOGGER.info("%s:%s removed %s", path, record.qualname, ", ".join(record.removed))
        if diff:
            typer.echo(_unified_diff(path, plan), nl=False)
        elif check:
            typer.echo(f"would fix {path}")
        else:
            path.write_text(plan.new_source, encoding="utf-8")
            typer.echo(f"fixed {path}")
    if failed:
        raise typer.Exit(code=EXIT_ERRORS)
    if check and changed:
        raise typer.Exit(code=EXIT_CHANGES)
    if not changed:
        typer.echo("nothing to fix")
    raise typer.Exit(code=EXIT_OK)


@app.command()
def explain() -> None:
    """Describe the rule with a before/after sample."""
    typer.echo(DEFINITION)
    typer.echo("")
    typer.echo("Before:")
    typer.echo(CODE_SAMPLE_BEFORE)
    typer.echo("After:")
    typer.echo(CODE_SAMPLE_AFTER)

