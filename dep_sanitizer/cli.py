"""Click CLI with unused, undeclared, and sort subcommands."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path

import click

from dep_sanitizer.errors import SanitizerError
from dep_sanitizer.models import BlockEdit, ModuleOutcome, Relation, SanitizerConfig
from dep_sanitizer.pipeline import fix_undeclared, fix_unused, show, sort_all

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


@contextmanager
def _fatal_errors():
    try:
        yield
    except SanitizerError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--report-file", "-r",
    type=click.Path(dir_okay=False, path_type=Path),
    default="deps.json", show_default=True,
    help="Dependency-usage report in JSON, e.g. from "
         "`./pants -q dep-usage.jvm --no-summary src/:: > deps.json`",
)
@click.option("--prefix", "-p", default="src/scala/", show_default=True,
              help="Only touch modules whose address starts with this prefix")
@click.option("--skip-marker", default="#skip-sanitize", show_default=True,
              help="Lines containing this marker are never removed")
@click.option("--root", type=click.Path(exists=True, file_okay=False, path_type=Path),
              default=".", help="Workspace root that module folders are relative to")
@click.option("--keep-going", is_flag=True,
              help="Report per-module failures at the end instead of aborting")
@click.option("--verbose", "-v", count=True, help="-v for info, -vv for debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    report_file: Path,
    prefix: str,
    skip_marker: str,
    root: Path,
    keep_going: bool,
    verbose: int,
):
    """dep-sanitizer: Keep BUILD dependency lists in line with actual usage."""
    logging.basicConfig(
        level=_LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = SanitizerConfig(
        report_file=report_file,
        prefix=prefix,
        skip_marker=skip_marker,
        root=root,
        keep_going=keep_going,
    )


@cli.group()
def unused():
    """Manage declared but unused dependencies."""


@cli.group()
def undeclared():
    """Manage used but undeclared dependencies."""


@unused.command("show")
@click.pass_obj
def unused_show(config: SanitizerConfig):
    """Show all unused dependencies."""
    _show(config, Relation.UNUSED)


@unused.command("fix")
@click.pass_obj
def unused_fix(config: SanitizerConfig):
    """Remove all unused dependencies from their BUILD files."""
    with _fatal_errors():
        summary = fix_unused(config, on_outcome=_outcome_printer("removed"))
    _finish_fix(summary.modules_affected, summary.total_changed, "removed", summary.errors)


@undeclared.command("show")
@click.pass_obj
def undeclared_show(config: SanitizerConfig):
    """Show all undeclared dependencies."""
    _show(config, Relation.UNDECLARED)


@undeclared.command("fix")
@click.pass_obj
def undeclared_fix(config: SanitizerConfig):
    """Add all undeclared dependencies to their BUILD files."""
    with _fatal_errors():
        summary = fix_undeclared(config, on_outcome=_outcome_printer("added"))
    _finish_fix(summary.modules_affected, summary.total_changed, "added", summary.errors)


@cli.command("sort")
@click.pass_obj
def sort_cmd(config: SanitizerConfig):
    """Sort dependencies and exports in every BUILD file under the prefix."""

    def report(edit: BlockEdit):
        if edit.error:
            click.echo(click.style(f"failed {edit.path}: {edit.error}", fg="red"))
        else:
            click.echo(f"sorted {edit.path}")

    with _fatal_errors():
        edits = sort_all(config, on_file=report)

    changed = sum(1 for e in edits if e.changed)
    failed = [e for e in edits if e.error]
    click.echo(f"\n files sorted: {len(edits) - len(failed)}, files changed: {changed}")
    if failed:
        raise click.ClickException(f"{len(failed)} BUILD file(s) could not be sorted")


def _show(config: SanitizerConfig, relation: Relation) -> None:
    with _fatal_errors():
        selection = show(config, relation)

    for module, deps in selection.modules.items():
        click.echo(click.style(str(module), fg="cyan"))
        for dep in deps:
            click.echo(f"  {dep}")
    click.echo(
        f"\n modules affected: {selection.modules_affected}, "
        f"total dependencies {relation.value}: {selection.total_dependencies}"
    )


def _outcome_printer(verb: str):
    def report(outcome: ModuleOutcome):
        if outcome.error:
            click.echo(click.style(f"{outcome.module} failed: {outcome.error}", fg="red"))
        else:
            click.echo(f"{outcome.module} {verb}: {outcome.changed}")
    return report


def _finish_fix(modules: int, total: int, verb: str, errors: list[ModuleOutcome]) -> None:
    click.echo(f"\n modules affected: {modules}, total dependencies {verb}: {total}")
    if errors:
        raise click.ClickException(f"{len(errors)} module(s) could not be fixed")


def main():
    cli(auto_envvar_prefix="DEP_SANITIZER")


if __name__ == "__main__":
    main()
