"""Orchestrator: report -> selection -> per-module BUILD rewrite."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Callable, Iterable

from dep_sanitizer.errors import StructuralViolation, TargetFileIoError
from dep_sanitizer.models import (
    BUILD_FILE_NAME,
    Address,
    BlockEdit,
    ModuleOutcome,
    Relation,
    RunSummary,
    SanitizerConfig,
    Selection,
)
from dep_sanitizer.report import read_report, select
from dep_sanitizer.rewriter import (
    AnyListMatcher,
    BlockRewriter,
    TargetBlockMatcher,
    add_lines,
    remove_lines,
    sort_lines,
)

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[ModuleOutcome], None]
FileCallback = Callable[[BlockEdit], None]
ModuleEdit = Callable[[Address, list[Address], SanitizerConfig, BlockRewriter], int]

# Per-file failures that --keep-going may isolate. Report errors always abort.
_FILE_ERRORS = (TargetFileIoError, StructuralViolation)


def show(config: SanitizerConfig, relation: Relation | str) -> Selection:
    """Select the dependencies of one relation kind without touching any file."""
    report = read_report(config.report_file)
    return select(report, relation, config.prefix)


def build_file_for(module: Address, root: Path) -> Path:
    path = module.build_file(root)
    if not path.is_file():
        raise TargetFileIoError(path, "no BUILD file in the module folder", str(module))
    return path


def remove_deps(
    module: Address,
    deps: Iterable[Address],
    config: SanitizerConfig,
    rewriter: BlockRewriter | None = None,
) -> int:
    """Remove ``deps`` from the module's dependency list; returns lines removed."""
    rewriter = rewriter or BlockRewriter(skip_marker=config.skip_marker)
    edit = rewriter.rewrite_file(
        build_file_for(module, config.root),
        TargetBlockMatcher(module, rewriter.classifier),
        partial(remove_lines, deps=list(deps), skip_marker=config.skip_marker),
    )
    return abs(edit.delta)


def add_deps(
    module: Address,
    deps: Iterable[Address],
    config: SanitizerConfig,
    rewriter: BlockRewriter | None = None,
) -> int:
    """Add ``deps`` to the module's dependency list; returns lines added."""
    rewriter = rewriter or BlockRewriter(skip_marker=config.skip_marker)
    edit = rewriter.rewrite_file(
        build_file_for(module, config.root),
        TargetBlockMatcher(module, rewriter.classifier),
        partial(add_lines, deps=list(deps)),
    )
    return edit.delta


def fix_unused(config: SanitizerConfig, on_outcome: OutcomeCallback | None = None) -> RunSummary:
    """Remove every unused dependency from the corresponding BUILD files."""
    return _run_fix(config, Relation.UNUSED, remove_deps, on_outcome)


def fix_undeclared(config: SanitizerConfig, on_outcome: OutcomeCallback | None = None) -> RunSummary:
    """Declare every used-but-undeclared dependency in the corresponding BUILD files."""
    return _run_fix(config, Relation.UNDECLARED, add_deps, on_outcome)


def sort_all(config: SanitizerConfig, on_file: FileCallback | None = None) -> list[BlockEdit]:
    """Sort every dependencies and exports list in BUILD files under the prefix."""
    base = config.root / config.prefix
    if not base.is_dir():
        logger.warning("Nothing to sort: %s is not a directory", base)
        return []

    rewriter = BlockRewriter(skip_marker=config.skip_marker)
    edits: list[BlockEdit] = []
    for path in sorted(base.rglob(BUILD_FILE_NAME)):
        if not path.is_file():
            continue
        try:
            edit = rewriter.rewrite_file(path, AnyListMatcher(rewriter.classifier), sort_lines)
        except _FILE_ERRORS as exc:
            if not config.keep_going:
                raise
            logger.warning("Skipping %s: %s", path, exc)
            edit = BlockEdit(path=path, error=str(exc))
        edits.append(edit)
        if on_file:
            on_file(edit)
    return edits


def _run_fix(
    config: SanitizerConfig,
    relation: Relation,
    apply: ModuleEdit,
    on_outcome: OutcomeCallback | None,
) -> RunSummary:
    selection = show(config, relation)
    rewriter = BlockRewriter(skip_marker=config.skip_marker)
    summary = RunSummary(relation=selection.relation)

    for module, deps in selection.modules.items():
        try:
            changed = apply(module, deps, config, rewriter)
        except _FILE_ERRORS as exc:
            if not config.keep_going:
                raise
            logger.warning("Skipping %s: %s", module, exc)
            outcome = ModuleOutcome(module=module, error=str(exc))
        else:
            logger.info("%s: %d %s dependencies fixed", module, changed, relation.value)
            outcome = ModuleOutcome(module=module, changed=changed)
        summary.outcomes.append(outcome)
        if on_outcome:
            on_outcome(outcome)

    return summary
