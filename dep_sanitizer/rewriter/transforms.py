"""Pure transforms applied to the content of a single list block."""

from __future__ import annotations

from typing import Callable, Iterable

from dep_sanitizer.models import Address, Block

Transform = Callable[[Block], Iterable[str]]


def remove_lines(block: Block, deps: Iterable[Address], skip_marker: str) -> list[str]:
    """Drop every line referencing one of ``deps`` unless it carries ``skip_marker``."""
    deps = list(deps)
    return [
        line for line in block.lines
        if (skip_marker and skip_marker in line)
        or not any(dep.match_line(line) for dep in deps)
    ]


def add_lines(block: Block, deps: Iterable[Address]) -> list[str]:
    """Append an entry for each dependency the block does not reference yet."""
    result = list(block.lines)
    indent = block.indent
    q = block.quote
    for dep in deps:
        if any(dep.match_line(line) for line in result):
            continue
        result.append(f"{indent}{q}{dep.as_str()}{q},")
    return result


def sort_lines(block: Block) -> list[str]:
    # The rewriter already hands over sorted, de-duplicated lines.
    return list(block.lines)
