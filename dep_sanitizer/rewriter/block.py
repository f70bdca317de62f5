"""Single-pass block rewriter for BUILD files.

A *block* is the run of lines between a list opener (``dependencies = [``
or ``exports = [``) and the first following line containing ``]``. The
rewriter copies every line outside the matched blocks verbatim and hands
each block's content to a transform as a sorted, de-duplicated set.
Original line order and interior comments inside a block are not kept.
Quote normalization swaps every quote character on a block line, so an
apostrophe in an interior comment becomes a double quote in a file whose
dialect is double quotes.
"""

from __future__ import annotations

import abc
import logging
import re
from pathlib import Path

from dep_sanitizer.errors import StructuralViolation
from dep_sanitizer.models import Address, Block, BlockEdit
from dep_sanitizer.rewriter.classifier import LineClassifier, default_classifier
from dep_sanitizer.rewriter.file_io import read_build_file, write_build_file
from dep_sanitizer.rewriter.transforms import Transform

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


class BlockMatcher(abc.ABC):
    """Decides which list openers start a block to rewrite."""

    description: str = "BUILD file"

    @abc.abstractmethod
    def starts_block(self, line: str) -> bool:
        """Called for every line outside a block, in file order."""

    def block_closed(self) -> None:
        """Called after a matched block has been rewritten."""


class AnyListMatcher(BlockMatcher):
    """Matches every dependencies and exports list in the file."""

    description = "all dependency lists"

    def __init__(self, classifier: LineClassifier | None = None):
        self.classifier = classifier or default_classifier

    def starts_block(self, line: str) -> bool:
        return self.classifier.list_block_start(line)


class TargetBlockMatcher(BlockMatcher):
    """Matches the dependency list owned by a single target.

    A simple target owns every list in its file. Otherwise a target-name line
    (``name=`` as the first argument) mentioning the target must come first;
    another target's name line, or the end of the target's block, closes the
    gate again. ``name=`` inside a nested call such as ``provides=`` is ignored.
    """

    def __init__(
        self,
        address: Address,
        classifier: LineClassifier | None = None,
        include_exports: bool = False,
    ):
        self.address = address
        self.classifier = classifier or default_classifier
        self.include_exports = include_exports
        self.description = str(address)
        self._simple = address.is_simple()
        self._inside_target = self._simple

    def starts_block(self, line: str) -> bool:
        if not self._simple and self.classifier.names_target(line):
            self._inside_target = self.address.module_name in line
        if not self._inside_target:
            return False
        if self.classifier.deps_block_start(line):
            return True
        return self.include_exports and self.classifier.exports_block_start(line)

    def block_closed(self) -> None:
        if not self._simple:
            self._inside_target = False


def detect_quote(text: str) -> str:
    """The quote character a file mostly uses; single quotes win ties."""
    return '"' if text.count('"') > text.count("'") else "'"


def _detect_newline(lines: list[str]) -> str:
    for raw in lines:
        ending = raw[len(raw.rstrip("\r\n")):]
        if ending:
            return ending
    return "\n"


class BlockRewriter:
    """Runs transforms over the blocks a matcher selects."""

    def __init__(
        self,
        classifier: LineClassifier | None = None,
        skip_marker: str = "#skip-sanitize",
    ):
        self.classifier = classifier or default_classifier
        self.skip_marker = skip_marker

    def rewrite_text(
        self,
        text: str,
        matcher: BlockMatcher,
        transform: Transform,
        path: Path | None = None,
    ) -> tuple[str, BlockEdit]:
        """Return the rewritten text and a summary of what changed."""
        lines = _LINE_RE.findall(text)
        newline = _detect_newline(lines)
        quote = detect_quote(text)
        edit = BlockEdit(path=path)

        out: list[str] = []
        buffer: set[str] = set()
        inside = False

        for number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")

            if not inside:
                if matcher.starts_block(line):
                    inside = True
                    edit.blocks += 1
                elif self.classifier.is_inline_list(line):
                    logger.debug("%s:%d: inline list left as is", path or "<text>", number)
                out.append(raw)
                continue

            if self.classifier.list_block_start(line):
                raise StructuralViolation(
                    path, number, "list opener inside an unterminated block",
                    matcher.description,
                )

            if self.classifier.block_ends(line):
                old = sorted(buffer)
                new = sorted(set(transform(Block(lines=old, quote=quote))))
                edit.delta += len(new) - len(old)
                out.extend(entry + newline for entry in new)
                out.append(raw)
                buffer = set()
                inside = False
                matcher.block_closed()
                continue

            entry = self._normalize(line, quote)
            if entry:
                buffer.add(entry)

        if inside:
            raise StructuralViolation(
                path, len(lines), "block is never closed", matcher.description,
            )

        new_text = "".join(out)
        edit.changed = new_text != text
        return new_text, edit

    def rewrite_file(
        self,
        path: Path,
        matcher: BlockMatcher,
        transform: Transform,
    ) -> BlockEdit:
        """Rewrite ``path`` in place; the file is left alone if nothing changed."""
        text = read_build_file(path, matcher.description)
        new_text, edit = self.rewrite_text(text, matcher, transform, path=path)
        if not edit.blocks:
            logger.debug("%s: no block found for %s", path, matcher.description)
        if edit.changed:
            write_build_file(path, new_text, matcher.description)
            logger.info("%s: rewrote %d block(s), delta %+d", path, edit.blocks, edit.delta)
        else:
            logger.debug("%s: unchanged", path)
        return edit

    def _normalize(self, line: str, quote: str) -> str | None:
        line = line.rstrip()
        if not line:
            return None
        other = '"' if quote == "'" else "'"
        line = line.replace(other, quote)
        if line.endswith(",") or (self.skip_marker and self.skip_marker in line):
            return line
        return line + ","
