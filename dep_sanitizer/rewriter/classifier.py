"""Line classification for BUILD files via precompiled regex matchers."""

from __future__ import annotations

import re

_DEPS_START_RE = re.compile(r"dependencies\s*=\s*\[")
_EXPORTS_START_RE = re.compile(r"exports\s*=\s*\[")
# `name` as the first argument: a bare `name=` line or `scala_library(name=`.
# Keyword arguments of nested calls such as `provides=artifact(name=...)` do not count.
_NAME_ASSIGN_RE = re.compile(r"^\s*(?:\w+\s*\(\s*)?name\s*=")


class LineClassifier:
    """Decides what role a single BUILD file line plays.

    The block state machine only talks to this class, so a smarter parser
    can replace the substring heuristics without touching the rewriter.
    """

    def __init__(
        self,
        deps_start: re.Pattern[str] = _DEPS_START_RE,
        exports_start: re.Pattern[str] = _EXPORTS_START_RE,
        name_assign: re.Pattern[str] = _NAME_ASSIGN_RE,
    ):
        self.deps_start = deps_start
        self.exports_start = exports_start
        self.name_assign = name_assign

    def deps_block_start(self, line: str) -> bool:
        return self._opens(self.deps_start, line)

    def exports_block_start(self, line: str) -> bool:
        return self._opens(self.exports_start, line)

    def list_block_start(self, line: str) -> bool:
        return self.deps_block_start(line) or self.exports_block_start(line)

    def is_inline_list(self, line: str) -> bool:
        """An opener whose closing bracket sits on the same line."""
        for pattern in (self.deps_start, self.exports_start):
            m = pattern.search(line)
            if m and "]" in line[m.end():]:
                return True
        return False

    def block_ends(self, line: str) -> bool:
        return "]" in line

    def names_target(self, line: str) -> bool:
        return bool(self.name_assign.search(line))

    def _opens(self, pattern: re.Pattern[str], line: str) -> bool:
        m = pattern.search(line)
        return bool(m) and "]" not in line[m.end():]


default_classifier = LineClassifier()


def deps_block_start(line: str) -> bool:
    return default_classifier.deps_block_start(line)


def exports_block_start(line: str) -> bool:
    return default_classifier.exports_block_start(line)


def list_block_start(line: str) -> bool:
    return default_classifier.list_block_start(line)


def block_ends(line: str) -> bool:
    return default_classifier.block_ends(line)
