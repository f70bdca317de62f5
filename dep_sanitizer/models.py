"""Data models for the dependency sanitizer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

from dep_sanitizer.errors import AddressFormatError

BUILD_FILE_NAME = "BUILD"
QUOTES = ("'", '"')


class Relation(str, enum.Enum):
    UNUSED = "unused"
    UNDECLARED = "undeclared"
    DECLARED = "declared"


@dataclass(frozen=True, order=True)
class Address:
    """A build target label split into ``folder`` and ``module_name``."""
    folder: str
    module_name: str

    @classmethod
    def from_str(cls, label: str) -> Address:
        folder, sep, module_name = label.partition(":")
        if not sep or not folder or not module_name:
            raise AddressFormatError(label)
        return cls(folder=folder, module_name=module_name)

    def is_simple(self) -> bool:
        """True when the folder holds a single target named after the folder."""
        return self.folder.rstrip("/").rsplit("/", 1)[-1] == self.module_name

    def match_line(self, line: str) -> bool:
        """Whether ``line`` references this address in any of its shorthand forms."""
        for q in QUOTES:
            if f"{q}{self.folder}:{self.module_name}{q}" in line:
                return True
            if self.is_simple() and f"{q}{self.folder}{q}" in line:
                return True
            if f"{q}:{self.module_name}{q}" in line:
                return True
        return False

    def as_str(self) -> str:
        if self.is_simple():
            return self.folder
        return f"{self.folder}:{self.module_name}"

    def build_file(self, root: Path) -> Path:
        return root / self.folder / BUILD_FILE_NAME

    def __str__(self) -> str:
        return f"{self.folder}:{self.module_name}"


@dataclass(frozen=True)
class DependencyEdge:
    """One report entry: ``owner`` depends on ``target`` with ``relation``."""
    owner: Address
    target: Address
    relation: str


@dataclass
class Block:
    """Content of one dependency/exports list, handed to a transform."""
    lines: list[str]
    quote: str = "'"

    @property
    def indent(self) -> str:
        if not self.lines:
            return " " * 8
        first = self.lines[0]
        return first[: len(first) - len(first.lstrip())]


@dataclass
class BlockEdit:
    """Result of rewriting one BUILD file."""
    path: Path | None
    blocks: int = 0
    delta: int = 0
    changed: bool = False
    error: str | None = None


@dataclass
class ModuleOutcome:
    """Per-owner result inside a fix run."""
    module: Address
    changed: int = 0
    error: str | None = None


@dataclass
class RunSummary:
    relation: str
    outcomes: list[ModuleOutcome] = field(default_factory=list)

    @property
    def modules_affected(self) -> int:
        return sum(1 for o in self.outcomes if o.changed)

    @property
    def total_changed(self) -> int:
        return sum(o.changed for o in self.outcomes)

    @property
    def errors(self) -> list[ModuleOutcome]:
        return [o for o in self.outcomes if o.error is not None]


@dataclass
class Selection:
    """Owners and the dependencies of one relation kind selected from a report."""
    relation: str
    modules: dict[Address, list[Address]] = field(default_factory=dict)

    @property
    def modules_affected(self) -> int:
        return len(self.modules)

    @property
    def total_dependencies(self) -> int:
        return sum(len(deps) for deps in self.modules.values())


@dataclass
class SanitizerConfig:
    """Configuration shared by every command."""
    report_file: Path = field(default_factory=lambda: Path("deps.json"))
    prefix: str = "src/scala/"
    skip_marker: str = "#skip-sanitize"
    root: Path = field(default_factory=lambda: Path("."))
    keep_going: bool = False
