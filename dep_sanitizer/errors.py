"""Exception hierarchy for report ingestion and BUILD file rewriting."""

from __future__ import annotations

from pathlib import Path


class SanitizerError(Exception):
    """Base class for every failure that aborts a run."""


class AddressFormatError(SanitizerError, ValueError):
    def __init__(self, label: str):
        super().__init__(f"Invalid address {label!r}: expected 'folder:name'")
        self.label = label


class ReportIoError(SanitizerError):
    def __init__(self, path: Path, cause: Exception):
        super().__init__(f"Couldn't open the report file {str(path)!r}. Cause={cause}")
        self.path = path


class ReportParseError(SanitizerError):
    def __init__(self, path: Path, cause: object):
        super().__init__(f"Couldn't parse the report file {str(path)!r}. Cause={cause}")
        self.path = path


class TargetFileIoError(SanitizerError):
    def __init__(self, path: Path, cause: object, target: str | None = None):
        where = f" for target {target}" if target else ""
        super().__init__(f"Couldn't access BUILD file {str(path)!r}{where}. Cause={cause}")
        self.path = path
        self.target = target


class StructuralViolation(SanitizerError):
    """A BUILD file has a shape the block rewriter refuses to edit."""

    def __init__(self, path: Path | None, line_number: int, reason: str, target: str):
        location = f"{path}:{line_number}" if path else f"line {line_number}"
        super().__init__(f"{location}: {reason} (while editing {target})")
        self.path = path
        self.line_number = line_number
        self.target = target
