"""Whole-file reads and atomic writes for BUILD files."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from dep_sanitizer.errors import TargetFileIoError


def read_build_file(path: Path, target: str | None = None) -> str:
    """Read ``path`` keeping its original line endings."""
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise TargetFileIoError(path, exc, target) from exc


def write_build_file(path: Path, text: str, target: str | None = None) -> None:
    """Replace ``path`` with ``text`` so readers never see a partial file."""
    tmp_path: Path | None = None
    try:
        existing_mode = path.stat().st_mode & 0o777
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", newline="", delete=False,
            dir=path.parent, prefix=f".{path.name}.",
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, existing_mode)
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as exc:
        raise TargetFileIoError(path, exc, target) from exc
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
