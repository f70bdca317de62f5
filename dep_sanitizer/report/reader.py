"""Load the JVM dependency-usage report produced by the build tool."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from dep_sanitizer.errors import ReportIoError, ReportParseError

logger = logging.getLogger(__name__)


class DependencyRecord(BaseModel):
    target: str
    dependency_type: str
    aliases: list[str] = Field(default_factory=list)
    products_used: int = 0
    products_used_ratio: float = 0.0


class ModuleInfo(BaseModel):
    dependencies: list[DependencyRecord]
    cost: int = 0
    cost_transitive: int = 0
    products_total: int = 0


def read_report(path: Path) -> dict[str, ModuleInfo]:
    """Read and validate a report keyed by owner label."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportIoError(path, exc) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ReportParseError(path, exc) from exc

    if not isinstance(data, dict):
        raise ReportParseError(path, f"expected a JSON object, got {type(data).__name__}")

    report: dict[str, ModuleInfo] = {}
    for owner, info in data.items():
        try:
            report[owner] = ModuleInfo.model_validate(info)
        except ValidationError as exc:
            raise ReportParseError(path, f"module {owner!r}: {exc}") from exc

    logger.debug("Loaded %d module(s) from %s", len(report), path)
    return report
