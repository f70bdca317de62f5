"""Report layer."""

from dep_sanitizer.report.reader import DependencyRecord, ModuleInfo, read_report
from dep_sanitizer.report.selector import THIRD_PARTY_MARKER, iter_edges, select

__all__ = [
    "DependencyRecord",
    "ModuleInfo",
    "THIRD_PARTY_MARKER",
    "iter_edges",
    "read_report",
    "select",
]
