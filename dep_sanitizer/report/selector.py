"""Turn report entries into per-owner dependency lists."""

from __future__ import annotations

import logging
from typing import Iterator

from dep_sanitizer.models import Address, DependencyEdge, Relation, Selection
from dep_sanitizer.report.reader import ModuleInfo

logger = logging.getLogger(__name__)

THIRD_PARTY_MARKER = "3rdparty"


def iter_edges(
    report: dict[str, ModuleInfo],
    relation: str | None = None,
) -> Iterator[DependencyEdge]:
    """Yield dependency edges in report order.

    With ``relation`` set, only labels of matching edges are parsed, so a
    malformed label on an unrelated edge never aborts the run.
    """
    for owner_label, info in report.items():
        deps = [
            dep for dep in info.dependencies
            if relation is None or dep.dependency_type == relation
        ]
        if not deps:
            continue
        owner = Address.from_str(owner_label)
        for dep in deps:
            yield DependencyEdge(
                owner=owner,
                target=Address.from_str(dep.target),
                relation=dep.dependency_type,
            )


def select(
    report: dict[str, ModuleInfo],
    relation: Relation | str,
    prefix: str,
) -> Selection:
    """Owners under ``prefix`` mapped to their dependencies of kind ``relation``.

    Third-party owners and owners with no matching dependency are left out.
    Owners come back ordered by address.
    """
    kind = relation.value if isinstance(relation, Relation) else relation
    grouped: dict[Address, list[Address]] = {}

    eligible = {
        label: info for label, info in report.items()
        if THIRD_PARTY_MARKER not in label and label.startswith(prefix)
    }
    for edge in iter_edges(eligible, kind):
        grouped.setdefault(edge.owner, []).append(edge.target)

    logger.debug("Selected %d module(s) with %s dependencies", len(grouped), kind)
    return Selection(relation=kind, modules=dict(sorted(grouped.items())))
