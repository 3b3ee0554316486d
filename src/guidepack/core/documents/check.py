"""Catalog consistency checks backing ``guidepack docs check``."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from guidepack.core.exceptions import GuidepackError, ReadError

from .registry import DocumentRegistry
from .resolver import BundleResolver
from .storage import DocumentStorage, FileStorage


@dataclass(frozen=True)
class LineCountDrift:
    id: str
    declared: int
    actual: int


@dataclass
class CheckReport:
    checked: int = 0
    drifts: List[LineCountDrift] = field(default_factory=list)
    unreadable: Dict[str, str] = field(default_factory=dict)
    broken_profiles: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not (self.drifts or self.unreadable or self.broken_profiles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "checked": self.checked,
            "drifts": [{"id": d.id, "declared": d.declared, "actual": d.actual} for d in self.drifts],
            "unreadable": dict(self.unreadable),
            "broken_profiles": dict(self.broken_profiles),
        }


def count_lines(text: str) -> int:
    return len(text.splitlines())


def check_catalog(
    registry: DocumentRegistry,
    storage: Optional[DocumentStorage] = None,
    resolver: Optional[BundleResolver] = None,
) -> CheckReport:
    """Compare declared line counts with actual content.

    Unlike composing, checking keeps going after a read failure so every
    problem is reported at once. When ``resolver`` is given, every profile
    is also resolved.
    """
    store = storage or FileStorage()
    report = CheckReport()
    for doc in registry.list():
        report.checked += 1
        try:
            actual = count_lines(store.read(doc.path))
        except ReadError as exc:
            report.unreadable[doc.id] = str(exc)
            continue
        if actual != doc.line_count:
            report.drifts.append(LineCountDrift(doc.id, doc.line_count, actual))

    if resolver is not None:
        for name in resolver.profiles():
            try:
                resolver.resolve_profile(name)
            except GuidepackError as exc:
                report.broken_profiles[name] = str(exc)
    return report


__all__ = ["LineCountDrift", "CheckReport", "count_lines", "check_catalog"]
