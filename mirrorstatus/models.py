"""Report models shared across mirror-status components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class StatusEntry:
    """A single porcelain status line for a changed path."""

    code: str
    path: str
    raw: str

    @classmethod
    def parse(cls, line: str) -> "StatusEntry":
        code = line[:2]
        path = line[3:] if len(line) > 3 else ""
        # Renames and copies are reported as "old -> new".
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        return cls(code=code, path=path, raw=line)


@dataclass
class AreaReport:
    """Working-tree status of one area."""

    name: str
    exists: bool
    changes: List[StatusEntry] = field(default_factory=list)
    diff_since: Optional[List[str]] = None

    @property
    def change_count(self) -> int:
        return len(self.changes)


@dataclass
class DriftReport:
    """File presence and content drift of one area between two roots."""

    area: str
    missing_in_both: bool = False
    only_in_repo: int = 0
    only_in_drift_root: int = 0
    hash_diffs: int = 0


@dataclass
class RunReport:
    """Everything a single run computed, ready to be rendered."""

    repo_root: str
    areas: List[AreaReport]
    since: Optional[str] = None
    missing_cross_links: List[str] = field(default_factory=list)
    drift_root: Optional[str] = None
    drift: List[DriftReport] = field(default_factory=list)

    @property
    def total_changes(self) -> int:
        return sum(area.change_count for area in self.areas)
