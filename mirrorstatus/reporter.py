"""Area status reporting for a repository and an optional drift root."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Sequence, TextIO

from .config import ReporterConfig, parse_areas
from .crosslinks import CrossLinkChecker
from .drift import DriftComparer
from .errors import InvalidRootError, NotARepositoryError
from .git.status import GitCommandError, GitStatusProvider, StatusProvider
from .logging import get_logger
from .models import AreaReport, DriftReport, RunReport


class AreaStatusReporter:
    """Prints per-area working-tree changes, cross-link hints and drift."""

    def __init__(
        self,
        provider: StatusProvider | None = None,
        *,
        drift_comparer: DriftComparer | None = None,
    ) -> None:
        self._provider = provider or GitStatusProvider()
        self._drift = drift_comparer or DriftComparer()
        self.logger = get_logger("reporter")

    def run(self, config: ReporterConfig, out: TextIO | None = None) -> RunReport:
        """Validate the repository, then write the full report to ``out``.

        Raises :class:`InvalidRootError` or :class:`NotARepositoryError` before
        anything is written.
        """
        stream = out if out is not None else sys.stdout
        root = self.validate(config.repo_root)
        areas = parse_areas(config.areas)

        report = RunReport(
            repo_root=str(config.repo_root),
            areas=self.report_areas(root, areas, since=config.since),
            since=config.since,
        )
        _write(stream, render_areas(report))

        checker = CrossLinkChecker(
            triggers=config.cross_link_triggers,
            required=config.required_cross_links,
        )
        report.missing_cross_links = checker.check(root)
        if report.missing_cross_links:
            self.logger.warning(
                "README may be missing cross-link(s): %s",
                " ".join(report.missing_cross_links),
            )

        if config.drift_root is not None:
            drift_root = config.drift_root
            report.drift_root = str(drift_root)
            if not self._provider.is_repository(drift_root):
                self.logger.warning("--drift-root is not a Git repo: %s", drift_root)
            _write(stream, ["", f"Drift check vs: {drift_root}"])
            for area in areas:
                drift = self._drift.compare(root, drift_root, area)
                report.drift.append(drift)
                _write(stream, render_drift(drift))

        self.logger.debug("Reported %d area(s) for %s", len(report.areas), root)
        return report

    def validate(self, repo_root: Path) -> Path:
        if not repo_root.is_dir():
            raise InvalidRootError(f"Repo root does not exist: {repo_root}")
        if not self._provider.is_repository(repo_root):
            raise NotARepositoryError(f"Not a Git repo: {repo_root}")
        return repo_root

    def report_areas(
        self, root: Path, areas: Sequence[str], *, since: str | None = None
    ) -> List[AreaReport]:
        return [self.report_area(root, area, since=since) for area in areas]

    def report_area(self, root: Path, area: str, *, since: str | None = None) -> AreaReport:
        if not (root / area).is_dir():
            return AreaReport(name=area, exists=False)

        try:
            changes = self._provider.changed_files(root, area)
        except GitCommandError as exc:
            self.logger.warning("Status query failed for %s/: %s", area, exc)
            changes = []

        diff_since = None
        if since:
            try:
                diff_since = self._provider.diff_name_status(root, area, since)
            except GitCommandError as exc:
                self.logger.debug("Diff since %s failed for %s/: %s", since, area, exc)
                diff_since = []

        return AreaReport(name=area, exists=True, changes=changes, diff_since=diff_since)


def render_areas(report: RunReport) -> List[str]:
    """Return the status section of ``report`` as output lines."""
    lines = [f"Repo root: {report.repo_root}"]
    for area in report.areas:
        if not area.exists:
            lines.append(f"--- {area.name}/ (missing)")
            continue
        lines.append(f"--- {area.name}/")
        if area.changes:
            lines.extend(entry.raw for entry in area.changes)
            lines.append(f"({area.change_count} change(s))")
        else:
            lines.append("(clean)")
        if area.diff_since is not None:
            lines.append(f"Diff since {report.since}:")
            lines.extend(area.diff_since)
    lines.append(f"Total changes across areas: {report.total_changes}")
    return lines


def render_drift(drift: DriftReport) -> List[str]:
    lines = [f"--- Drift: {drift.area}/"]
    if drift.missing_in_both:
        lines.append("(missing in both)")
        return lines
    lines.append(f"Only in repo: {drift.only_in_repo}")
    lines.append(f"Only in drift-root: {drift.only_in_drift_root}")
    lines.append(f"Hash diffs on common files: {drift.hash_diffs}")
    return lines


def _write(stream: TextIO, lines: Iterable[str]) -> None:
    for line in lines:
        stream.write(f"{line}\n")
    stream.flush()


__all__ = ["AreaStatusReporter", "render_areas", "render_drift"]
