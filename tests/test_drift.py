"""Tests for drift comparison between two roots."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mirrorstatus import drift as drift_module
from mirrorstatus.drift import DriftComparer, list_area_files
from mirrorstatus.logging import configure_logging
from tests._fixtures.repo_builder import RepoBuilder


def _pair(tmp_path: Path) -> tuple[RepoBuilder, RepoBuilder]:
    return RepoBuilder(tmp_path, "primary"), RepoBuilder(tmp_path, "drift")


def test_list_area_files_is_sorted_bytewise(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "scripts/b.sh": "b",
            "scripts/Z.sh": "Z",
            "scripts/a/nested.sh": "n",
            "other/ignored.txt": "x",
        }
    )

    files = list_area_files(repo_builder.path(), "scripts")

    assert files == ["scripts/Z.sh", "scripts/a/nested.sh", "scripts/b.sh"]


def test_list_area_files_missing_area_is_empty(repo_builder: RepoBuilder) -> None:
    assert list_area_files(repo_builder.path(), "scripts") == []


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_list_area_files_skips_symlinks(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"scripts/real.sh": "echo"})
    link = repo_builder.path() / "scripts" / "link.sh"
    try:
        link.symlink_to(repo_builder.path() / "scripts" / "real.sh")
    except OSError:
        pytest.skip("cannot create symlinks here")

    assert list_area_files(repo_builder.path(), "scripts") == ["scripts/real.sh"]


def test_compare_counts_presence_and_hash_differences(tmp_path: Path) -> None:
    primary, drift = _pair(tmp_path)
    primary.write(
        {
            "scripts/same.sh": "echo same",
            "scripts/changed.sh": "echo one",
            "scripts/only_primary.sh": "p",
            "scripts/sub/only_primary2.sh": "p2",
        }
    )
    drift.write(
        {
            "scripts/same.sh": "echo same",
            "scripts/changed.sh": "echo two",
            "scripts/only_drift.sh": "d",
        }
    )

    report = DriftComparer().compare(primary.path(), drift.path(), "scripts")

    assert report.missing_in_both is False
    assert report.only_in_repo == 2
    assert report.only_in_drift_root == 1
    assert report.hash_diffs == 1


def test_compare_is_symmetric(tmp_path: Path) -> None:
    primary, drift = _pair(tmp_path)
    primary.write({"prompts/a.md": "a", "prompts/b.md": b"\x00\x01", "prompts/c.md": "c"})
    drift.write({"prompts/b.md": b"\x00\x02", "prompts/d.md": "d"})

    comparer = DriftComparer()
    forward = comparer.compare(primary.path(), drift.path(), "prompts")
    backward = comparer.compare(drift.path(), primary.path(), "prompts")

    assert (forward.only_in_repo, forward.only_in_drift_root) == (2, 1)
    assert (backward.only_in_repo, backward.only_in_drift_root) == (1, 2)
    assert forward.hash_diffs == backward.hash_diffs == 1


def test_compare_reports_missing_in_both(tmp_path: Path) -> None:
    primary, drift = _pair(tmp_path)

    report = DriftComparer().compare(primary.path(), drift.path(), "workflows")

    assert report.missing_in_both is True
    assert report.only_in_repo == 0


def test_compare_area_present_on_one_side_only(tmp_path: Path) -> None:
    primary, drift = _pair(tmp_path)
    drift.write({"workflows/ci.yml": "on: push"})

    report = DriftComparer().compare(primary.path(), drift.path(), "workflows")

    assert report.missing_in_both is False
    assert report.only_in_repo == 0
    assert report.only_in_drift_root == 1
    assert report.hash_diffs == 0


def test_unreadable_common_file_counts_as_hash_diff(tmp_path: Path, monkeypatch, capsys) -> None:
    configure_logging()
    primary, drift = _pair(tmp_path)
    primary.write({"scripts/a.sh": "same", "scripts/b.sh": "same"})
    drift.write({"scripts/a.sh": "same", "scripts/b.sh": "same"})
    locked = drift.path() / "scripts" / "a.sh"
    real_hash = drift_module._hash_file

    def _guarded_hash(path: Path) -> str:
        if path == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_hash(path)

    monkeypatch.setattr(drift_module, "_hash_file", _guarded_hash)

    report = DriftComparer().compare(primary.path(), drift.path(), "scripts")

    assert report.only_in_repo == 0
    assert report.only_in_drift_root == 0
    assert report.hash_diffs == 1
    assert f"Unable to hash {locked}" in capsys.readouterr().err
