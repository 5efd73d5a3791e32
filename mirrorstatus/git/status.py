"""Git status and diff queries used by the area reporter."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Protocol

from ..models import StatusEntry


class GitCommandError(RuntimeError):
    """Raised when a git invocation fails or git is not installed."""


class StatusProvider(Protocol):
    """Version-control queries the reporter depends on."""

    def is_repository(self, root: Path) -> bool: ...

    def toplevel(self, path: Path) -> Optional[str]: ...

    def changed_files(self, root: Path, area: str) -> List[StatusEntry]: ...

    def diff_name_status(self, root: Path, area: str, rev: str) -> List[str]: ...


class GitStatusProvider:
    """Answers status queries by shelling out to the git client."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner

    def is_repository(self, root: Path) -> bool:
        try:
            self._run(["git", "rev-parse", "--git-dir"], cwd=root, capture_output=True)
        except GitCommandError:
            return False
        return True

    def toplevel(self, path: Path) -> Optional[str]:
        try:
            output = self._run(
                ["git", "rev-parse", "--show-toplevel"], cwd=path, capture_output=True
            )
        except GitCommandError:
            return None
        return output.strip() or None

    def changed_files(self, root: Path, area: str) -> List[StatusEntry]:
        """Return porcelain status entries for paths under ``area``."""
        output = self._run(
            ["git", "status", "--porcelain", "--untracked-files=all", "--", f"{area}/"],
            cwd=root,
            capture_output=True,
        )
        return [StatusEntry.parse(line) for line in output.splitlines() if line.strip()]

    def diff_name_status(self, root: Path, area: str, rev: str) -> List[str]:
        """Return ``git diff --name-status`` lines between ``rev`` and the working tree."""
        output = self._run(
            ["git", "diff", "--name-status", rev, "--", f"{area}/"],
            cwd=root,
            capture_output=True,
        )
        return [line for line in output.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # Internals

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        args = list(args)
        try:
            return self._runner(args, cwd=cwd, capture_output=capture_output)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip() if isinstance(exc.stderr, str) else ""
            message = f"{' '.join(args)} failed with exit code {exc.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise GitCommandError(message) from exc
        except UnicodeDecodeError as exc:
            raise GitCommandError(f"{' '.join(args)} produced undecodable output: {exc}") from exc
        except OSError as exc:
            raise GitCommandError(f"Unable to run {args[0]}: {exc}") from exc

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


__all__ = ["GitCommandError", "GitStatusProvider", "StatusProvider"]
