"""Error taxonomy for mirror-status runs."""

from __future__ import annotations


class MirrorStatusError(RuntimeError):
    """Base error carrying the process exit code for the CLI."""

    exit_code = 1


class UsageError(MirrorStatusError):
    """Raised for unrecognised or incomplete command-line arguments."""

    exit_code = 2


class InvalidRootError(MirrorStatusError):
    """Raised when the repository root is not an existing directory."""


class NotARepositoryError(MirrorStatusError):
    """Raised when the repository root is not a Git working copy."""


__all__ = ["InvalidRootError", "MirrorStatusError", "NotARepositoryError", "UsageError"]
