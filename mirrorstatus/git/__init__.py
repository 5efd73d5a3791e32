"""Git collaborators for mirror-status."""

from .status import GitCommandError, GitStatusProvider, StatusProvider

__all__ = ["GitCommandError", "GitStatusProvider", "StatusProvider"]
