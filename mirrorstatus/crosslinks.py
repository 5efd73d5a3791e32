"""README cross-link heuristic for mirrored repositories."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence

from .config import DEFAULT_CROSS_LINK_TRIGGERS, DEFAULT_REQUIRED_CROSS_LINKS


def mentions_mirror(text: str, triggers: Sequence[str] = DEFAULT_CROSS_LINK_TRIGGERS) -> bool:
    """Return True when the README reads like a mirror or meta-project README."""
    if not triggers:
        return False
    pattern = re.compile("|".join(re.escape(trigger) for trigger in triggers), re.IGNORECASE)
    return pattern.search(text) is not None


class CrossLinkChecker:
    """Reports cross-links a mirror README is expected to carry but does not."""

    README_NAME = "README.md"

    def __init__(
        self,
        *,
        triggers: Sequence[str] = DEFAULT_CROSS_LINK_TRIGGERS,
        required: Sequence[str] = DEFAULT_REQUIRED_CROSS_LINKS,
    ) -> None:
        self._triggers = tuple(triggers)
        self._required = tuple(required)

    def check(self, root: Path) -> List[str]:
        """Return the required links missing from ``root``'s README, in order."""
        readme = root / self.README_NAME
        if not readme.is_file():
            return []
        try:
            text = readme.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return []
        if not mentions_mirror(text, self._triggers):
            return []
        return [link for link in self._required if link not in text]


__all__ = ["CrossLinkChecker", "mentions_mirror"]
