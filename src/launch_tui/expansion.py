from __future__ import annotations

from typing import Set


class ExpansionTracker:
    """Which launches are showing their extended details.

    Purely local UI state: fetching never touches it, and keys for launches
    that dropped out of the feed after a search simply linger unobserved.
    """

    def __init__(self) -> None:
        self._expanded: Set[int] = set()

    def toggle(self, key: int) -> bool:
        """Flip ``key`` and return whether it is now expanded."""
        if key in self._expanded:
            self._expanded.discard(key)
            return False
        self._expanded.add(key)
        return True

    def is_expanded(self, key: int) -> bool:
        return key in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)
