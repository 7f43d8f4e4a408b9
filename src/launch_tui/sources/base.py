from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..config import PAGE_SIZE
from ..datamodels import Launch


class TransportError(Exception):
    """A page could not be fetched or decoded."""


class LaunchSource(ABC):
    """Abstract base class for a paginated, read-only launch collection."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    @abstractmethod
    def fetch_page(self, offset: int, limit: int = PAGE_SIZE) -> List[Launch]:
        """Return up to ``limit`` launches starting at ``offset``.

        Raises TransportError on any network or payload failure. Never
        retries and never fetches more than one page.
        """
        pass
