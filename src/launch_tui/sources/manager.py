from __future__ import annotations

from typing import Any, Dict, List, Type

from .base import LaunchSource
from .spacex import SpaceXSource

AVAILABLE_SOURCES: Dict[str, Type[LaunchSource]] = {
    "spacex": SpaceXSource,
}


class SourceManager:
    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.sources: Dict[str, LaunchSource] = {}
        self._load_sources()

    def _load_sources(self) -> None:
        """Load every available source that has a config block."""
        source_config = self.config.get("sources", {})
        for name, source_class in AVAILABLE_SOURCES.items():
            if name in source_config:
                self.sources[name] = source_class(source_config[name])

    def get_source(self, name: str) -> LaunchSource | None:
        """Get a source by name."""
        return self.sources.get(name)

    def get_active_source(self) -> LaunchSource | None:
        """The source named by the ``source`` key, else the first loaded one."""
        name = self.config.get("source")
        if name and name in self.sources:
            return self.sources[name]
        sources = self.get_all_sources()
        return sources[0] if sources else None

    def get_all_sources(self) -> List[LaunchSource]:
        """Get a list of all loaded sources."""
        return list(self.sources.values())
