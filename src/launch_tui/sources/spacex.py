from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import API_URL, HTTP_TIMEOUT, PAGE_SIZE, REQUEST_HEADERS
from ..datamodels import Launch
from .base import LaunchSource, TransportError

logger = logging.getLogger("launches")


class SpaceXSource(LaunchSource):
    """Launches from the SpaceX v3 REST API."""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.url = self.config.get("url", API_URL)
        self.timeout = self.config.get("timeout", HTTP_TIMEOUT)
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        # Failures go straight back to the feed, which never retries either.
        retries = Retry(total=0, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def fetch_page(self, offset: int, limit: int = PAGE_SIZE) -> List[Launch]:
        params = {"limit": limit, "offset": offset}
        try:
            logger.debug("Fetching %s offset=%d limit=%d", self.url, offset, limit)
            resp = self.session.get(self.url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise TransportError(f"Failed to fetch launches at offset {offset}: {e}") from e

        if not isinstance(payload, list):
            raise TransportError(
                f"Unexpected payload from {self.url}: expected a list, "
                f"got {type(payload).__name__}"
            )

        launches = [Launch.from_dict(entry) for entry in payload if isinstance(entry, dict)]
        logger.debug("Fetched %d launches at offset %d", len(launches), offset)
        return launches
