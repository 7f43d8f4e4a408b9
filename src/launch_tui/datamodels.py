from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger("launches")


class Outcome(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    UNKNOWN = "unknown"


class LaunchStatus(Enum):
    UPCOMING = "Upcoming"
    SUCCESS = "Success"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


# --- Data models ---
@dataclass
class LaunchLinks:
    mission_patch: Optional[str] = None
    video_link: Optional[str] = None
    article_link: Optional[str] = None


@dataclass
class Launch:
    flight_number: int
    mission_name: str
    details: Optional[str] = None
    launch_date_utc: Optional[datetime] = None
    links: LaunchLinks = field(default_factory=LaunchLinks)
    outcome: Outcome = Outcome.UNKNOWN
    upcoming: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Launch:
        """Build a Launch from one entry of the v3 launches payload.

        Missing or malformed fields fall back to defaults instead of raising.
        """
        links = data.get("links")
        if not isinstance(links, dict):
            links = {}
        upcoming = data.get("upcoming") is True
        return cls(
            flight_number=_as_int(data.get("flight_number")),
            mission_name=_as_str(data.get("mission_name")),
            details=data.get("details") if isinstance(data.get("details"), str) else None,
            launch_date_utc=_parse_timestamp(data.get("launch_date_utc")),
            links=LaunchLinks(
                mission_patch=_as_link(links.get("mission_patch")),
                video_link=_as_link(links.get("video_link")),
                article_link=_as_link(links.get("article_link")),
            ),
            outcome=_outcome(data.get("launch_success"), upcoming),
            upcoming=upcoming,
        )


@dataclass
class LaunchEntry:
    """What the list renders for one launch."""

    key: int
    title: str
    status: LaunchStatus
    launched: str
    details: str
    expanded: bool = False
    video_link: Optional[str] = None
    article_link: Optional[str] = None
    mission_patch: Optional[str] = None


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_link(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _outcome(launch_success: Any, upcoming: bool) -> Outcome:
    if launch_success is True:
        return Outcome.SUCCESS
    if launch_success is False:
        return Outcome.FAILURE
    if upcoming:
        return Outcome.PENDING
    return Outcome.UNKNOWN


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable launch date: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
