"""Pagination, filtering and merge state for the launch feed.

The controller never performs I/O on its own schedule. Every fetch starts
from ``reset`` or ``load_next`` and is handed to a ``dispatch`` callable;
the host delivers the outcome back through ``resolve`` or ``reject``. The
default dispatch runs the fetch synchronously, which is what tests and
scripts want. The Textual app dispatches to a thread worker instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from .config import PAGE_SIZE
from .datamodels import Launch, LaunchEntry, LaunchStatus, Outcome
from .expansion import ExpansionTracker
from .formatting import from_now
from .sources.base import LaunchSource, TransportError

logger = logging.getLogger("launches")

NO_DETAILS = "No details available"


@dataclass(frozen=True)
class PageRequest:
    """One issued fetch, with the query and generation it was issued under."""

    page: int
    limit: int
    query: str
    replace: bool
    generation: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def matches_query(launch: Launch, query: str) -> bool:
    needle = query.casefold()
    return needle in launch.mission_name.casefold() or needle in (launch.details or "").casefold()


def launch_status(launch: Launch) -> LaunchStatus:
    if launch.upcoming:
        return LaunchStatus.UPCOMING
    if launch.outcome is Outcome.SUCCESS:
        return LaunchStatus.SUCCESS
    if launch.outcome is Outcome.FAILURE:
        return LaunchStatus.FAILED
    return LaunchStatus.UNKNOWN


class FeedController:
    def __init__(
        self,
        source: LaunchSource,
        dispatch: Optional[Callable[[PageRequest], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        page_size: int = PAGE_SIZE,
    ):
        self.source = source
        self.page_size = page_size
        self.items: List[Launch] = []
        self.cursor = 1
        self.query = ""
        self.exhausted = False
        self.loading = False
        self._dispatch = dispatch or self.execute
        self._on_change = on_change
        self._on_error = on_error
        self._generation = 0
        self._in_flight: Optional[PageRequest] = None
        self._deferred: Optional[PageRequest] = None

    @property
    def generation(self) -> int:
        """Bumped by every reset; lets a view tell a replaced list from an appended one."""
        return self._generation

    @property
    def in_flight(self) -> Optional[PageRequest]:
        return self._in_flight

    def reset(self, query: str) -> None:
        """Start the feed over for ``query`` and fetch its first page.

        If a fetch is already out, the first page is requested as soon as
        that one settles; its result will be stale by then and is dropped.
        """
        self._generation += 1
        self.query = query
        self.items = []
        self.exhausted = False
        self.cursor = 1
        request = self._request(replace=True)

        if self.loading:
            logger.debug(
                "Deferring reset for %r until page %d settles",
                query,
                self._in_flight.page if self._in_flight else 0,
            )
            self._deferred = request
            self._notify()
            return

        self._notify()
        self._issue(request)

    def load_next(self) -> bool:
        """Request the page at ``cursor``. Returns False when nothing was issued."""
        if self.loading or self.exhausted:
            return False
        self._issue(self._request(replace=False))
        return True

    def execute(self, request: PageRequest) -> None:
        """Fetch ``request`` from the source right now and apply the outcome."""
        try:
            launches = self.source.fetch_page(request.offset, request.limit)
        except TransportError as e:
            self.reject(request, e)
            return
        except Exception:
            self._settle()
            raise
        self.resolve(request, launches)

    def resolve(self, request: PageRequest, launches: List[Launch]) -> None:
        if request != self._in_flight:
            logger.debug("Ignoring result for page %d: not in flight", request.page)
            return
        self._settle()

        if self.is_stale(request):
            logger.debug(
                "Discarding stale page %d for %r (current query %r)",
                request.page,
                request.query,
                self.query,
            )
        else:
            if len(launches) < request.limit:
                self.exhausted = True
            page = [launch for launch in launches if matches_query(launch, request.query)]
            if request.replace:
                self.items = page
            else:
                self.items = self.items + page
            self.cursor = request.page + 1
            logger.debug(
                "Page %d: %d raw, %d matching, %d total%s",
                request.page,
                len(launches),
                len(page),
                len(self.items),
                " (exhausted)" if self.exhausted else "",
            )
            self._notify()

        self._issue_deferred()

    def reject(self, request: PageRequest, error: Exception) -> None:
        if request != self._in_flight:
            logger.debug("Ignoring failure for page %d: not in flight", request.page)
            return
        self._settle()

        if self.is_stale(request):
            logger.debug("Stale page %d for %r failed: %s", request.page, request.query, error)
        else:
            logger.warning(
                "Failed to fetch page %d (offset %d): %s", request.page, request.offset, error
            )
            if self._on_error:
                self._on_error(error)
            self._notify()

        self._issue_deferred()

    def is_stale(self, request: PageRequest) -> bool:
        return request.generation != self._generation or request.query != self.query

    def entries(
        self, tracker: ExpansionTracker, now: Optional[datetime] = None
    ) -> List[LaunchEntry]:
        return [
            LaunchEntry(
                key=launch.flight_number,
                title=launch.mission_name,
                status=launch_status(launch),
                launched=from_now(launch.launch_date_utc, now),
                details=launch.details or NO_DETAILS,
                expanded=tracker.is_expanded(launch.flight_number),
                video_link=launch.links.video_link,
                article_link=launch.links.article_link,
                mission_patch=launch.links.mission_patch,
            )
            for launch in self.items
        ]

    def _request(self, replace: bool) -> PageRequest:
        return PageRequest(
            page=self.cursor,
            limit=self.page_size,
            query=self.query,
            replace=replace,
            generation=self._generation,
        )

    def _issue(self, request: PageRequest) -> None:
        self.loading = True
        self._in_flight = request
        logger.debug(
            "Requesting page %d (offset %d) for %r", request.page, request.offset, request.query
        )
        self._dispatch(request)

    def _issue_deferred(self) -> None:
        if self._deferred is None:
            return
        request, self._deferred = self._deferred, None
        self._issue(request)

    def _settle(self) -> None:
        self.loading = False
        self._in_flight = None

    def _notify(self) -> None:
        if self._on_change:
            self._on_change()
