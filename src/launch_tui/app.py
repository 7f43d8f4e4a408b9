from __future__ import annotations

import logging
import webbrowser
from functools import partial
from typing import Any, Dict, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.command import Hit, Hits, Provider
from textual.containers import Vertical
from textual.worker import Worker, WorkerState
from textual.widgets import (
    Header,
    Input,
    ListView,
    LoadingIndicator,
)

from .config import (
    DEFAULT_THEME,
    NEAR_END_THRESHOLD,
    UI_DEFAULTS,
    load_themes,
)
from .expansion import ExpansionTracker
from .feed import FeedController, PageRequest
from .messages import StatusUpdate
from .screens import ErrorScreen
from .sources.base import TransportError
from .sources.manager import SourceManager
from .widgets import EndMessage, LaunchItem, StatusBar

logger = logging.getLogger("launches")


class ThemeProvider(Provider):
    async def search(self, query: str) -> Hits:
        """Search for a theme."""
        matcher = self.matcher(query)

        for theme_name in self.app.available_themes:
            score = matcher.match(theme_name)
            if score > 0:
                yield Hit(
                    score,
                    matcher.highlight(f"Switch to {theme_name} theme"),
                    partial(self.app.action_switch_theme, theme_name),
                )


class LaunchesApp(App):
    TITLE = "SpaceX Launches"
    SUB_TITLE = "Every launch, one page at a time"

    CSS_PATH = "app.css"

    COMMANDS = App.COMMANDS | {ThemeProvider}

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("/", "focus_search", "Search"),
        Binding("escape", "focus_list", "List", show=False),
        Binding("n", "load_more", "More"),
        Binding("r", "refresh", "Refresh"),
        Binding("v", "open_video", "Video"),
        Binding("a", "open_article", "Article"),
        Binding("ctrl+p", "command_palette", "Commands"),
    ]

    def __init__(
        self,
        theme: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self._theme_name = theme or DEFAULT_THEME
        self.config = config or {}
        self.source_manager = SourceManager(self.config)
        self.source = self.source_manager.get_active_source()
        self.expansion = ExpansionTracker()
        self.feed: Optional[FeedController] = None
        if self.source:
            self.feed = FeedController(
                self.source,
                dispatch=self._dispatch_page,
                on_change=self._render_feed,
                on_error=self._report_fetch_error,
            )
        self._page_requests: Dict[Worker, PageRequest] = {}
        self._rendered_generation = -1
        self._rendered_count = 0

    @property
    def theme_name(self) -> str:
        return self._theme_name

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Input(
                placeholder="Search launches by mission name or details...",
                id="launch-search",
            )
            yield LoadingIndicator(id="feed-loading")
            yield ListView(id="launches-list")
            yield EndMessage(id="feed-end")
        yield StatusBar()

    def on_mount(self) -> None:
        for name, theme in load_themes(self.config).items():
            if name not in self.available_themes:
                self.register_theme(theme)
        if self._theme_name in self.available_themes:
            self.theme = self._theme_name
        else:
            logger.warning("Theme '%s' is not registered", self._theme_name)

        if not self.feed:
            self.push_screen(
                ErrorScreen(
                    "No launch source configured",
                    "Please configure a launch source in `~/.config/launches/config.json`.",
                )
            )
            return

        keybindings_text = self.config.get("ui", {}).get(
            "statusbar_keybindings", UI_DEFAULTS["statusbar_keybindings"]
        )
        self.query_one(StatusBar).set_keybindings(keybindings_text.format(color="cyan"))
        self.query_one("#feed-end", EndMessage).set_message("")

        self.feed.reset("")
        self._update_feed_status()
        self.query_one("#launches-list", ListView).focus()

    # --- Fetching ---
    def _dispatch_page(self, request: PageRequest) -> None:
        worker = self.run_worker(
            partial(self.source.fetch_page, request.offset, request.limit),
            name="page_loader",
            group="feed",
            thread=True,
            exit_on_error=False,
        )
        self._page_requests[worker] = request

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if getattr(event.worker, "name", None) != "page_loader":
            return
        if event.state in (WorkerState.PENDING, WorkerState.RUNNING):
            return

        request = self._page_requests.pop(event.worker, None)
        if request is None:
            return

        if event.state is WorkerState.SUCCESS:
            self.feed.resolve(request, event.worker.result or [])
        else:
            error = getattr(event.worker, "error", None) or TransportError(
                "Page request was cancelled"
            )
            self.feed.reject(request, error)
        self._update_feed_status()

    def _report_fetch_error(self, error: Exception) -> None:
        self.post_message(StatusUpdate(f"Failed to load launches: {error}", error=True))

    def on_status_update(self, message: StatusUpdate) -> None:
        self.query_one(StatusBar).loading_status = message.text
        if message.error:
            self.notify(message.text, severity="error")

    # --- Rendering ---
    def _render_feed(self) -> None:
        """Sync the list with the feed, appending when the feed only grew."""
        launches_list = self.query_one("#launches-list", ListView)
        entries = self.feed.entries(self.expansion)

        if (
            self.feed.generation != self._rendered_generation
            or len(entries) < self._rendered_count
        ):
            launches_list.clear()
            self._rendered_generation = self.feed.generation
            self._rendered_count = 0

        new_entries = entries[self._rendered_count :]
        if new_entries:
            launches_list.extend(LaunchItem(entry) for entry in new_entries)
        self._rendered_count = len(entries)
        self._update_feed_status()

    def _update_feed_status(self) -> None:
        feed = self.feed
        self.query_one("#feed-loading", LoadingIndicator).display = feed.loading and not feed.items

        status_bar = self.query_one(StatusBar)
        status_bar.loading_status = "Loading launches..." if feed.loading else ""
        count = f"{len(feed.items)} launches"
        status_bar.feed_status = f"{count} matching '{feed.query}'" if feed.query else count

        end = self.query_one("#feed-end", EndMessage)
        if feed.exhausted and not feed.loading:
            end.set_message(
                "No launches found matching your search" if not feed.items else "End of List."
            )
        else:
            end.set_message("")

    # --- Triggers ---
    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "launch-search" and self.feed:
            self.feed.reset(event.value)
            self._update_feed_status()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "launch-search":
            self.action_focus_list()

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        if event.list_view.id != "launches-list" or not self.feed:
            return
        index = event.list_view.index
        if index is None:
            return
        if index >= len(event.list_view.children) - NEAR_END_THRESHOLD:
            if self.feed.load_next():
                self._update_feed_status()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.list_view.id == "launches-list" and isinstance(event.item, LaunchItem):
            expanded = self.expansion.toggle(event.item.flight_number)
            event.item.set_expanded(expanded)

    def _highlighted_launch(self) -> Optional[LaunchItem]:
        item = self.query_one("#launches-list", ListView).highlighted_child
        return item if isinstance(item, LaunchItem) else None

    def _open_link(self, url: Optional[str], kind: str) -> None:
        if not url:
            self.notify(f"No {kind} link for this launch.")
            return
        logger.info("Opening %s link %s", kind, url)
        webbrowser.open(url)

    # --- Actions ---
    def action_load_more(self) -> None:
        if self.feed and self.feed.load_next():
            self._update_feed_status()

    def action_refresh(self) -> None:
        if self.feed:
            self.feed.reset(self.feed.query)
            self._update_feed_status()

    def action_open_video(self) -> None:
        item = self._highlighted_launch()
        if item:
            self._open_link(item.entry.video_link, "video")

    def action_open_article(self) -> None:
        item = self._highlighted_launch()
        if item:
            self._open_link(item.entry.article_link, "article")

    def action_switch_theme(self, theme: str) -> None:
        """Switch to a new theme."""
        self.theme = theme
        self._theme_name = theme

    def action_focus_search(self) -> None:
        self.query_one("#launch-search", Input).focus()

    def action_focus_list(self) -> None:
        self.query_one("#launches-list", ListView).focus()
