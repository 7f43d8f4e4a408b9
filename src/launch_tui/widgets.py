from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import ListItem, Static
from textual.reactive import reactive
from rich.markup import escape
from rich.style import Style
from rich.text import Text

from .datamodels import LaunchEntry, LaunchStatus

STATUS_STYLES = {
    LaunchStatus.UPCOMING: "bold yellow",
    LaunchStatus.SUCCESS: "bold green",
    LaunchStatus.FAILED: "bold red",
    LaunchStatus.UNKNOWN: "dim",
}


def status_badge(status: LaunchStatus) -> Text:
    return Text.assemble(("● ", STATUS_STYLES[status]), status.value)


def detail_text(entry: LaunchEntry) -> Text:
    """Launch date, links, patch and details for an expanded launch."""
    text = Text(entry.launched, style="dim")
    for label, url in (("Video", entry.video_link), ("Article", entry.article_link)):
        if url:
            text.append(" | ", style="dim")
            text.append(label, style=Style(link=url, underline=True, color="blue"))
    if entry.mission_patch:
        text.append("\nPatch: ", style="dim")
        text.append(entry.mission_patch, style=Style(link=entry.mission_patch))
    text.append("\n\n")
    text.append(entry.details)
    return text


# --- UI Widgets ---
class LaunchItem(ListItem):
    def __init__(self, entry: LaunchEntry):
        super().__init__()
        self.entry = entry

    @property
    def flight_number(self) -> int:
        return self.entry.key

    def compose(self) -> ComposeResult:
        with Vertical(classes="launch-card"):
            with Horizontal(classes="launch-header"):
                yield Static(Text(self.entry.title), classes="launch-title")
                yield Static(status_badge(self.entry.status), classes="launch-status")
            yield Static(detail_text(self.entry), classes="launch-details")
            yield Static(self._toggle_label(), classes="launch-toggle")

    def on_mount(self) -> None:
        self.query_one(".launch-details", Static).display = self.entry.expanded

    def set_expanded(self, expanded: bool) -> None:
        self.entry.expanded = expanded
        self.query_one(".launch-details", Static).display = expanded
        self.query_one(".launch-toggle", Static).update(self._toggle_label())

    def _toggle_label(self) -> Text:
        label = "▾ Hide Details" if self.entry.expanded else "▸ Show Details"
        return Text(label, style="cyan")


class EndMessage(Static):
    """Shown under the list once no more pages will be requested."""

    def set_message(self, message: str) -> None:
        self.update(Text(message, style="dim italic"))
        self.display = bool(message)


class StatusBar(Static):
    loading_status = reactive("")
    feed_status = reactive("")
    keybinding_hint = reactive("")

    def on_mount(self) -> None:
        self.update_display()

    def set_keybindings(self, hint: str) -> None:
        """Set the keybinding hint text."""
        self.keybinding_hint = hint

    def update_display(self) -> None:
        """Update the status bar display."""
        status_items = []
        if self.loading_status:
            status_items.append(escape(self.loading_status))

        if self.feed_status:
            status_items.append(escape(self.feed_status))

        if self.keybinding_hint:
            status_items.append(self.keybinding_hint)

        self.update(" | ".join(status_items))

    def watch_loading_status(self, loading_status: str) -> None:
        self.update_display()

    def watch_feed_status(self, feed_status: str) -> None:
        self.update_display()

    def watch_keybinding_hint(self, keybinding_hint: str) -> None:
        self.update_display()
