from __future__ import annotations

from launch_tui.datamodels import LaunchEntry, LaunchStatus
from launch_tui.widgets import detail_text, status_badge


def make_entry(**kwargs):
    fields = dict(
        key=1,
        title="FalconSat",
        status=LaunchStatus.FAILED,
        launched="18 years ago",
        details="Engine failure at 33 seconds",
    )
    fields.update(kwargs)
    return LaunchEntry(**fields)


def test_status_badge_shows_label():
    assert status_badge(LaunchStatus.UPCOMING).plain == "● Upcoming"


def test_detail_text_lists_only_present_links():
    text = detail_text(make_entry(video_link="https://youtu.be/x"))

    assert text.plain.startswith("18 years ago | Video")
    assert "Article" not in text.plain
    assert text.plain.endswith("Engine failure at 33 seconds")


def test_detail_text_links_point_at_urls():
    text = detail_text(
        make_entry(article_link="https://example.com/a", mission_patch="https://img/p.png")
    )

    links = {span.style.link for span in text.spans if getattr(span.style, "link", None)}
    assert links == {"https://example.com/a", "https://img/p.png"}
    assert "Patch: https://img/p.png" in text.plain
