from __future__ import annotations

from datetime import datetime, timezone

from launch_tui.datamodels import Launch, LaunchLinks, Outcome


FALCONSAT = {
    "flight_number": 1,
    "mission_name": "FalconSat",
    "launch_date_utc": "2006-03-24T22:30:00.000Z",
    "details": "Engine failure at 33 seconds and loss of vehicle",
    "upcoming": False,
    "launch_success": False,
    "links": {
        "mission_patch": "https://images2.imgbox.com/40/e3/GypSkayF_o.png",
        "article_link": "https://www.space.com/2196-spacex-inaugural-falcon-1-rocket-lost-launch.html",
        "video_link": "https://www.youtube.com/watch?v=0a_00nJ_Y88",
    },
}


def test_from_dict_reads_v3_launch():
    launch = Launch.from_dict(FALCONSAT)

    assert launch.flight_number == 1
    assert launch.mission_name == "FalconSat"
    assert launch.details.startswith("Engine failure")
    assert launch.launch_date_utc == datetime(2006, 3, 24, 22, 30, tzinfo=timezone.utc)
    assert launch.outcome is Outcome.FAILURE
    assert launch.upcoming is False
    assert launch.links.video_link == "https://www.youtube.com/watch?v=0a_00nJ_Y88"
    assert launch.links.mission_patch.endswith("GypSkayF_o.png")


def test_from_dict_defaults_missing_fields():
    launch = Launch.from_dict({})

    assert launch.flight_number == 0
    assert launch.mission_name == ""
    assert launch.details is None
    assert launch.launch_date_utc is None
    assert launch.links == LaunchLinks()
    assert launch.outcome is Outcome.UNKNOWN
    assert launch.upcoming is False


def test_from_dict_tolerates_malformed_fields():
    launch = Launch.from_dict(
        {
            "flight_number": "12",
            "mission_name": None,
            "details": 42,
            "launch_date_utc": "not a date",
            "links": ["nope"],
            "launch_success": "yes",
        }
    )

    assert launch.flight_number == 12
    assert launch.mission_name == ""
    assert launch.details is None
    assert launch.launch_date_utc is None
    assert launch.links.video_link is None
    assert launch.outcome is Outcome.UNKNOWN


def test_upcoming_without_result_is_pending():
    launch = Launch.from_dict({"flight_number": 110, "upcoming": True, "launch_success": None})

    assert launch.outcome is Outcome.PENDING
    assert launch.upcoming is True


def test_empty_links_become_none():
    launch = Launch.from_dict({"links": {"video_link": "", "article_link": None}})

    assert launch.links.video_link is None
    assert launch.links.article_link is None
