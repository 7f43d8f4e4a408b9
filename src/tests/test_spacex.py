from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from launch_tui.config import API_URL
from launch_tui.sources.base import TransportError
from launch_tui.sources.spacex import SpaceXSource


@pytest.fixture
def spacex_source():
    return SpaceXSource({})


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    return resp


def test_fetch_page_requests_offset_and_limit(spacex_source):
    with patch.object(spacex_source.session, "get") as mock_get:
        mock_get.return_value = _response(
            [
                {"flight_number": 11, "mission_name": "CRS-1"},
                {"flight_number": 12, "mission_name": "CRS-2"},
            ]
        )
        launches = spacex_source.fetch_page(10, 10)

    mock_get.assert_called_once_with(
        API_URL, params={"limit": 10, "offset": 10}, timeout=15
    )
    assert [launch.flight_number for launch in launches] == [11, 12]
    assert launches[0].mission_name == "CRS-1"


def test_fetch_page_uses_configured_url_and_timeout():
    source = SpaceXSource({"url": "http://localhost:6673/v3/launches", "timeout": 3})
    with patch.object(source.session, "get") as mock_get:
        mock_get.return_value = _response([])
        assert source.fetch_page(0) == []

    mock_get.assert_called_once_with(
        "http://localhost:6673/v3/launches", params={"limit": 10, "offset": 0}, timeout=3
    )


def test_fetch_page_skips_non_object_entries(spacex_source):
    with patch.object(spacex_source.session, "get") as mock_get:
        mock_get.return_value = _response([{"flight_number": 1}, "junk", None])
        launches = spacex_source.fetch_page(0)

    assert len(launches) == 1


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("read timed out"),
    ],
)
def test_network_errors_become_transport_errors(spacex_source, error):
    with patch.object(spacex_source.session, "get", side_effect=error):
        with pytest.raises(TransportError) as excinfo:
            spacex_source.fetch_page(0)

    assert excinfo.value.__cause__ is error


def test_http_status_error_becomes_transport_error(spacex_source):
    resp = _response([])
    resp.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
    with patch.object(spacex_source.session, "get", return_value=resp):
        with pytest.raises(TransportError):
            spacex_source.fetch_page(0)


def test_invalid_json_becomes_transport_error(spacex_source):
    resp = MagicMock()
    resp.json.side_effect = ValueError("Expecting value")
    with patch.object(spacex_source.session, "get", return_value=resp):
        with pytest.raises(TransportError):
            spacex_source.fetch_page(0)


def test_non_list_payload_becomes_transport_error(spacex_source):
    with patch.object(spacex_source.session, "get") as mock_get:
        mock_get.return_value = _response({"error": "Not Found"})
        with pytest.raises(TransportError, match="expected a list"):
            spacex_source.fetch_page(0)


def test_session_never_retries(spacex_source):
    adapter = spacex_source.session.get_adapter(API_URL)

    assert adapter.max_retries.total == 0
