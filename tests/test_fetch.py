import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from portfolio.errors import FetchError
from portfolio.fetch import fetch_github_data, fetch_json, safe_fetch_json


def _response(ok=True, status=200, reason="OK", body=None):
    resp = MagicMock(ok=ok, status_code=status, reason=reason)
    resp.json.return_value = body
    return resp


@patch("portfolio.fetch.requests.get")
def test_fetch_json_returns_body(mock_get):
    mock_get.return_value = _response(body=[{"title": "A"}])
    assert fetch_json("https://example.com/projects.json") == [{"title": "A"}]
    assert mock_get.call_args[0][0] == "https://example.com/projects.json"


@patch("portfolio.fetch.requests.get")
def test_non_success_status_raises(mock_get):
    mock_get.return_value = _response(ok=False, status=404, reason="Not Found")
    with pytest.raises(FetchError) as exc:
        fetch_json("https://example.com/missing.json")
    assert exc.value.status == 404
    assert "Not Found" in str(exc.value)


@patch("portfolio.fetch.requests.get")
def test_invalid_json_raises(mock_get):
    resp = _response()
    resp.json.side_effect = ValueError("bad json")
    mock_get.return_value = resp
    with pytest.raises(FetchError, match="not valid JSON"):
        fetch_json("https://example.com/x.json")


@patch("portfolio.fetch.requests.get")
def test_transport_error_raises(mock_get):
    mock_get.side_effect = requests.exceptions.ConnectionError("offline")
    with pytest.raises(FetchError, match="Request failed"):
        fetch_json("https://example.com/x.json")


@patch("portfolio.fetch.requests.get")
def test_safe_fetch_logs_and_returns_none(mock_get, caplog):
    mock_get.return_value = _response(ok=False, status=500, reason="Server Error")
    with caplog.at_level("ERROR", logger="portfolio.fetch"):
        assert safe_fetch_json("https://example.com/x.json") is None
    assert "Error fetching or parsing JSON data" in caplog.text


@patch("portfolio.fetch.requests.get")
def test_github_profile_url(mock_get):
    mock_get.return_value = _response(body={"followers": 3})
    assert fetch_github_data("octocat") == {"followers": 3}
    assert mock_get.call_args[0][0] == "https://api.github.com/users/octocat"


def test_session_is_used_when_given():
    session = MagicMock()
    session.get.return_value = _response(body={"ok": True})
    assert fetch_json("https://example.com/x.json", session=session) == {"ok": True}
    session.get.assert_called_once()


def test_local_path_is_read_from_disk(tmp_path):
    path = tmp_path / "projects.json"
    path.write_text(json.dumps([{"title": "Local"}]))
    assert fetch_json(str(path)) == [{"title": "Local"}]
    with pytest.raises(FetchError):
        fetch_json(str(tmp_path / "missing.json"))
