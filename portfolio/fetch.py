"""JSON fetching for the project list and the GitHub profile."""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Optional

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com/users/{username}"
TIMEOUT_SECONDS = 10


def fetch_json(url: str, session: Optional[requests.Session] = None) -> Any:
    """GET ``url`` and decode JSON; a local path is read from disk.

    Raises FetchError on a non-success status, a transport error or a body
    that is not JSON.
    """
    if not url.startswith(("http://", "https://")):
        try:
            return json.loads(Path(url).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise FetchError(url, f"Failed to read JSON: {e}") from e

    http = session or requests
    try:
        response = http.get(url, timeout=TIMEOUT_SECONDS, headers={"Accept": "application/json"})
    except requests.exceptions.RequestException as e:
        raise FetchError(url, f"Request failed: {e}") from e
    if not response.ok:
        raise FetchError(url, f"Failed to fetch: {response.reason}", status=response.status_code)
    try:
        return response.json()
    except ValueError as e:
        raise FetchError(url, "Response is not valid JSON", status=response.status_code) from e


def safe_fetch_json(url: str, session: Optional[requests.Session] = None) -> Any:
    """fetch_json that logs the failure and returns None instead of raising."""
    try:
        return fetch_json(url, session=session)
    except FetchError as e:
        logger.error("Error fetching or parsing JSON data: %s", e)
        return None


def fetch_github_data(username: str, session: Optional[requests.Session] = None) -> Optional[dict]:
    return safe_fetch_json(GITHUB_API.format(username=username), session=session)
