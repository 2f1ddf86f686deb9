"""Colour-scheme preference, kept per browser under a single key."""

from __future__ import annotations
import json
import logging
from typing import Dict, MutableMapping, Optional

logger = logging.getLogger(__name__)

PREF_KEY = "colorScheme"
DEFAULT_SCHEME = "light dark"
SCHEMES: Dict[str, str] = {"light dark": "Automatic", "light": "Light", "dark": "Dark"}

# localStorage round trip: read on first render, write when the visitor picks a scheme
READ_EXPRESSION = f"window.localStorage.getItem({json.dumps(PREF_KEY)}) || ''"


def parse_scheme(raw: Optional[str]) -> str:
    if raw is None or raw == "":
        return DEFAULT_SCHEME
    if raw not in SCHEMES:
        logger.warning("Ignoring unknown stored color scheme %r", raw)
        return DEFAULT_SCHEME
    return raw


class PreferenceStore:
    """One visitor's preference. ``storage`` is that visitor's session mapping."""

    def __init__(self, storage: MutableMapping):
        self.storage = storage

    def load(self) -> str:
        return parse_scheme(self.storage.get(PREF_KEY))

    def save(self, scheme: str) -> None:
        if scheme not in SCHEMES:
            raise ValueError(f"Unknown color scheme: {scheme!r}")
        logger.info("color scheme changed to %s", scheme)
        self.storage[PREF_KEY] = scheme


def write_script(scheme: str) -> str:
    """Script that stores ``scheme`` in the browser's localStorage."""
    if scheme not in SCHEMES:
        raise ValueError(f"Unknown color scheme: {scheme!r}")
    return (
        "<script>\n"
        f"try {{ window.localStorage.setItem({json.dumps(PREF_KEY)}, {json.dumps(scheme)}); }} catch(e) {{}}\n"
        "</script>"
    )


def color_scheme_css(scheme: str) -> str:
    return f"<style>:root {{ color-scheme: {scheme}; }}</style>"


def is_dark(scheme: str) -> bool:
    return scheme == "dark"
