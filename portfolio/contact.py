"""Contact form → mailto: URL."""

from __future__ import annotations
from typing import Iterable, Mapping, Tuple, Union
from urllib.parse import quote

# characters encodeURIComponent leaves alone
_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    return quote(str(value), safe=_SAFE)


def build_mailto_url(action: str, fields: Union[Mapping[str, str], Iterable[Tuple[str, str]]]) -> str:
    items = fields.items() if isinstance(fields, Mapping) else fields
    params = [f"{encode_component(name)}={encode_component(value)}" for name, value in items]
    if not params:
        return action
    sep = "&" if "?" in action else "?"
    return action + sep + "&".join(params)
