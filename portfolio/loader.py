"""Commit log ingestion: one row per source line touched by a commit."""

from __future__ import annotations
import json
import logging
from typing import Iterable, Union, IO
from pathlib import Path

import pandas as pd

from .errors import DataLoadError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("commit", "file", "line", "depth", "length", "type", "datetime")
NUMERIC_COLUMNS = ("line", "depth", "length")

_OFFSET_RE = r"^([+-])(\d{2}):?(\d{2})$"


def _decode_list(cell) -> list:
    if not isinstance(cell, str) or not cell.strip():
        return []
    try:
        value = json.loads(cell)
    except ValueError:
        return []
    return value if isinstance(value, list) else []


def parse_offsets(tz: pd.Series) -> pd.Series:
    """'+05:30' / '-0700' → Timedelta; anything else (incl. 'Z') → zero."""
    parts = tz.astype(str).str.strip().str.extract(_OFFSET_RE)
    sign = parts[0].map({"+": 1.0, "-": -1.0}).astype(float)
    minutes = sign * (parts[1].astype(float) * 60 + parts[2].astype(float))
    return pd.to_timedelta(minutes.fillna(0), unit="m")


def load_records(
    source: Union[str, Path, IO[str]],
    list_columns: Iterable[str] = ("tags",),
) -> pd.DataFrame:
    """Read the commit log and coerce its typed fields.

    ``datetime`` is kept as a UTC timestamp for ordering and comparison;
    ``local_datetime`` is the author's wall clock (UTC shifted by the row's
    ``timezone``) and drives hour-of-day. Unparsable numbers and dates become
    NaN / NaT rather than raising.
    """
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, na_values=[""])
    except FileNotFoundError as e:
        raise DataLoadError(f"Commit log not found: {source}") from e
    except pd.errors.EmptyDataError as e:
        raise DataLoadError(f"Commit log is empty: {source}") from e

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise DataLoadError(f"Commit log missing columns: {', '.join(missing)}")

    for col in NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    if "author" not in df.columns:
        df["author"] = pd.NA
    if "timezone" not in df.columns:
        df["timezone"] = "+00:00"
    offset = parse_offsets(df["timezone"])

    df["datetime"] = pd.to_datetime(df["datetime"], errors="coerce", utc=True, format="ISO8601")
    df["local_datetime"] = df["datetime"].dt.tz_localize(None) + offset
    if "date" in df.columns:
        midnight = pd.to_datetime(df["date"], errors="coerce", format="%Y-%m-%d")
        df["date"] = (midnight - offset).dt.tz_localize("UTC")

    for col in list_columns:
        if col in df.columns:
            df[col] = df[col].map(_decode_list)

    bad = int(df["datetime"].isna().sum())
    if bad:
        logger.warning("%d of %d rows have an unparsable datetime", bad, len(df))
    logger.debug("Loaded %d line records from %s", len(df), source)
    return df
