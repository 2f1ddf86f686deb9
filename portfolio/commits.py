"""Per-commit summaries derived from line records."""

from __future__ import annotations
import logging
from typing import Dict

import pandas as pd

logger = logging.getLogger(__name__)

COMMIT_COLUMNS = ["commit", "datetime", "local_datetime", "hour_frac", "total_lines", "file_count", "author"]


def usable_rows(records: pd.DataFrame) -> pd.Series:
    """Rows that can be attributed to a commit: a commit id and a datetime."""
    return records["commit"].notna() & records["datetime"].notna()


def summarize_commits(records: pd.DataFrame) -> pd.DataFrame:
    """One row per commit id, ascending by timestamp.

    Timestamp and author are taken from the commit's first record; all records
    of a commit are assumed to share them.
    """
    dated = records[usable_rows(records)]
    dropped = len(records) - len(dated)
    if dropped:
        logger.warning("Skipping %d records without a commit id or datetime", dropped)
    if dated.empty:
        return pd.DataFrame(columns=COMMIT_COLUMNS)

    grouped = dated.groupby("commit", sort=False)
    commits = grouped.agg(
        datetime=("datetime", "first"),
        local_datetime=("local_datetime", "first"),
        author=("author", "first"),
        total_lines=("commit", "size"),
        file_count=("file", "nunique"),
    ).reset_index()
    local = commits["local_datetime"]
    commits["hour_frac"] = local.dt.hour + local.dt.minute / 60
    commits = commits.sort_values(["datetime", "commit"], kind="stable").reset_index(drop=True)
    return commits[COMMIT_COLUMNS]


def plot_order(commits: pd.DataFrame) -> pd.DataFrame:
    """Largest commits first so smaller circles are drawn on top."""
    return commits.sort_values("total_lines", ascending=False, kind="stable").reset_index(drop=True)


def lines_by_commit(records: pd.DataFrame) -> Dict[str, int]:
    if records.empty:
        return {}
    return {str(k): int(v) for k, v in records.groupby("commit", sort=False).size().items()}
