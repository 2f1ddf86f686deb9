"""Headline numbers for the commit log."""

from __future__ import annotations
from html import escape
from typing import List, Tuple

import pandas as pd


def summary_stats(records: pd.DataFrame) -> List[Tuple[str, str]]:
    """(label, value) pairs in display order; label may contain markup."""
    if records.empty:
        return [
            ('Total <abbr title="Lines of code">LOC</abbr>', "0"),
            ("Total commits", "0"),
            ("Files", "0"),
            ("Max depth", "0"),
            ("Avg depth", "0"),
            ("Longest line (chars)", "0"),
        ]
    depth = records["depth"]
    avg = depth.mean()
    longest = records["length"].max()
    max_depth = depth.max()
    return [
        ('Total <abbr title="Lines of code">LOC</abbr>', str(len(records))),
        ("Total commits", str(records["commit"].nunique())),
        ("Files", str(records["file"].nunique())),
        ("Max depth", "0" if pd.isna(max_depth) else f"{max_depth:g}"),
        ("Avg depth", "0" if pd.isna(avg) else f"{avg:.2f}"),
        ("Longest line (chars)", "0" if pd.isna(longest) else f"{longest:g}"),
    ]


def stats_html(stats: List[Tuple[str, str]]) -> str:
    items = "".join(f"<dt>{label}</dt><dd>{escape(value)}</dd>" for label, value in stats)
    return f"<dl class='stats'>{items}</dl>"
