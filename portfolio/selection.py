"""Summary of a brush selection: commit count label and per-type line breakdown."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Collection, List

import pandas as pd


@dataclass(frozen=True)
class TypeShare:
    type: str
    lines: int
    fraction: float

    @property
    def percent(self) -> str:
        return format_percent(self.fraction)


@dataclass(frozen=True)
class SelectionSummary:
    count: int
    label: str
    breakdown: List[TypeShare] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def format_percent(fraction: float) -> str:
    """One decimal with trailing zeros trimmed: 0.5 → '50%', 1/3 → '33.3%'."""
    text = f"{fraction * 100:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}%"


def selection_count_label(n: int) -> str:
    return f"{n if n else 'No'} commit{'' if n == 1 else 's'} selected"


def language_breakdown(records: pd.DataFrame, commit_ids: Collection[str]) -> List[TypeShare]:
    """Lines per type across the selected commits, largest first."""
    ids = set(commit_ids)
    if not ids:
        return []
    selected = records[records["commit"].isin(ids)]
    if selected.empty:
        return []
    counts = selected["type"].fillna("unknown").value_counts(sort=False)
    total = int(counts.sum())
    shares = [TypeShare(str(t), int(n), n / total) for t, n in counts.items()]
    return sorted(shares, key=lambda s: (-s.lines, s.type))


def summarize_selection(records: pd.DataFrame, commit_ids: Collection[str]) -> SelectionSummary:
    ids = set(commit_ids)
    return SelectionSummary(
        count=len(ids),
        label=selection_count_label(len(ids)),
        breakdown=language_breakdown(records, ids),
    )
