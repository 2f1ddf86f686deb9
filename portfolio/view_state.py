"""
Single source of truth for the meta page.

A ``ViewState`` owns the loaded records, one cutoff timestamp and the current
brush selection. Every filtered collection is recomputed from scratch when the
cutoff moves; renderers only read from it.

The cutoff has two writers, the time slider and the narrative steps. Both call
``set_cutoff``; the most recent call wins and is remembered as ``last_source``
so the page can move the other control to match.
"""

from __future__ import annotations
import logging
from typing import Dict, Optional

import pandas as pd

from .commits import lines_by_commit, summarize_commits, usable_rows
from .events import CutoffChanged, EventBus, SelectionChanged
from .scatter import Scales, SelectionRegion, radius_domain, select_commits

logger = logging.getLogger(__name__)

SOURCE_INIT = "init"
SOURCE_SLIDER = "slider"
SOURCE_NARRATIVE = "narrative"


class ViewState:
    def __init__(self, records: pd.DataFrame, bus: Optional[EventBus] = None):
        self.records = records
        self.commits = summarize_commits(records)
        self.bus = bus or EventBus()
        self.r_domain = radius_domain(self.commits)
        self.revision = 0
        self.last_source = SOURCE_INIT
        self.selection: Optional[SelectionRegion] = None
        self.cutoff: Optional[pd.Timestamp] = None
        self.filtered_records = records.iloc[0:0]
        self.filtered_commits = self.commits.iloc[0:0]
        self.lines_lookup: Dict[str, int] = {}
        if not self.commits.empty:
            self.set_cutoff(self.max_time, source=SOURCE_INIT)

    # -- time bounds ---------------------------------------------------
    @property
    def min_time(self) -> Optional[pd.Timestamp]:
        return None if self.commits.empty else self.commits["datetime"].min()

    @property
    def max_time(self) -> Optional[pd.Timestamp]:
        return None if self.commits.empty else self.commits["datetime"].max()

    def cutoff_from_percent(self, percent: float) -> pd.Timestamp:
        """Map slider 0..100 linearly onto the commit time span."""
        lo, hi = self.min_time, self.max_time
        if lo is None:
            raise ValueError("no commits loaded")
        return lo + (hi - lo) * (float(percent) / 100)

    def percent_from_cutoff(self, cutoff: pd.Timestamp) -> float:
        lo, hi = self.min_time, self.max_time
        if lo is None or hi == lo:
            return 100.0
        pct = (cutoff - lo) / (hi - lo) * 100
        return max(0.0, min(100.0, float(pct)))

    # -- mutation entry points ------------------------------------------
    def set_cutoff(self, cutoff: pd.Timestamp, source: str = SOURCE_SLIDER) -> None:
        cutoff = pd.Timestamp(cutoff)
        if cutoff.tzinfo is None:
            cutoff = cutoff.tz_localize("UTC")
        self.cutoff = cutoff
        self.last_source = source
        self.revision += 1
        usable = usable_rows(self.records)
        self.filtered_records = self.records[usable & (self.records["datetime"] <= cutoff)]
        self.filtered_commits = summarize_commits(self.filtered_records)
        self.lines_lookup = lines_by_commit(self.filtered_records)
        logger.debug("cutoff=%s source=%s commits=%d rows=%d",
                     cutoff, source, len(self.filtered_commits), len(self.filtered_records))
        self.bus.publish(CutoffChanged(cutoff, source, self.revision))

    def set_cutoff_percent(self, percent: float) -> None:
        self.set_cutoff(self.cutoff_from_percent(percent), source=SOURCE_SLIDER)

    def set_cutoff_to_commit(self, commit_id: str) -> None:
        match = self.commits.loc[self.commits["commit"] == commit_id, "datetime"]
        if match.empty:
            raise KeyError(commit_id)
        self.set_cutoff(match.iloc[0], source=SOURCE_NARRATIVE)

    def set_selection(self, region: Optional[SelectionRegion]) -> None:
        self.selection = region
        ids = tuple(self.selected_commits()["commit"])
        self.bus.publish(SelectionChanged(region, ids))

    def clear_selection(self) -> None:
        self.set_selection(None)

    # -- derived --------------------------------------------------------
    def scales(self) -> Scales:
        return Scales.build(self.filtered_commits, self.r_domain)

    def selected_commits(self) -> pd.DataFrame:
        return select_commits(self.selection, self.filtered_commits, self.scales())

    def selected_ids(self) -> set:
        return set(self.selected_commits()["commit"])
