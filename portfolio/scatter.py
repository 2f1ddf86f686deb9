"""
Commit scatterplot: commit time (x) against hour of day (y), radius by lines changed.

Scales work in a fixed 1000x600 plot space so a brush rectangle can be
tested against commits in pixels, the same way regardless of how wide the
browser renders the chart.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from .commits import plot_order


R_RANGE = (5.0, 30.0)
HOUR_DOMAIN = (0.0, 24.0)
DOT_COLOR = "steelblue"
SELECTED_COLOR = "#ff6b6b"
BASE_OPACITY = 0.7
DAY = pd.Timedelta(days=1)


@dataclass(frozen=True)
class PlotArea:
    width: int = 1000
    height: int = 600
    top: int = 10
    right: int = 10
    bottom: int = 30
    left: int = 36

    @property
    def usable_left(self) -> int: return self.left

    @property
    def usable_right(self) -> int: return self.width - self.right

    @property
    def usable_top(self) -> int: return self.top

    @property
    def usable_bottom(self) -> int: return self.height - self.bottom


@dataclass(frozen=True)
class LinearScale:
    d0: float
    d1: float
    r0: float
    r1: float

    def __call__(self, v):
        if self.d0 == self.d1:
            return np.asarray(v, dtype=float) * 0 + (self.r0 + self.r1) / 2
        return self.r0 + (np.asarray(v, dtype=float) - self.d0) / (self.d1 - self.d0) * (self.r1 - self.r0)

    def invert(self, px):
        if self.r0 == self.r1:
            return np.asarray(px, dtype=float) * 0 + self.d0
        return self.d0 + (np.asarray(px, dtype=float) - self.r0) / (self.r1 - self.r0) * (self.d1 - self.d0)


def _seconds(ts) -> np.ndarray:
    """UTC epoch seconds for a Timestamp, datetime Series or list of Timestamps."""
    s = ts if isinstance(ts, pd.Series) else pd.Series(list(np.atleast_1d(ts)), dtype=object)
    s = pd.to_datetime(s, utc=True)
    return (s - pd.Timestamp(0, tz="UTC")).dt.total_seconds().to_numpy()


@dataclass(frozen=True)
class TimeScale:
    start: pd.Timestamp
    end: pd.Timestamp
    r0: float
    r1: float

    @property
    def _linear(self) -> LinearScale:
        d0, d1 = _seconds([self.start, self.end])
        return LinearScale(d0, d1, self.r0, self.r1)

    def __call__(self, ts):
        out = self._linear(_seconds(ts))
        return float(out[0]) if np.ndim(ts) == 0 and not isinstance(ts, pd.Series) else out

    def invert(self, px) -> pd.Timestamp:
        return pd.Timestamp(float(self._linear.invert(px)), unit="s", tz="UTC")


@dataclass(frozen=True)
class SqrtScale:
    d0: float
    d1: float
    r0: float
    r1: float

    def __call__(self, v):
        lin = LinearScale(math.sqrt(self.d0), math.sqrt(self.d1), self.r0, self.r1)
        return lin(np.sqrt(np.asarray(v, dtype=float)))


def nice_days(start: pd.Timestamp, end: pd.Timestamp) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """Extend a time extent outward to whole (UTC) days."""
    lo = start.floor("D")
    hi = end.ceil("D")
    if hi <= lo:
        hi = lo + DAY
    return lo, hi


def radius_domain(commits: pd.DataFrame) -> Tuple[float, float]:
    if commits.empty:
        return (1.0, 1.0)
    return float(commits["total_lines"].min()), float(commits["total_lines"].max())


@dataclass(frozen=True)
class Scales:
    x: TimeScale
    y: LinearScale
    r: SqrtScale
    area: PlotArea

    @classmethod
    def build(cls, commits: pd.DataFrame, r_domain: Tuple[float, float], area: PlotArea = PlotArea()) -> "Scales":
        """x from the given (filtered) commits, r from ``r_domain`` (the full dataset)."""
        if commits.empty:
            start = pd.Timestamp(0, tz="UTC")
            lo, hi = start, start + DAY
        else:
            lo, hi = nice_days(commits["datetime"].min(), commits["datetime"].max())
        return cls(
            x=TimeScale(lo, hi, area.usable_left, area.usable_right),
            y=LinearScale(HOUR_DOMAIN[0], HOUR_DOMAIN[1], area.usable_bottom, area.usable_top),
            r=SqrtScale(r_domain[0], r_domain[1], *R_RANGE),
            area=area,
        )


@dataclass(frozen=True)
class SelectionRegion:
    """Brush rectangle in plot pixels, corners normalised so x0 <= x1 and y0 <= y1."""
    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_corners(cls, a: Sequence[float], b: Sequence[float]) -> "SelectionRegion":
        return cls(min(a[0], b[0]), min(a[1], b[1]), max(a[0], b[0]), max(a[1], b[1]))

    @classmethod
    def full(cls, area: PlotArea = PlotArea()) -> "SelectionRegion":
        return cls(0, 0, area.width, area.height)

    @property
    def is_degenerate(self) -> bool:
        return self.x0 == self.x1 or self.y0 == self.y1


def is_commit_selected(region: Optional[SelectionRegion], commit: Mapping, scales: Scales) -> bool:
    if region is None or region.is_degenerate:
        return False
    x = scales.x(commit["datetime"])
    y = float(scales.y(commit["hour_frac"]))
    return region.x0 <= x <= region.x1 and region.y0 <= y <= region.y1


def select_commits(region: Optional[SelectionRegion], commits: pd.DataFrame, scales: Scales) -> pd.DataFrame:
    if region is None or region.is_degenerate or commits.empty:
        return commits.iloc[0:0]
    xs = scales.x(commits["datetime"])
    ys = scales.y(commits["hour_frac"])
    mask = (xs >= region.x0) & (xs <= region.x1) & (ys >= region.y0) & (ys <= region.y1)
    return commits[np.asarray(mask)]


def _as_utc(value) -> pd.Timestamp:
    if isinstance(value, (int, float)):
        return pd.Timestamp(value, unit="ms", tz="UTC")
    ts = pd.Timestamp(value)
    return ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")


def region_from_plotly_box(box: Optional[Mapping], scales: Scales) -> Optional[SelectionRegion]:
    """Convert a plotly box selection (data coordinates) into a pixel region."""
    if not box or not box.get("x") or not box.get("y"):
        return None
    (xa, xb), (ya, yb) = box["x"][:2], box["y"][:2]
    a = (scales.x(_as_utc(xa)), float(scales.y(ya)))
    b = (scales.x(_as_utc(xb)), float(scales.y(yb)))
    region = SelectionRegion.from_corners(a, b)
    return None if region.is_degenerate else region


def format_full_date(ts: pd.Timestamp) -> str:
    return f"{ts:%A, %B} {ts.day}, {ts.year}"


def format_short_time(ts: pd.Timestamp) -> str:
    hour = ts.hour % 12 or 12
    return f"{hour}:{ts.minute:02d} {'AM' if ts.hour < 12 else 'PM'}"


def hour_tick_labels(step: int = 2) -> Tuple[list, list]:
    vals = list(range(0, 25, step))
    return vals, [f"{v % 24:02d}:00" for v in vals]


def tooltip_fields(commit: Mapping, lines_lookup: Mapping[str, int]) -> dict:
    local = commit["local_datetime"]
    author = commit.get("author")
    return {
        "commit": commit["commit"],
        "date": format_full_date(local),
        "time": format_short_time(local),
        "author": author if isinstance(author, str) and author else "—",
        "lines": f"{lines_lookup.get(commit['commit'], commit['total_lines'])} lines",
    }


def build_scatter_figure(
    commits: pd.DataFrame,
    scales: Scales,
    lines_lookup: Mapping[str, int],
) -> go.Figure:
    """Brushed dots take the ``selected`` style from plotly's own selection state."""
    ordered = plot_order(commits)
    tips = [tooltip_fields(row, lines_lookup) for row in ordered.to_dict("records")]
    x_lo, x_hi = scales.x.start, scales.x.end
    tickvals, ticktext = hour_tick_labels()

    fig = go.Figure(
        go.Scatter(
            ids=ordered["commit"].tolist(),
            x=ordered["datetime"].dt.tz_convert("UTC").dt.tz_localize(None) if not ordered.empty else [],
            y=ordered["hour_frac"],
            mode="markers",
            marker=dict(
                size=2 * scales.r(ordered["total_lines"]) if not ordered.empty else [],
                color=DOT_COLOR,
                opacity=BASE_OPACITY,
                line=dict(width=1, color="white"),
            ),
            selected=dict(marker=dict(color=SELECTED_COLOR, opacity=1.0)),
            unselected=dict(marker=dict(opacity=BASE_OPACITY)),
            customdata=[[t["commit"], t["date"], t["time"], t["author"], t["lines"]] for t in tips],
            hovertemplate=(
                "<b>Commit</b> %{customdata[0]}<br>"
                "<b>Date</b> %{customdata[1]}<br>"
                "<b>Time</b> %{customdata[2]}<br>"
                "<b>Author</b> %{customdata[3]}<br>"
                "<b>Lines edited</b> %{customdata[4]}<extra></extra>"
            ),
        )
    )
    area = scales.area
    fig.update_layout(
        height=area.height,
        margin=dict(l=area.left, r=area.right, t=area.top, b=area.bottom),
        dragmode="select",
        showlegend=False,
        hoverlabel=dict(bgcolor="rgba(255,255,255,0.9)"),
    )
    fig.update_xaxes(range=[x_lo.tz_localize(None), x_hi.tz_localize(None)], showgrid=False)
    fig.update_yaxes(range=list(HOUR_DOMAIN), tickvals=tickvals, ticktext=ticktext,
                     showgrid=True, gridcolor="rgba(128,128,128,0.2)", fixedrange=True)
    return fig
