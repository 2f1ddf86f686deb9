"""Per-file unit chart: one dot per line, coloured by the line's type."""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# tableau10, same ordering as d3.schemeTableau10
PALETTE = [
    "#4e79a7", "#f28e2c", "#e15759", "#76b7b2", "#59a14f",
    "#edc949", "#af7aa1", "#ff9da7", "#9c755f", "#bab0ab",
]


@dataclass(frozen=True)
class FileUnits:
    name: str
    types: Sequence[str]

    @property
    def line_count(self) -> int:
        return len(self.types)


def file_breakdown(records: pd.DataFrame) -> List[FileUnits]:
    """Group records by file, most lines first (ties by name)."""
    if records.empty:
        return []
    out = [
        FileUnits(str(name), tuple(group["type"].fillna("unknown").astype(str)))
        for name, group in records.groupby("file", sort=False)
    ]
    return sorted(out, key=lambda f: (-f.line_count, f.name))


def type_colors(types: Iterable[str]) -> Dict[str, str]:
    """Stable colour per type: sorted order indexes into the palette."""
    return {t: PALETTE[i % len(PALETTE)] for i, t in enumerate(sorted(set(types)))}


def render_unit_chart(breakdown: List[FileUnits], colors: Dict[str, str], per_row: int = 50, dark: bool = False):
    rows = [max(1, math.ceil(f.line_count / per_row)) for f in breakdown]
    total_rows = max(1, sum(rows))
    dpi = 100
    fig, ax = plt.subplots(figsize=(10, 0.5 + 0.18 * total_rows + 0.12 * len(breakdown)), dpi=dpi)
    fig.patch.set_alpha(0.0); ax.set_facecolor("none")
    text_color = "#e5e7eb" if dark else "#111827"

    y = 0.0
    yticks, ylabels = [], []
    for f, n_rows in zip(breakdown, rows):
        idx = np.arange(f.line_count)
        xs = idx % per_row
        ys = y + idx // per_row
        ax.scatter(xs, ys, s=14, c=[colors.get(t, "#999999") for t in f.types], marker="o", linewidths=0)
        yticks.append(y); ylabels.append(f"{f.name}  ({f.line_count} lines)")
        y += n_rows + 0.6

    ax.set_yticks(yticks); ax.set_yticklabels(ylabels, fontsize=8, color=text_color)
    ax.set_xticks([]); ax.set_xlim(-1, per_row)
    ax.set_ylim(max(y, 1), -1)
    for side in ("top", "right", "bottom", "left"):
        ax.spines[side].set_visible(False)
    ax.tick_params(length=0)
    handles = [plt.Line2D([], [], marker="o", linestyle="", color=c, label=t) for t, c in colors.items()]
    if handles:
        legend = ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.0, 1.0), frameon=False, fontsize=8)
        for text in legend.get_texts():
            text.set_color(text_color)
    return fig
