"""Project gallery: parsing, search, year filter, pie chart and card markup."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from html import escape
from typing import Any, Iterable, List, Optional, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .files import PALETTE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Project:
    title: str
    image: str = ""
    description: str = ""
    year: str = ""
    url: str = ""

    def search_text(self) -> str:
        return "\n".join([self.title, self.image, self.description, self.year, self.url]).lower()


def parse_projects(raw: Any) -> List[Project]:
    """Build Projects from the decoded JSON list; entries without a title are skipped."""
    if not isinstance(raw, list):
        logger.warning("Project list is not a JSON array (%s)", type(raw).__name__)
        return []
    out = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("title"):
            logger.warning("Skipping malformed project entry: %r", item)
            continue
        out.append(Project(
            title=str(item["title"]),
            image=str(item.get("image") or ""),
            description=str(item.get("description") or ""),
            year=str(item.get("year") or ""),
            url=str(item.get("url") or ""),
        ))
    return out


def search_projects(projects: Iterable[Project], query: str) -> List[Project]:
    q = (query or "").strip().lower()
    return [p for p in projects if q in p.search_text()]


def year_counts(projects: Iterable[Project]) -> List[Tuple[str, int]]:
    counts: dict = {}
    for p in projects:
        counts[p.year] = counts.get(p.year, 0) + 1
    return sorted(counts.items())


def latest_projects(projects: List[Project], n: int = 3) -> List[Project]:
    return projects[:n]


@dataclass
class ProjectFilter:
    """Search query plus the year picked from the pie chart (None = all years)."""
    query: str = ""
    selected_year: Optional[str] = None

    def pie_data(self, projects: Iterable[Project]) -> List[Tuple[str, int]]:
        return year_counts(search_projects(projects, self.query))

    def selected_index(self, projects: Iterable[Project]) -> int:
        years = [y for y, _ in self.pie_data(projects)]
        return years.index(self.selected_year) if self.selected_year in years else -1

    def toggle_wedge(self, index: int, projects: Iterable[Project]) -> None:
        """Select wedge ``index``; selecting the already-selected wedge clears it."""
        data = self.pie_data(projects)
        if not 0 <= index < len(data):
            raise IndexError(index)
        year = data[index][0]
        self.selected_year = None if self.selected_year == year else year

    def apply(self, projects: Iterable[Project]) -> List[Project]:
        found = search_projects(projects, self.query)
        if self.selected_year is None or self.selected_year not in {p.year for p in found}:
            return found
        return [p for p in found if p.year == self.selected_year]


def render_pie(data: List[Tuple[str, int]], selected_index: int = -1, size_px: int = 320, dark: bool = False):
    dpi = 200
    fig, ax = plt.subplots(figsize=(size_px / dpi, size_px / dpi), dpi=dpi)
    fig.patch.set_alpha(0.0); ax.set_facecolor("none")
    if not data:
        ax.axis("off")
        return fig
    labels = [y or "n/a" for y, _ in data]
    values = [n for _, n in data]
    colors = [PALETTE[i % len(PALETTE)] for i in range(len(data))]
    if selected_index >= 0:
        colors = [c if i == selected_index else c + "55" for i, c in enumerate(colors)]
    explode = [0.08 if i == selected_index else 0 for i in range(len(data))]
    ax.pie(values, labels=labels, colors=colors, explode=explode, startangle=90, counterclock=False,
           textprops=dict(fontsize=5, color="#e5e7eb" if dark else "#111827"))
    ax.set_aspect("equal")
    return fig


def render_projects_html(projects: Iterable[Project], heading_level: str = "h2") -> str:
    cards = []
    for p in projects:
        link = (
            f'<p class="project-link"><a href="{escape(p.url)}" target="_blank" '
            f'rel="noopener noreferrer">View project →</a></p>'
            if p.url else ""
        )
        img = f'<img src="{escape(p.image)}" alt="{escape(p.title)}">' if p.image else ""
        cards.append(
            f"<article><{heading_level}>{escape(p.title)}</{heading_level}>{img}"
            f'<div class="project-body"><p>{escape(p.description)}</p>'
            f'<p class="project-year"><em>c. {escape(p.year)}</em></p>{link}</div></article>'
        )
    return f"<div class='projects'>{''.join(cards)}</div>"
