# subpages/projects_page.py
# ----------------------------------------------------------
# Project gallery: search box, year pie (click a year to filter,
# click it again to clear) and the card grid.
# ----------------------------------------------------------

from __future__ import annotations
from typing import List, Optional

import streamlit as st

from portfolio.config import SiteConfig
from portfolio.fetch import safe_fetch_json
from portfolio.projects import Project, ProjectFilter, parse_projects, render_pie, render_projects_html

STATE_KEY = "projects_filter"
QUERY_KEY = "projects_query"


@st.cache_data(show_spinner=False)
def load_projects(source: str) -> Optional[List[Project]]:
    raw = safe_fetch_json(source)
    if raw is None:
        return None
    return parse_projects(raw)


def _init_state() -> ProjectFilter:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = ProjectFilter()
    return st.session_state[STATE_KEY]


def _on_query(state: ProjectFilter):
    state.query = st.session_state[QUERY_KEY]


def _on_wedge(state: ProjectFilter, index: int, projects: List[Project]):
    state.toggle_wedge(index, projects)


def projects_page(cfg: SiteConfig, dark: bool = False):
    state = _init_state()
    projects = load_projects(str(cfg.projects_json))
    if projects is None:
        st.error(f"Could not load projects from {cfg.projects_json}")
        return

    st.title(f"Projects ({len(projects)})")
    st.text_input("🔍 Search projects…", key=QUERY_KEY, on_change=_on_query, args=(state,))

    pie = state.pie_data(projects)
    selected = state.selected_index(projects)
    col_pie, col_legend = st.columns([1, 1.4], vertical_alignment="center")
    with col_pie:
        st.pyplot(render_pie(pie, selected, dark=dark), use_container_width=False, transparent=True)
    with col_legend:
        st.caption("Filter by year")
        for i, (year, count) in enumerate(pie):
            st.button(
                f"{year or 'n/a'} ({count})",
                key=f"wedge_{year}",
                type="primary" if i == selected else "secondary",
                on_click=_on_wedge,
                args=(state, i, projects),
            )

    shown = state.apply(projects)
    if not shown:
        st.info("No projects match.")
    st.markdown(render_projects_html(shown, "h2"), unsafe_allow_html=True)
