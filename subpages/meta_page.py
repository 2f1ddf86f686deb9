# subpages/meta_page.py
# ----------------------------------------------------------
# "Meta": this site's own commit history.
#   • stats for everything up to the current cutoff
#   • scatter of commits (time × hour of day), box-select to brush
#   • per-file unit chart
#   • narrative steps; stepping moves the cutoff like the slider does
# The slider and the narrative both write the same cutoff; whichever
# was touched last wins and the other control is moved to match.
# ----------------------------------------------------------

from __future__ import annotations
import logging
from html import escape
from typing import Optional

import pandas as pd
import streamlit as st

from portfolio.config import SiteConfig
from portfolio.errors import DataLoadError
from portfolio.files import file_breakdown, render_unit_chart, type_colors
from portfolio.loader import load_records
from portfolio.narrative import Narrator
from portfolio.scatter import build_scatter_figure, region_from_plotly_box
from portfolio.selection import summarize_selection
from portfolio.stats import stats_html, summary_stats
from portfolio.view_state import ViewState

logger = logging.getLogger(__name__)

STATE_KEY = "meta_state"
SLIDER_KEY = "meta_slider"
STEP_KEY = "meta_step"
SCATTER_KEY = "meta_scatter"


@st.cache_data(show_spinner=False)
def _load(path_str: str, list_columns: tuple) -> pd.DataFrame:
    return load_records(path_str, list_columns)


def _init_state(cfg: SiteConfig) -> Optional[dict]:
    path = str(cfg.loc_csv)
    state = st.session_state.get(STATE_KEY)
    if state is None or state["path"] != path:
        try:
            records = _load(path, tuple(cfg.list_columns))
        except DataLoadError as e:
            st.error(f"{e}\n\nGenerate it with `python -m portfolio.gitlog . -o {path}`.")
            return None
        view = ViewState(records)
        logger.info("Loaded %d line records, %d commits from %s", len(records), len(view.commits), path)
        state = {"path": path, "view": view, "narrator": Narrator(view)}
        st.session_state[STATE_KEY] = state
        st.session_state[SLIDER_KEY] = 100.0
        st.session_state[STEP_KEY] = max(0, len(state["narrator"]) - 1)
    return state


# -----------------------------
# Cutoff writers
# -----------------------------
def _on_slider(state: dict):
    view, narrator = state["view"], state["narrator"]
    view.set_cutoff_percent(st.session_state[SLIDER_KEY])
    st.session_state[STEP_KEY] = narrator.step_for_cutoff(view.cutoff)


def _on_step(state: dict):
    view, narrator = state["view"], state["narrator"]
    narrator.activate(st.session_state[STEP_KEY])
    st.session_state[SLIDER_KEY] = round(view.percent_from_cutoff(view.cutoff), 1)


def _step_by(state: dict, delta: int):
    last = len(state["narrator"]) - 1
    st.session_state[STEP_KEY] = max(0, min(last, st.session_state[STEP_KEY] + delta))
    _on_step(state)


# -----------------------------
# Renderers
# -----------------------------
def render_scatter(view: ViewState):
    scales = view.scales()
    # brush from the previous interaction, in data space → pixel region
    prior = st.session_state.get(SCATTER_KEY) or {}
    boxes = (prior.get("selection") or {}).get("box") or []
    view.set_selection(region_from_plotly_box(boxes[0] if boxes else None, scales))

    fig = build_scatter_figure(view.filtered_commits, scales, view.lines_lookup)
    st.plotly_chart(fig, use_container_width=True, key=SCATTER_KEY, on_select="rerun", selection_mode=("box",))


def render_selection(view: ViewState):
    summary = summarize_selection(view.filtered_records, view.selected_ids())
    st.markdown(f"<p id='selection-count'>{summary.label}</p>", unsafe_allow_html=True)
    if summary.is_empty or not summary.breakdown:
        return
    cols = st.columns(len(summary.breakdown))
    for col, share in zip(cols, summary.breakdown):
        col.markdown(
            f"<div class='lang-block'><div class='lang-title'>{escape(share.type.upper())}</div>"
            f"<div class='lang-lines'>{share.lines} lines</div>"
            f"<div class='lang-pct'>({share.percent})</div></div>",
            unsafe_allow_html=True,
        )


def render_files(view: ViewState, dark: bool):
    breakdown = file_breakdown(view.filtered_records)
    if not breakdown:
        st.info("No files yet at this point in time.")
        return
    colors = type_colors(view.records["type"].dropna().astype(str))
    st.pyplot(render_unit_chart(breakdown, colors, dark=dark), transparent=True)


def render_narrative(state: dict):
    narrator = state["narrator"]
    active = st.session_state[STEP_KEY]
    if len(narrator) > 1:
        c_prev, c_step, c_next = st.columns([1, 4, 1], vertical_alignment="bottom")
        c_prev.button("◀", key="meta_prev", on_click=_step_by, args=(state, -1), use_container_width=True)
        c_step.slider("Story step", 0, len(narrator) - 1, key=STEP_KEY, on_change=_on_step, args=(state,))
        c_next.button("▶", key="meta_next", on_click=_step_by, args=(state, 1), use_container_width=True)
    with st.container(height=560):
        for step in narrator.steps:
            cls = "step active" if step.index == active else "step"
            st.markdown(f"<div class='{cls}'>{escape(step.text)}</div>", unsafe_allow_html=True)


# -----------------------------
# Page
# -----------------------------
def meta_page(cfg: SiteConfig, dark: bool = False):
    st.title("Meta")
    st.caption("This page includes stats about the code of this website.")
    state = _init_state(cfg)
    if state is None:
        st.stop()
    view: ViewState = state["view"]
    if view.commits.empty:
        st.warning("The commit log has no dated commits.")
        return

    st.slider("Show commits until:", 0.0, 100.0, step=0.1, key=SLIDER_KEY, on_change=_on_slider, args=(state,))
    local_cutoff = view.cutoff.tz_convert(None)
    st.caption(f"{local_cutoff:%Y-%m-%d %H:%M} UTC · updated by {view.last_source}")

    st.subheader("Summary")
    st.markdown(stats_html(summary_stats(view.filtered_records)), unsafe_allow_html=True)

    col_story, col_chart = st.columns([1, 1.6])
    with col_story:
        render_narrative(state)
    with col_chart:
        st.subheader("Commits by time of day")
        render_scatter(view)
        render_selection(view)

    st.subheader("Files")
    render_files(view, dark)
