# app.py — Portfolio shell: nav, theme, Home + subpage dispatch
# ----------------------------------------------------------------
#  • Pages come from site.toml ([[pages]]); internal ones route through
#    st.session_state["view"] (mirrored to ?view= so links are shareable)
#  • Theme choice lives in the session and in the browser's localStorage
#  • Projects / Resume / Contact / Meta live in subpages/
# ----------------------------------------------------------------

from __future__ import annotations
import logging
from html import escape
from pathlib import Path
from typing import Optional

import streamlit as st
from streamlit.components.v1 import html as st_html
from streamlit_js_eval import streamlit_js_eval

from portfolio.config import SiteConfig, configure_logging, load_config
from portfolio.errors import ConfigError
from portfolio.fetch import fetch_github_data
from portfolio.nav import base_path_for, build_nav, known_views, nav_bar_html
from portfolio.projects import latest_projects, render_projects_html
from portfolio.theme import READ_EXPRESSION, SCHEMES, PreferenceStore, color_scheme_css, is_dark, parse_scheme, write_script
from subpages.contact_page import contact_page
from subpages.meta_page import meta_page
from subpages.projects_page import load_projects, projects_page
from subpages.resume_page import resume_page

logger = logging.getLogger("portfolio.app")

BASE = Path(__file__).resolve().parent

# -----------------------------
# Config + logging
# -----------------------------
try:
    CFG, CONFIG_ERROR = load_config(BASE), None
except ConfigError as e:
    CFG, CONFIG_ERROR = SiteConfig(), e
configure_logging(CFG.log_level)

# -----------------------------
# Page config + CSS
# -----------------------------
st.set_page_config(
    page_title=CFG.title,
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded",
)

if CONFIG_ERROR:
    st.error(str(CONFIG_ERROR))
    st.stop()

st.markdown("""
<style>
/* --- top nav --- */
nav.site-nav {
  display: flex;
  gap: 4px;
  margin-bottom: 1em;
  border-bottom: 1px solid rgba(128,128,128,.35);
}
nav.site-nav a {
  flex: 1;
  text-align: center;
  padding: .5em;
  text-decoration: none;
  color: inherit;
}
nav.site-nav a.current {
  border-bottom: .4em solid rgba(128,128,128,.5);
  padding-bottom: .1em;
  font-weight: 700;
}

/* --- commit stats --- */
dl.stats {
  display: grid;
  grid-template-columns: repeat(6, 1fr);
  grid-auto-flow: column;
  grid-template-rows: auto auto;
  margin: 0 0 1em;
}
dl.stats dt { font-size: .75em; text-transform: uppercase; opacity: .7; }
dl.stats dd { margin: 0; font-size: 1.6em; font-weight: 600; }

/* --- selection breakdown --- */
.lang-block { text-align: center; padding: 6px; }
.lang-title { font-weight: 700; }
.lang-pct { opacity: .7; }

/* --- narrative --- */
.step { padding: .6em 0 1.2em; opacity: .55; }
.step.active { opacity: 1; border-left: 3px solid steelblue; padding-left: .6em; }

/* --- project cards --- */
.projects {
  display: grid;
  grid-template-columns: repeat(auto-fill, minmax(15em, 1fr));
  gap: 1em;
}
.projects article {
  border: 1px solid rgba(0,0,0,.08);
  border-radius: 12px;
  padding: 10px;
  box-shadow: 0 2px 6px rgba(0,0,0,0.06);
}
.projects img {
  width: 100%;
  height: 160px;
  object-fit: cover;
  border-radius: 8px;
}
.project-year { opacity: .7; }

.hero {
  font-weight: 800;
  line-height: 1.1;
  margin: 0 0 6px;
  font-size: clamp(28px, 3.6vw, 48px);
}
.hero-sub {
  font-size: clamp(15px, 1.2vw, 18px);
  line-height: 1.6;
  opacity: .9;
  max-width: 62ch;
}
</style>
""", unsafe_allow_html=True)

# -----------------------------
# Helpers (routing, rerun, theme)
# -----------------------------
def rerun():
    st.rerun()

def current_host() -> str:
    try:
        return st.context.headers.get("host", "")
    except AttributeError:
        return ""

LINKS_BASE = base_path_for(current_host(), CFG.base_path)
VIEWS = known_views(build_nav(CFG.pages, LINKS_BASE, ""))

def get_view() -> str:
    v = st.session_state.get("view") or st.query_params.get("view", "home")
    return v if v in VIEWS else "home"

def set_view(v: str):
    st.session_state["view"] = v
    if v == "home":
        st.query_params.clear()
    else:
        st.query_params["view"] = v

prefs = PreferenceStore(st.session_state)

def _on_theme_change():
    prefs.save(st.session_state["theme_select"])
    st.session_state["theme_restored"] = True
    st.session_state["theme_write"] = True

if "theme_select" not in st.session_state:
    st.session_state["theme_select"] = prefs.load()

def restore_theme():
    """Once per session, pick up the scheme this browser stored on an earlier visit."""
    if st.session_state.get("theme_restored"):
        return
    with st.sidebar:
        stored = streamlit_js_eval(js_expressions=READ_EXPRESSION, key="theme_read")
    if stored is None:
        return  # browser has not answered yet
    st.session_state["theme_restored"] = True
    scheme = parse_scheme(stored)
    if scheme != st.session_state["theme_select"]:
        st.session_state["theme_select"] = scheme
        prefs.save(scheme)

def persist_theme():
    if st.session_state.pop("theme_write", False):
        with st.sidebar:
            st_html(write_script(st.session_state["theme_select"]), height=0)

def is_dark_theme() -> bool:
    scheme = st.session_state.get("theme_select", "light dark")
    if scheme != "light dark":
        return is_dark(scheme)
    try:
        base = (st.get_option("theme.base") or "light").lower()
    except Exception:
        base = "light"
    return base == "dark"

# -----------------------------
# Sidebar
# -----------------------------
view = get_view()
links = build_nav(CFG.pages, LINKS_BASE, view)

st.sidebar.title("Navigate")
for link in links:
    if link.external:
        st.sidebar.link_button(link.title, link.href, use_container_width=True)
    elif st.sidebar.button(link.title, key=f"nav_{link.view}", use_container_width=True,
                           type="primary" if link.current else "secondary"):
        set_view(link.view); rerun()
st.sidebar.markdown("---")
restore_theme()
st.sidebar.selectbox(
    "Theme:",
    options=list(SCHEMES),
    format_func=SCHEMES.get,
    key="theme_select",
    on_change=_on_theme_change,
)
persist_theme()
st.markdown(color_scheme_css(st.session_state["theme_select"]), unsafe_allow_html=True)
st.markdown(nav_bar_html(links), unsafe_allow_html=True)

# -----------------------------
# HOME
# -----------------------------
@st.cache_data(ttl=3600, show_spinner=False)
def github_profile(username: str) -> Optional[dict]:
    return fetch_github_data(username)

def render_home():
    st.markdown(f'<div class="hero">{escape(CFG.title)}</div>', unsafe_allow_html=True)
    st.markdown(
        '<div class="hero-sub">'
        'Data visualization, web development and the occasional side project. '
        'Browse the projects, or see how this site was built on the Meta page.'
        '</div>',
        unsafe_allow_html=True,
    )

    st.markdown("---")
    st.subheader("Latest Projects")
    projects = load_projects(str(CFG.projects_json))
    if projects is None:
        st.warning("Projects could not be loaded.")
    else:
        st.markdown(render_projects_html(latest_projects(projects), "h3"), unsafe_allow_html=True)

    st.markdown("---")
    st.subheader("My GitHub Stats")
    profile = github_profile(CFG.github_user)
    if not profile:
        st.info("GitHub profile is unavailable right now.")
        return
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Followers", profile.get("followers", 0))
    c2.metric("Following", profile.get("following", 0))
    c3.metric("Public Repos", profile.get("public_repos", 0))
    c4.metric("Public Gists", profile.get("public_gists", 0))

# -----------------------------
# Dispatch
# -----------------------------
logger.debug("render view=%s", view)
if view == "projects":
    projects_page(CFG, dark=is_dark_theme())
elif view == "resume":
    resume_page(CFG)
elif view == "contact":
    contact_page(CFG)
elif view == "meta":
    meta_page(CFG, dark=is_dark_theme())
else:
    render_home()
