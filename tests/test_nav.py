from portfolio.config import DEFAULT_PAGES
from portfolio.nav import base_path_for, build_nav, known_views, nav_bar_html, resolve_url, view_for


def test_base_path_depends_on_host():
    assert base_path_for("localhost:8501") == "/"
    assert base_path_for("127.0.0.1") == "/"
    assert base_path_for("stephmuna.github.io") == "/portfolio/"
    assert base_path_for("example.com", "/site/") == "/site/"


def test_resolve_url():
    assert resolve_url("", "/portfolio/") == "/portfolio/"
    assert resolve_url("projects/", "/portfolio/") == "/portfolio/?view=projects"
    assert resolve_url("https://github.com/x", "/portfolio/") == "https://github.com/x"


def test_view_for():
    assert view_for("") == "home"
    assert view_for("meta/") == "meta"


def test_build_nav_marks_current_and_external():
    links = build_nav(DEFAULT_PAGES, "/", "meta")
    by_title = {link.title: link for link in links}
    assert by_title["Meta"].current
    assert not by_title["Home"].current
    assert by_title["GitHub"].external
    assert not by_title["GitHub"].current
    assert known_views(links) == ["home", "projects", "resume", "contact", "meta"]


def test_nav_bar_html():
    html = nav_bar_html(build_nav(DEFAULT_PAGES, "/", "projects"))
    assert '<a href="/?view=projects" class="current" target="_self">Projects</a>' in html
    assert 'href="https://github.com/stephmuna" target="_blank" rel="noopener"' in html
