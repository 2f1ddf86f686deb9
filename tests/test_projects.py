import matplotlib.pyplot as plt
import pytest

from portfolio.projects import (
    Project,
    ProjectFilter,
    latest_projects,
    parse_projects,
    render_pie,
    render_projects_html,
    search_projects,
    year_counts,
)

RAW = [
    {"title": "Commit Scrollytelling", "image": "a.png", "description": "Git history", "year": "2025", "url": ""},
    {"title": "Bike Traffic", "image": "b.png", "description": "Boston bikes", "year": "2025", "url": "https://x.y"},
    {"title": "Wildfire Risk", "image": "c.png", "description": "Fire perimeters", "year": 2024},
    {"title": "Movie Ratings", "image": "d.png", "description": "Critics vs audiences", "year": "2023"},
]


@pytest.fixture
def projects():
    return parse_projects(RAW)


def test_parse_normalises_year_and_skips_junk():
    parsed = parse_projects(RAW + [{"image": "no-title.png"}, "nope"])
    assert len(parsed) == 4
    assert parsed[2].year == "2024"
    assert parsed[2].url == ""
    assert parse_projects({"not": "a list"}) == []


def test_search_by_title_substring_finds_one(projects):
    found = search_projects(projects, "wildf")
    assert [p.title for p in found] == ["Wildfire Risk"]


def test_search_matches_any_field_case_insensitively(projects):
    assert [p.title for p in search_projects(projects, "BOSTON")] == ["Bike Traffic"]
    assert len(search_projects(projects, "")) == 4


def test_year_counts(projects):
    assert year_counts(projects) == [("2023", 1), ("2024", 1), ("2025", 2)]


def test_pie_selection_filters_by_year(projects):
    state = ProjectFilter()
    state.toggle_wedge(2, projects)
    assert state.selected_year == "2025"
    assert state.selected_index(projects) == 2
    assert [p.title for p in state.apply(projects)] == ["Commit Scrollytelling", "Bike Traffic"]


def test_reselecting_wedge_restores_full_list(projects):
    state = ProjectFilter()
    state.toggle_wedge(0, projects)
    state.toggle_wedge(0, projects)
    assert state.selected_year is None
    assert state.selected_index(projects) == -1
    assert state.apply(projects) == projects


def test_search_and_year_combine(projects):
    state = ProjectFilter(query="git")
    assert state.pie_data(projects) == [("2025", 1)]
    state.toggle_wedge(0, projects)
    assert [p.title for p in state.apply(projects)] == ["Commit Scrollytelling"]


def test_stale_year_is_ignored_after_search_changes(projects):
    state = ProjectFilter()
    state.toggle_wedge(0, projects)  # 2023
    state.query = "bike"
    assert [p.title for p in state.apply(projects)] == ["Bike Traffic"]
    assert state.selected_index(projects) == -1


def test_toggle_out_of_range(projects):
    with pytest.raises(IndexError):
        ProjectFilter().toggle_wedge(10, projects)


def test_latest_projects(projects):
    assert len(latest_projects(projects)) == 3


def test_cards_escape_text_and_link_only_when_url():
    html = render_projects_html([Project(title="<b>Hi</b>", year="2024"), Project(title="X", url="https://x.y")], "h3")
    assert "<h3>&lt;b&gt;Hi&lt;/b&gt;</h3>" in html
    assert "c. 2024" in html
    assert html.count("View project →") == 1


def test_pie_renders_and_highlights(projects):
    fig = render_pie(year_counts(projects), selected_index=1)
    try:
        wedges = fig.axes[0].patches
        assert len(wedges) == 3
        assert wedges[1].get_alpha() is None or wedges[1].get_alpha() == 1
    finally:
        plt.close(fig)
    plt.close(render_pie([]))
