import pytest

from portfolio.selection import format_percent, language_breakdown, selection_count_label, summarize_selection


def test_count_label_pluralises():
    assert selection_count_label(0) == "No commits selected"
    assert selection_count_label(1) == "1 commit selected"
    assert selection_count_label(4) == "4 commits selected"


def test_format_percent_trims_trailing_zero():
    assert format_percent(0.5) == "50%"
    assert format_percent(1 / 3) == "33.3%"
    assert format_percent(1) == "100%"


def test_breakdown_of_both_commits(records):
    shares = language_breakdown(records, {"aaa", "bbb"})
    assert [(s.type, s.lines, s.percent) for s in shares] == [
        ("js", 9, "60%"),
        ("html", 4, "26.7%"),
        ("css", 2, "13.3%"),
    ]
    assert sum(s.fraction for s in shares) == pytest.approx(1)


def test_breakdown_of_one_commit(records):
    shares = language_breakdown(records, ["aaa"])
    assert [(s.type, s.lines) for s in shares] == [("js", 3), ("css", 2)]


def test_empty_selection_clears_everything(records):
    summary = summarize_selection(records, [])
    assert summary.is_empty
    assert summary.label == "No commits selected"
    assert summary.breakdown == []


def test_summary_counts_distinct_commits(records):
    summary = summarize_selection(records, ["aaa", "aaa", "bbb"])
    assert summary.count == 2
    assert summary.label == "2 commits selected"
