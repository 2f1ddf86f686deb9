import pandas as pd
import pytest

from portfolio.events import StepActivated
from portfolio.narrative import Narrator, build_narrative
from portfolio.view_state import SOURCE_NARRATIVE, ViewState


def test_one_step_per_commit_in_time_order(three_commit_records):
    view = ViewState(three_commit_records)
    steps = build_narrative(view.commits)
    assert [s.commit for s in steps] == ["aaa", "bbb", "ccc"]
    assert [s.index for s in steps] == [0, 1, 2]


def test_step_text_mentions_lines_and_files(records):
    steps = build_narrative(ViewState(records).commits)
    assert "my first commit, and it was glorious" in steps[0].text
    assert "5 lines across 2 files" in steps[0].text
    assert "Friday, March 1, 2024, 9:30 AM" in steps[0].text
    assert "another glorious commit" in steps[1].text
    assert "10 lines across 2 files" in steps[1].text


def test_activating_a_step_moves_the_cutoff(three_commit_records):
    view = ViewState(three_commit_records)
    narrator = Narrator(view)
    seen = []
    view.bus.subscribe(StepActivated, seen.append)

    step = narrator.activate(1)
    assert step.commit == "bbb"
    assert narrator.active == 1
    assert view.cutoff == step.datetime
    assert view.last_source == SOURCE_NARRATIVE
    assert view.filtered_commits["commit"].tolist() == ["aaa", "bbb"]
    assert seen == [StepActivated(1, "bbb")]


def test_activate_clamps_index(records):
    narrator = Narrator(ViewState(records))
    assert narrator.activate(99).commit == "bbb"
    assert narrator.activate(-3).commit == "aaa"


def test_step_for_cutoff(three_commit_records):
    narrator = Narrator(ViewState(three_commit_records))
    assert narrator.step_for_cutoff(pd.Timestamp("2024-03-03", tz="UTC")) == 1
    assert narrator.step_for_cutoff(pd.Timestamp("2030-01-01", tz="UTC")) == 2
    assert narrator.step_for_cutoff(pd.Timestamp("2000-01-01", tz="UTC")) == 0


def test_empty_narrator_cannot_activate():
    empty = pd.DataFrame(columns=["commit", "file", "line", "depth", "length", "type", "datetime", "local_datetime", "author"])
    narrator = Narrator(ViewState(empty))
    assert len(narrator) == 0
    with pytest.raises(IndexError):
        narrator.activate(0)
