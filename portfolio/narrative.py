"""Step-by-step narration of the commit history.

One step per commit in chronological order. Activating a step moves the
view's cutoff to that commit, which re-drives every chart on the page.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from .events import StepActivated
from .scatter import format_full_date, format_short_time


@dataclass(frozen=True)
class NarrativeStep:
    index: int
    commit: str
    datetime: pd.Timestamp
    text: str


def step_text(index: int, commit: dict) -> str:
    local = commit["local_datetime"]
    when = f"{format_full_date(local)}, {format_short_time(local)}"
    what = "my first commit, and it was glorious" if index == 0 else "another glorious commit"
    files = commit["file_count"]
    return (
        f"On {when}, I made {what}. "
        f"I edited {commit['total_lines']} lines across {files} file{'' if files == 1 else 's'}. "
        "Then I looked over all I had made, and I saw that it was very good."
    )


def build_narrative(commits: pd.DataFrame) -> List[NarrativeStep]:
    ordered = commits.sort_values("datetime", kind="stable")
    return [
        NarrativeStep(i, str(c["commit"]), c["datetime"], step_text(i, c))
        for i, c in enumerate(ordered.to_dict("records"))
    ]


class Narrator:
    def __init__(self, view_state):
        self.view_state = view_state
        self.steps = build_narrative(view_state.commits)
        self.active: Optional[int] = None

    def __len__(self):
        return len(self.steps)

    def activate(self, index: int) -> NarrativeStep:
        if not self.steps:
            raise IndexError("no narrative steps")
        index = max(0, min(len(self.steps) - 1, int(index)))
        step = self.steps[index]
        self.active = index
        self.view_state.set_cutoff_to_commit(step.commit)
        self.view_state.bus.publish(StepActivated(index, step.commit))
        return step

    def step_for_cutoff(self, cutoff: pd.Timestamp) -> int:
        """Last step at or before ``cutoff`` (0 if the cutoff precedes every commit)."""
        last = 0
        for step in self.steps:
            if step.datetime <= cutoff:
                last = step.index
            else:
                break
        return last
