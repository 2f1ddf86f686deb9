"""Shared fixtures: small in-memory commit logs."""

import io

import pytest

from portfolio.loader import load_records

HEADER = "file,line,type,commit,author,date,time,timezone,datetime,depth,length,tags\n"


def _rows(file, type_, commit, when, n, start=1, tz="+00:00", author="Steph"):
    date, clock = when.split("T")
    return "".join(
        f'{file},{start + i},{type_},{commit},{author},{date},{clock}{tz},{tz},{when}{tz},{i % 3},{20 + i},"[""{type_}""]"\n'
        for i in range(n)
    )


@pytest.fixture
def two_commit_csv():
    """aaa: 5 lines at 09:30 (a.js x3, b.css x2); bbb: 10 lines at 14:00 (a.js x6, c.html x4)."""
    return (
        HEADER
        + _rows("a.js", "js", "aaa", "2024-03-01T09:30:00", 3)
        + _rows("b.css", "css", "aaa", "2024-03-01T09:30:00", 2)
        + _rows("a.js", "js", "bbb", "2024-03-02T14:00:00", 6, start=4)
        + _rows("c.html", "html", "bbb", "2024-03-02T14:00:00", 4)
    )


@pytest.fixture
def records(two_commit_csv):
    return load_records(io.StringIO(two_commit_csv))


@pytest.fixture
def three_commit_records(two_commit_csv):
    csv = two_commit_csv + _rows("d.py", "py", "ccc", "2024-03-05T23:15:00", 7, tz="-07:00")
    return load_records(io.StringIO(csv))


@pytest.fixture
def blank_commit_records():
    """c1: one line; a second line with an empty commit cell."""
    csv = (
        HEADER
        + _rows("a.js", "js", "c1", "2024-03-01T09:30:00", 1)
        + _rows("b.js", "js", "", "2024-03-01T10:00:00", 1)
    )
    return load_records(io.StringIO(csv))
