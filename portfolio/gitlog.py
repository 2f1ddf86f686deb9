"""
Build ``loc.csv`` from a git checkout.

Every line of every tracked source file at HEAD becomes one row, attributed to
the commit that last touched it (``git blame --line-porcelain``).

Usage:
    python -m portfolio.gitlog . -o data/loc.csv
    python -m portfolio.gitlog . --ext py --ext css
"""

from __future__ import annotations
import argparse
import logging
import subprocess
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

import pandas as pd

from .config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("py", "js", "css", "html", "toml")
CSV_COLUMNS = ["file", "line", "type", "commit", "author", "date", "time", "timezone", "datetime", "depth", "length"]


def run_git_command(repo_path, args) -> Optional[str]:
    """Run a git command and return the output."""
    cmd = ["git", "-C", str(repo_path)] + list(args)
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        return result.stdout
    except subprocess.CalledProcessError as e:
        logger.error("Git command failed: %s: %s", " ".join(cmd), e.stderr.strip())
        return None


def tracked_files(repo_path, extensions: Sequence[str]) -> List[str]:
    out = run_git_command(repo_path, ["ls-files"]) or ""
    wanted = {e.lower().lstrip(".") for e in extensions}
    return [f for f in out.splitlines() if file_type(f) in wanted]


def file_type(path: str) -> str:
    name = Path(path).name
    return name.rsplit(".", 1)[-1].lower() if "." in name else name


def line_depth(text: str) -> int:
    """Indent level: one per tab, one per two spaces."""
    stripped = text.lstrip(" \t")
    indent = text[: len(text) - len(stripped)]
    return indent.count("\t") + indent.count(" ") // 2


def format_offset(tz: str) -> str:
    """'+0200' → '+02:00'."""
    return f"{tz[:3]}:{tz[3:5]}" if len(tz) == 5 else "+00:00"


def _local_time(epoch: int, tz: str) -> datetime:
    sign = -1 if tz.startswith("-") else 1
    hours, minutes = int(tz[1:3] or 0), int(tz[3:5] or 0)
    offset = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime.fromtimestamp(epoch, tz=offset)


def parse_blame(path: str, porcelain: str) -> Iterator[dict]:
    """Yield one row per line of ``git blame --line-porcelain`` output."""
    headers: dict = {}
    commit = None
    line_no = 0
    for raw in porcelain.splitlines():
        if raw.startswith("\t"):
            text = raw[1:]
            when = _local_time(int(headers.get("author-time", 0)), headers.get("author-tz", "+0000"))
            yield {
                "file": path,
                "line": line_no,
                "type": file_type(path),
                "commit": commit,
                "author": headers.get("author", ""),
                "date": when.strftime("%Y-%m-%d"),
                "time": when.strftime("%H:%M:%S") + format_offset(headers.get("author-tz", "+0000")),
                "timezone": format_offset(headers.get("author-tz", "+0000")),
                "datetime": when.isoformat(),
                "depth": line_depth(text),
                "length": len(text),
            }
            headers = {}
            continue
        first, _, rest = raw.partition(" ")
        if len(first) == 40 and all(c in "0123456789abcdef" for c in first):
            commit = first
            line_no = int(rest.split()[1])
        else:
            headers[first] = rest


def collect(repo_path, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> pd.DataFrame:
    rows = []
    files = tracked_files(repo_path, extensions)
    logger.info("Blaming %d files in %s", len(files), repo_path)
    for f in files:
        out = run_git_command(repo_path, ["blame", "--line-porcelain", "--", f])
        if out is None:
            continue
        rows.extend(parse_blame(f, out))
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Write a per-line commit log (loc.csv) for a git repository")
    parser.add_argument("repo_path", nargs="?", default=".", help="Path to the git repository")
    parser.add_argument("--output", "-o", default="data/loc.csv", help="CSV to write (default: data/loc.csv)")
    parser.add_argument("--ext", action="append", default=None,
                        help=f"File extension to include (repeatable, default: {' '.join(DEFAULT_EXTENSIONS)})")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    if run_git_command(args.repo_path, ["rev-parse", "--git-dir"]) is None:
        print(f"Not a git repository: {args.repo_path}", file=sys.stderr)
        return 1
    df = collect(args.repo_path, args.ext or DEFAULT_EXTENSIONS)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    logger.info("Wrote %d rows (%d commits) to %s", len(df), df["commit"].nunique(), out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
