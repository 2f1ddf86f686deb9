"""
Site configuration.

Reads ``site.toml`` from the repository root. Every key is optional; a missing
file yields the defaults below so the app runs from a bare checkout.
"""

from __future__ import annotations
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib as toml
else:
    import tomli as toml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_NAME = "site.toml"
LOG_LEVEL_ENV = "PORTFOLIO_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_NAME = "portfolio"

DEFAULT_PAGES: List[Dict[str, str]] = [
    {"url": "", "title": "Home"},
    {"url": "projects/", "title": "Projects"},
    {"url": "resume/", "title": "Resume"},
    {"url": "contact/", "title": "Contact"},
    {"url": "https://github.com/stephmuna", "title": "GitHub"},
    {"url": "meta/", "title": "Meta"},
]


@dataclass
class SiteConfig:
    title: str = "Portfolio"
    base_path: str = "/portfolio/"
    github_user: str = "stephmuna"
    email: str = ""
    pages: List[Dict[str, str]] = field(default_factory=lambda: [dict(p) for p in DEFAULT_PAGES])
    loc_csv: Path = Path("data/loc.csv")
    projects_json: Path = Path("data/projects.json")
    resume_pdf: Optional[Path] = None
    list_columns: List[str] = field(default_factory=lambda: ["tags"])
    log_level: str = "INFO"


def get_value(config: dict, path: str):
    """Retrieve a value from the config dict based on dot-notation path."""
    curr = config
    for key in path.split("."):
        if isinstance(curr, dict) and key in curr:
            curr = curr[key]
        else:
            return None
    return curr


def _resolve(root: Path, value: Optional[str], default: Path) -> Path:
    p = Path(value) if value else default
    return p if p.is_absolute() else root / p


def load_config(root_dir: Path) -> SiteConfig:
    root_dir = Path(root_dir)
    config_path = root_dir / CONFIG_NAME
    raw: dict = {}
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                raw = toml.load(f)
        except toml.TOMLDecodeError as e:
            raise ConfigError(f"Error loading {config_path}: {e}") from e
    else:
        logger.info("No %s in %s, using defaults", CONFIG_NAME, root_dir)

    defaults = SiteConfig()
    resume = get_value(raw, "site.resume_pdf")
    cfg = SiteConfig(
        title=get_value(raw, "site.title") or defaults.title,
        base_path=get_value(raw, "site.base_path") or defaults.base_path,
        github_user=get_value(raw, "site.github_user") or defaults.github_user,
        email=get_value(raw, "site.email") or defaults.email,
        pages=raw.get("pages") or defaults.pages,
        loc_csv=_resolve(root_dir, get_value(raw, "data.loc_csv"), defaults.loc_csv),
        projects_json=_resolve(root_dir, get_value(raw, "data.projects_json"), defaults.projects_json),
        resume_pdf=_resolve(root_dir, resume, Path(resume)) if resume else None,
        list_columns=get_value(raw, "data.list_columns") or defaults.list_columns,
        log_level=os.environ.get(LOG_LEVEL_ENV) or get_value(raw, "logging.level") or defaults.log_level,
    )
    for page in cfg.pages:
        if "url" not in page or "title" not in page:
            raise ConfigError(f"Every [[pages]] entry needs url and title: {page!r}")
    return cfg


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package logger (idempotent across reruns)."""
    pkg_logger = logging.getLogger("portfolio")
    pkg_logger.setLevel(level.upper())
    if not any(h.get_name() == HANDLER_NAME for h in pkg_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        pkg_logger.addHandler(handler)
