from pathlib import Path

import pytest

from portfolio.config import DEFAULT_PAGES, HANDLER_NAME, configure_logging, get_value, load_config
from portfolio.errors import ConfigError


def test_defaults_without_file(tmp_path):
    cfg = load_config(tmp_path)
    assert cfg.pages == DEFAULT_PAGES
    assert cfg.loc_csv == tmp_path / "data/loc.csv"
    assert cfg.resume_pdf is None
    assert cfg.list_columns == ["tags"]


def test_values_from_toml(tmp_path):
    (tmp_path / "site.toml").write_text(
        '[site]\ntitle = "Me"\ngithub_user = "octocat"\nresume_pdf = "cv.pdf"\n'
        '[[pages]]\nurl = ""\ntitle = "Home"\n'
        '[data]\nloc_csv = "/abs/loc.csv"\n'
        '[logging]\nlevel = "DEBUG"\n'
    )
    cfg = load_config(tmp_path)
    assert cfg.title == "Me"
    assert cfg.github_user == "octocat"
    assert cfg.pages == [{"url": "", "title": "Home"}]
    assert cfg.loc_csv == Path("/abs/loc.csv")
    assert cfg.resume_pdf == tmp_path / "cv.pdf"
    assert cfg.log_level == "DEBUG"


def test_env_overrides_log_level(tmp_path, monkeypatch):
    monkeypatch.setenv("PORTFOLIO_LOG_LEVEL", "WARNING")
    assert load_config(tmp_path).log_level == "WARNING"


def test_invalid_toml_raises(tmp_path):
    (tmp_path / "site.toml").write_text("[site\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_page_without_title_raises(tmp_path):
    (tmp_path / "site.toml").write_text('[[pages]]\nurl = "x/"\n')
    with pytest.raises(ConfigError, match="url and title"):
        load_config(tmp_path)


def test_get_value():
    assert get_value({"a": {"b": 1}}, "a.b") == 1
    assert get_value({"a": {"b": 1}}, "a.c") is None


def test_configure_logging_is_idempotent():
    import logging

    configure_logging("DEBUG")
    configure_logging("DEBUG")
    handlers = [h for h in logging.getLogger("portfolio").handlers if h.get_name() == HANDLER_NAME]
    assert len(handlers) == 1
    configure_logging("WARNING")
