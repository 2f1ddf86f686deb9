"""Exception types raised by the portfolio package."""


class PortfolioError(Exception):
    """Base class for all portfolio errors."""


class ConfigError(PortfolioError):
    """site.toml could not be parsed."""


class DataLoadError(PortfolioError):
    """The commit log is missing required columns or cannot be read."""


class FetchError(PortfolioError):
    """A JSON resource returned a non-success status or invalid body."""

    def __init__(self, url: str, message: str, status: int | None = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status = status
