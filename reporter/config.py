"""Runtime settings read from environment variables."""

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

from reporter.domain.errors import InvalidSetting

DEFAULT_API_URL = "https://api.github.com"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

T = TypeVar("T")


def _read(environ: Mapping[str, str], name: str, default: str, convert: Callable[[str], T]) -> T:
    value = environ.get(name, default)
    try:
        return convert(value)
    except ValueError as e:
        raise InvalidSetting(name, value) from e


@dataclass(frozen=True)
class Settings:
    """Settings shared by the GitHub client and the command line."""

    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    per_page: int = 100
    max_pages: int = 0  # 0 means no limit
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from the environment.

        Args:
            environ: Mapping to read from. If None, uses os.environ.

        Raises:
            InvalidSetting: If a numeric setting or the log level is malformed
        """
        if environ is None:
            environ = os.environ

        api_url = environ.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/")
        timeout = _read(environ, "REPORTER_TIMEOUT", "30", float)
        per_page = min(_read(environ, "REPORTER_PER_PAGE", "100", int), 100)
        max_pages = _read(environ, "REPORTER_MAX_PAGES", "0", int)

        log_level = environ.get("LOG_LEVEL", "WARNING").upper()
        if log_level not in LOG_LEVELS:
            raise InvalidSetting("LOG_LEVEL", log_level)

        return cls(
            api_url=api_url or DEFAULT_API_URL,
            timeout=timeout,
            per_page=max(per_page, 1),
            max_pages=max(max_pages, 0),
            log_level=log_level,
        )
