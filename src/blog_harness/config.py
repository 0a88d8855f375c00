"""Harness settings resolved from the environment.

Precedence: environment variable > .env > .env.defaults > fallback below.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .config_defaults import get_default

DEFAULT_API_BASE_URL = "http://localhost:3003"
DEFAULT_UI_BASE_URL = "http://localhost:5173"
DEFAULT_DB_URI = "sqlite:///:memory:"
DEFAULT_TIMEOUT_SECONDS = 5.0

# Same fixture user as the browser suite has always used
DEFAULT_FIXTURE_USERNAME = "testuser"
DEFAULT_FIXTURE_PASSWORD = "testpassword"
DEFAULT_OTHER_USERNAME = "anotheruser"
DEFAULT_OTHER_PASSWORD = "anotherpassword"
DEFAULT_UI_TIMEOUT_MS = 10000


def _setting(key: str, fallback: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key) or get_default(key, fallback)


def _as_bool(value: Optional[str]) -> bool:
    return (value or "").lower() in ("true", "1", "yes")


@dataclass
class HarnessSettings:
    """Everything a scenario needs to find its collaborators."""

    api_base_url: str = DEFAULT_API_BASE_URL
    ui_base_url: str = DEFAULT_UI_BASE_URL
    database_uri: str = DEFAULT_DB_URI
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    fixture_username: str = DEFAULT_FIXTURE_USERNAME
    fixture_password: str = DEFAULT_FIXTURE_PASSWORD
    other_username: str = DEFAULT_OTHER_USERNAME
    other_password: str = DEFAULT_OTHER_PASSWORD
    log_level: str = "INFO"
    log_file: Optional[str] = None
    playwright_headless: bool = True
    ui_timeout_ms: int = DEFAULT_UI_TIMEOUT_MS

    @classmethod
    def from_env(cls) -> "HarnessSettings":
        timeout_raw = _setting("BLOG_API_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout = float(timeout_raw)
        except (TypeError, ValueError):
            raise RuntimeError(f"BLOG_API_TIMEOUT must be a number, got {timeout_raw!r}")
        if timeout <= 0:
            raise RuntimeError(f"BLOG_API_TIMEOUT must be positive, got {timeout}")

        ui_timeout_raw = _setting("PLAYWRIGHT_TIMEOUT_MS", str(DEFAULT_UI_TIMEOUT_MS))
        try:
            ui_timeout_ms = int(ui_timeout_raw)
        except (TypeError, ValueError):
            raise RuntimeError(f"PLAYWRIGHT_TIMEOUT_MS must be an integer, got {ui_timeout_raw!r}")

        return cls(
            api_base_url=_setting("BLOG_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
            ui_base_url=_setting("BLOG_UI_BASE_URL", DEFAULT_UI_BASE_URL).rstrip("/"),
            database_uri=_setting("BLOG_HARNESS_DB_URI", DEFAULT_DB_URI),
            timeout=timeout,
            fixture_username=_setting("BLOG_FIXTURE_USERNAME", DEFAULT_FIXTURE_USERNAME),
            fixture_password=_setting("BLOG_FIXTURE_PASSWORD", DEFAULT_FIXTURE_PASSWORD),
            other_username=_setting("BLOG_OTHER_USERNAME", DEFAULT_OTHER_USERNAME),
            other_password=_setting("BLOG_OTHER_PASSWORD", DEFAULT_OTHER_PASSWORD),
            log_level=(_setting("LOG_LEVEL", "INFO") or "INFO").upper(),
            log_file=_setting("LOG_FILE"),
            playwright_headless=_as_bool(_setting("PLAYWRIGHT_HEADLESS", "true")),
            ui_timeout_ms=ui_timeout_ms,
        )

    def api_url(self, path: str) -> str:
        return f"{self.api_base_url}/{path.lstrip('/')}"

    def ui_url(self, path: str = "") -> str:
        return f"{self.ui_base_url}/{path.lstrip('/')}"
