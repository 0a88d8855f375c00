"""Shared configuration for the browser suite.

Everything comes from HarnessSettings (environment > .env > .env.defaults):
- BLOG_UI_BASE_URL: frontend under test
- BLOG_API_BASE_URL: API used for the fixture reset
- BLOG_FIXTURE_USERNAME / BLOG_FIXTURE_PASSWORD: the provisioned user
- PLAYWRIGHT_HEADLESS: run the browser headless
- BLOG_OTHER_USERNAME / BLOG_OTHER_PASSWORD: second actor
- PLAYWRIGHT_TIMEOUT_MS: default Playwright timeout
"""
from __future__ import annotations

from blog_harness.config import HarnessSettings
from blog_harness.records import UserCredentials


class UiTestConfig:
    """Settings for one browser test run."""

    def __init__(self) -> None:
        harness = HarnessSettings.from_env()
        self.ui_base_url: str = harness.ui_base_url
        self.api_base_url: str = harness.api_base_url
        self.api_timeout: float = harness.timeout
        self.playwright_headless: bool = harness.playwright_headless
        self.fixture_user = UserCredentials(
            username=harness.fixture_username,
            password=harness.fixture_password,
        )
        # Second actor for the creator-only delete scenario
        self.other_user = UserCredentials(
            username=harness.other_username,
            password=harness.other_password,
        )
        self.default_timeout_ms: int = harness.ui_timeout_ms

    def url(self, path: str = "") -> str:
        return f"{self.ui_base_url}/{path.lstrip('/')}"


settings = UiTestConfig()
