import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[2]
for path in (ROOT, ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from ui_tests import workflows
from ui_tests.browser import Browser
from ui_tests.config import settings
from ui_tests.playwright_client import PlaywrightClient


def _reachable(url: str) -> bool:
    try:
        httpx.get(url, timeout=settings.api_timeout)
    except httpx.HTTPError:
        return False
    return True


@pytest.fixture(scope="session", autouse=True)
def require_live_deployment():
    """Skip the browser suite unless both the API and the frontend answer."""
    if not _reachable(f"{settings.api_base_url}/api/blogs"):
        pytest.skip(f"Blog API not reachable at {settings.api_base_url}")
    if not _reachable(settings.url()):
        pytest.skip(f"Blog frontend not reachable at {settings.ui_base_url}")


@pytest_asyncio.fixture()
async def playwright_client():
    """Create a Playwright client instance."""
    async with PlaywrightClient(
        base_url=settings.ui_base_url,
        headless=settings.playwright_headless,
        timeout=settings.default_timeout_ms,
    ) as client:
        yield client


@pytest_asyncio.fixture()
async def browser(playwright_client):
    """Fresh fixture data, then the app's start page."""
    await workflows.prepare_fixture()
    browser = Browser(playwright_client.page)
    await workflows.open_app(browser)
    return browser


@pytest_asyncio.fixture()
async def logged_in_with_blog(browser):
    """Fixture user logged in with one blog created."""
    await workflows.login(browser)
    await workflows.create_blog(browser)
    return browser


@pytest_asyncio.fixture()
async def visitor(playwright_client):
    """Second actor in its own browser context (anonymous)."""
    visitor = Browser(await playwright_client.isolated_page())
    await workflows.open_app(visitor)
    return visitor
