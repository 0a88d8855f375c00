"""Reusable workflows for the blog browser suite."""
from __future__ import annotations

from dataclasses import dataclass

import anyio

from blog_harness.fixtures import FixtureReset
from blog_harness.records import UserCredentials, UserRecord
from blog_harness.stores.http import HttpBlogStore
from ui_tests import locators
from ui_tests.browser import Browser
from ui_tests.config import settings


@dataclass
class BlogFormData:
    title: str = "Test Blog"
    author: str = "Test Author"
    url: str = "http://example.com"


def _http_store() -> HttpBlogStore:
    return HttpBlogStore(settings.api_base_url, timeout=settings.api_timeout)


def _prepare_sync(credentials: UserCredentials) -> UserRecord:
    with _http_store() as store:
        return FixtureReset(store).prepare(credentials)


def _provision_sync(credentials: UserCredentials) -> UserRecord:
    with _http_store() as store:
        return FixtureReset(store).provision(credentials)


async def prepare_fixture(credentials: UserCredentials | None = None) -> UserRecord:
    """Delete all blogs and users through the API, then provision one user."""
    return await anyio.to_thread.run_sync(_prepare_sync, credentials or settings.fixture_user)


async def provision_user(credentials: UserCredentials) -> UserRecord:
    """Add a user without resetting (second actor)."""
    return await anyio.to_thread.run_sync(_provision_sync, credentials)


async def open_app(browser: Browser) -> None:
    await browser.goto(settings.url())
    await browser.wait_for_visible(locators.LOGIN_FORM)


async def submit_login(browser: Browser, username: str, password: str) -> None:
    """Fill and submit the login form without asserting the outcome."""
    await browser.fill(locators.USERNAME_INPUT, username)
    await browser.fill(locators.PASSWORD_INPUT, password)
    await browser.click(locators.SUBMIT_BUTTON)


async def login(browser: Browser, credentials: UserCredentials | None = None) -> None:
    """Log in and wait until the UI names the user."""
    credentials = credentials or settings.fixture_user
    await submit_login(browser, credentials.username, credentials.password)
    await browser.wait_for_visible(locators.logged_in_as(credentials.username))


async def logout(browser: Browser) -> None:
    await browser.click(locators.LOGOUT_BUTTON)
    await browser.wait_for_visible(locators.LOGIN_FORM)


async def create_blog(browser: Browser, data: BlogFormData | None = None) -> BlogFormData:
    """Open the blog form, submit it and wait for the entry to render."""
    data = data or BlogFormData()
    await browser.click(locators.NEW_BLOG_BUTTON)
    await browser.fill(locators.TITLE_INPUT, data.title)
    await browser.fill(locators.AUTHOR_INPUT, data.author)
    await browser.fill(locators.URL_INPUT, data.url)
    await browser.click(locators.SUBMIT_BUTTON)
    await browser.wait_for_visible(locators.blog_entry(data.title))
    return data


async def like_blog(browser: Browser, title: str, expected_likes: int) -> str:
    """Click like once and wait for the counter to show the new value."""
    await browser.click(locators.LIKE_BUTTON)
    return await wait_for_likes(browser, title, expected_likes)


async def wait_for_likes(browser: Browser, title: str, expected_likes: int) -> str:
    return await browser.wait_for_text(locators.blog_likes(title), f"Likes: {expected_likes}")


async def open_details(browser: Browser) -> None:
    await browser.click(locators.VIEW_BUTTON)
