"""Thin wrapper around a Playwright page for the blog scenarios.

Actions raise ToolError with the selector that failed; the wait_* helpers
poll with anyio deadlines because the UI renders API results
asynchronously.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Dict

import anyio
from playwright.async_api import Error as PlaywrightError, Page


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


@asynccontextmanager
async def _guard(name: str, **payload):
    try:
        yield
    except PlaywrightError as exc:
        raise ToolError(name=name, payload=payload, message=str(exc)) from exc


class Browser:
    """One actor's view of the frontend."""

    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def page(self) -> Page:
        return self._page

    async def goto(self, url: str) -> int | None:
        """Navigate and return the HTTP status of the document."""
        async with _guard("goto", url=url):
            response = await self._page.goto(url, wait_until="domcontentloaded")
        return response.status if response else None

    async def fill(self, selector: str, value: str) -> None:
        async with _guard("fill", selector=selector):
            await self._page.fill(selector, value)

    async def click(self, selector: str) -> None:
        """Click the first element matching selector."""
        async with _guard("click", selector=selector):
            await self._page.locator(selector).first.click()

    async def text(self, selector: str) -> str:
        async with _guard("text", selector=selector):
            text = await self._page.locator(selector).first.text_content(timeout=2000)
        return text or ""

    async def count(self, selector: str) -> int:
        return await self._page.locator(selector).count()

    async def is_visible(self, selector: str) -> bool:
        return await self._page.locator(selector).first.is_visible()

    async def wait_for_visible(self, selector: str, timeout: float = 5.0) -> None:
        async with _guard("wait_for_visible", selector=selector, timeout=timeout):
            await self._page.locator(selector).first.wait_for(state="visible", timeout=timeout * 1000)

    async def wait_for_text(self, selector: str, expected: str, timeout: float = 5.0, interval: float = 0.2) -> str:
        """Poll for text content until it contains the expected substring."""
        deadline = anyio.current_time() + timeout
        last_error: ToolError | None = None
        content = ""

        while anyio.current_time() <= deadline:
            try:
                content = await self.text(selector)
            except ToolError as exc:
                content = ""
                last_error = exc
            if expected in content:
                return content
            await anyio.sleep(interval)

        if last_error:
            raise AssertionError(
                f"Timed out waiting for '{expected}' in selector '{selector}'. Last error: {last_error}"
            ) from last_error
        raise AssertionError(f"Timed out waiting for '{expected}' in '{selector}'; last text='{content}'")

    async def wait_for_count(self, selector: str, expected: int, timeout: float = 5.0, interval: float = 0.2) -> int:
        """Poll until exactly `expected` elements match selector."""
        deadline = anyio.current_time() + timeout
        current = -1
        while anyio.current_time() <= deadline:
            current = await self.count(selector)
            if current == expected:
                return current
            await anyio.sleep(interval)
        raise AssertionError(f"Expected {expected} matches for '{selector}', last saw {current}")
