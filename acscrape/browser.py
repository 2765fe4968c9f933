"""Browser sessions used by the crawler.

A session loads one page at a time and answers questions about the page that
is currently loaded. Two implementations are provided:

- ``PlaywrightSession`` drives headless Chromium and sees the page after its
  scripts have run.
- ``RequestsSession`` performs a plain HTTP GET. Enough for server-rendered
  listings and much lighter than a browser.

Use ``open_session`` to get a session that is always closed afterwards.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Protocol

import requests  # type: ignore[import-untyped]
from bs4 import BeautifulSoup
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from acscrape.config import HEADERS, NAVIGATION_TIMEOUT_MS, REQUEST_TIMEOUT
from acscrape.errors import ConfigurationError, NavigationError
from acscrape.logging_config import get_logger

__all__ = [
    "BrowserSession",
    "PlaywrightSession",
    "RequestsSession",
    "create_session",
    "open_session",
]

logger = get_logger("browser")

CHROME_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
    "--disable-dev-shm-usage",
]


class BrowserSession(Protocol):
    """What the crawler needs from a browser."""

    def navigate(self, url: str) -> None:
        """Load ``url``. Raises NavigationError on failure."""
        ...

    def current_source(self) -> bytes:
        """Return the markup of the loaded page."""
        ...

    def find_single(self, selector: str) -> Optional[Any]:
        """Return the first element matching a CSS selector, or None."""
        ...

    def attribute(self, element: Any, name: str) -> Optional[str]:
        """Return an attribute of an element found with ``find_single``."""
        ...

    def close(self) -> None:
        ...


class PlaywrightSession:
    """Chromium session driven through Playwright's sync API."""

    def __init__(self, headless: bool = True, timeout_ms: int = NAVIGATION_TIMEOUT_MS):
        self.timeout_ms = timeout_ms
        self._pw = None
        self._browser = None
        self._context = None
        self._page = None
        self._url = "about:blank"

        try:
            self._pw = sync_playwright().start()
            self._browser = self._pw.chromium.launch(headless=headless, args=CHROME_ARGS)
            self._context = self._browser.new_context(
                user_agent=HEADERS["User-Agent"],
                locale="ro-RO",
                viewport={"width": 1366, "height": 900},
            )
            self._page = self._context.new_page()
        except PlaywrightError as e:
            self.close()
            raise NavigationError(self._url, f"could not start Chromium: {e}") from e

    def navigate(self, url: str) -> None:
        logger.debug(f"Navigating to {url}")
        try:
            self._page.goto(url, wait_until="load", timeout=self.timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(url, str(e)) from e
        self._url = url

    def current_source(self) -> bytes:
        try:
            return self._page.content().encode("utf-8")
        except PlaywrightError as e:
            raise NavigationError(self._url, f"could not read page source: {e}") from e

    def find_single(self, selector: str) -> Optional[Any]:
        try:
            return self._page.query_selector(selector)
        except PlaywrightError as e:
            raise NavigationError(self._url, f"query {selector!r} failed: {e}") from e

    def attribute(self, element: Any, name: str) -> Optional[str]:
        try:
            return element.get_attribute(name)
        except PlaywrightError as e:
            raise NavigationError(self._url, f"reading attribute {name!r} failed: {e}") from e

    def close(self) -> None:
        """Close the page, context, browser and Playwright driver."""
        for resource in (self._context, self._browser):
            if resource is None:
                continue
            try:
                resource.close()
            except PlaywrightError as e:
                logger.warning(f"Error while closing browser: {e}")
        if self._pw is not None:
            self._pw.stop()
        self._page = self._context = self._browser = self._pw = None


class RequestsSession:
    """HTTP-only session: no JavaScript, elements come from BeautifulSoup."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.timeout = timeout
        self._http = requests.Session()
        self._http.headers.update(HEADERS)
        self._http.headers.setdefault("Accept-Encoding", "gzip, deflate")
        self._url = "about:blank"
        self._source = b""
        self._soup: Optional[BeautifulSoup] = None

    def navigate(self, url: str) -> None:
        logger.debug(f"GET {url}")
        try:
            resp = self._http.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NavigationError(url, str(e)) from e
        self._url = url
        self._source = resp.content
        self._soup = None

    def current_source(self) -> bytes:
        return self._source

    def find_single(self, selector: str) -> Optional[Any]:
        if self._soup is None:
            self._soup = BeautifulSoup(self._source, "html.parser")
        return self._soup.select_one(selector)

    def attribute(self, element: Any, name: str) -> Optional[str]:
        value = element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def close(self) -> None:
        self._http.close()


def create_session(engine: str = "playwright", headless: bool = True) -> BrowserSession:
    """Create a session for the given engine name.

    Raises:
        ConfigurationError: If the engine is unknown
        NavigationError: If the browser cannot be started
    """
    logger.info(f"Starting {engine} session")
    if engine == "playwright":
        return PlaywrightSession(headless=headless)
    if engine == "requests":
        return RequestsSession()
    raise ConfigurationError(f"Unknown engine: {engine}")


@contextmanager
def open_session(engine: str = "playwright", headless: bool = True) -> Iterator[BrowserSession]:
    """Yield a session that is closed on every exit path."""
    session = create_session(engine, headless=headless)
    try:
        yield session
    finally:
        logger.info(f"Closing {engine} session")
        session.close()
