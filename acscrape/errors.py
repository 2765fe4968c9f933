"""Exception types raised by the scraper.

Recoverable errors (naming, page parsing) are caught and logged by the
crawler and extractor. Everything else ends the operation that raised it.
"""

__all__ = [
    "ScrapeError",
    "ConfigurationError",
    "NavigationError",
    "PaginationError",
    "NamingError",
    "OpaqueOriginError",
    "PageParseError",
    "CrawlCancelled",
]


class ScrapeError(Exception):
    """Base class for all scraper errors."""


class ConfigurationError(ScrapeError):
    """Invalid start URL or output directories. Raised before any work starts."""


class NavigationError(ScrapeError):
    """The browser session could not be created or could not load a page."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to navigate to {url}: {reason}")
        self.url = url
        self.reason = reason


class PaginationError(ScrapeError):
    """A next-page link exists but its target is not a usable URL."""

    def __init__(self, page_url: str, href):
        super().__init__(
            f"Next page link on {page_url} has an invalid target: {href!r}"
        )
        self.page_url = page_url
        self.href = href


class NamingError(ScrapeError):
    """A URL cannot be turned into a page capture file name."""


class OpaqueOriginError(NamingError):
    """The URL has no scheme/host/port origin to build a file name from."""


class PageParseError(ScrapeError):
    """A saved page source could not be parsed into a document tree."""


class CrawlCancelled(ScrapeError):
    """Shutdown was requested while a crawl was in progress."""
