"""Pagination crawler: saves the source of every page of a product listing."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from acscrape.browser import BrowserSession, open_session
from acscrape.config import DEFAULT_ENGINE, NEXT_PAGE_SELECTOR
from acscrape.errors import (
    ConfigurationError,
    CrawlCancelled,
    NamingError,
    PaginationError,
)
from acscrape.logging_config import get_logger, log_scrape_event
from acscrape.shutdown import shutdown_requested
from acscrape.storage import PageStore
from acscrape.url_validation import URLValidationError, resolve_url, validate_url

__all__ = [
    "CrawlReport",
    "PageCrawler",
    "save_page_sources",
]

logger = get_logger("crawler")


@dataclass
class CrawlReport:
    """What a finished crawl visited and saved."""

    visited: List[str] = field(default_factory=list)
    saved: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.visited)


class PageCrawler:
    """Follows ``<link rel="next">`` from a first listing page until the last page.

    Every visited page is saved through the page store. Pages are visited
    strictly in order with a single session; there is no page limit and no
    cycle detection, so a listing that links back to an earlier page is
    crawled forever (until shutdown is requested).
    """

    def __init__(self, session: BrowserSession, store: PageStore):
        self.session = session
        self.store = store

    def crawl(self, start_url: str) -> CrawlReport:
        """Crawl the listing starting at ``start_url``.

        Raises:
            ConfigurationError: If ``start_url`` is not a valid URL
            NavigationError: If a page cannot be loaded
            PaginationError: If a next-page link has an unusable target
            CrawlCancelled: If shutdown was requested between pages
        """
        try:
            page_url: Optional[str] = validate_url(start_url)
        except URLValidationError as e:
            raise ConfigurationError(f"Invalid start URL {start_url!r}: {e}") from e

        logger.info(f"Saving page sources starting with {page_url}")
        log_scrape_event("crawl_start", {"start_url": page_url, "output": str(self.store.root)})

        report = CrawlReport()
        while page_url is not None:
            if shutdown_requested():
                logger.info(f"Shutdown requested, stopping before {page_url}")
                raise CrawlCancelled(f"Crawl cancelled after {report.page_count} pages")

            self.session.navigate(page_url)
            report.visited.append(page_url)
            self._save_current_page(page_url, report)

            page_url = self._next_page_url(page_url)

        logger.info(f"No more pages left. Visited {report.page_count} pages, saved {len(report.saved)}")
        log_scrape_event("crawl_complete", {
            "pages_visited": report.page_count,
            "pages_saved": len(report.saved),
            "pages_skipped": len(report.skipped),
        })
        return report

    def _save_current_page(self, page_url: str, report: CrawlReport) -> None:
        try:
            capture = self.store.capture(page_url, self.session.current_source())
        except NamingError as e:
            logger.error(f"Could not determine file name to save page {page_url}: {e}")
            report.skipped.append(page_url)
            return

        path = self.store.save(capture)
        report.saved.append(path)
        logger.info(f"  Page {report.page_count}: saved {page_url} to {path}")
        log_scrape_event("page_saved", {"url": page_url, "path": str(path)}, level=logging.DEBUG)

    def _next_page_url(self, page_url: str) -> Optional[str]:
        link = self.session.find_single(NEXT_PAGE_SELECTOR)
        if link is None:
            return None

        href = self.session.attribute(link, "href")
        try:
            return resolve_url(href, page_url)
        except URLValidationError as e:
            logger.error(f"Failed while parsing URL for next page link {href!r}: {e}")
            raise PaginationError(page_url, href) from e


def save_page_sources(
    start_url: str,
    sources_dir: str,
    engine: str = DEFAULT_ENGINE,
    headless: bool = True,
) -> CrawlReport:
    """Save the sources of a whole product listing into ``sources_dir``.

    The browser session is opened for this crawl only and closed on every
    exit path.
    """
    try:
        validate_url(start_url)
    except URLValidationError as e:
        raise ConfigurationError(f"Invalid start URL {start_url!r}: {e}") from e

    store = PageStore(sources_dir)
    if not store.root.is_dir():
        raise NotADirectoryError(f"{store.root} is not a directory or does not exist")

    with open_session(engine, headless=headless) as session:
        return PageCrawler(session, store).crawl(start_url)
