"""High-level workflows combining crawling, extraction and export."""

from pathlib import Path
from typing import List

from acscrape.config import Settings
from acscrape.crawler import CrawlReport, save_page_sources
from acscrape.extractor import extract_products
from acscrape.logging_config import get_logger
from acscrape.shopify import export_products
from acscrape.shutdown import get_shutdown_handler

__all__ = [
    "crawl_workflow",
    "export_workflow",
    "crawl_and_export_workflow",
]

logger = get_logger("workflows")


def crawl_workflow(settings: Settings) -> CrawlReport:
    """Validate settings, create output directories and save every listing page."""
    settings.validate()
    settings.ensure_dirs()

    handler = get_shutdown_handler().install()
    try:
        return save_page_sources(
            settings.start_url,
            settings.sources_dir,
            engine=settings.engine,
            headless=settings.headless,
        )
    finally:
        handler.uninstall()


def export_workflow(settings: Settings) -> List[Path]:
    """Extract products from saved pages and write their Shopify CSV files."""
    settings.validate()
    Path(settings.product_info_dir).mkdir(parents=True, exist_ok=True)

    products = extract_products(settings.sources_dir, settings.product_info_dir)
    logger.info(f"Extracted {len(products)} products from {settings.sources_dir}")
    return export_products(products, settings.product_info_dir)


def crawl_and_export_workflow(settings: Settings) -> List[Path]:
    """Crawl the listing, then export everything that was saved."""
    report = crawl_workflow(settings)
    logger.info(f"Crawl finished: {report.page_count} pages visited")
    return export_workflow(settings)
