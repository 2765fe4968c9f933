"""Climatico AC listing scraper with Shopify CSV export."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from acscrape.config import Settings
from acscrape.crawler import CrawlReport, PageCrawler, save_page_sources
from acscrape.errors import (
    ConfigurationError,
    NamingError,
    NavigationError,
    OpaqueOriginError,
    PageParseError,
    PaginationError,
    ScrapeError,
)
from acscrape.extractor import extract_products, parse_listing_page
from acscrape.models import ACProduct, Currency, PageCapture, ShopifyProduct
from acscrape.naming import url_to_html_file_name
from acscrape.shopify import export_products, product_to_shopify, write_shopify_csv
from acscrape.storage import PageStore

__all__ = [
    # Version
    "__version__",
    # Config
    "Settings",
    # Models
    "ACProduct",
    "Currency",
    "PageCapture",
    "ShopifyProduct",
    # Errors
    "ScrapeError",
    "ConfigurationError",
    "NavigationError",
    "PaginationError",
    "NamingError",
    "OpaqueOriginError",
    "PageParseError",
    # Core functions
    "url_to_html_file_name",
    "PageStore",
    "PageCrawler",
    "CrawlReport",
    "save_page_sources",
    "parse_listing_page",
    "extract_products",
    "product_to_shopify",
    "write_shopify_csv",
    "export_products",
]
