"""Command-line interface for the scraper."""

import argparse
import sys
from typing import List, Optional

__all__ = ["main", "parse_args"]

from acscrape.config import ENGINES, Settings
from acscrape.errors import ScrapeError
from acscrape.extractor import extract_products
from acscrape.logging_config import get_logger, setup_logging
from acscrape.workflows import crawl_and_export_workflow, crawl_workflow, export_workflow

logger = get_logger("cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Climatico AC listing scraper with Shopify CSV export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Save every page of the default listing
  python -m acscrape.cli crawl

  # Save a different listing using plain HTTP instead of Chromium
  python -m acscrape.cli crawl https://www.climatico.ro/aer-conditionat/split --engine requests

  # List the products found in the saved pages
  python -m acscrape.cli extract

  # Write one Shopify CSV per product
  python -m acscrape.cli export

  # Crawl and export in one go
  python -m acscrape.cli run
        """,
    )
    parser.add_argument(
        "command",
        choices=["crawl", "extract", "export", "run"],
        help="crawl: save listing pages; extract: show products; export: write CSVs; run: crawl + export",
    )
    parser.add_argument("url", nargs="?", help="First listing page (default from config)")
    parser.add_argument("--sources-dir", help="Directory for saved page sources")
    parser.add_argument("--product-info-dir", help="Directory for Shopify CSV files")
    parser.add_argument("--engine", choices=ENGINES, help="Browser engine")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--no-log-file", action="store_true", help="Only log to the console")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Environment settings overridden by command-line options."""
    settings = Settings.from_env()
    if args.url:
        settings.start_url = args.url
    if args.sources_dir:
        settings.sources_dir = args.sources_dir
    if args.product_info_dir:
        settings.product_info_dir = args.product_info_dir
    if args.engine:
        settings.engine = args.engine
    if args.headed:
        settings.headless = False
    if args.log_level:
        settings.log_level = args.log_level
    return settings


def show_products(settings: Settings) -> None:
    settings.validate()
    products = extract_products(settings.sources_dir, settings.product_info_dir)
    for product in products:
        wifi = "WiFi" if product.has_wifi_connection else "-"
        print(f"{product.product_code or '?':<20} {product.cooling_btu_capacity:<14} {wifi:<5} {product.name}")
    print(f"\n{len(products)} products in {settings.sources_dir}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    settings = build_settings(args)
    setup_logging(settings.log_level, log_to_file=not args.no_log_file)

    try:
        if args.command == "crawl":
            report = crawl_workflow(settings)
            print(f"Saved {len(report.saved)} of {report.page_count} pages to {settings.sources_dir}")
        elif args.command == "extract":
            show_products(settings)
        elif args.command == "export":
            paths = export_workflow(settings)
            print(f"Wrote {len(paths)} product files to {settings.product_info_dir}")
        else:
            paths = crawl_and_export_workflow(settings)
            print(f"Wrote {len(paths)} product files to {settings.product_info_dir}")
    except (ScrapeError, OSError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
