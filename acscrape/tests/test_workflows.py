"""End-to-end tests: crawl with a fake session, then export to CSV."""

import csv
from unittest.mock import patch

import pytest

from acscrape.config import Settings
from acscrape.errors import ConfigurationError
from acscrape.workflows import crawl_and_export_workflow, crawl_workflow, export_workflow


@pytest.fixture
def settings(sources_dir, product_info_dir, listing_url):
    return Settings(
        start_url=listing_url,
        sources_dir=str(sources_dir),
        product_info_dir=str(product_info_dir),
        engine="requests",
    )


class TestWorkflows:
    def test_crawl_and_export(self, settings, three_page_listing, make_session, product_info_dir):
        _, pages = three_page_listing
        session = make_session(pages)

        with patch("acscrape.browser.create_session", return_value=session):
            paths = crawl_and_export_workflow(settings)

        assert session.closed
        assert sorted(p.name for p in paths) == ["SKU-1.csv", "SKU-2.csv", "SKU-3.csv"]
        with open(product_info_dir / "SKU-2.csv", newline="", encoding="utf-8") as f:
            row = next(csv.DictReader(f))
        assert row["Title"] == "Unit 2"
        assert row["Variant SKU"] == "SKU-2"

    def test_crawl_creates_sources_dir(self, settings, three_page_listing, make_session, tmp_path):
        _, pages = three_page_listing
        settings.sources_dir = str(tmp_path / "new" / "sources")

        with patch("acscrape.browser.create_session", return_value=make_session(pages)):
            report = crawl_workflow(settings)

        assert len(report.saved) == 3
        assert len(list((tmp_path / "new" / "sources").iterdir())) == 3

    def test_export_from_saved_pages(self, settings, sources_dir, product_info_dir, make_item, make_listing):
        items = [make_item(name="Unit A", features=[("Cod produs:", "SKU1"), ("Capacitate racire:", "12000 BTU")])]
        (sources_dir / "page.html").write_text(make_listing(items), encoding="utf-8")

        paths = export_workflow(settings)

        assert paths == [product_info_dir / "SKU1.csv"]
        with open(paths[0], newline="", encoding="utf-8") as f:
            row = next(csv.DictReader(f))
        assert row["SEO Title"] == "Unit A"
        assert "12000 BTU" in row["Body (HTML)"]

    def test_invalid_settings_stop_before_crawling(self, settings, make_session):
        settings.product_info_dir = settings.sources_dir

        with patch("acscrape.browser.create_session") as create:
            with pytest.raises(ConfigurationError):
                crawl_workflow(settings)

        create.assert_not_called()
