"""Tests for the command-line entry point."""

import logging

import pytest

from acscrape.cli import main, parse_args


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """Run in a temp dir with a clean environment and restore package logging after."""
    monkeypatch.chdir(tmp_path)
    for name in ("START_URL", "SOURCES_DIR", "PRODUCT_INFO_DIR", "ENGINE", "HEADLESS", "LOG_LEVEL"):
        monkeypatch.delenv(f"ACSCRAPE_{name}", raising=False)
    logger = logging.getLogger("acscrape")
    level = logger.level
    yield
    logger.handlers.clear()
    logger.setLevel(level)


class TestParseArgs:
    def test_defaults(self):
        args = parse_args(["crawl"])

        assert args.command == "crawl"
        assert args.url is None
        assert args.engine is None
        assert not args.headed

    def test_options(self):
        args = parse_args([
            "run", "https://www.climatico.ro/aer-conditionat/split",
            "--engine", "requests", "--headed", "--sources-dir", "s",
        ])

        assert args.url.endswith("/split")
        assert args.engine == "requests"
        assert args.headed
        assert args.sources_dir == "s"

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            parse_args(["scrape"])


class TestMain:
    def test_export(self, sources_dir, tmp_path, make_item, make_listing, capsys):
        items = [make_item(name="Unit A", features=[("Cod produs:", "SKU1")])]
        (sources_dir / "page.html").write_text(make_listing(items), encoding="utf-8")
        out_dir = tmp_path / "csv"

        code = main([
            "export", "--sources-dir", str(sources_dir),
            "--product-info-dir", str(out_dir), "--no-log-file",
        ])

        assert code == 0
        assert (out_dir / "SKU1.csv").is_file()
        assert "Wrote 1 product files" in capsys.readouterr().out

    def test_extract_lists_products(self, sources_dir, tmp_path, make_item, make_listing, capsys):
        items = [make_item(name="Unit A", features=[("Cod produs:", "SKU1"), ("Conexiune Wi-Fi:", "Da")])]
        (sources_dir / "page.html").write_text(make_listing(items), encoding="utf-8")

        code = main([
            "extract", "--sources-dir", str(sources_dir),
            "--product-info-dir", str(tmp_path / "csv"), "--no-log-file",
        ])

        out = capsys.readouterr().out
        assert code == 0
        assert "SKU1" in out
        assert "WiFi" in out
        assert "1 products" in out

    def test_missing_sources_dir_fails(self, tmp_path):
        code = main([
            "export", "--sources-dir", str(tmp_path / "missing"),
            "--product-info-dir", str(tmp_path / "csv"), "--no-log-file",
        ])

        assert code == 1

    def test_same_directories_fail(self, sources_dir):
        code = main([
            "export", "--sources-dir", str(sources_dir),
            "--product-info-dir", str(sources_dir), "--no-log-file",
        ])

        assert code == 1
