"""Tests for the page source store."""

import pytest

from acscrape.errors import OpaqueOriginError
from acscrape.storage import PageStore


class TestPageStore:
    def test_capture_uses_url_file_name(self, sources_dir, listing_url):
        store = PageStore(sources_dir)
        capture = store.capture(listing_url, b"<html></html>")

        assert capture.source_url == listing_url
        assert capture.file_name == "https__www.climatico.ro__443__slash_aer-conditionat_slash_vrv.html"
        assert capture.raw_bytes == b"<html></html>"

    def test_capture_rejects_opaque_url(self, sources_dir):
        with pytest.raises(OpaqueOriginError):
            PageStore(sources_dir).capture("data:,x", b"")

    def test_save_writes_bytes(self, sources_dir, listing_url):
        store = PageStore(sources_dir)
        path = store.save(store.capture(listing_url, "<p>ă</p>".encode("utf-8")))

        assert path.parent == sources_dir
        assert path.read_bytes() == "<p>ă</p>".encode("utf-8")

    def test_save_same_url_replaces_capture(self, sources_dir, listing_url):
        store = PageStore(sources_dir)
        store.save(store.capture(listing_url, b"old"))
        path = store.save(store.capture(listing_url, b"new"))

        assert len(store) == 1
        assert store.read(path) == b"new"

    def test_paths_are_sorted_and_skip_directories(self, sources_dir):
        (sources_dir / "b.html").write_text("b")
        (sources_dir / "a.html").write_text("a")
        (sources_dir / "nested").mkdir()

        assert [p.name for p in PageStore(sources_dir)] == ["a.html", "b.html"]

    def test_paths_on_missing_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            PageStore(tmp_path / "missing").paths()

    def test_paths_on_file(self, tmp_path):
        file_path = tmp_path / "file.html"
        file_path.write_text("x")
        with pytest.raises(NotADirectoryError):
            PageStore(file_path).paths()
