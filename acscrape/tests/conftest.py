"""Shared fixtures: listing page builders and a fake browser session."""

from typing import Dict, List, Optional, Sequence, Tuple

import pytest
from bs4 import BeautifulSoup

from acscrape.errors import NavigationError
from acscrape.shutdown import get_shutdown_handler

LISTING_URL = "https://www.climatico.ro/aer-conditionat/vrv"


def product_item_html(
    name: Optional[str] = "Daikin Perfera FTXM35R",
    image_url: str = "https://www.climatico.ro/media/catalog/product/ftxm35r.jpg",
    product_url: str = "https://www.climatico.ro/daikin-perfera-ftxm35r",
    features: Optional[Sequence[Tuple[str, ...]]] = (),
) -> str:
    """One <li> product item. ``features=None`` leaves out the feature table."""
    img = ""
    if name is not None:
        img = f'<img class="product-image-photo" alt="{name}" data-amsrc="{image_url}" src="lazy.gif"/>'

    table = ""
    if features is not None:
        rows = "".join(
            "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
            for row in features
        )
        table = f'<table class="prod-list-features"><tbody>{rows}</tbody></table>'

    return (
        '<li class="item product product-item">'
        f'<div class="product-item-photo">{img}</div>'
        '<strong class="product name product-item-name product-name">'
        f'<a class="product-item-link" href="{product_url}">{name or ""}</a>'
        "</strong>"
        f"{table}"
        "</li>"
    )


def listing_page_html(items: Sequence[str] = (), next_url: Optional[str] = None) -> str:
    """A listing page in the storefront's layout."""
    head_link = f'<link rel="next" href="{next_url}"/>' if next_url else ""
    return (
        f"<html><head><title>VRV</title>{head_link}</head><body>"
        '<div id="amasty-shopby-product-list">'
        '<div class="products wrapper list products-list">'
        '<ol class="products list items product-items">'
        f"{''.join(items)}"
        "</ol></div></div></body></html>"
    )


class FakeSession:
    """In-memory browser session serving pages from a dict of URL -> HTML."""

    def __init__(self, pages: Dict[str, str], broken: Sequence[str] = ()):
        self.pages = pages
        self.broken = set(broken)
        self.navigated: List[str] = []
        self.closed = False
        self._soup: Optional[BeautifulSoup] = None
        self._source = b""

    def navigate(self, url: str) -> None:
        self.navigated.append(url)
        if url in self.broken or url not in self.pages:
            raise NavigationError(url, "net::ERR_NAME_NOT_RESOLVED")
        self._source = self.pages[url].encode("utf-8")
        self._soup = BeautifulSoup(self._source, "html.parser")

    def current_source(self) -> bytes:
        return self._source

    def find_single(self, selector: str):
        return self._soup.select_one(selector) if self._soup else None

    def attribute(self, element, name: str):
        return element.get(name)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def reset_shutdown():
    """Make sure no test sees a shutdown flag left over by another."""
    handler = get_shutdown_handler()
    handler.reset()
    yield
    handler.reset()


@pytest.fixture
def three_page_listing():
    """Pages 1 and 2 link to their successor, page 3 is the last."""
    urls = [LISTING_URL, f"{LISTING_URL}?p=2", f"{LISTING_URL}?p=3"]
    pages = {}
    for i, url in enumerate(urls):
        next_url = urls[i + 1] if i + 1 < len(urls) else None
        items = [product_item_html(name=f"Unit {i + 1}", features=[("Cod produs:", f"SKU-{i + 1}")])]
        pages[url] = listing_page_html(items, next_url=next_url)
    return urls, pages


@pytest.fixture
def sources_dir(tmp_path):
    path = tmp_path / "sources"
    path.mkdir()
    return path


@pytest.fixture
def product_info_dir(tmp_path):
    path = tmp_path / "product_info"
    path.mkdir()
    return path


@pytest.fixture
def make_item():
    return product_item_html


@pytest.fixture
def make_listing():
    return listing_page_html


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def listing_url():
    return LISTING_URL
