"""Extract AC products from saved listing page sources."""

from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from acscrape.config import FEATURE_LABELS, WIFI_AFFIRMATIVE_PREFIX, same_directory
from acscrape.errors import ConfigurationError, PageParseError
from acscrape.logging_config import get_logger, log_scrape_event
from acscrape.models import ACProduct
from acscrape.selection import Selector, Step, get_attr, get_text
from acscrape.storage import PageStore

__all__ = [
    "PRODUCT_ITEMS",
    "PRODUCT_IMAGE",
    "PRODUCT_LINK",
    "FEATURES_TABLE",
    "FEATURES_TABLE_BODY",
    "FEATURE_SETTERS",
    "parse_wifi_flag",
    "normalize_label",
    "read_feature_rows",
    "parse_product_item",
    "parse_listing_page",
    "iter_page_products",
    "extract_products",
]

logger = get_logger("extractor")


# =============================================================================
# Selectors
# =============================================================================

# Each <li> of the listing's product list is one product
PRODUCT_ITEMS = Selector.of(
    Step("div", id="amasty-shopby-product-list"),
    Step("div", classes=("products", "wrapper", "list", "products-list")),
    Step("ol", classes=("products", "list", "items", "product-items")),
    Step("li", child=True),
)

PRODUCT_IMAGE = Selector.of(Step("img", classes=("product-image-photo",)))

PRODUCT_LINK = Selector.of(
    Step("strong", classes=("product", "name", "product-item-name", "product-name")),
    Step("a", classes=("product-item-link",)),
)

FEATURES_TABLE = Selector.of(Step("table", classes=("prod-list-features",)))

# Browsers insert <tbody>, raw server HTML may not have one
FEATURES_TABLE_BODY = Selector.of(
    Step("table", classes=("prod-list-features",)),
    Step("tbody"),
)


# =============================================================================
# Feature Label Mapping
# =============================================================================

def parse_wifi_flag(value: str) -> bool:
    """Interpret the WiFi row. Only values starting with "D" ("Da") count as yes."""
    return value.startswith(WIFI_AFFIRMATIVE_PREFIX)


FIELD_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "has_wifi_connection": parse_wifi_flag,
}


def _field_setter(field_name: str) -> Callable[[ACProduct, str], None]:
    convert = FIELD_CONVERTERS.get(field_name, str)

    def set_field(product: ACProduct, value: str) -> None:
        setattr(product, field_name, convert(value))

    return set_field


FEATURE_SETTERS: Dict[str, Callable[[ACProduct, str], None]] = {
    label: _field_setter(field_name) for label, field_name in FEATURE_LABELS.items()
}


def normalize_label(text: str) -> str:
    """'  Cod produs: ' -> 'Cod produs'"""
    return text.strip().rstrip(":").strip()


# =============================================================================
# Parsing
# =============================================================================

def read_feature_rows(table_body: Tag) -> List[Tuple[str, str]]:
    """Return (label, value) pairs from a feature table or its body.

    The label is the first cell of a row and the value the last one. A row
    with a single cell has an empty value.
    """
    rows: List[Tuple[str, str]] = []
    for tr in table_body.find_all("tr"):
        cells = tr.find_all(["th", "td"], recursive=False)
        if not cells:
            continue
        label = get_text(cells[0]) or ""
        value = (get_text(cells[-1]) or "") if len(cells) > 1 else ""
        rows.append((normalize_label(label), value))
    return rows


def parse_product_item(item: Tag) -> ACProduct:
    """Build an ACProduct from one product list item.

    Every lookup uses the first matching element only. Missing elements leave
    the field at its empty default.
    """
    product = ACProduct()

    img = PRODUCT_IMAGE.first(item)
    name = get_attr(img, "alt")
    if name is not None:
        product.name = name
    image_url = get_attr(img, "data-amsrc")
    if image_url is not None:
        product.listing_image_url = image_url

    product_url = get_attr(PRODUCT_LINK.first(item), "href")
    if product_url is not None:
        product.product_url = product_url

    table_body = FEATURES_TABLE_BODY.first(item)
    if table_body is None:
        table_body = FEATURES_TABLE.first(item)
    if table_body is None:
        logger.debug(f"No product features table found for {product.name!r}")
        return product

    for label, value in read_feature_rows(table_body):
        setter = FEATURE_SETTERS.get(label)
        if setter is not None:
            setter(product, value)

    return product


def parse_listing_page(source: Union[bytes, str]) -> List[ACProduct]:
    """Parse a listing page source into products, in document order.

    Raises:
        PageParseError: If the source cannot be parsed
    """
    try:
        soup = BeautifulSoup(source, "html.parser")
    except Exception as e:
        raise PageParseError(f"Could not parse page source: {e}") from e

    return [parse_product_item(item) for item in PRODUCT_ITEMS.find_all(soup)]


def iter_page_products(store: PageStore) -> Iterator[Tuple[Path, List[ACProduct]]]:
    """Yield (path, products) for every readable, parseable capture in the store.

    Files that cannot be read or parsed are logged and skipped.

    Raises:
        NotADirectoryError: If the store root is not a directory
    """
    for path in store.paths():
        logger.info(f"Extracting ACProduct from file {path}")
        try:
            products = parse_listing_page(store.read(path))
        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            log_scrape_event("page_error", {"path": str(path), "error": str(e)})
            continue
        except PageParseError as e:
            logger.error(f"Skipping {path}: {e}")
            log_scrape_event("page_error", {"path": str(path), "error": str(e)})
            continue

        logger.info(f"  Found {len(products)} products")
        yield path, products


def extract_products(
    sources_dir: Union[str, Path],
    product_info_dir: Optional[Union[str, Path]] = None,
) -> List[ACProduct]:
    """Extract all products from the page sources saved in ``sources_dir``.

    Args:
        sources_dir: Directory of saved listing pages
        product_info_dir: Export directory the products are headed for. It
            must differ from ``sources_dir`` so exports are never read back
            as page sources.

    Raises:
        NotADirectoryError: If ``sources_dir`` is not a directory
        ConfigurationError: If both directories are the same
    """
    if product_info_dir is not None and same_directory(sources_dir, product_info_dir):
        raise ConfigurationError(
            f"Page sources and product info directories must differ: {sources_dir}"
        )

    store = PageStore(sources_dir)
    products: List[ACProduct] = []
    pages = 0
    for _, page_products in iter_page_products(store):
        pages += 1
        products.extend(page_products)

    log_scrape_event("extract_complete", {
        "sources_dir": str(sources_dir),
        "pages_parsed": pages,
        "products_found": len(products),
    })
    return products
