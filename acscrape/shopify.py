"""Map AC products to Shopify product CSV rows and write one file per product."""

import csv
import html
import re
import unicodedata
from pathlib import Path
from typing import Dict, Iterable, List, Union

from acscrape.config import (
    BREADCRUMB_SEPARATOR,
    DEFAULT_PRODUCT_TYPE,
    GOOGLE_PRODUCT_CATEGORY,
)
from acscrape.errors import NamingError
from acscrape.logging_config import get_logger, log_scrape_event
from acscrape.models import SHOPIFY_COLUMNS, ACProduct, ShopifyProduct

__all__ = [
    "SHOPIFY_DEFAULTS",
    "slugify",
    "render_body_html",
    "export_file_name",
    "product_to_shopify",
    "write_shopify_csv",
    "export_products",
]

logger = get_logger("shopify")

# Columns that are the same for every product
SHOPIFY_DEFAULTS: Dict[str, str] = {
    "published": "TRUE",
    "option1_name": "Title",
    "option1_value": "Default Title",
    "variant_grams": "0",
    "variant_inventory_tracker": "shopify",
    "variant_inventory_qty": "0",
    "variant_inventory_policy": "deny",
    "variant_fulfillment_service": "manual",
    "variant_price": "0.00",
    "variant_requires_shipping": "TRUE",
    "variant_taxable": "TRUE",
    "image_position": "1",
    "gift_card": "FALSE",
    "google_shopping_condition": "new",
    "google_shopping_custom_product": "FALSE",
    "variant_weight_unit": "kg",
}


def slugify(text: str) -> str:
    """'Unitate Daikin FTXM35R' -> 'unitate-daikin-ftxm35r'"""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _yes_no(flag: bool) -> str:
    return "Da" if flag else "Nu"


def render_body_html(product: ACProduct) -> str:
    """Build the product description: a table of the main technical attributes."""
    rows = [
        ("Capacitate racire", product.cooling_btu_capacity),
        ("Capacitate incalzire", product.heating_btu_capacity),
        ("Clasa energetica racire", product.cooling_energy_class),
        ("Clasa energetica incalzire", product.heating_energy_class),
        ("Tensiune alimentare", product.mains_voltage),
        ("Lungime unitate interna", product.internal_unit_length),
        ("Conexiune Wi-Fi", _yes_no(product.has_wifi_connection)),
        ("Categorie", BREADCRUMB_SEPARATOR.join(product.category_drill_down)),
    ]
    body = "".join(
        f"<tr><th>{html.escape(label)}</th><td>{html.escape(value)}</td></tr>"
        for label, value in rows
    )
    return f"<table><tbody>{body}</tbody></table>"


def _tags(product: ACProduct) -> str:
    tags: List[str] = list(product.category_drill_down)
    tags.append(product.manufacturer)
    if product.has_wifi_connection:
        tags.append("WiFi")
    return ", ".join(dict.fromkeys(t.strip() for t in tags if t.strip()))


def product_to_shopify(product: ACProduct) -> ShopifyProduct:
    """Convert a product into a Shopify row. Pure: same product, same row."""
    title = product.name.strip()
    code = product.product_code.strip()

    return ShopifyProduct(
        handle=slugify(title) or slugify(code),
        title=title,
        body_html=render_body_html(product),
        vendor=product.manufacturer.strip(),
        type=product.category_drill_down[-1] if product.category_drill_down else DEFAULT_PRODUCT_TYPE,
        tags=_tags(product),
        variant_sku=code,
        image_src=product.listing_image_url,
        image_alt_text=title,
        seo_title=title,
        seo_description=title,
        google_shopping_google_product_category=GOOGLE_PRODUCT_CATEGORY,
        google_shopping_mpn=code,
        google_shopping_custom_label_0=product.cooling_energy_class,
        **SHOPIFY_DEFAULTS,
    )


def export_file_name(product_code: str) -> str:
    """'FTXM35R/RXM35R' -> 'FTXM35R_RXM35R.csv'

    Path separators and a leading dot are replaced so the name stays inside
    the export directory.
    """
    name = re.sub(r"[\\/\x00]", "_", product_code)
    if name.startswith("."):
        name = "_" + name[1:]
    return f"{name}.csv"


def write_shopify_csv(product: ACProduct, product_info_dir: Union[str, Path]) -> Path:
    """Write ``<product_code>.csv`` with the product's Shopify row.

    An existing file for the same product code is overwritten.

    Raises:
        NotADirectoryError: If ``product_info_dir`` is not an existing directory
        NamingError: If the product code cannot be turned into a file name
            inside ``product_info_dir``
    """
    out_dir = Path(product_info_dir)
    if not out_dir.is_dir():
        raise NotADirectoryError(f"{out_dir} is not a directory or does not exist")

    path = out_dir / export_file_name(product.product_code)
    if path.resolve().parent != out_dir.resolve():
        raise NamingError(f"Product code {product.product_code!r} does not name a file in {out_dir}")
    row = product_to_shopify(product).to_row()

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=SHOPIFY_COLUMNS)
        writer.writeheader()
        writer.writerow(row)

    logger.debug(f"Wrote {path}")
    return path


def export_products(products: Iterable[ACProduct], product_info_dir: Union[str, Path]) -> List[Path]:
    """Write one Shopify CSV per product.

    Products whose codes map to the same file name end up in the same file
    and the last one wins. Each such overwrite is logged as a warning.
    """
    written: Dict[str, str] = {}
    paths: List[Path] = []
    for product in products:
        file_name = export_file_name(product.product_code)
        if file_name in written:
            logger.warning(
                f"Duplicate product code {product.product_code!r}: "
                f"overwriting {file_name} written for {written[file_name]!r}"
            )
        path = write_shopify_csv(product, product_info_dir)
        written[file_name] = product.product_code
        paths.append(path)

    logger.info(f"Exported {len(written)} products to {product_info_dir}")
    log_scrape_event("export_complete", {
        "product_info_dir": str(product_info_dir),
        "products_written": len(paths),
        "unique_codes": len(written),
    })
    return paths
