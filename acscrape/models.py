"""Data models for page captures, products and Shopify export rows."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, List, Optional

__all__ = [
    "PageCapture",
    "Currency",
    "ACProduct",
    "ShopifyProduct",
    "SHOPIFY_COLUMNS",
]


@dataclass(frozen=True)
class PageCapture:
    """Rendered source of one listing page.

    ``file_name`` is derived from ``source_url`` with
    ``naming.url_to_html_file_name``.
    """

    source_url: str
    file_name: str
    raw_bytes: bytes


class Currency(str, Enum):
    RON = "RON"
    USD = "USD"
    EUR = "EUR"


@dataclass
class ACProduct:
    """An air conditioning product found on a listing page.

    Text fields are empty strings when the page did not provide them.
    """

    name: str = ""
    manufacturer: str = ""

    # Uniquely identifying product code, also the export file name
    product_code: str = ""
    # Dedicated product (details) page
    product_url: str = ""

    reseller_product_page_url: str = ""
    manufacturer_product_page_url: str = ""

    listing_image_path: str = ""
    listing_image_url: str = ""

    price: float = 0.0
    currency: Currency = Currency.RON

    has_wifi_connection: bool = False
    mains_voltage: str = ""
    # Main dimension used to decide if the unit fits a mounting place
    internal_unit_length: str = ""

    heating_noise_level: str = ""
    cooling_noise_level: str = ""

    heating_energy_class: str = ""
    cooling_energy_class: str = ""

    heating_btu_capacity: str = ""
    cooling_btu_capacity: str = ""

    # Root to leaf, e.g. ["Residential", "AC", "Split system"]
    category_drill_down: List[str] = field(default_factory=list)


def _col(name: str):
    return field(default=None, metadata={"column": name})


@dataclass
class ShopifyProduct:
    """One row of the Shopify product CSV import format.

    Field order is the CSV column order. ``None`` is written as an empty cell.
    """

    handle: Optional[str] = _col("Handle")
    title: Optional[str] = _col("Title")
    body_html: Optional[str] = _col("Body (HTML)")
    vendor: Optional[str] = _col("Vendor")
    type: Optional[str] = _col("Type")
    tags: Optional[str] = _col("Tags")
    published: Optional[str] = _col("Published")
    option1_name: Optional[str] = _col("Option1 Name")
    option1_value: Optional[str] = _col("Option1 Value")
    option2_name: Optional[str] = _col("Option2 Name")
    option2_value: Optional[str] = _col("Option2 Value")
    option3_name: Optional[str] = _col("Option3 Name")
    option3_value: Optional[str] = _col("Option3 Value")
    variant_sku: Optional[str] = _col("Variant SKU")
    variant_grams: Optional[str] = _col("Variant Grams")
    variant_inventory_tracker: Optional[str] = _col("Variant Inventory Tracker")
    variant_inventory_qty: Optional[str] = _col("Variant Inventory Qty")
    variant_inventory_policy: Optional[str] = _col("Variant Inventory Policy")
    variant_fulfillment_service: Optional[str] = _col("Variant Fulfillment Service")
    variant_price: Optional[str] = _col("Variant Price")
    variant_compare_at_price: Optional[str] = _col("Variant Compare At Price")
    variant_requires_shipping: Optional[str] = _col("Variant Requires Shipping")
    variant_taxable: Optional[str] = _col("Variant Taxable")
    variant_barcode: Optional[str] = _col("Variant Barcode")
    image_src: Optional[str] = _col("Image Src")
    image_position: Optional[str] = _col("Image Position")
    image_alt_text: Optional[str] = _col("Image Alt Text")
    gift_card: Optional[str] = _col("Gift Card")
    seo_title: Optional[str] = _col("SEO Title")
    seo_description: Optional[str] = _col("SEO Description")
    google_shopping_google_product_category: Optional[str] = _col(
        "Google Shopping / Google Product Category"
    )
    google_shopping_gender: Optional[str] = _col("Google Shopping / Gender")
    google_shopping_age_group: Optional[str] = _col("Google Shopping / Age Group")
    google_shopping_mpn: Optional[str] = _col("Google Shopping / MPN")
    google_shopping_ad_words_grouping: Optional[str] = _col("Google Shopping / AdWords Grouping")
    google_shopping_ad_words_labels: Optional[str] = _col("Google Shopping / AdWords Labels")
    google_shopping_condition: Optional[str] = _col("Google Shopping / Condition")
    google_shopping_custom_product: Optional[str] = _col("Google Shopping / Custom Product")
    google_shopping_custom_label_0: Optional[str] = _col("Google Shopping / Custom Label 0")
    google_shopping_custom_label_1: Optional[str] = _col("Google Shopping / Custom Label 1")
    google_shopping_custom_label_2: Optional[str] = _col("Google Shopping / Custom Label 2")
    google_shopping_custom_label_3: Optional[str] = _col("Google Shopping / Custom Label 3")
    google_shopping_custom_label_4: Optional[str] = _col("Google Shopping / Custom Label 4")
    variant_image: Optional[str] = _col("Variant Image")
    variant_weight_unit: Optional[str] = _col("Variant Weight Unit")
    variant_tax_code: Optional[str] = _col("Variant Tax Code")
    cost_per_item: Optional[str] = _col("Cost per item")

    def to_row(self) -> Dict[str, str]:
        """Return the row keyed by CSV header, with every column present."""
        return {
            f.metadata["column"]: "" if getattr(self, f.name) is None else getattr(self, f.name)
            for f in fields(self)
        }


SHOPIFY_COLUMNS: List[str] = [f.metadata["column"] for f in fields(ShopifyProduct)]
