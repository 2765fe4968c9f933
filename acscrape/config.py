"""Configuration and constants for the scraper."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

from acscrape.errors import ConfigurationError
from acscrape.url_validation import URLValidationError, validate_url

__all__ = [
    "BASE_URL",
    "START_URL",
    "SOURCES_DIR",
    "PRODUCT_INFO_DIR",
    "ENGINES",
    "DEFAULT_ENGINE",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "NAVIGATION_TIMEOUT_MS",
    "NEXT_PAGE_SELECTOR",
    "FEATURE_LABELS",
    "WIFI_AFFIRMATIVE_PREFIX",
    "DEFAULT_PRODUCT_TYPE",
    "GOOGLE_PRODUCT_CATEGORY",
    "BREADCRUMB_SEPARATOR",
    "Settings",
    "same_directory",
]

BASE_URL = "https://www.climatico.ro"

# First page of the listing to crawl
START_URL = "https://www.climatico.ro/aer-conditionat/vrv"

# Output paths
SOURCES_DIR = "out/climatico/sources"
PRODUCT_INFO_DIR = "out/climatico/product_info"

# Browser engines: "playwright" renders JavaScript, "requests" only fetches HTML
ENGINES = ("playwright", "requests")
DEFAULT_ENGINE = "playwright"

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/133.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "ro-RO,ro;q=0.9",
}

# Request timeouts
REQUEST_TIMEOUT = 30
NAVIGATION_TIMEOUT_MS = 60_000

# Pagination: the listing declares its successor in the document head
NEXT_PAGE_SELECTOR = "head > link[rel=next]"


# =============================================================================
# Product Feature Table
# =============================================================================
# Maps a feature table label (trailing ":" removed) to an ACProduct field.
# Labels are the storefront's Romanian wording; rows with other labels are
# ignored.

FEATURE_LABELS: Dict[str, str] = {
    "Cod produs": "product_code",
    "Capacitate racire": "cooling_btu_capacity",
    "Capacitate incalzire": "heating_btu_capacity",
    "Clasa energetica racire": "cooling_energy_class",
    "Clasa energetica incalzire": "heating_energy_class",
    "Tensiune alimentare": "mains_voltage",
    "Nivel de zgomot racire": "cooling_noise_level",
    "Nivel de zgomot incalzire": "heating_noise_level",
    "Lungime unitate interna": "internal_unit_length",
    "Conexiune Wi-Fi": "has_wifi_connection",
}

# "Da" (yes). Any value starting with this letter counts as WiFi capable.
WIFI_AFFIRMATIVE_PREFIX = "D"


# =============================================================================
# Shopify Export
# =============================================================================

DEFAULT_PRODUCT_TYPE = "Aer conditionat"
GOOGLE_PRODUCT_CATEGORY = (
    "Home & Garden > Household Appliances > Climate Control Appliances > Air Conditioners"
)
BREADCRUMB_SEPARATOR = " > "


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes")


@dataclass
class Settings:
    """Runtime settings for one scraper run.

    Defaults come from the module constants; ``from_env`` lets a ``.env``
    file or the environment override them.
    """

    start_url: str = START_URL
    sources_dir: str = SOURCES_DIR
    product_info_dir: str = PRODUCT_INFO_DIR
    engine: str = DEFAULT_ENGINE
    headless: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """Build settings from environment variables (all optional)."""
        load_dotenv(dotenv_path=dotenv_path)
        return cls(
            start_url=os.getenv("ACSCRAPE_START_URL", START_URL),
            sources_dir=os.getenv("ACSCRAPE_SOURCES_DIR", SOURCES_DIR),
            product_info_dir=os.getenv("ACSCRAPE_PRODUCT_INFO_DIR", PRODUCT_INFO_DIR),
            engine=os.getenv("ACSCRAPE_ENGINE", DEFAULT_ENGINE),
            headless=_env_flag("ACSCRAPE_HEADLESS", True),
            log_level=os.getenv("ACSCRAPE_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """Check settings before any work is done.

        Raises:
            ConfigurationError: If the start URL is invalid, the engine is
                unknown or both output roots point at the same directory
        """
        try:
            validate_url(self.start_url)
        except URLValidationError as e:
            raise ConfigurationError(f"Invalid start URL: {e}") from e

        if self.engine not in ENGINES:
            raise ConfigurationError(
                f"Unknown engine '{self.engine}'. Choices: {', '.join(ENGINES)}"
            )

        if same_directory(self.sources_dir, self.product_info_dir):
            raise ConfigurationError(
                f"Page sources and product info must use different directories, "
                f"both are {self.sources_dir}"
            )

    def ensure_dirs(self) -> None:
        """Create both output directories if they are missing."""
        Path(self.sources_dir).mkdir(parents=True, exist_ok=True)
        Path(self.product_info_dir).mkdir(parents=True, exist_ok=True)


def same_directory(a, b) -> bool:
    """Return True if two paths resolve to the same location."""
    return Path(a).resolve() == Path(b).resolve()
