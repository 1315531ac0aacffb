"""Luiz Eletronicos catalog ("pauta") scraper package."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from pauta_scrape.config import BASE_URL, OUTPUT_PATH, get_output_path
from pauta_scrape.models import Category, ProductRecord, ProductSummary
from pauta_scrape.scraper import (
    FetchError,
    FetchTimeout,
    enrich_product,
    fetch_html,
    scrape_category,
)
from pauta_scrape.snapshot import load_snapshot, save_snapshot
from pauta_scrape.url_utils import normalize_url
from pauta_scrape.workflows import run_crawl

__all__ = [
    # Version
    "__version__",
    # Config
    "BASE_URL",
    "OUTPUT_PATH",
    "get_output_path",
    # Models
    "Category",
    "ProductSummary",
    "ProductRecord",
    # Errors
    "FetchError",
    "FetchTimeout",
    # Core functions
    "fetch_html",
    "normalize_url",
    "scrape_category",
    "enrich_product",
    "run_crawl",
    "save_snapshot",
    "load_snapshot",
]
