"""Configuration and constants for the scraper."""

import os
from pathlib import Path
from typing import Dict

__all__ = [
    "BASE_URL",
    "SITE_ORIGIN",
    "CATEGORY_PATH_PREFIX",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "ENRICH_BATCH_SIZE",
    "ENRICH_BATCH_PAUSE",
    "CATEGORY_GROUP_SIZE",
    "CATEGORY_GROUP_PAUSE",
    "SAMPLE_LOG_LIMIT",
    "PUBLIC_DIR",
    "OUTPUT_PATH",
    "PARTIAL_SUFFIX",
    "get_output_path",
    "partial_path_for",
]

# Project root (parent of the 'pauta_scrape' package)
_PROJECT_ROOT = Path(__file__).parent.parent

BASE_URL = "https://www.luizeletronicos.com.br/"
SITE_ORIGIN = "https://www.luizeletronicos.com.br"

# Every category link in the site menu starts with this path
CATEGORY_PATH_PREFIX = "/t/produtos"

HEADERS: Dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (compatible; LuizBot/1.0)",
    "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
}

# Request timeout (seconds)
REQUEST_TIMEOUT = 30

# Detail enrichment: flush partial progress every N products, then pause
ENRICH_BATCH_SIZE = 10
ENRICH_BATCH_PAUSE = 10.0

# Cooldown after every N categories to avoid IP-level blocking
CATEGORY_GROUP_SIZE = 7
CATEGORY_GROUP_PAUSE = 35

# Number of sample products logged per category
SAMPLE_LOG_LIMIT = 5

# Output paths (the storefront serves files from public/)
PUBLIC_DIR = _PROJECT_ROOT / "public"
OUTPUT_PATH = str(PUBLIC_DIR / "produtos.json")
PARTIAL_SUFFIX = "_parcial"


def get_output_path() -> str:
    """Snapshot path, honouring the PAUTA_OUTPUT_PATH environment override."""
    return os.getenv("PAUTA_OUTPUT_PATH") or OUTPUT_PATH


def partial_path_for(output_path: str) -> str:
    """Derive the partial-enrichment snapshot path from the full snapshot path."""
    path = Path(output_path)
    suffix = path.suffix or ".json"
    return str(path.with_name(f"{path.stem}{PARTIAL_SUFFIX}{suffix}"))
