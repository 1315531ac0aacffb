"""Category discovery from the site's navigation menu.

Every category and subcategory link in the storefront menu points under
``/t/produtos``; this module collects them from the landing page.

Usage:
    python -m pauta_scrape.discover_categories
    python -m pauta_scrape.discover_categories --output data/categories.json
"""

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional, Set

import requests  # type: ignore[import-untyped]
from bs4 import BeautifulSoup

from pauta_scrape.config import BASE_URL, CATEGORY_PATH_PREFIX
from pauta_scrape.html_utils import clean_text
from pauta_scrape.logging_config import get_logger, setup_logging
from pauta_scrape.models import Category
from pauta_scrape.scraper import FetchError, fetch_html
from pauta_scrape.url_utils import normalize_url

__all__ = [
    "extract_categories",
    "discover_categories",
    "print_categories",
]

logger = get_logger("discover")


def extract_categories(html: str) -> List[Category]:
    """Parse category links out of a landing page.

    Names are whitespace-collapsed anchor text. Links without a name are
    dropped, and a URL seen twice keeps its first occurrence.
    """
    soup = BeautifulSoup(html, "html.parser")
    categories: List[Category] = []
    seen: Set[str] = set()

    for a in soup.select(f"a[href^='{CATEGORY_PATH_PREFIX}']"):
        href = a.get("href")
        if not href or not isinstance(href, str):
            continue
        url = normalize_url(href)
        name = clean_text(a.get_text())
        if not url or not name or url in seen:
            continue
        seen.add(url)
        categories.append(Category(name=name, url=url))

    return categories


def discover_categories(
    origin_url: str = BASE_URL,
    session: Optional[requests.Session] = None,
) -> List[Category]:
    """Fetch the landing page once and return its category links.

    An empty list is a valid (if degenerate) result.

    Raises:
        FetchError: If the landing page cannot be fetched
    """
    html = fetch_html(origin_url, session)
    categories = extract_categories(html)
    if categories:
        logger.info(f"Discovered {len(categories)} categories")
    else:
        logger.warning(f"No category links found on {origin_url}")
    return categories


def print_categories(categories: List[Category]) -> None:
    print(f"\nCategories found: {len(categories)}")
    for cat in categories:
        print(f"  {cat.name}: {cat.url}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Discover categories from the storefront navigation menu",
    )
    parser.add_argument(
        "--output",
        help="Save discovered categories to a JSON file",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    setup_logging(log_to_file=False)

    try:
        categories = discover_categories()
    except FetchError as e:
        logger.error(f"Category discovery failed for {e.url}: {e.cause}")
        return
    print_categories(categories)

    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump([asdict(c) for c in categories], f, indent=2, ensure_ascii=False)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
