"""High-level crawl workflow.

Drives a full run: discover categories, scrape each one in order, persist
the snapshot after every category and cool down between category groups.
"""

import logging
import sys
import time
from typing import Optional

import requests  # type: ignore[import-untyped]

from pauta_scrape.config import (
    BASE_URL,
    CATEGORY_GROUP_PAUSE,
    CATEGORY_GROUP_SIZE,
    get_output_path,
    partial_path_for,
)
from pauta_scrape.discover_categories import discover_categories
from pauta_scrape.logging_config import get_logger, log_scrape_event
from pauta_scrape.models import CatalogSnapshot
from pauta_scrape.scraper import FetchError, scrape_category
from pauta_scrape.snapshot import save_snapshot

__all__ = [
    "countdown_pause",
    "run_crawl",
]

logger = get_logger("workflows")


def countdown_pause(seconds: int) -> None:
    """Sleep ``seconds``, showing a one-line countdown on stdout."""
    for remaining in range(seconds, 0, -1):
        sys.stdout.write(f"\r[PAUSE] Waiting {remaining}s... ")
        sys.stdout.flush()
        time.sleep(1)
    sys.stdout.write("\r[Pause finished, resuming extraction]   \n")
    sys.stdout.flush()


def run_crawl(
    output_path: Optional[str] = None,
    origin_url: str = BASE_URL,
    session: Optional[requests.Session] = None,
    pause: bool = True,
) -> CatalogSnapshot:
    """Crawl the whole catalog into a fresh snapshot.

    A category that fails for any reason, a failed write included, is logged
    and left out of the snapshot; the run always finishes with a final full
    write.

    Args:
        output_path: Snapshot path (default: configured output path)
        origin_url: Landing page to discover categories from
        session: Optional requests.Session for connection reuse
        pause: If False, skip every cooldown pause

    Returns:
        The category name -> products mapping that was written
    """
    output_path = output_path or get_output_path()
    partial_path = partial_path_for(output_path)

    snapshot: CatalogSnapshot = {}
    failed = 0

    logger.info("Collecting categories/subcategories...")
    try:
        categories = discover_categories(origin_url, session=session)
    except FetchError as e:
        logger.error(f"Category discovery failed for {e.url}: {e.cause}")
        categories = []

    since_pause = 0
    for category in categories:
        logger.info(f"-- Reading products from: {category.name}")
        log_scrape_event("category_start", {"category": category.name, "url": category.url})
        try:
            products = scrape_category(
                category.url,
                partial_path=partial_path,
                session=session,
                pause=pause,
            )
            snapshot[category.name] = products
            save_snapshot(snapshot, output_path)
        except FetchError as e:
            failed += 1
            logger.error(f"Failed to fetch {category.url}: {e.cause}")
            log_scrape_event(
                "category_error",
                {"category": category.name, "url": category.url, "error": str(e.cause)},
                level=logging.ERROR,
            )
            continue
        except Exception as e:
            failed += 1
            snapshot.pop(category.name, None)
            logger.error(f"Error processing category {category.url}: {e}")
            log_scrape_event(
                "category_error",
                {"category": category.name, "url": category.url, "error": str(e)},
                level=logging.ERROR,
            )
            continue

        log_scrape_event("category_complete", {
            "category": category.name,
            "products_scraped": len(products),
        })

        since_pause += 1
        if since_pause >= CATEGORY_GROUP_SIZE:
            if pause:
                logger.info(
                    f"Pausing {CATEGORY_GROUP_PAUSE}s to avoid IP blocking (progress saved)..."
                )
                countdown_pause(CATEGORY_GROUP_PAUSE)
            since_pause = 0

    save_snapshot(snapshot, output_path)

    total = sum(len(products) for products in snapshot.values())
    logger.info(f"Products saved to {output_path}")
    log_scrape_event("crawl_complete", {
        "categories_discovered": len(categories),
        "categories_saved": len(snapshot),
        "categories_failed": failed,
        "products": total,
        "output_path": output_path,
    })
    return snapshot
