"""Core scraping logic: page fetching, listing pagination and detail enrichment."""

import logging
import time
from typing import List, Optional, Sequence

import requests  # type: ignore[import-untyped]
from bs4 import BeautifulSoup

from pauta_scrape.config import (
    ENRICH_BATCH_PAUSE,
    ENRICH_BATCH_SIZE,
    HEADERS,
    REQUEST_TIMEOUT,
    SAMPLE_LOG_LIMIT,
    get_output_path,
    partial_path_for,
)
from pauta_scrape.html_utils import (
    extract_long_description,
    extract_max_page_number,
    extract_product_cards,
    extract_specifications,
)
from pauta_scrape.logging_config import get_logger, log_scrape_event
from pauta_scrape.models import (
    EnrichmentFailure,
    EnrichmentResult,
    EnrichmentSuccess,
    ProductDetails,
    ProductRecord,
    ProductSummary,
)
from pauta_scrape.snapshot import save_partial
from pauta_scrape.url_utils import build_page_url, strip_query

__all__ = [
    "FetchError",
    "FetchTimeout",
    "create_session",
    "fetch_html",
    "enrich_product",
    "enrich_products",
    "scrape_category",
]

logger = get_logger("scraper")


class FetchError(Exception):
    """Raised when a page cannot be retrieved."""

    def __init__(self, url: str, cause: BaseException):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to fetch {url}: {cause}")


class FetchTimeout(FetchError):
    """Raised when a page takes longer than REQUEST_TIMEOUT to answer."""


# Module-level session for connection reuse
_session: Optional[requests.Session] = None


def create_session() -> requests.Session:
    """Create a requests Session carrying the scraper's headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    return session


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = create_session()
    return _session


def fetch_html(url: str, session: Optional[requests.Session] = None) -> str:
    """Single HTTP GET with a fixed timeout. No retries.

    Raises:
        FetchTimeout: If the server does not answer within REQUEST_TIMEOUT
        FetchError: On connection errors, non-2xx responses or any other
            transport failure
    """
    sess = session or _get_session()
    try:
        resp = sess.get(url, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Timeout fetching {url}: {e}")
        raise FetchTimeout(url, e) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error fetching {url}: {e}")
        raise FetchError(url, e) from e
    return str(resp.text)


def enrich_product(
    detail_url: str, session: Optional[requests.Session] = None
) -> EnrichmentResult:
    """Fetch a product page and pull its long description and specifications.

    Never raises: any failure comes back as an EnrichmentFailure.
    """
    try:
        html = fetch_html(detail_url, session)
        soup = BeautifulSoup(html, "html.parser")
        details = ProductDetails(
            long_description=extract_long_description(soup),
            specifications=extract_specifications(soup),
        )
    except Exception as e:
        logger.warning(f"Could not extract details: {detail_url} ({e})")
        log_scrape_event(
            "enrichment_error",
            {"url": detail_url, "error": str(e)},
            level=logging.WARNING,
        )
        return EnrichmentFailure(url=detail_url, reason=str(e))
    return EnrichmentSuccess(details)


def enrich_products(
    summaries: Sequence[ProductSummary],
    partial_path: str,
    session: Optional[requests.Session] = None,
    pause: bool = True,
) -> List[ProductRecord]:
    """Enrich listing summaries one by one, flushing progress in batches.

    After every ENRICH_BATCH_SIZE products, and after the last one, the
    records enriched so far are written to ``partial_path``. Between
    batches (not after the final one) the crawl sleeps ENRICH_BATCH_PAUSE.
    """
    enriched: List[ProductRecord] = []
    in_batch = 0
    last_index = len(summaries) - 1

    for i, summary in enumerate(summaries):
        result = enrich_product(summary.detail_url, session)
        enriched.append(ProductRecord.from_summary(summary, result.details))
        in_batch += 1

        if in_batch == ENRICH_BATCH_SIZE or i == last_index:
            save_partial(enriched, partial_path)
            in_batch = 0
            if i != last_index and pause:
                logger.info(f"  Short pause of {ENRICH_BATCH_PAUSE:g}s to avoid blocking...")
                time.sleep(ENRICH_BATCH_PAUSE)

    return enriched


def scrape_category(
    category_url: str,
    partial_path: Optional[str] = None,
    session: Optional[requests.Session] = None,
    pause: bool = True,
) -> List[ProductRecord]:
    """Scrape every listing page of a category, then enrich each product.

    Page 1 is the category URL without its query string; page N is
    ``?pagina=N``. The crawl advances while the highest page number linked
    from the current page is greater than the current page.

    Args:
        category_url: Category listing URL (any query string is dropped)
        partial_path: Where enrichment progress is flushed
            (default: derived from the configured output path)
        session: Optional requests.Session for connection reuse
        pause: If False, skip the cooldown between enrichment batches

    Returns:
        Enriched products in listing order (empty if the category has none)

    Raises:
        FetchError: If a listing page cannot be fetched
    """
    if partial_path is None:
        partial_path = partial_path_for(get_output_path())

    base_url = strip_query(category_url)
    summaries: List[ProductSummary] = []
    page = 1

    while True:
        html = fetch_html(build_page_url(base_url, page), session)
        soup = BeautifulSoup(html, "html.parser")

        summaries.extend(extract_product_cards(soup))
        logger.info(f"  Page {page}: {len(summaries)} products found")

        max_page = extract_max_page_number(soup, page)
        if max_page <= page:
            break
        page += 1

    if not summaries:
        logger.warning(f"No products extracted from category: {category_url}")
        return []

    for summary in summaries[:SAMPLE_LOG_LIMIT]:
        logger.info(f"  Sample product: {summary.name} - {summary.detail_url}")

    return enrich_products(summaries, partial_path, session=session, pause=pause)
