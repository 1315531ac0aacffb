"""HTML parsing and extraction utilities."""

import re
from typing import Callable, Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from pauta_scrape.models import ProductSummary
from pauta_scrape.url_utils import PAGE_PARAM, normalize_url

__all__ = [
    "clean_text",
    "clean_price_text",
    "extract_card_image_url",
    "extract_product_card",
    "extract_product_cards",
    "extract_max_page_number",
    "description_from_dedicated_block",
    "description_from_generic_block",
    "description_from_meta",
    "DESCRIPTION_STRATEGIES",
    "extract_long_description",
    "extract_specifications",
]

# Listing card structure
CARD_SELECTOR = ".product-card"
CARD_IMAGE_SELECTOR = "a.product-card__image-frame img"
CARD_NAME_SELECTOR = "h3.product-card__name"
CARD_LINK_SELECTOR = "a.product-card__detail-link"
CARD_PRICE_SELECTOR = ".inline-buy__price"
CARD_SKU_SELECTOR = ".product-card__sku"

PAGE_LINK_SELECTOR = f"a[href*='?{PAGE_PARAM}=']"
PAGE_NUMBER_RE = re.compile(rf"{PAGE_PARAM}=(\d+)")

# Trailing unit suffix on prices, e.g. "R$ 49,90 / unidade"
PRICE_UNIT_RE = re.compile(r"\s*/.*$")

DescriptionStrategy = Callable[[BeautifulSoup], Optional[str]]


def clean_text(text: str) -> str:
    """Collapse runs of whitespace and trim."""
    return re.sub(r"\s+", " ", text or "").strip()


def clean_price_text(text: str) -> str:
    """Collapse whitespace and drop a trailing "/<unit>" suffix."""
    return PRICE_UNIT_RE.sub("", clean_text(text)).strip()


def _first_text(root: Tag, selector: str) -> str:
    el = root.select_one(selector)
    return el.get_text().strip() if el else ""


def _attr(el: Tag, name: str) -> str:
    value = el.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or ""


# =============================================================================
# Listing pages
# =============================================================================

def extract_card_image_url(card: Tag) -> str:
    """Card image URL: live ``src`` first, lazy-load ``data-src`` as fallback."""
    img = card.select_one(CARD_IMAGE_SELECTOR)
    if img is None:
        return ""
    src = _attr(img, "src") or _attr(img, "data-src")
    return normalize_url(src) if src else ""


def extract_product_card(card: Tag) -> Optional[ProductSummary]:
    """Parse one listing card. Returns None when name or link is missing."""
    name = _first_text(card, CARD_NAME_SELECTOR)

    link = card.select_one(CARD_LINK_SELECTOR)
    detail_url = normalize_url(_attr(link, "href")) if link else ""

    if not name or not detail_url:
        return None

    price_el = card.select_one(CARD_PRICE_SELECTOR)
    price_text = clean_price_text(price_el.get_text()) if price_el else ""

    return ProductSummary(
        name=name,
        detail_url=detail_url,
        price_text=price_text,
        image_url=extract_card_image_url(card),
        short_description=_first_text(card, CARD_SKU_SELECTOR),
    )


def extract_product_cards(soup: BeautifulSoup) -> List[ProductSummary]:
    """All usable product cards on a listing page, in page order."""
    products: List[ProductSummary] = []
    for card in soup.select(CARD_SELECTOR):
        summary = extract_product_card(card)
        if summary is not None:
            products.append(summary)
    return products


def extract_max_page_number(soup: BeautifulSoup, current_page: int) -> int:
    """Highest page number advertised by the pagination links.

    Never returns less than ``current_page``. The widget may only show a
    window of page links; the largest visible number is what counts.
    """
    max_page = current_page
    for a in soup.select(PAGE_LINK_SELECTOR):
        match = PAGE_NUMBER_RE.search(_attr(a, "href"))
        if match:
            max_page = max(max_page, int(match.group(1)))
    return max_page


# =============================================================================
# Detail pages
# =============================================================================

def _joined_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
    text = "".join(el.get_text() for el in soup.select(selector)).strip()
    return text or None


def description_from_dedicated_block(soup: BeautifulSoup) -> Optional[str]:
    return _joined_text(soup, ".descricao-produto")


def description_from_generic_block(soup: BeautifulSoup) -> Optional[str]:
    return _joined_text(soup, ".product-description")


def description_from_meta(soup: BeautifulSoup) -> Optional[str]:
    meta = soup.select_one('meta[name="description"]')
    if meta is None:
        return None
    return _attr(meta, "content").strip() or None


# Tried in order; first non-empty result wins
DESCRIPTION_STRATEGIES: List[DescriptionStrategy] = [
    description_from_dedicated_block,
    description_from_generic_block,
    description_from_meta,
]


def extract_long_description(
    soup: BeautifulSoup,
    strategies: Optional[List[DescriptionStrategy]] = None,
) -> str:
    for strategy in strategies or DESCRIPTION_STRATEGIES:
        text = strategy(soup)
        if text:
            return text
    return ""


def extract_specifications(soup: BeautifulSoup) -> Dict[str, str]:
    """Collect the "ficha tecnica" from both table shapes on a detail page.

    Labeled rows (th/td) are scanned first, then dt/dd pairs. Both are
    always scanned and a repeated label keeps the last value seen.
    """
    specs: Dict[str, str] = {}

    for tr in soup.select(".tabela-ficha-tecnica tr"):
        label = "".join(th.get_text() for th in tr.find_all("th")).strip()
        value = "".join(td.get_text() for td in tr.find_all("td")).strip()
        if label and value:
            specs[label] = value

    for dt in soup.select(".ficha-tecnica dt"):
        key = dt.get_text().strip()
        dd = dt.find_next_sibling()
        if dd is None or dd.name != "dd":
            continue
        value = dd.get_text().strip()
        if key and value:
            specs[key] = value

    return specs
