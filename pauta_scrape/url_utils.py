"""URL normalization utilities for scraped hrefs.

Every href pulled out of the catalog markup goes through ``normalize_url``
before it is stored or fetched, so relative image/product links end up as
fully-qualified URLs on the site origin.
"""

import re

from pauta_scrape.config import SITE_ORIGIN

__all__ = [
    "sanitize_url",
    "normalize_url",
    "strip_query",
    "build_page_url",
    "PAGE_PARAM",
]

# Query parameter used by the listing pagination widget
PAGE_PARAM = "pagina"

_ABSOLUTE_RE = re.compile(r"^https?://")


def sanitize_url(url: str) -> str:
    """Strip whitespace and control characters from a raw href.

    Args:
        url: Raw URL string

    Returns:
        Sanitized URL string
    """
    if not url:
        return ""
    url = url.strip()
    return re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url)


def normalize_url(href: str, origin: str = SITE_ORIGIN) -> str:
    """Turn an absolute, root-relative or relative href into a full URL.

    Rules, in order:
        - empty input -> empty output
        - http:// or https:// -> unchanged
        - "/path" -> origin + "/path"
        - anything else -> origin + "/" + href (leading slashes stripped)

    Normalizing an already-absolute URL returns it unchanged.
    """
    href = sanitize_url(href)
    if not href:
        return ""
    if _ABSOLUTE_RE.match(href):
        return href
    origin = origin.rstrip("/")
    if href.startswith("/"):
        return origin + href
    return origin + "/" + href.lstrip("/")


def strip_query(url: str) -> str:
    """Drop the query string (and anything after it) from a URL."""
    return url.split("?", 1)[0]


def build_page_url(base_url: str, page: int) -> str:
    """URL of listing page ``page``; page 1 is the bare base URL."""
    if page <= 1:
        return base_url
    return f"{base_url}?{PAGE_PARAM}={page}"
