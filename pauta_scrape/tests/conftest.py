"""Shared fixtures for the scraper test suite.

Network access is replaced by ``FakeSite``, a URL -> HTML mapping patched
in place of ``fetch_html`` wherever the crawl modules call it.
"""

from typing import Dict, Iterable, List, Optional, Union

import pytest

from pauta_scrape import discover_categories as discover_module
from pauta_scrape import scraper as scraper_module
from pauta_scrape.config import SITE_ORIGIN
from pauta_scrape.scraper import FetchError


def card_html(
    name: str = "Mouse X",
    href: Optional[str] = "/produto/mouse-x",
    price: str = "R$ 49,90 / unidade",
    src: Optional[str] = None,
    data_src: Optional[str] = "/img/mouse.png",
    sku: str = "",
) -> str:
    """Markup of one listing card; pass None to leave an element out."""
    img_attrs = ""
    if src is not None:
        img_attrs += f' src="{src}"'
    if data_src is not None:
        img_attrs += f' data-src="{data_src}"'
    link = (
        f'<a class="product-card__detail-link" href="{href}">Ver produto</a>'
        if href is not None
        else ""
    )
    sku_el = f'<span class="product-card__sku">{sku}</span>' if sku else ""
    return f"""
    <div class="product-card">
      <a class="product-card__image-frame" href="{href or '#'}"><img{img_attrs}></a>
      <h3 class="product-card__name">{name}</h3>
      {link}
      <div class="inline-buy__price">
        {price}
      </div>
      {sku_el}
    </div>
    """


def listing_html(cards: Iterable[str] = (), page_links: Iterable[int] = ()) -> str:
    """A listing page with the given cards and ``?pagina=N`` links."""
    links = "".join(f'<a href="?pagina={n}">{n}</a>' for n in page_links)
    return f"""
    <html><body>
      <div class="product-grid">{''.join(cards)}</div>
      <nav class="paginacao">{links}</nav>
    </body></html>
    """


def detail_html(
    description: str = "",
    meta: str = "",
    table: Optional[Dict[str, str]] = None,
    definitions: Optional[Dict[str, str]] = None,
) -> str:
    meta_el = f'<meta name="description" content="{meta}">' if meta else ""
    desc_el = f'<div class="descricao-produto">{description}</div>' if description else ""
    rows = "".join(
        f"<tr><th>{k}</th><td>{v}</td></tr>" for k, v in (table or {}).items()
    )
    dl = "".join(f"<dt>{k}</dt><dd>{v}</dd>" for k, v in (definitions or {}).items())
    return f"""
    <html><head>{meta_el}</head><body>
      {desc_el}
      <table class="tabela-ficha-tecnica">{rows}</table>
      <dl class="ficha-tecnica">{dl}</dl>
    </body></html>
    """


def absolute(path: str) -> str:
    return SITE_ORIGIN + path


class FakeSite:
    """In-memory stand-in for the remote site.

    Values may be HTML strings or exceptions to raise. Unknown URLs fail
    with FetchError, like a 404 would.
    """

    def __init__(self, pages: Optional[Dict[str, Union[str, Exception]]] = None):
        self.pages: Dict[str, Union[str, Exception]] = dict(pages or {})
        self.requested: List[str] = []

    def add(self, url: str, content: Union[str, Exception]) -> None:
        self.pages[url] = content

    def fetch(self, url: str, session=None) -> str:
        self.requested.append(url)
        content = self.pages.get(url)
        if content is None:
            raise FetchError(url, Exception("404 Not Found"))
        if isinstance(content, Exception):
            raise content
        return content


@pytest.fixture
def fake_site(monkeypatch):
    """A FakeSite patched in for every fetch made by the crawl modules."""
    site = FakeSite()
    monkeypatch.setattr(scraper_module, "fetch_html", site.fetch)
    monkeypatch.setattr(discover_module, "fetch_html", site.fetch)
    return site


@pytest.fixture
def no_sleep(monkeypatch):
    """Record requested sleeps instead of sleeping."""
    calls: List[float] = []
    monkeypatch.setattr(scraper_module.time, "sleep", calls.append)
    return calls
