"""
Pagination tests for category listings.
This test verifies that:
1. The highest advertised page number is read from ?pagina=N links
2. scrape_category visits pages 1..N exactly once and stops
3. Sliding-window pagination widgets are still followed to the end
"""
import pytest
from bs4 import BeautifulSoup

from conftest import absolute, card_html, listing_html
from pauta_scrape.html_utils import extract_max_page_number
from pauta_scrape.scraper import scrape_category
from pauta_scrape.url_utils import build_page_url

BASE = absolute("/t/produtos/informatica")


def page_cards(page: int, count: int = 2):
    return [
        card_html(name=f"P{page}-{i}", href=f"/produto/p{page}-{i}")
        for i in range(count)
    ]


class TestMaxPageNumber:
    """Test reading the pagination widget."""

    def test_highest_link_wins(self):
        html = listing_html(page_links=[2, 3, 7, 4])

        assert extract_max_page_number(BeautifulSoup(html, "html.parser"), 1) == 7

    def test_no_links_returns_current_page(self):
        html = listing_html()

        assert extract_max_page_number(BeautifulSoup(html, "html.parser"), 3) == 3

    def test_never_below_current_page(self):
        html = listing_html(page_links=[1, 2])

        assert extract_max_page_number(BeautifulSoup(html, "html.parser"), 5) == 5

    def test_absolute_pagination_links(self):
        html = f'<a href="{BASE}?pagina=9">9</a><a href="{BASE}?pagina=x">x</a>'

        assert extract_max_page_number(BeautifulSoup(html, "html.parser"), 1) == 9

    def test_links_without_pagina_param_ignored(self):
        html = '<a href="?page=12">12</a><a href="/t/produtos?ordem=preco">ordem</a>'

        assert extract_max_page_number(BeautifulSoup(html, "html.parser"), 1) == 1


class TestPaginationFlow:
    """Test pagination in the context of scrape_category."""

    def listing_urls(self, fake_site):
        return [u for u in fake_site.requested if u.startswith(BASE)]

    def test_single_page_category(self, fake_site, tmp_path):
        fake_site.add(BASE, listing_html(page_cards(1)))

        products = scrape_category(BASE, partial_path=str(tmp_path / "p.json"), pause=False)

        assert self.listing_urls(fake_site) == [BASE]
        assert [p.name for p in products] == ["P1-0", "P1-1"]

    def test_visits_each_page_once(self, fake_site, tmp_path):
        for page in (1, 2, 3):
            fake_site.add(
                build_page_url(BASE, page),
                listing_html(page_cards(page), page_links=[1, 2, 3]),
            )

        products = scrape_category(BASE, partial_path=str(tmp_path / "p.json"), pause=False)

        assert self.listing_urls(fake_site) == [
            BASE,
            f"{BASE}?pagina=2",
            f"{BASE}?pagina=3",
        ]
        assert len(products) == 6
        assert products[-1].name == "P3-1"

    def test_sliding_window_widget(self, fake_site, tmp_path):
        last = 5
        for page in range(1, last + 1):
            window = [n for n in range(page - 1, page + 2) if 1 <= n <= last]
            fake_site.add(build_page_url(BASE, page), listing_html(page_cards(page, 1), window))

        products = scrape_category(BASE, partial_path=str(tmp_path / "p.json"), pause=False)

        assert self.listing_urls(fake_site) == [build_page_url(BASE, n) for n in range(1, last + 1)]
        assert [p.name for p in products] == [f"P{n}-0" for n in range(1, last + 1)]

    def test_page_without_links_ends_crawl(self, fake_site, tmp_path):
        fake_site.add(BASE, listing_html(page_cards(1), page_links=[2]))
        fake_site.add(f"{BASE}?pagina=2", listing_html(page_cards(2)))

        scrape_category(BASE, partial_path=str(tmp_path / "p.json"), pause=False)

        assert self.listing_urls(fake_site) == [BASE, f"{BASE}?pagina=2"]

    @pytest.mark.parametrize("advertised", [[2, 4], [3], [4, 2]])
    def test_counter_advances_one_page_at_a_time(self, fake_site, tmp_path, advertised):
        """Jumps in the advertised maximum still fetch every page in between."""
        last = max(advertised)
        for page in range(1, last + 1):
            fake_site.add(build_page_url(BASE, page), listing_html(page_cards(page, 1), advertised))

        scrape_category(BASE, partial_path=str(tmp_path / "p.json"), pause=False)

        assert self.listing_urls(fake_site) == [build_page_url(BASE, n) for n in range(1, last + 1)]
