"""Scrape-fallback providers reading public map search pages."""
from typing import List, Optional
from urllib.parse import quote

from bs4 import BeautifulSoup

from ...models import SearchCandidate
from ...utils.logger import logger
from .base import PlaceProvider, looks_like_fitness_venue


class MapSearchScraper(PlaceProvider):
    """Base class for providers that parse a map site's search result page.

    Scraped listings carry no coordinates, so candidates are emitted at (0, 0)
    and rank below every structured source.
    """

    search_url: str = ""
    item_selector: str = ""
    name_selector: str = ""
    address_selector: str = ""
    category_selector: str = ""

    async def _search(self, query: str, timeout: Optional[float]) -> List[SearchCandidate]:
        html, error = await self.http.fetch_url(
            self.search_url.format(query=quote(query)), timeout=timeout
        )
        if error:
            logger.warning(f"{self.source} scrape error for '{query}': {error}")
            return []
        return self.parse(html)

    def parse(self, html: str) -> List[SearchCandidate]:
        """Extract fitness listings from a search result page.

        Args:
            html: Raw HTML of the search page

        Returns:
            Candidates for listings that have both a name and an address
        """
        if not html or not html.strip():
            return []

        soup = BeautifulSoup(html, "lxml")
        candidates = []
        for item in soup.select(self.item_selector):
            name = self._text(item, self.name_selector)
            address = self._text(item, self.address_selector)
            if not name or not address:
                continue
            if not looks_like_fitness_venue(name, self._text(item, self.category_selector)):
                continue
            candidates.append(
                self._candidate(name=name, address=address, latitude=0.0, longitude=0.0)
            )
        return candidates

    @staticmethod
    def _text(item, selector: str) -> str:
        if not selector:
            return ""
        element = item.select_one(selector)
        return element.get_text(strip=True) if element else ""


class KakaoMapWebScraper(MapSearchScraper):
    source = "kakao_web"
    confidence = 0.6
    search_url = "https://map.kakao.com/link/search/{query}"
    item_selector = ".search_item"
    name_selector = ".item_name"
    address_selector = ".item_address"
    category_selector = ".item_category"


class NaverMapWebScraper(MapSearchScraper):
    source = "naver_web"
    confidence = 0.5
    search_url = "https://map.naver.com/p/search/{query}"
    item_selector = ".search_result_item"
    name_selector = ".item_title"
    address_selector = ".item_address"
    category_selector = ".item_category"
