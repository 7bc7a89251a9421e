"""Structured place-search API providers."""
from typing import Any, Dict, List, Optional

from ...config import settings
from ...models import SearchCandidate
from ...utils.logger import logger
from ..facility_analyzer import analyze_facilities
from ..http_client import HTTPClient
from .base import PlaceProvider, looks_like_fitness_venue

KAKAO_KEYWORD_URL = "https://dapi.kakao.com/v2/local/search/keyword.json"
GOOGLE_TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
SEOUL_OPEN_DATA_URL = "http://openapi.seoul.go.kr:8088/{key}/json/LOCALDATA_104201/1/1000/"

GOOGLE_GYM_TYPES = {"gym", "health"}


class KakaoMapProvider(PlaceProvider):
    """Kakao Local keyword search."""

    source = "kakao_map"
    confidence = 0.9

    def __init__(
        self,
        http: HTTPClient,
        api_key: Optional[str] = None,
        analyze: bool = False,
    ):
        super().__init__(http)
        self.api_key = api_key if api_key is not None else settings.kakao_api_key
        self.analyze = analyze

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _search(self, query: str, timeout: Optional[float]) -> List[SearchCandidate]:
        payload, error = await self.http.fetch_json(
            KAKAO_KEYWORD_URL,
            params={"query": query, "size": 10, "page": 1},
            headers={"Authorization": f"KakaoAK {self.api_key}"},
            timeout=timeout,
        )
        if error:
            logger.warning(f"Kakao Map API error for '{query}': {error}")
            return []

        candidates = []
        for doc in payload.get("documents") or []:
            category = f"{doc.get('category_group_name', '')} {doc.get('category_name', '')}"
            if not looks_like_fitness_venue(category, doc.get("place_name")):
                continue
            try:
                candidates.append(
                    self._candidate(
                        name=doc["place_name"],
                        address=doc["address_name"],
                        phone=doc.get("phone") or None,
                        latitude=float(doc["y"]),
                        longitude=float(doc["x"]),
                        amenities=self._amenities(doc, category),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed Kakao document {doc.get('place_name')!r}: {e}")
        return candidates

    def _amenities(self, doc: Dict[str, Any], category: str):
        if not self.analyze:
            return None
        return analyze_facilities(
            doc["place_name"], doc.get("address_name", ""), doc.get("phone"), [category]
        )


class GooglePlacesProvider(PlaceProvider):
    """Google Places text search, restricted to Korean results."""

    source = "google_places"
    confidence = 0.85

    def __init__(
        self,
        http: HTTPClient,
        api_key: Optional[str] = None,
        analyze: bool = False,
    ):
        super().__init__(http)
        self.api_key = api_key if api_key is not None else settings.google_places_api_key
        self.analyze = analyze

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _search(self, query: str, timeout: Optional[float]) -> List[SearchCandidate]:
        payload, error = await self.http.fetch_json(
            GOOGLE_TEXT_SEARCH_URL,
            params={
                "query": f"{query} 헬스장",
                "key": self.api_key,
                "language": "ko",
                "region": "kr",
            },
            timeout=timeout,
        )
        if error:
            logger.warning(f"Google Places API error for '{query}': {error}")
            return []

        candidates = []
        for place in payload.get("results") or []:
            types = place.get("types") or []
            if not (GOOGLE_GYM_TYPES.intersection(types) or looks_like_fitness_venue(place.get("name"))):
                continue
            try:
                candidates.append(self._parse_place(place, types))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed Google place {place.get('name')!r}: {e}")
        return candidates

    def _parse_place(self, place: Dict[str, Any], types: List[str]) -> SearchCandidate:
        location = place["geometry"]["location"]
        amenities = None
        if self.analyze:
            amenities = analyze_facilities(
                place["name"], place.get("formatted_address", ""), None, types
            )
        return self._candidate(
            name=place["name"],
            address=place["formatted_address"],
            phone=place.get("formatted_phone_number"),
            latitude=float(location["lat"]),
            longitude=float(location["lng"]),
            amenities=amenities,
        )


class SeoulOpenDataProvider(PlaceProvider):
    """Seoul open-data registry of licensed fitness businesses."""

    source = "seoul_open_data"
    confidence = 0.8

    def __init__(
        self,
        http: HTTPClient,
        api_key: Optional[str] = None,
        analyze: bool = False,
    ):
        super().__init__(http)
        self.api_key = api_key if api_key is not None else settings.seoul_openapi_key
        self.analyze = analyze

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _search(self, query: str, timeout: Optional[float]) -> List[SearchCandidate]:
        payload, error = await self.http.fetch_json(
            SEOUL_OPEN_DATA_URL.format(key=self.api_key), timeout=timeout
        )
        if error:
            logger.warning(f"Seoul Open Data API error for '{query}': {error}")
            return []

        rows = (payload.get("LOCALDATA_104201") or {}).get("row") or []
        needle = query.lower()
        candidates = []
        for row in rows:
            name = row.get("BPLCNM") or ""
            # Registry rows carry no category; the whole dataset is fitness businesses.
            if needle not in name.lower():
                continue
            # X/Y may be blank for closed businesses
            if not row.get("X") or not row.get("Y"):
                continue
            address = row.get("RDNWHLADDR") or row.get("SITEWHLADDR") or ""
            try:
                candidates.append(
                    self._candidate(
                        name=name,
                        address=address,
                        phone=row.get("SITETEL") or None,
                        latitude=float(row["Y"]),
                        longitude=float(row["X"]),
                        amenities=analyze_facilities(name, address) if self.analyze else None,
                    )
                )
            except (TypeError, ValueError) as e:
                logger.debug(f"Skipping Seoul registry row {name!r} with bad coordinates: {e}")
        return candidates
