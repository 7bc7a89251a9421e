"""Tests for place-data providers."""
import httpx
import pytest

from gym_enricher.models import UpdateStrategy
from gym_enricher.services import HTTPClient
from gym_enricher.services.providers import (
    GooglePlacesProvider,
    KakaoMapProvider,
    KakaoMapWebScraper,
    NaverMapWebScraper,
    SeoulOpenDataProvider,
    build_providers,
)

KAKAO_PAYLOAD = {
    "documents": [
        {
            "place_name": "파워짐 강남점",
            "address_name": "서울 강남구 역삼동 123",
            "phone": "02-555-1234",
            "category_group_name": "",
            "category_name": "스포츠,레저 > 헬스클럽",
            "x": "127.0276",
            "y": "37.4979",
        },
        {
            "place_name": "강남 김밥",
            "address_name": "서울 강남구 역삼동 124",
            "phone": "",
            "category_group_name": "음식점",
            "category_name": "음식점 > 분식",
            "x": "127.0277",
            "y": "37.4980",
        },
    ]
}

GOOGLE_PAYLOAD = {
    "results": [
        {
            "name": "Power Gym Gangnam",
            "formatted_address": "서울특별시 강남구 테헤란로 1",
            "types": ["gym", "point_of_interest"],
            "geometry": {"location": {"lat": 37.5, "lng": 127.03}},
        },
        {
            "name": "Gangnam Bakery",
            "formatted_address": "서울특별시 강남구 테헤란로 2",
            "types": ["bakery"],
            "geometry": {"location": {"lat": 37.5, "lng": 127.04}},
        },
    ]
}

SEOUL_PAYLOAD = {
    "LOCALDATA_104201": {
        "row": [
            {"BPLCNM": "파워짐 강남점", "RDNWHLADDR": "서울 강남구 테헤란로 1", "X": "127.1", "Y": "37.4"},
            {"BPLCNM": "파워짐 서초점", "RDNWHLADDR": "", "SITEWHLADDR": "서울 서초구 1", "X": "", "Y": ""},
            {"BPLCNM": "다른헬스", "RDNWHLADDR": "서울 마포구 1", "X": "126.9", "Y": "37.5"},
        ]
    }
}

KAKAO_WEB_HTML = """
<html><body>
  <ul>
    <li class="search_item">
      <span class="item_name">파워짐 강남점</span>
      <span class="item_address">서울 강남구 역삼동 123</span>
      <span class="item_category">헬스클럽</span>
    </li>
    <li class="search_item">
      <span class="item_name">강남 서점</span>
      <span class="item_address">서울 강남구 역삼동 200</span>
      <span class="item_category">서점</span>
    </li>
    <li class="search_item">
      <span class="item_name">주소없는짐</span>
    </li>
  </ul>
</body></html>
"""


def json_transport(payload, status_code=200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


def failing_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


class TestKakaoMapProvider:
    """Tests for KakaoMapProvider."""

    @pytest.mark.asyncio
    async def test_filters_non_fitness_places(self):
        """Test only fitness venues are returned with fixed confidence."""
        async with HTTPClient(transport=json_transport(KAKAO_PAYLOAD)) as http:
            results = await KakaoMapProvider(http, api_key="key").search("파워짐")

        assert len(results) == 1
        candidate = results[0]
        assert candidate.name == "파워짐 강남점"
        assert candidate.address == "서울 강남구 역삼동 123"
        assert candidate.phone == "02-555-1234"
        assert candidate.latitude == pytest.approx(37.4979)
        assert candidate.longitude == pytest.approx(127.0276)
        assert candidate.source == "kakao_map"
        assert candidate.confidence == 0.9
        assert candidate.amenities is None

    @pytest.mark.asyncio
    async def test_sends_api_key_header(self):
        """Test the Kakao authorization header and query params are sent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["query"] = request.url.params.get("query")
            return httpx.Response(200, json={"documents": []})

        async with HTTPClient(transport=httpx.MockTransport(handler)) as http:
            assert await KakaoMapProvider(http, api_key="secret").search("파워짐 헬스") == []

        assert seen == {"auth": "KakaoAK secret", "query": "파워짐 헬스"}

    @pytest.mark.asyncio
    async def test_network_error_returns_empty(self):
        """Test connection failures are swallowed at the adapter."""
        async with HTTPClient(transport=failing_transport()) as http:
            assert await KakaoMapProvider(http, api_key="key").search("파워짐") == []

    @pytest.mark.asyncio
    async def test_http_error_returns_empty(self):
        """Test a 401 response yields no candidates."""
        async with HTTPClient(transport=json_transport({}, status_code=401)) as http:
            assert await KakaoMapProvider(http, api_key="bad").search("파워짐") == []

    @pytest.mark.asyncio
    async def test_malformed_payload_returns_empty(self):
        """Test a document missing coordinates does not escape as an error."""
        payload = {"documents": [{"place_name": "파워짐", "address_name": "서울", "category_name": "헬스"}]}
        async with HTTPClient(transport=json_transport(payload)) as http:
            assert await KakaoMapProvider(http, api_key="key").search("파워짐") == []

    @pytest.mark.asyncio
    async def test_facility_analysis_when_enabled(self):
        """Test amenity flags are attached when analysis is on."""
        async with HTTPClient(transport=json_transport(KAKAO_PAYLOAD)) as http:
            results = await KakaoMapProvider(http, api_key="key", analyze=True).search("파워짐")

        assert results[0].amenities is not None

    @pytest.mark.asyncio
    async def test_malformed_document_skipped_others_kept(self):
        """Test one broken document does not discard the rest of the page."""
        payload = {
            "documents": [
                {"place_name": "깨진짐", "category_name": "헬스클럽", "x": "127.0", "y": "not-a-number",
                 "address_name": "서울 강남구 1"},
                {"place_name": "주소없는짐", "category_name": "헬스클럽", "x": "127.0", "y": "37.5"},
                *KAKAO_PAYLOAD["documents"],
            ]
        }
        async with HTTPClient(transport=json_transport(payload)) as http:
            results = await KakaoMapProvider(http, api_key="key").search("짐")

        assert [r.name for r in results] == ["파워짐 강남점"]


class TestGooglePlacesProvider:
    """Tests for GooglePlacesProvider."""

    @pytest.mark.asyncio
    async def test_keeps_gym_types(self):
        """Test non-gym place types are filtered out."""
        async with HTTPClient(transport=json_transport(GOOGLE_PAYLOAD)) as http:
            results = await GooglePlacesProvider(http, api_key="key").search("Power Gym")

        assert [r.name for r in results] == ["Power Gym Gangnam"]
        assert results[0].confidence == 0.85
        assert results[0].phone is None

    @pytest.mark.asyncio
    async def test_place_without_geometry_skipped(self):
        """Test a result missing geometry or address is dropped on its own."""
        payload = {
            "results": [
                {"name": "No Geometry Gym", "formatted_address": "서울 1", "types": ["gym"]},
                {"name": "No Address Gym", "types": ["gym"], "geometry": {"location": {"lat": 37.5, "lng": 127.0}}},
                *GOOGLE_PAYLOAD["results"],
            ]
        }
        async with HTTPClient(transport=json_transport(payload)) as http:
            results = await GooglePlacesProvider(http, api_key="key").search("Gym")

        assert [r.name for r in results] == ["Power Gym Gangnam"]


class TestSeoulOpenDataProvider:
    """Tests for SeoulOpenDataProvider."""

    @pytest.mark.asyncio
    async def test_matches_by_name_and_skips_missing_coordinates(self):
        """Test rows are matched on business name and need coordinates."""
        async with HTTPClient(transport=json_transport(SEOUL_PAYLOAD)) as http:
            results = await SeoulOpenDataProvider(http, api_key="key").search("파워짐")

        assert [r.name for r in results] == ["파워짐 강남점"]
        assert results[0].address == "서울 강남구 테헤란로 1"
        assert results[0].confidence == 0.8

    @pytest.mark.asyncio
    async def test_non_numeric_coordinates_skipped(self):
        payload = {
            "LOCALDATA_104201": {
                "row": [
                    {"BPLCNM": "파워짐 역삼점", "RDNWHLADDR": "서울 강남구 2", "X": "n/a", "Y": "n/a"},
                    *SEOUL_PAYLOAD["LOCALDATA_104201"]["row"],
                ]
            }
        }
        async with HTTPClient(transport=json_transport(payload)) as http:
            results = await SeoulOpenDataProvider(http, api_key="key").search("파워짐")

        assert [r.name for r in results] == ["파워짐 강남점"]


class TestMapScrapers:
    """Tests for the scrape-fallback providers."""

    def test_parse_kakao_search_page(self):
        """Test listings are parsed and filtered for fitness venues."""
        results = KakaoMapWebScraper(http=None).parse(KAKAO_WEB_HTML)

        assert len(results) == 1
        assert results[0].name == "파워짐 강남점"
        assert results[0].address == "서울 강남구 역삼동 123"
        assert (results[0].latitude, results[0].longitude) == (0.0, 0.0)
        assert results[0].confidence == 0.6

    def test_parse_empty_page(self):
        """Test an empty page yields nothing."""
        assert NaverMapWebScraper(http=None).parse("") == []

    @pytest.mark.asyncio
    async def test_scrape_fetches_encoded_url(self):
        """Test the query is URL-encoded into the search page path."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.raw_path.decode()
            return httpx.Response(200, text="<html></html>")

        async with HTTPClient(transport=httpx.MockTransport(handler)) as http:
            assert await NaverMapWebScraper(http).search("파워짐 헬스") == []

        assert seen["path"].startswith("/p/search/")
        assert "%20" in seen["path"]

    @pytest.mark.asyncio
    async def test_scrape_network_error_returns_empty(self):
        """Test scraper failures are isolated."""
        async with HTTPClient(transport=failing_transport()) as http:
            assert await KakaoMapWebScraper(http).search("파워짐") == []


class TestBuildProviders:
    """Tests for strategy provider sets."""

    @pytest.mark.asyncio
    async def test_unconfigured_api_providers_are_skipped(self, monkeypatch):
        """Test providers without API keys are left out."""
        from gym_enricher.config import settings

        monkeypatch.setattr(settings, "kakao_api_key", "key")
        monkeypatch.setattr(settings, "google_places_api_key", "")
        monkeypatch.setattr(settings, "seoul_openapi_key", "")

        async with HTTPClient() as http:
            sources = [p.source for p in build_providers(UpdateStrategy.MULTISOURCE, http)]

        assert sources == ["kakao_map", "kakao_web", "naver_web"]

    @pytest.mark.asyncio
    async def test_enhanced_strategy_analyzes_facilities(self, monkeypatch):
        """Test the enhanced strategy turns on amenity analysis."""
        from gym_enricher.config import settings

        monkeypatch.setattr(settings, "kakao_api_key", "key")
        monkeypatch.setattr(settings, "google_places_api_key", "key")
        monkeypatch.setattr(settings, "seoul_openapi_key", "key")

        async with HTTPClient() as http:
            providers = build_providers(UpdateStrategy.ENHANCED, http)

        assert [p.source for p in providers] == ["kakao_map", "google_places", "seoul_open_data"]
        assert all(p.analyze for p in providers)
