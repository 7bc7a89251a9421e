"""Place-data providers and the per-strategy provider sets."""
from typing import Callable, Dict, List, Type

from ...models import UpdateStrategy
from ...utils.logger import logger
from ..http_client import HTTPClient
from .base import PlaceProvider, looks_like_fitness_venue
from .map_scrapers import KakaoMapWebScraper, MapSearchScraper, NaverMapWebScraper
from .place_apis import GooglePlacesProvider, KakaoMapProvider, SeoulOpenDataProvider

STRATEGY_PROVIDERS: Dict[UpdateStrategy, List[Type[PlaceProvider]]] = {
    UpdateStrategy.BASIC: [KakaoMapProvider],
    UpdateStrategy.ENHANCED: [KakaoMapProvider, GooglePlacesProvider, SeoulOpenDataProvider],
    UpdateStrategy.MULTISOURCE: [
        KakaoMapProvider,
        GooglePlacesProvider,
        KakaoMapWebScraper,
        NaverMapWebScraper,
    ],
    UpdateStrategy.ADVANCED: [
        KakaoMapProvider,
        GooglePlacesProvider,
        SeoulOpenDataProvider,
        KakaoMapWebScraper,
        NaverMapWebScraper,
    ],
}

# Only the enhanced strategy runs keyword amenity analysis on API results.
ANALYZING_STRATEGIES = {UpdateStrategy.ENHANCED}

ProviderFactory = Callable[[UpdateStrategy, HTTPClient], List[PlaceProvider]]


def build_providers(strategy: UpdateStrategy, http: HTTPClient) -> List[PlaceProvider]:
    """Instantiate the configured providers for a strategy.

    Args:
        strategy: Update strategy
        http: Open HTTP client for the cycle

    Returns:
        Providers with credentials available; unconfigured ones are skipped
    """
    analyze = strategy in ANALYZING_STRATEGIES
    providers: List[PlaceProvider] = []

    for provider_cls in STRATEGY_PROVIDERS[strategy]:
        if issubclass(provider_cls, MapSearchScraper):
            provider = provider_cls(http)
        else:
            provider = provider_cls(http, analyze=analyze)

        if not provider.is_configured:
            logger.warning(f"Skipping {provider.source}: API key not configured")
            continue
        providers.append(provider)

    return providers


__all__ = [
    "PlaceProvider",
    "looks_like_fitness_venue",
    "MapSearchScraper",
    "KakaoMapWebScraper",
    "NaverMapWebScraper",
    "GooglePlacesProvider",
    "KakaoMapProvider",
    "SeoulOpenDataProvider",
    "STRATEGY_PROVIDERS",
    "ProviderFactory",
    "build_providers",
]
