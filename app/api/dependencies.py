"""Wiring of adapters and services for the web application."""

import logging

import httpx
from fastapi import Request

from app.adapters.catalog.mock import MockCatalogAdapter
from app.adapters.catalog.openlibrary import OpenLibraryCatalogAdapter
from app.adapters.favorites.memory import InMemoryFavoritesAdapter
from app.config import CatalogProvider, FavoritesBackend, Settings
from app.ports.catalog import CatalogPort
from app.ports.favorites import FavoritesPort
from app.ports.recommender import RecommenderPort
from app.services.cache import TTLCacheStore
from app.services.catalog import CatalogService
from app.services.formatter import ResultFormatter
from app.services.recommendation import RecommendationService

logger = logging.getLogger(__name__)


def build_http_client(config: Settings) -> httpx.AsyncClient:
    """Shared keep-alive client for outbound catalog calls."""
    return httpx.AsyncClient(
        timeout=config.http_timeout_seconds,
        limits=httpx.Limits(
            max_connections=config.http_max_connections,
            max_keepalive_connections=config.http_max_connections,
        ),
        headers={"User-Agent": config.http_user_agent, "Accept": "application/json"},
    )


def build_catalog(config: Settings, client: httpx.AsyncClient | None = None) -> CatalogPort:
    if config.catalog_provider == CatalogProvider.MOCK:
        return MockCatalogAdapter()
    return OpenLibraryCatalogAdapter(
        base_url=config.openlibrary_base_url,
        timeout=config.catalog_timeout_seconds,
        client=client,
    )


def build_favorites(config: Settings) -> FavoritesPort:
    if config.favorites_backend == FavoritesBackend.MEMORY:
        return InMemoryFavoritesAdapter()

    from app.adapters.favorites.sql import SqlFavoritesAdapter
    from app.database import async_session_factory

    return SqlFavoritesAdapter(async_session_factory)


def build_recommendation_service(
    config: Settings,
    client: httpx.AsyncClient | None = None,
    cache: TTLCacheStore | None = None,
) -> RecommendationService:
    cache = cache or TTLCacheStore(ttls=config.cache_ttls, max_entries=config.cache_max_entries)
    catalog = CatalogService(
        build_catalog(config, client), cache, covers_base_url=config.covers_base_url
    )
    return RecommendationService(
        favorites=build_favorites(config),
        catalog=catalog,
        cache=cache,
        formatter=ResultFormatter(covers_base_url=config.covers_base_url),
    )


def get_recommendation_service(request: Request) -> RecommenderPort:
    """FastAPI dependency returning the service built at startup."""
    return request.app.state.recommender
