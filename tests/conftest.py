from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.adapters.favorites.memory import InMemoryFavoritesAdapter
from app.domain.models import Base
from app.ports.catalog import CatalogPort
from app.services.cache import TTLCacheStore
from app.services.catalog import CatalogService
from app.services.recommendation import RecommendationService


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCatalog(CatalogPort):
    """In-memory catalog with per-method call counters and injectable failures."""

    def __init__(self) -> None:
        self.works: dict[str, dict[str, Any]] = {}
        self.authors: dict[str, dict[str, Any]] = {}
        self.subjects: dict[str, dict[str, Any]] = {}
        self.ratings: dict[str, dict[str, Any]] = {}
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _check(self, method: str, key: str) -> None:
        self.calls.append((method, key))
        if key in self.failing:
            request = httpx.Request("GET", f"https://catalog.test{key}")
            raise httpx.ConnectError("catalog unreachable", request=request)

    async def get_work(self, work_key: str) -> dict[str, Any]:
        self._check("work", work_key)
        return self.works.get(work_key, {})

    async def get_author_works(self, author_key: str, limit: int) -> dict[str, Any]:
        self._check("author", author_key)
        data = self.authors.get(author_key, {"name": "", "entries": []})
        return {**data, "entries": data.get("entries", [])[:limit]}

    async def get_subject_works(self, subject: str, limit: int) -> dict[str, Any]:
        self._check("subject", subject)
        data = self.subjects.get(subject, {"works": []})
        return {**data, "works": data.get("works", [])[:limit]}

    async def get_ratings(self, work_key: str) -> dict[str, Any]:
        self._check("rating", work_key)
        return self.ratings.get(work_key, {})

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.calls if m == method)


def subject_work(
    key: str,
    title: str,
    author: str = "Some Author",
    edition_count: int = 1,
    cover_id: int | None = 100,
    ratings_average: float | None = None,
) -> dict[str, Any]:
    work: dict[str, Any] = {
        "key": key,
        "title": title,
        "authors": [{"key": "/authors/OLX", "name": author}],
        "cover_id": cover_id,
        "edition_count": edition_count,
        "first_publish_year": 1990,
    }
    if ratings_average is not None:
        work["ratings_average"] = ratings_average
    return work


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(now=1_000.0)


@pytest.fixture
def cache(clock: FakeClock) -> TTLCacheStore:
    return TTLCacheStore(clock=clock)


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def catalog_service(fake_catalog: FakeCatalog, cache: TTLCacheStore) -> CatalogService:
    return CatalogService(fake_catalog, cache)


@pytest.fixture
def favorites() -> InMemoryFavoritesAdapter:
    return InMemoryFavoritesAdapter()


@pytest.fixture
def service(
    favorites: InMemoryFavoritesAdapter,
    catalog_service: CatalogService,
    cache: TTLCacheStore,
) -> RecommendationService:
    return RecommendationService(favorites=favorites, catalog=catalog_service, cache=cache)


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh SQLite database with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()
