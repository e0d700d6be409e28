"""Personal recommendation pipeline for a single user."""

import json
import logging
from typing import Any

from app.ports.favorites import FavoritesPort
from app.ports.recommender import RecommenderPort
from app.services.cache import RESULT, TTLCacheStore
from app.services.candidates import CandidatePoolBuilder, RatingHydrator, select_popular
from app.services.catalog import CatalogService
from app.services.formatter import ResultFormatter
from app.services.ranking import LIMIT_FINAL, score_and_diversify
from app.services.seeds import SeedLoader, cold_start_profile
from app.services.similarity import seeded_shuffle

logger = logging.getLogger(__name__)

MAX_FAVORITE_IDS = 50


def result_cache_key(user_id: str, favorite_ids: list[str], seed: str) -> str:
    return json.dumps({"u": user_id, "f": sorted(favorite_ids), "s": seed})


class RecommendationService(RecommenderPort):
    """
    Orchestrates seed loading, candidate generation, hydration, popularity
    filtering, MMR ranking, seeded shuffling and formatting.

    Results are cached for the result TTL under the user, their favorite
    IDs and the seed, so identical requests in that window are served
    without touching the catalog.
    """

    def __init__(
        self,
        favorites: FavoritesPort,
        catalog: CatalogService,
        cache: TTLCacheStore,
        formatter: ResultFormatter | None = None,
    ) -> None:
        self._favorites = favorites
        self._cache = cache
        self._seed_loader = SeedLoader(favorites, catalog)
        self._pool_builder = CandidatePoolBuilder(catalog)
        self._hydrator = RatingHydrator(catalog)
        self._formatter = formatter or ResultFormatter()

    async def get_personal_recommendations(
        self, user_id: str, seed: str
    ) -> list[dict[str, Any]]:
        favorite_ids = await self._favorites.get_favorite_ids(user_id, MAX_FAVORITE_IDS)
        cache_key = result_cache_key(user_id, favorite_ids, seed)
        cached = self._cache.get(RESULT, cache_key)
        if cached is not None:
            logger.debug("Recommendation cache hit for user=%s", user_id)
            return cached

        if favorite_ids:
            profile = await self._seed_loader.load(user_id)
        else:
            logger.info("Cold start for user=%s", user_id)
            profile = cold_start_profile()

        pool = await self._pool_builder.build(profile)
        await self._hydrator.hydrate(pool)
        popular = select_popular(pool)
        ranked = seeded_shuffle(score_and_diversify(popular, profile), seed)

        payload = self._formatter.format_many(ranked[:LIMIT_FINAL])
        logger.info(
            "Recommendations for user=%s: %d items (pool=%d, popular=%d)",
            user_id, len(payload), len(pool), len(popular),
        )
        return self._cache.set(RESULT, cache_key, payload)
