"""Candidate pool construction, rating hydration and popularity filtering."""

import asyncio
import dataclasses
import logging

from app.domain.entities import Candidate, RatingSummary, SeedProfile
from app.services.catalog import CatalogService
from app.services.similarity import book_key, normalize_id

logger = logging.getLogger(__name__)

WORKS_PER_SOURCE = 60
MAX_HYDRATED = 120

HARD_MIN_EDITIONS = 8
HARD_MIN_RATINGS = 25
SOFT_MIN_EDITIONS = 3
SOFT_MIN_RATINGS = 5
MIN_FILTERED = 24


class CandidatePoolBuilder:
    """Gathers works by the profile's authors and subjects."""

    def __init__(self, catalog: CatalogService) -> None:
        self._catalog = catalog

    async def build(self, profile: SeedProfile) -> list[Candidate]:
        tasks = [
            *(self._catalog.get_author_works(a, WORKS_PER_SOURCE) for a in profile.authors),
            *(self._catalog.get_subject_works(s, WORKS_PER_SOURCE) for s in profile.subjects),
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        seen: set[str] = set()
        pool: list[Candidate] = []
        for result in results:
            if isinstance(result, BaseException):
                logger.warning("Candidate source failed: %s", result)
                continue
            for candidate in result:
                candidate_id = normalize_id(candidate.id)
                if not candidate_id or candidate_id in seen:
                    continue
                seen.add(candidate_id)
                # copy so hydration never touches cached catalog records
                pool.append(dataclasses.replace(candidate))

        kept = exclude_favorites(pool, profile)
        logger.info(
            "Candidate pool: %d unique from %d sources, %d after favorite exclusion",
            len(pool), len(tasks), len(kept),
        )
        return kept


def exclude_favorites(pool: list[Candidate], profile: SeedProfile) -> list[Candidate]:
    """Drop books the user already favorited, by ID and by title::author."""
    kept = []
    for candidate in pool:
        candidate_id = normalize_id(candidate.id)
        if candidate_id and candidate_id in profile.favorite_ids:
            continue
        if book_key(candidate.title, candidate.primary_author) in profile.favorite_keys:
            continue
        kept.append(candidate)
    return kept


class RatingHydrator:
    """Fills in missing rating signals for the head of the pool."""

    def __init__(self, catalog: CatalogService, max_items: int = MAX_HYDRATED) -> None:
        self._catalog = catalog
        self._max_items = max_items

    async def hydrate(self, pool: list[Candidate]) -> None:
        targets = [
            c for c in pool[: self._max_items]
            if normalize_id(c.id) and c.ratings_count is None
        ]
        if not targets:
            return
        summaries = await asyncio.gather(
            *(self._catalog.get_work_ratings(c.id) for c in targets),
            return_exceptions=True,
        )
        for candidate, summary in zip(targets, summaries):
            if isinstance(summary, BaseException):
                logger.warning("Rating hydration failed for %s: %s", candidate.id, summary)
                summary = RatingSummary()
            if candidate.ratings_average is None:
                candidate.ratings_average = summary.average
            candidate.ratings_count = summary.count
        logger.debug("Hydrated ratings for %d candidates", len(targets))


def filter_by_popularity(
    pool: list[Candidate], min_editions: int, min_ratings: int
) -> list[Candidate]:
    return [
        c for c in pool
        if c.image
        and ((c.edition_count or 0) >= min_editions or (c.ratings_count or 0) >= min_ratings)
    ]


def select_popular(pool: list[Candidate], minimum: int = MIN_FILTERED) -> list[Candidate]:
    """
    Apply hard popularity thresholds, relaxing them while fewer than
    ``minimum`` candidates survive. Each tier filters the full pool.
    """
    filtered = filter_by_popularity(pool, HARD_MIN_EDITIONS, HARD_MIN_RATINGS)
    if len(filtered) >= minimum:
        return filtered
    filtered = filter_by_popularity(pool, SOFT_MIN_EDITIONS, SOFT_MIN_RATINGS)
    if len(filtered) >= minimum:
        logger.debug("Popularity filter relaxed to soft thresholds (%d left)", len(filtered))
        return filtered
    logger.debug("Popularity filter dropped thresholds")
    return [c for c in pool if c.image]
