"""
Cache-backed, failure-tolerant view of the external book catalog.

Every lookup goes through the TTL cache. A failed lookup (network error,
timeout, non-2xx, malformed JSON) is logged and degrades to an empty
result for that source only; the degraded result is cached like any
other so a failing upstream is not hammered within the TTL window.
"""

import logging
from typing import Any

import httpx

from app.domain.entities import (
    ORIGIN_AUTHOR,
    ORIGIN_SUBJECT,
    Candidate,
    RatingSummary,
    WorkMeta,
)
from app.ports.catalog import CatalogPort
from app.services.cache import AUTHOR, RATING, SUBJECT, WORK, TTLCacheStore
from app.services.similarity import normalize_id

logger = logging.getLogger(__name__)

MAX_WORK_SUBJECTS = 30
DEFAULT_COVERS_URL = "https://covers.openlibrary.org"

CatalogError = (httpx.HTTPError, ValueError)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_number(value: Any) -> float | None:
    """Numeric value or ``None``; zero and non-numbers count as missing."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number == 0:
        return None
    return number


def _first_int(values: Any) -> int | None:
    items = _as_list(values)
    if items and isinstance(items[0], int) and items[0] > 0:
        return items[0]
    return None


class CatalogService:
    """Normalises catalog payloads into pipeline records."""

    def __init__(
        self,
        catalog: CatalogPort,
        cache: TTLCacheStore,
        covers_base_url: str = DEFAULT_COVERS_URL,
    ) -> None:
        self._catalog = catalog
        self._cache = cache
        self._covers_base_url = covers_base_url.rstrip("/")

    def cover_url(self, cover_id: int | None) -> str | None:
        if not cover_id:
            return None
        return f"{self._covers_base_url}/b/id/{cover_id}-L.jpg"

    async def get_work_meta(self, work_key: str) -> WorkMeta:
        key = normalize_id(work_key)
        return await self._cache.get_or_set(WORK, key, lambda: self._fetch_work_meta(key))

    async def get_author_works(self, author_key: str, limit: int = 60) -> list[Candidate]:
        key = normalize_id(author_key)
        return await self._cache.get_or_set(
            AUTHOR, key, lambda: self._fetch_author_works(key, limit)
        )

    async def get_subject_works(self, subject: str, limit: int = 60) -> list[Candidate]:
        return await self._cache.get_or_set(
            SUBJECT, subject.lower(), lambda: self._fetch_subject_works(subject, limit)
        )

    async def get_work_ratings(self, work_key: str) -> RatingSummary:
        key = normalize_id(work_key)
        return await self._cache.get_or_set(RATING, key, lambda: self._fetch_ratings(key))

    async def _fetch_work_meta(self, key: str) -> WorkMeta:
        try:
            data = await self._catalog.get_work(key)
        except CatalogError as exc:
            logger.warning("Work lookup failed for %s: %s", key, exc)
            return WorkMeta(key=key)

        subjects = [s for s in _as_list(data.get("subjects")) if isinstance(s, str)]
        author_keys = []
        for entry in _as_list(data.get("authors")):
            author = entry.get("author") if isinstance(entry, dict) else None
            if isinstance(author, dict) and author.get("key"):
                author_keys.append(author["key"])
        return WorkMeta(
            key=key,
            title=data.get("title") or "",
            subjects=tuple(subjects[:MAX_WORK_SUBJECTS]),
            author_keys=tuple(author_keys),
        )

    async def _fetch_author_works(self, key: str, limit: int) -> list[Candidate]:
        try:
            data = await self._catalog.get_author_works(key, limit)
        except CatalogError as exc:
            logger.warning("Author works lookup failed for %s: %s", key, exc)
            return []

        name = data.get("name") or ""
        works = []
        for entry in _as_list(data.get("entries")):
            if not isinstance(entry, dict):
                continue
            cover_id = _first_int(entry.get("covers"))
            works.append(
                Candidate(
                    id=entry.get("key") or "",
                    title=entry.get("title") or "",
                    author=name,
                    authors=[name],
                    cover_id=cover_id,
                    image=self.cover_url(cover_id),
                    edition_count=entry.get("edition_count") or 0,
                    origin=ORIGIN_AUTHOR,
                )
            )
        logger.debug("Author %s: %d works", key, len(works))
        return works

    async def _fetch_subject_works(self, subject: str, limit: int) -> list[Candidate]:
        try:
            data = await self._catalog.get_subject_works(subject, limit)
        except CatalogError as exc:
            logger.warning("Subject works lookup failed for %r: %s", subject, exc)
            return []

        works = []
        for work in _as_list(data.get("works")):
            if not isinstance(work, dict):
                continue
            names = [
                a["name"]
                for a in _as_list(work.get("authors"))
                if isinstance(a, dict) and a.get("name")
            ]
            cover_id = work.get("cover_id") or None
            average = work.get("ratings_average")
            works.append(
                Candidate(
                    id=work.get("key") or "",
                    title=work.get("title") or "",
                    author=names[0] if names else "",
                    authors=names,
                    cover_id=cover_id,
                    image=self.cover_url(cover_id),
                    edition_count=work.get("edition_count") or 0,
                    ratings_average=(
                        float(average)
                        if isinstance(average, (int, float)) and not isinstance(average, bool)
                        else None
                    ),
                    first_publish_year=work.get("first_publish_year") or None,
                    origin=ORIGIN_SUBJECT,
                    subject_tag=subject,
                )
            )
        logger.debug("Subject %r: %d works", subject, len(works))
        return works

    async def _fetch_ratings(self, key: str) -> RatingSummary:
        try:
            data = await self._catalog.get_ratings(key)
        except CatalogError as exc:
            logger.warning("Ratings lookup failed for %s: %s", key, exc)
            return RatingSummary()

        summary = data.get("summary") if isinstance(data.get("summary"), dict) else {}
        # a null summary field falls back to the top-level one
        average = summary.get("average")
        if average is None:
            average = data.get("average")
        count = summary.get("count")
        if count is None:
            count = data.get("count")
        average = _as_number(average)
        count = _as_number(count)
        return RatingSummary(average=average, count=int(count) if count is not None else None)
