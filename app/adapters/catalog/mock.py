import asyncio
import logging
import zlib
from typing import Any

from app.ports.catalog import CatalogPort

logger = logging.getLogger(__name__)

MOCK_SUBJECTS = ("fiction", "adventure", "fantasy", "mystery", "romance", "classics")


def _stable_int(text: str, modulo: int) -> int:
    return zlib.crc32(text.encode("utf-8")) % modulo


def _slug(text: str) -> str:
    return "".join(ch if ch.isalnum() else "-" for ch in text.lower()).strip("-")


class MockCatalogAdapter(CatalogPort):
    """
    Mock catalog for development and tests without network access.

    Returns deterministic, realistic-looking OpenLibrary payloads derived
    from the requested key, so repeated calls always agree.
    """

    def __init__(self, works_per_list: int = 30, latency: float = 0.0) -> None:
        self._works_per_list = works_per_list
        self._latency = latency

    async def _simulate_latency(self) -> None:
        if self._latency:
            await asyncio.sleep(self._latency)

    async def get_work(self, work_key: str) -> dict[str, Any]:
        await self._simulate_latency()
        offset = _stable_int(work_key, len(MOCK_SUBJECTS))
        subjects = [MOCK_SUBJECTS[(offset + i) % len(MOCK_SUBJECTS)] for i in range(3)]
        logger.info("MockCatalog: get_work %s", work_key)
        return {
            "key": work_key,
            "title": f"Mock Work {work_key.rsplit('/', 1)[-1]}",
            "subjects": [s.title() for s in subjects],
            "covers": [_stable_int(work_key, 90000) + 1],
            "authors": [{"author": {"key": f"/authors/MOCK{offset}A"}}],
        }

    async def get_author_works(self, author_key: str, limit: int) -> dict[str, Any]:
        await self._simulate_latency()
        slug = _slug(author_key)
        count = min(limit, self._works_per_list)
        entries = [
            {
                "key": f"/works/MOCK-{slug}-{i}W",
                "title": f"Collected Tales {i} of {slug}",
                "covers": [2000 + i] if i % 4 else [],
                "edition_count": (i * 5) % 17,
            }
            for i in range(count)
        ]
        logger.info("MockCatalog: get_author_works %s (%d entries)", author_key, len(entries))
        return {"name": f"Author {slug}", "entries": entries}

    async def get_subject_works(self, subject: str, limit: int) -> dict[str, Any]:
        await self._simulate_latency()
        slug = _slug(subject)
        count = min(limit, self._works_per_list)
        works = [
            {
                "key": f"/works/MOCK-{slug}-{i}W",
                "title": f"The {subject.title()} Chronicle {i}",
                "authors": [{"key": f"/authors/MOCK{i % 7}A", "name": f"Writer {i % 7}"}],
                "cover_id": 1000 + i if i % 5 else None,
                "edition_count": (i * 3) % 20,
                "first_publish_year": 1950 + i,
            }
            for i in range(count)
        ]
        logger.info("MockCatalog: get_subject_works %s (%d works)", subject, len(works))
        return {"name": subject, "works": works}

    async def get_ratings(self, work_key: str) -> dict[str, Any]:
        await self._simulate_latency()
        return {
            "summary": {
                "average": 2.5 + _stable_int(work_key, 25) / 10,
                "count": _stable_int(work_key + ":count", 400),
            }
        }
