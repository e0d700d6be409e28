import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.ports.catalog import CatalogPort

logger = logging.getLogger(__name__)


class OpenLibraryCatalogAdapter(CatalogPort):
    """Catalog adapter backed by the public OpenLibrary JSON API."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a JSON document, raising ``httpx.HTTPError`` on failure."""
        url = f"{self._base_url}{path}"
        logger.debug("OpenLibrary request: %s params=%s", url, params)
        if self._client is not None:
            resp = await self._client.get(url, params=params, timeout=self._timeout)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(url, params=params)
        resp.raise_for_status()
        data = resp.json()
        return data if isinstance(data, dict) else {}

    async def get_work(self, work_key: str) -> dict[str, Any]:
        return await self._get(f"{work_key}.json")

    async def get_author_works(self, author_key: str, limit: int) -> dict[str, Any]:
        return await self._get(f"{author_key}/works.json", params={"limit": limit})

    async def get_subject_works(self, subject: str, limit: int) -> dict[str, Any]:
        return await self._get(
            f"/subjects/{quote(subject, safe='')}.json", params={"limit": limit}
        )

    async def get_ratings(self, work_key: str) -> dict[str, Any]:
        return await self._get(f"{work_key}/ratings.json")
