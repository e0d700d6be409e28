"""Catalog port: raw access to an OpenLibrary-like book catalog."""

from abc import ABC, abstractmethod
from typing import Any


class CatalogPort(ABC):
    """
    Abstraction over an external book catalog.

    Methods return the catalog's JSON payloads unmodified and raise on
    transport or HTTP errors; callers decide how to degrade.
    """

    @abstractmethod
    async def get_work(self, work_key: str) -> dict[str, Any]:
        """``{title, subjects[], covers[], authors[{author: {key}}]}``"""
        ...

    @abstractmethod
    async def get_author_works(self, author_key: str, limit: int) -> dict[str, Any]:
        """``{name, entries[{key, title, covers[], edition_count}]}``"""
        ...

    @abstractmethod
    async def get_subject_works(self, subject: str, limit: int) -> dict[str, Any]:
        """``{works[{key, title, authors[], cover_id, edition_count, ratings_average, first_publish_year}]}``"""
        ...

    @abstractmethod
    async def get_ratings(self, work_key: str) -> dict[str, Any]:
        """``{summary: {average, count}}``"""
        ...
