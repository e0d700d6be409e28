"""Favorites port: read access to a user's favorite books."""

from abc import ABC, abstractmethod

from app.domain.entities import FavoriteSeed


class FavoritesPort(ABC):
    """Abstraction for the store holding users' favorite books."""

    @abstractmethod
    async def get_favorite_seeds(self, user_id: str, max_count: int) -> list[FavoriteSeed]:
        """Return up to ``max_count`` favorites with their book snapshot."""
        ...

    @abstractmethod
    async def get_favorite_ids(self, user_id: str, limit: int) -> list[str]:
        """Return up to ``limit`` favorite book IDs."""
        ...
