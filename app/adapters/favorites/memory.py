"""In-memory favorites adapter for development and tests."""

from collections import defaultdict

from app.domain.entities import FavoriteSeed
from app.ports.favorites import FavoritesPort


class InMemoryFavoritesAdapter(FavoritesPort):
    """Keeps favorites per user in insertion order."""

    def __init__(self, favorites: dict[str, list[FavoriteSeed]] | None = None) -> None:
        self._favorites: dict[str, list[FavoriteSeed]] = defaultdict(list)
        for user_id, seeds in (favorites or {}).items():
            self._favorites[str(user_id)].extend(seeds)

    def add(self, user_id: str, seed: FavoriteSeed) -> None:
        self._favorites[str(user_id)].append(seed)

    async def get_favorite_seeds(self, user_id: str, max_count: int) -> list[FavoriteSeed]:
        return list(self._favorites.get(str(user_id), [])[:max_count])

    async def get_favorite_ids(self, user_id: str, limit: int) -> list[str]:
        return [seed.book_id for seed in self._favorites.get(str(user_id), [])[:limit]]
