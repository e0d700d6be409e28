"""SQLAlchemy-backed favorites adapter."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.domain.entities import BookSnapshot, FavoriteSeed
from app.domain.models import Favorite
from app.ports.favorites import FavoritesPort

logger = logging.getLogger(__name__)


def _as_user_pk(user_id: str) -> int | None:
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None


class SqlFavoritesAdapter(FavoritesPort):
    """Read favorites from the relational store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_favorite_seeds(self, user_id: str, max_count: int) -> list[FavoriteSeed]:
        """Take the first ``max_count`` favorites in insertion order, with their book."""
        pk = _as_user_pk(user_id)
        if pk is None:
            logger.debug("Non-numeric user id %r has no favorites", user_id)
            return []

        async with self._session_factory() as session:
            result = await session.execute(
                select(Favorite)
                .where(Favorite.user_id == pk)
                .order_by(Favorite.id)
                .limit(max_count)
            )
            favorites = result.unique().scalars().all()

        seeds = []
        for fav in favorites:
            book = fav.book
            snapshot = (
                BookSnapshot(title=book.title or "", author=book.author or "", category=book.category)
                if book is not None
                else BookSnapshot()
            )
            seeds.append(FavoriteSeed(book_id=fav.book_id, book=snapshot))
        return seeds

    async def get_favorite_ids(self, user_id: str, limit: int) -> list[str]:
        pk = _as_user_pk(user_id)
        if pk is None:
            return []

        async with self._session_factory() as session:
            result = await session.execute(
                select(Favorite.book_id)
                .where(Favorite.user_id == pk)
                .order_by(Favorite.id)
                .limit(limit)
            )
            return list(result.scalars().all())
