"""Tests for the SQL and in-memory favorites adapters."""

import pytest

from app.adapters.favorites.memory import InMemoryFavoritesAdapter
from app.adapters.favorites.sql import SqlFavoritesAdapter
from app.domain.entities import BookSnapshot, FavoriteSeed
from app.domain.models import Book, Favorite, User


@pytest.fixture
async def seeded_factory(session_factory):
    async with session_factory() as session:
        session.add_all(
            [
                User(id=1, email="reader@example.com", username="reader"),
                User(id=2, email="other@example.com", username="other"),
                Book(id="/works/OL1W", title="Emma", author="Jane Austen", category="classics"),
                Book(id="/works/OL2W", title="Dune", author="Frank Herbert"),
                Book(id="/works/OL3W", title="Beloved", author="Toni Morrison"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                Favorite(id=1, user_id=1, book_id="/works/OL2W"),
                Favorite(id=2, user_id=2, book_id="/works/OL3W"),
                Favorite(id=3, user_id=1, book_id="/works/OL1W"),
                Favorite(id=4, user_id=1, book_id="/works/OL3W"),
            ]
        )
        await session.commit()
    return session_factory


@pytest.mark.asyncio
async def test_sql_favorite_ids_in_insertion_order(seeded_factory):
    adapter = SqlFavoritesAdapter(seeded_factory)
    assert await adapter.get_favorite_ids("1", 50) == ["/works/OL2W", "/works/OL1W", "/works/OL3W"]
    assert await adapter.get_favorite_ids("1", 2) == ["/works/OL2W", "/works/OL1W"]


@pytest.mark.asyncio
async def test_sql_favorite_seeds_carry_book_snapshot(seeded_factory):
    adapter = SqlFavoritesAdapter(seeded_factory)

    seeds = await adapter.get_favorite_seeds("1", 2)

    assert seeds == [
        FavoriteSeed("/works/OL2W", BookSnapshot("Dune", "Frank Herbert", None)),
        FavoriteSeed("/works/OL1W", BookSnapshot("Emma", "Jane Austen", "classics")),
    ]


@pytest.mark.asyncio
async def test_sql_unknown_or_non_numeric_user(seeded_factory):
    adapter = SqlFavoritesAdapter(seeded_factory)
    assert await adapter.get_favorite_ids("99", 50) == []
    assert await adapter.get_favorite_ids("anonymous", 50) == []
    assert await adapter.get_favorite_seeds("", 8) == []


@pytest.mark.asyncio
async def test_memory_adapter_limits_and_isolation():
    adapter = InMemoryFavoritesAdapter(
        {7: [FavoriteSeed("/works/OL1W"), FavoriteSeed("/works/OL2W")]}
    )
    adapter.add("7", FavoriteSeed("/works/OL3W"))

    assert await adapter.get_favorite_ids("7", 2) == ["/works/OL1W", "/works/OL2W"]
    assert len(await adapter.get_favorite_seeds("7", 8)) == 3
    assert await adapter.get_favorite_ids("8", 50) == []
