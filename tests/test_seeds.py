"""Tests for favorite-derived seed profiles."""

import pytest

from app.domain.entities import BookSnapshot, FavoriteSeed
from app.services.seeds import DEFAULT_SUBJECTS, SeedLoader
from conftest import FakeCatalog


def favorite(book_id: str, title: str = "", author: str = "") -> FavoriteSeed:
    return FavoriteSeed(book_id=book_id, book=BookSnapshot(title=title, author=author))


@pytest.fixture
def loader(favorites, catalog_service) -> SeedLoader:
    return SeedLoader(favorites, catalog_service)


@pytest.mark.asyncio
async def test_cold_start_profile(loader: SeedLoader):
    profile = await loader.load("42")

    assert profile.subjects == list(DEFAULT_SUBJECTS)
    assert profile.authors == []
    assert profile.favorite_token_sets == [set()]
    assert profile.favorite_ids == set()


@pytest.mark.asyncio
async def test_profile_from_favorites(favorites, fake_catalog: FakeCatalog, loader: SeedLoader):
    fake_catalog.works["/works/OL1W"] = {
        "title": "The Hobbit",
        "subjects": ["Fantasy", "Dragons", "Adventure"],
        "authors": [{"author": {"key": "/authors/A1"}}, {"author": {"key": "/authors/A2"}}, {"author": {"key": "/authors/A3"}}],
    }
    fake_catalog.works["/works/OL2W"] = {
        "title": "Treasure Island",
        "subjects": ["Adventure", "Pirates"],
        "authors": [{"author": {"key": "/authors/A2"}}],
    }
    favorites.add("7", favorite("works/OL1W", "The Hobbit", "J.R.R. Tolkien"))
    favorites.add("7", favorite("/works/OL2W", "Treasure Island", "Robert Louis Stevenson"))
    favorites.add("7", favorite("isbn:123", "Local Book", "Someone"))

    profile = await loader.load("7")

    assert profile.favorite_ids == {"/works/OL1W", "/works/OL2W", "/isbn:123"}
    assert "the hobbit::j r r tolkien" in profile.favorite_keys
    # "adventure" appears twice; ties keep first-seen order
    assert profile.subjects == ["adventure", "fantasy", "dragons", "pirates"]
    assert profile.authors == ["/authors/A1", "/authors/A2"]
    assert len(profile.favorite_token_sets) == 2
    assert {"hobbit", "fantasy", "dragons"} <= profile.favorite_token_sets[0]
    # non-work favorites are never looked up in the catalog
    assert fake_catalog.count("work") == 2


@pytest.mark.asyncio
async def test_subject_and_author_caps(favorites, fake_catalog: FakeCatalog, loader: SeedLoader):
    for i in range(10):
        key = f"/works/OL{i}W"
        fake_catalog.works[key] = {
            "title": f"Book {i}",
            "subjects": [f"topic {i}-{j}" for j in range(8)],
            "authors": [{"author": {"key": f"/authors/A{i}"}}],
        }
        favorites.add("1", favorite(key, f"Book {i}", "x"))

    profile = await loader.load("1")

    # only the first 8 favorites are seeds; 6 subjects each, top 10 kept
    assert fake_catalog.count("work") == 8
    assert len(profile.subjects) == 10
    assert profile.subjects[:6] == [f"topic 0-{j}" for j in range(6)]
    assert profile.authors == [f"/authors/A{i}" for i in range(8)]


@pytest.mark.asyncio
async def test_favorites_without_catalog_seeds_give_empty_profile(favorites, fake_catalog: FakeCatalog, loader: SeedLoader):
    favorites.add("3", favorite("local-1", "My Diary", "Me"))

    profile = await loader.load("3")

    assert profile.subjects == []
    assert profile.authors == []
    assert fake_catalog.count("work") == 0
    assert profile.favorite_ids == {"/local-1"}
    assert profile.favorite_token_sets == []
