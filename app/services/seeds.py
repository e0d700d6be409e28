"""Derive a taste profile from a user's favorite books."""

import asyncio
import logging

from app.domain.entities import FavoriteSeed, SeedProfile, WorkMeta
from app.ports.favorites import FavoritesPort
from app.services.catalog import CatalogService
from app.services.similarity import book_key, extract_tokens, normalize_id

logger = logging.getLogger(__name__)

MAX_SEED_FAVORITES = 8
MAX_SUBJECTS_PER_SEED = 6
MAX_AUTHORS_PER_SEED = 2
MAX_PROFILE_SUBJECTS = 10
MAX_PROFILE_AUTHORS = 8
WORK_PREFIX = "/works/"

DEFAULT_SUBJECTS = ("fiction", "fantasy", "mystery", "romance")


def cold_start_profile() -> SeedProfile:
    """Profile for a user without favorites: popular default subjects only."""
    return SeedProfile(
        subjects=list(DEFAULT_SUBJECTS),
        favorite_token_sets=[set()],
    )


class SeedLoader:
    """Builds a ``SeedProfile`` from the first favorites of a user."""

    def __init__(self, favorites: FavoritesPort, catalog: CatalogService) -> None:
        self._favorites = favorites
        self._catalog = catalog

    async def load(self, user_id: str) -> SeedProfile:
        favorites = await self._favorites.get_favorite_seeds(user_id, MAX_SEED_FAVORITES)
        return await self.build_profile(favorites)

    async def build_profile(self, favorites: list[FavoriteSeed]) -> SeedProfile:
        if not favorites:
            return cold_start_profile()

        favorite_ids = {normalize_id(f.book_id) for f in favorites}
        favorite_keys = {book_key(f.book.title, f.book.author) for f in favorites}

        work_keys = [
            key for key in (normalize_id(f.book_id) for f in favorites)
            if key.startswith(WORK_PREFIX)
        ]
        metas: list[WorkMeta] = await asyncio.gather(
            *(self._catalog.get_work_meta(key) for key in work_keys)
        )

        subject_counts: dict[str, int] = {}
        author_keys: dict[str, None] = {}
        token_sets: list[set[str]] = []
        for meta in metas:
            token_sets.append(extract_tokens(meta.title, "", meta.subjects))
            for subject in meta.subjects[:MAX_SUBJECTS_PER_SEED]:
                lowered = subject.lower()
                subject_counts[lowered] = subject_counts.get(lowered, 0) + 1
            for author in meta.author_keys[:MAX_AUTHORS_PER_SEED]:
                author_keys.setdefault(author, None)

        # sorted() is stable, so equal counts keep first-seen order
        ranked = sorted(subject_counts.items(), key=lambda item: -item[1])
        subjects = [subject for subject, _ in ranked[:MAX_PROFILE_SUBJECTS]]
        authors = list(author_keys)[:MAX_PROFILE_AUTHORS]
        logger.debug(
            "Seed profile: %d subjects, %d authors from %d favorites",
            len(subjects), len(authors), len(favorites),
        )

        return SeedProfile(
            favorite_ids=favorite_ids,
            favorite_keys=favorite_keys,
            subjects=subjects,
            authors=authors,
            favorite_token_sets=token_sets,
        )
