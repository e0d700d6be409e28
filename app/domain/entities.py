"""Plain records passed through the recommendation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

ORIGIN_AUTHOR = "author"
ORIGIN_SUBJECT = "subject"


@dataclass(frozen=True)
class BookSnapshot:
    """The stored book a favorite points at."""

    title: str = ""
    author: str = ""
    category: str | None = None


@dataclass(frozen=True)
class FavoriteSeed:
    """A book the user marked as favorite."""

    book_id: str
    book: BookSnapshot = field(default_factory=BookSnapshot)


@dataclass(frozen=True)
class WorkMeta:
    """Normalised view of an OpenLibrary work."""

    key: str
    title: str = ""
    subjects: tuple[str, ...] = ()
    author_keys: tuple[str, ...] = ()


@dataclass(frozen=True)
class RatingSummary:
    average: float | None = None
    count: int | None = None


@dataclass
class Candidate:
    """
    A recommendable book gathered from the catalog.

    Instances held in the cache are shared; the pool builder hands the
    rating hydrator per-request copies to mutate.
    """

    id: str
    title: str = ""
    author: str = ""
    authors: list[str] = field(default_factory=list)
    image: str | None = None
    cover_id: int | None = None
    edition_count: int = 0
    ratings_average: float | None = None
    ratings_count: int | None = None
    first_publish_year: int | None = None
    origin: str = ORIGIN_SUBJECT
    subject_tag: str | None = None
    description: str = ""
    category: str = ""

    @property
    def primary_author(self) -> str:
        if self.author:
            return self.author
        return self.authors[0] if self.authors else ""


@dataclass
class SeedProfile:
    """What a user's favorites say about their taste."""

    favorite_ids: set[str] = field(default_factory=set)
    favorite_keys: set[str] = field(default_factory=set)
    subjects: list[str] = field(default_factory=list)
    authors: list[str] = field(default_factory=list)
    favorite_token_sets: list[set[str]] = field(default_factory=list)


@dataclass
class ScoredCandidate:
    candidate: Candidate
    score: float
    tokens: set[str]
