"""Shape pipeline candidates into the public book record."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from app.domain.entities import Candidate
from app.services.catalog import DEFAULT_COVERS_URL
from app.services.similarity import normalize_id

logger = logging.getLogger(__name__)

BookMapper = Callable[[Candidate], Mapping[str, Any] | None]

DEFAULT_TITLE = "Untitled"
DEFAULT_AUTHOR = "Unknown"


class ResultFormatter:
    """
    Maps candidates to ``{id, title, author, image, description, rating,
    category, publishedDate}``.

    An optional ``mapper`` may take over the shaping; its output is used
    only when it carries a non-empty ``id`` and ``title``. A mapper that
    raises is logged and bypassed.
    """

    def __init__(
        self,
        mapper: BookMapper | None = None,
        covers_base_url: str = DEFAULT_COVERS_URL,
    ) -> None:
        self._mapper = mapper
        self._covers_base_url = covers_base_url.rstrip("/")

    def format(self, candidate: Candidate) -> dict[str, Any]:
        if self._mapper is not None:
            try:
                mapped = self._mapper(candidate)
            except Exception as exc:
                logger.warning("Book mapper failed for %s: %s", candidate.id, exc)
            else:
                if isinstance(mapped, Mapping) and mapped.get("id") and mapped.get("title"):
                    return dict(mapped)
                logger.debug("Book mapper returned no usable record for %s", candidate.id)
        return self._default_format(candidate)

    def format_many(self, candidates: list[Candidate]) -> list[dict[str, Any]]:
        return [self.format(c) for c in candidates]

    def _default_format(self, candidate: Candidate) -> dict[str, Any]:
        image = candidate.image
        if not image and candidate.cover_id:
            image = f"{self._covers_base_url}/b/id/{candidate.cover_id}-L.jpg"
        return {
            "id": normalize_id(candidate.id),
            "title": candidate.title or DEFAULT_TITLE,
            "author": candidate.primary_author or DEFAULT_AUTHOR,
            "image": image,
            "description": candidate.description or "",
            "rating": candidate.ratings_average,
            "category": candidate.category or candidate.subject_tag or "",
            "publishedDate": candidate.first_publish_year,
        }
