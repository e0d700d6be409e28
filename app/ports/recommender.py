"""Recommender port: abstract interface for the recommendation engine."""

from abc import ABC, abstractmethod
from typing import Any


class RecommenderPort(ABC):
    """Abstraction for the personal book recommendation engine."""

    @abstractmethod
    async def get_personal_recommendations(
        self,
        user_id: str,
        seed: str,
    ) -> list[dict[str, Any]]:
        """Return up to 24 book records, deterministically ordered by ``seed``."""
        ...
