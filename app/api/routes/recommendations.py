"""Personal recommendation routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_recommendation_service
from app.api.schemas import PersonalRecommendationsRequest, RecommendedBook
from app.ports.recommender import RecommenderPort

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


def default_seed(user_id: str | None) -> str:
    """One seed per user per UTC day, so the order changes daily."""
    if not user_id:
        return "anon"
    return f"{user_id}-{datetime.now(timezone.utc).date().isoformat()}"


@router.post("/personal", response_model=list[RecommendedBook])
async def get_personal_recommendations(
    data: PersonalRecommendationsRequest,
    recommender: RecommenderPort = Depends(get_recommendation_service),
) -> list[dict]:
    """Get up to 24 personalised book suggestions for a user."""
    user_id = str(data.user_id) if data.user_id is not None else None
    seed = data.seed if data.seed is not None else default_seed(user_id)

    try:
        return await recommender.get_personal_recommendations(user_id or "", seed)
    except Exception as exc:
        logger.exception("Recommendation pipeline failed for user=%s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error generating recommendations",
        ) from exc
