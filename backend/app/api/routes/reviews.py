"""Site-wide review feed."""
from typing import Any

from fastapi import APIRouter
from sqlmodel import col, select

from app.api.deps import SessionDep
from app.models import Character, RecentReviewPublic, RecentReviewsPublic, Review
from nikkedex import time_ago
from nikkedex.constants import RECENT_REVIEWS_DEFAULT, RECENT_REVIEWS_MAX
from nikkedex.formatting import review_preview

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/recent", response_model=RecentReviewsPublic)
def list_recent_reviews(session: SessionDep, limit: int = RECENT_REVIEWS_DEFAULT) -> Any:
    """Newest reviews across all characters. `limit` is clamped to 1..100."""
    limit = max(1, min(RECENT_REVIEWS_MAX, limit))
    rows = session.exec(
        select(Review, Character)
        .join(Character, col(Review.character_slug) == col(Character.slug))
        .order_by(col(Review.created_at).desc(), col(Review.id).desc())
        .limit(limit)
    ).all()
    data = [
        RecentReviewPublic(
            id=review.id,
            character_slug=review.character_slug,
            character_name=character.name,
            small_image_url=character.small_image_url,
            small_image_width=character.small_image_width,
            small_image_height=character.small_image_height,
            nickname=review.nickname,
            rating=review.rating,
            content=review.content,
            preview=review_preview(review.content),
            created_at=review.created_at,
            time_ago=time_ago(review.created_at),
        )
        for review, character in rows
    ]
    return RecentReviewsPublic(data=data, count=len(data))
