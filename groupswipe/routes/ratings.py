"""
Rating Routes - Rate a match after the group watched it
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from groupswipe.database import get_db
from groupswipe.models.profile import Profile
from groupswipe.schemas.rating import RatingCreate, RatingResponse, UserRatingForMatch
from groupswipe.services.rating_service import RatingService
from groupswipe.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/matches", tags=["Ratings"])


@router.post("/{match_id}/rating", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
def add_or_update_rating(
    rating_data: RatingCreate,
    match_id: int = Path(..., description="Match ID", gt=0),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Rate a matched title

    - **rating**: 1 to 5 stars (required)
    - **reaction**: free-text reaction, up to 500 characters (optional)

    If the user has already rated this match, the rating is replaced.
    """
    return RatingService.add_or_update_rating(db, current_user.id, match_id, rating_data)


@router.get("/{match_id}/rating", response_model=UserRatingForMatch)
def get_my_rating_for_match(
    match_id: int = Path(..., description="Match ID", gt=0),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the current user's rating of a match

    Returns null values if the user hasn't rated it yet.
    """
    rating = RatingService.get_user_rating_for_match(db, current_user.id, match_id)

    if rating:
        return {
            "rating": rating.rating,
            "reaction": rating.reaction,
            "rating_id": rating.id
        }

    return {
        "rating": None,
        "reaction": None,
        "rating_id": None
    }
