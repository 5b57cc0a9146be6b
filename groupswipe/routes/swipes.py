"""
Swipe Routes - Record yes/no decisions
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from groupswipe.database import get_db
from groupswipe.models.profile import Profile
from groupswipe.schemas.swipe import SwipeCreate, SwipeResult
from groupswipe.services.swipe_service import SwipeService
from groupswipe.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/swipes", tags=["Swipes"])


@router.post("", response_model=SwipeResult, status_code=status.HTTP_201_CREATED)
def record_swipe(
    swipe_data: SwipeCreate,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Record a swipe on a title

    - **title_id**: Catalog title ID (required)
    - **group_id**: Group context; omit when swiping solo
    - **decision**: "yes" or "no"

    A swipe in a group runs the match check; `match` carries the
    decision (null when the check could not be completed or was not run).
    """
    return SwipeService.record_swipe(db, current_user.id, swipe_data)
