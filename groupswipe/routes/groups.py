from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from groupswipe.database import get_db
from groupswipe.models.profile import Profile
from groupswipe.schemas.group import GroupResponse, ThresholdUpdate
from groupswipe.services.group_service import GroupService
from groupswipe.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/groups", tags=["Groups"])


@router.put("/{group_id}/threshold", response_model=GroupResponse)
def update_match_threshold(
    threshold_data: ThresholdUpdate,
    group_id: int = Path(..., gt=0),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Change how many yes votes make a match (owner only)

    - **majority**: more than half of the members
    - **unanimous**: every member
    """
    return GroupService.update_match_threshold(db, current_user.id, group_id, threshold_data)
