"""
Match Routes - Group match history and on-demand match checks
"""

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session
from typing import List

from groupswipe.database import get_db
from groupswipe.models.profile import Profile
from groupswipe.schemas.match import MatchDecision, MatchResponse
from groupswipe.services.match_service import MatchService
from groupswipe.stores import GroupStore
from groupswipe.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/groups/{group_id}/matches", tags=["Matches"])


def ensure_member(db: Session, group_id: int, user: Profile) -> None:
    if not GroupStore(db).is_member(group_id, user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this group"
        )


@router.get("", response_model=List[MatchResponse])
def list_matches(
    group_id: int = Path(..., gt=0),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get all matches of a group, newest first"""
    ensure_member(db, group_id, current_user)
    return MatchService.list_matches(db, group_id)


@router.get("/check/{title_id}", response_model=MatchDecision)
def check_match(
    group_id: int = Path(..., gt=0),
    title_id: int = Path(..., gt=0),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Evaluate the group's votes on a title

    No match is reported until every member has swiped on it.
    """
    ensure_member(db, group_id, current_user)

    decision = MatchService.check_for_match(db, group_id, title_id)
    if decision is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Match check unavailable, try again"
        )
    return decision
