from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from groupswipe.database import get_db
from groupswipe.models.profile import Profile
from groupswipe.schemas.preference import PreferenceResponse, PreferenceUpdate
from groupswipe.services.preference_service import PreferenceService
from groupswipe.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


@router.get("/{group_id}", response_model=PreferenceResponse)
def get_my_preferences(
    group_id: int = Path(..., gt=0),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user's taste profile for a group"""
    return PreferenceService.get_preferences(db, current_user.id, group_id)


@router.put("/{group_id}", response_model=PreferenceResponse)
def save_my_preferences(
    preference_data: PreferenceUpdate,
    group_id: int = Path(..., gt=0),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create or replace the current user's taste profile for a group

    - **genres** / **moods**: boost matching titles in the feed
    - **services**: streaming services the user has
    - **max_runtime_min**: hide titles longer than this
    """
    return PreferenceService.upsert_preferences(db, current_user.id, group_id, preference_data)
