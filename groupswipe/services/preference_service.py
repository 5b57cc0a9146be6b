from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from groupswipe.models.preference import Preference
from groupswipe.schemas.preference import PreferenceUpdate
from groupswipe.stores import GroupStore, PreferenceStore


class PreferenceService:
    """Service for per-group taste profiles"""

    @staticmethod
    def _ensure_member(db: Session, user_id: int, group_id: int) -> None:
        if not GroupStore(db).is_member(group_id, user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not a member of this group"
            )

    @staticmethod
    def get_preferences(db: Session, user_id: int, group_id: int) -> Preference:
        PreferenceService._ensure_member(db, user_id, group_id)

        preference = PreferenceStore(db).get(user_id, group_id)
        if preference is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No preferences saved for this group"
            )
        return preference

    @staticmethod
    def upsert_preferences(
        db: Session,
        user_id: int,
        group_id: int,
        preference_data: PreferenceUpdate
    ) -> Preference:
        """Create the profile or replace every field of the existing one"""
        PreferenceService._ensure_member(db, user_id, group_id)

        return PreferenceStore(db).upsert(
            user_id=user_id,
            group_id=group_id,
            genres=preference_data.genres,
            moods=preference_data.moods,
            services=preference_data.services,
            max_runtime_min=preference_data.max_runtime_min
        )
