"""
Rating Service - Members rate a matched title after watching it
Follows the same add-or-update pattern as PreferenceService
"""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from groupswipe.models.match import Match
from groupswipe.models.rating import MatchRating
from groupswipe.schemas.rating import RatingCreate
from groupswipe.stores import GroupStore, MatchStore, RatingStore

logger = logging.getLogger(__name__)


class RatingService:
    """Service for match rating operations"""

    @staticmethod
    def _get_match_for_member(db: Session, user_id: int, match_id: int) -> Match:
        """
        Load a match the user is allowed to rate

        Raises:
            HTTPException 404: match does not exist
            HTTPException 403: user is not a member of the match's group
        """
        match = MatchStore(db).get_by_id(match_id)
        if match is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Match not found"
            )

        if not GroupStore(db).is_member(match.group_id, user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not a member of this group"
            )
        return match

    @staticmethod
    def add_or_update_rating(
        db: Session,
        user_id: int,
        match_id: int,
        rating_data: RatingCreate
    ) -> MatchRating:
        """
        Add a new rating or update the existing one
        Rating the same match again replaces both stars and reaction.

        Args:
            db: Database session
            user_id: User ID
            match_id: Match being rated
            rating_data: RatingCreate schema with stars and optional reaction

        Returns:
            MatchRating object
        """
        match = RatingService._get_match_for_member(db, user_id, match_id)

        rating = RatingStore(db).upsert(
            group_id=match.group_id,
            user_id=user_id,
            title_id=match.title_id,
            rating=rating_data.rating,
            reaction=rating_data.reaction
        )
        logger.info(f"User {user_id} rated title {match.title_id} in group {match.group_id}: {rating.rating} stars")
        return rating

    @staticmethod
    def get_user_rating_for_match(db: Session, user_id: int, match_id: int) -> Optional[MatchRating]:
        """User's rating of a match, or None if not rated yet"""
        match = RatingService._get_match_for_member(db, user_id, match_id)
        return RatingStore(db).get(match.group_id, user_id, match.title_id)
