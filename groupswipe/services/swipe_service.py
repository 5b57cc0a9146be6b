"""
Swipe Service - Stores swipes and triggers match checks
"""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
import logging

from groupswipe.exceptions import DuplicateSwipeError
from groupswipe.schemas.swipe import SwipeCreate, SwipeResponse, SwipeResult
from groupswipe.services.match_service import MatchService
from groupswipe.stores import GroupStore, SwipeStore

logger = logging.getLogger(__name__)


class SwipeService:
    """Service for swipe operations"""

    @staticmethod
    def record_swipe(db: Session, user_id: int, swipe_data: SwipeCreate) -> SwipeResult:
        """
        Store a swipe, then check for a match if it was made in a group.

        Every group swipe is checked, not only yes swipes: the vote that
        completes participation may be a no and still close a majority match.
        The swipe is the durable fact: a failed match check never fails
        the request. Solo swipes never reach the match checker.

        Raises:
            HTTPException 403: user is not a member of the group
            HTTPException 409: title already swiped in this context
            DataAccessError: the swipe could not be stored
        """
        group_id = swipe_data.group_id

        if group_id is not None and not GroupStore(db).is_member(group_id, user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not a member of this group"
            )

        try:
            swipe = SwipeStore(db).insert(
                group_id=group_id,
                user_id=user_id,
                title_id=swipe_data.title_id,
                decision=swipe_data.decision
            )
        except DuplicateSwipeError:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Title already swiped"
            )

        logger.info(
            f"User {user_id} swiped {swipe_data.decision} on title {swipe_data.title_id} (group={group_id})"
        )
        result = SwipeResult(swipe=SwipeResponse.model_validate(swipe))

        if group_id is not None:
            decision = MatchService.check_for_match(db, group_id, swipe_data.title_id)
            result.match = decision
            if decision is not None and decision.is_match:
                MatchService.record_match(db, group_id, swipe_data.title_id, decision)

        return result
