from fastapi import HTTPException, status
from sqlalchemy.orm import Session
import logging

from groupswipe.models.group import Group
from groupswipe.schemas.group import ThresholdUpdate
from groupswipe.stores import GroupStore

logger = logging.getLogger(__name__)


class GroupService:
    """Service for group settings"""

    @staticmethod
    def update_match_threshold(
        db: Session,
        user_id: int,
        group_id: int,
        threshold_data: ThresholdUpdate
    ) -> Group:
        """
        Change the group's match rule. Only the owner may do this.

        The new rule applies to match checks from now on; matches already
        recorded keep the rule they fired under.

        Raises:
            HTTPException 404: group does not exist
            HTTPException 403: user is not the group owner
        """
        groups = GroupStore(db)
        group = groups.get(group_id)

        if group is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Group not found"
            )

        if group.owner_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the group owner can change the match threshold"
            )

        if group.match_threshold == threshold_data.match_threshold:
            return group

        previous = group.match_threshold
        group = groups.set_threshold(group, threshold_data.match_threshold)
        logger.info(f"Group {group_id} match threshold changed: {previous} -> {group.match_threshold}")
        return group
