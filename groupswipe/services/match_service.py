"""
Match Service - Decides when a group has agreed on a title
A decision is rendered only after every member has swiped on the title;
the group's threshold (majority or unanimous) then decides the outcome.
"""
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from groupswipe.exceptions import DataAccessError
from groupswipe.models.group import THRESHOLD_MAJORITY, THRESHOLD_UNANIMOUS
from groupswipe.models.swipe import DECISION_YES
from groupswipe.schemas.feed import TitleResponse
from groupswipe.schemas.match import MatchDecision, MatchMemberResponse, MatchResponse
from groupswipe.stores import GroupStore, MatchStore, ProfileStore, SwipeStore

logger = logging.getLogger(__name__)

UNKNOWN_VOTER = "Unknown"


class MatchService:
    """Service for match detection and match history"""

    MIN_MEMBERS = 2  # Solo groups can never match

    @staticmethod
    def threshold_met(threshold: Optional[str], yes_votes: int, total_members: int) -> bool:
        """
        unanimous: every member said yes
        majority: strictly more than half said yes (exactly half is not enough)
        """
        if threshold == THRESHOLD_UNANIMOUS:
            return yes_votes == total_members
        return yes_votes > total_members / 2

    @staticmethod
    def _voter_names(db: Session, voter_ids: List[int]) -> List[str]:
        """Display names for voters; lookups that fail or miss become 'Unknown'"""
        profiles = ProfileStore(db)
        names = []
        for user_id in voter_ids:
            try:
                profile = profiles.get(user_id)
            except DataAccessError as e:
                logger.warning(f"Could not load profile {user_id}: {str(e)}")
                profile = None
            names.append(profile.display_name if profile and profile.display_name else UNKNOWN_VOTER)
        return names

    @staticmethod
    def check_for_match(db: Session, group_id: int, title_id: int) -> Optional[MatchDecision]:
        """
        Check whether a title is a match for the group.
        Call after a group swipe has been stored.

        Args:
            db: Database session
            group_id: Group the swipe belongs to
            title_id: Title that was swiped

        Returns:
            MatchDecision, or None when the check could not be completed.
            Store failures are logged, never raised: the swipe that triggered
            the check is already stored and must not fail because of it.
        """
        try:
            members = GroupStore(db).members(group_id)
            total_members = len(members)

            if total_members < MatchService.MIN_MEMBERS:
                return MatchDecision(is_match=False, total_members=total_members)

            group = GroupStore(db).get(group_id)
            threshold = (group.match_threshold if group else None) or THRESHOLD_MAJORITY

            swipes = SwipeStore(db).title_swipes(group_id, title_id)
            total_swipes = len(swipes)
            yes_voter_ids = [user_id for user_id, decision in swipes if decision == DECISION_YES]
            yes_votes = len(yes_voter_ids)

            decision = MatchDecision(
                is_match=False,
                total_members=total_members,
                total_swipes=total_swipes,
                yes_votes=yes_votes,
                yes_voter_ids=yes_voter_ids,
                threshold=threshold
            )

            # Only decide once every member has voted, even if the yes votes
            # already guarantee the threshold. A straggler's vote must be in
            # before a match is announced.
            if total_swipes != total_members:
                logger.debug(
                    f"Title {title_id} in group {group_id}: {total_swipes}/{total_members} voted, waiting"
                )
                return decision

            if not MatchService.threshold_met(threshold, yes_votes, total_members):
                return decision

            decision.is_match = True
            decision.yes_voter_names = MatchService._voter_names(db, yes_voter_ids)
            logger.info(
                f"Match in group {group_id} on title {title_id}: {yes_votes}/{total_members} ({threshold})"
            )
            return decision

        except DataAccessError as e:
            logger.error(f"Error checking for match (group={group_id}, title={title_id}): {str(e)}", exc_info=True)
            return None

    @staticmethod
    def record_match(db: Session, group_id: int, title_id: int, decision: MatchDecision) -> None:
        """
        Persist a declared match with its yes voters.
        Idempotent per (group, title); failures are logged and ignored.
        """
        matches = MatchStore(db)
        try:
            if matches.get(group_id, title_id) is not None:
                return
            matches.insert(
                group_id=group_id,
                title_id=title_id,
                rule=decision.threshold or THRESHOLD_MAJORITY,
                member_ids=decision.yes_voter_ids
            )
        except DataAccessError as e:
            logger.error(f"Failed to record match (group={group_id}, title={title_id}): {str(e)}")

    @staticmethod
    def list_matches(db: Session, group_id: int) -> List[MatchResponse]:
        """All matches for a group, newest first"""
        results = []
        for match in MatchStore(db).for_group(group_id):
            results.append(MatchResponse(
                id=match.id,
                group_id=match.group_id,
                rule=match.rule,
                created_at=match.created_at,
                title=TitleResponse.model_validate(match.title) if match.title else None,
                members=[
                    MatchMemberResponse(
                        user_id=member.user_id,
                        display_name=member.profile.display_name if member.profile else UNKNOWN_VOTER
                    )
                    for member in match.match_members
                ]
            ))
        return results
