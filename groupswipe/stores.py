"""
Store layer - thin query objects over the relational database

Each store wraps one table (or one join) and exposes only the reads and
writes the services need. Any SQLAlchemyError is rolled back and
re-raised as DataAccessError so callers deal with one error kind
regardless of the backend.

Usage:
    swipes = SwipeStore(db)
    seen = swipes.swiped_title_ids(user_id, group_id)
"""
from functools import wraps
from typing import Callable, Iterable, List, Optional, Tuple
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from groupswipe.exceptions import DataAccessError, DuplicateSwipeError
from groupswipe.models.group import Group, GroupMember
from groupswipe.models.match import Match, MatchMember
from groupswipe.models.preference import Preference
from groupswipe.models.profile import Profile
from groupswipe.models.rating import MatchRating
from groupswipe.models.swipe import Swipe, DECISION_YES
from groupswipe.models.title import Title

logger = logging.getLogger(__name__)


def store_call(operation: str) -> Callable:
    """
    Decorator for store methods: converts SQLAlchemy failures into
    DataAccessError and rolls the session back so it stays usable.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.warning(f"Store call {operation} failed: {str(e)}")
                raise DataAccessError(operation, str(e)) from e
        return wrapper
    return decorator


SWIPE_UNIQUE_CONSTRAINT = "unique_user_group_title_swipe"


def _is_duplicate_swipe(error: IntegrityError) -> bool:
    """
    True only for a violation of the (user, group, title) unique constraint.
    Server databases name the constraint; SQLite names the table columns.
    """
    message = str(error.orig)
    return SWIPE_UNIQUE_CONSTRAINT in message or "UNIQUE constraint failed: swipes." in message


class _Store:
    def __init__(self, db: Session):
        self.db = db


class TitleStore(_Store):

    @store_call("titles.query")
    def query(
        self,
        exclude_ids: Iterable[int] = (),
        max_runtime: Optional[int] = None,
        range_start: int = 0,
        range_end: int = 0
    ) -> List[Title]:
        """
        Titles not in exclude_ids, optionally capped by runtime.
        range_start/range_end are inclusive row positions, most popular first.
        """
        query = self.db.query(Title)

        exclude_ids = list(exclude_ids)
        if exclude_ids:
            query = query.filter(~Title.id.in_(exclude_ids))

        # NULL runtimes never satisfy the comparison and drop out
        if max_runtime:
            query = query.filter(Title.runtime_min <= max_runtime)

        if range_end < range_start:
            return []

        return (
            query.order_by(Title.popularity.desc(), Title.id.asc())
            .offset(range_start)
            .limit(range_end - range_start + 1)
            .all()
        )


class SwipeStore(_Store):

    @store_call("swipes.query_user")
    def swiped_title_ids(self, user_id: int, group_id: Optional[int]) -> List[int]:
        """Title ids the user swiped in this context (group, or solo when None)"""
        query = self.db.query(Swipe.title_id).filter(Swipe.user_id == user_id)

        if group_id is not None:
            query = query.filter(Swipe.group_id == group_id)
        else:
            query = query.filter(Swipe.group_id.is_(None))

        return [row.title_id for row in query.all()]

    @store_call("swipes.query_group_likes")
    def group_yes_swipes(self, group_id: int, exclude_user_id: int) -> List[Tuple[int, int]]:
        """(title_id, user_id) for every yes swipe by other members of the group"""
        rows = self.db.query(Swipe.title_id, Swipe.user_id).filter(
            Swipe.group_id == group_id,
            Swipe.decision == DECISION_YES,
            Swipe.user_id != exclude_user_id
        ).all()
        return [(row.title_id, row.user_id) for row in rows]

    @store_call("swipes.query_title")
    def title_swipes(self, group_id: int, title_id: int) -> List[Tuple[int, str]]:
        """(user_id, decision) for every swipe on the title in the group"""
        rows = self.db.query(Swipe.user_id, Swipe.decision).filter(
            Swipe.group_id == group_id,
            Swipe.title_id == title_id
        ).order_by(Swipe.id.asc()).all()
        return [(row.user_id, row.decision) for row in rows]

    def insert(self, group_id: Optional[int], user_id: int, title_id: int, decision: str) -> Swipe:
        swipe = Swipe(
            group_id=group_id,
            user_id=user_id,
            title_id=title_id,
            decision=decision
        )
        try:
            self.db.add(swipe)
            self.db.commit()
            self.db.refresh(swipe)
            return swipe
        except IntegrityError as e:
            self.db.rollback()
            if _is_duplicate_swipe(e):
                raise DuplicateSwipeError("swipes.insert", str(e.orig)) from e
            logger.warning(f"Store call swipes.insert failed: {str(e)}")
            raise DataAccessError("swipes.insert", str(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Store call swipes.insert failed: {str(e)}")
            raise DataAccessError("swipes.insert", str(e)) from e


class PreferenceStore(_Store):

    @store_call("preferences.get")
    def get(self, user_id: int, group_id: int) -> Optional[Preference]:
        return self.db.query(Preference).filter(
            Preference.user_id == user_id,
            Preference.group_id == group_id
        ).first()

    @store_call("preferences.upsert")
    def upsert(
        self,
        user_id: int,
        group_id: int,
        genres: List[str],
        moods: List[str],
        services: List[str],
        max_runtime_min: Optional[int]
    ) -> Preference:
        preference = self.db.query(Preference).filter(
            Preference.user_id == user_id,
            Preference.group_id == group_id
        ).first()

        if preference is None:
            preference = Preference(user_id=user_id, group_id=group_id)
            self.db.add(preference)

        preference.genres = genres
        preference.moods = moods
        preference.services = services
        preference.max_runtime_min = max_runtime_min

        self.db.commit()
        self.db.refresh(preference)
        return preference


class GroupStore(_Store):

    @store_call("group_members.query")
    def members(self, group_id: int) -> List[int]:
        rows = self.db.query(GroupMember.user_id).filter(
            GroupMember.group_id == group_id
        ).all()
        return [row.user_id for row in rows]

    @store_call("group_members.query_member")
    def is_member(self, group_id: int, user_id: int) -> bool:
        return self.db.query(GroupMember.id).filter(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id
        ).first() is not None

    @store_call("groups.get")
    def get(self, group_id: int) -> Optional[Group]:
        return self.db.get(Group, group_id)

    @store_call("groups.update_threshold")
    def set_threshold(self, group: Group, threshold: str) -> Group:
        group.match_threshold = threshold
        self.db.commit()
        self.db.refresh(group)
        return group


class ProfileStore(_Store):

    @store_call("profiles.get")
    def get(self, user_id: int) -> Optional[Profile]:
        return self.db.get(Profile, user_id)


class MatchStore(_Store):

    @store_call("matches.get_by_id")
    def get_by_id(self, match_id: int) -> Optional[Match]:
        return self.db.get(Match, match_id)

    @store_call("matches.get")
    def get(self, group_id: int, title_id: int) -> Optional[Match]:
        return self.db.query(Match).filter(
            Match.group_id == group_id,
            Match.title_id == title_id
        ).first()

    @store_call("matches.insert")
    def insert(self, group_id: int, title_id: int, rule: str, member_ids: List[int]) -> Match:
        match = Match(group_id=group_id, title_id=title_id, rule=rule)
        match.match_members = [MatchMember(user_id=user_id) for user_id in member_ids]
        self.db.add(match)
        self.db.commit()
        self.db.refresh(match)
        return match

    @store_call("matches.for_group")
    def for_group(self, group_id: int) -> List[Match]:
        return self.db.query(Match).options(
            joinedload(Match.title),
            joinedload(Match.match_members).joinedload(MatchMember.profile)
        ).filter(
            Match.group_id == group_id
        ).order_by(Match.created_at.desc(), Match.id.desc()).all()


class RatingStore(_Store):

    @store_call("ratings.get")
    def get(self, group_id: int, user_id: int, title_id: int) -> Optional[MatchRating]:
        return self.db.query(MatchRating).filter(
            MatchRating.group_id == group_id,
            MatchRating.user_id == user_id,
            MatchRating.title_id == title_id
        ).first()

    @store_call("ratings.upsert")
    def upsert(
        self,
        group_id: int,
        user_id: int,
        title_id: int,
        rating: int,
        reaction: Optional[str]
    ) -> MatchRating:
        existing = self.db.query(MatchRating).filter(
            MatchRating.group_id == group_id,
            MatchRating.user_id == user_id,
            MatchRating.title_id == title_id
        ).first()

        if existing is None:
            existing = MatchRating(group_id=group_id, user_id=user_id, title_id=title_id)
            self.db.add(existing)

        existing.rating = rating
        existing.reaction = reaction

        self.db.commit()
        self.db.refresh(existing)
        return existing
