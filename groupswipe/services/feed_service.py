"""
Feed Service - Group-aware ranking of unseen titles
Scores a pool of not-yet-swiped titles by group interest, taste profile
match and popularity, then shuffles near-equal candidates so the deck
does not feel repetitive.
"""
from collections import Counter
from typing import Dict, List, Optional
import logging
import os
import random

from sqlalchemy.orm import Session

from groupswipe.exceptions import DataAccessError
from groupswipe.models.preference import Preference
from groupswipe.models.title import Title
from groupswipe.schemas.feed import FeedItem, TitleResponse
from groupswipe.stores import PreferenceStore, SwipeStore, TitleStore

logger = logging.getLogger(__name__)


class FeedService:
    """
    Builds one page of a user's swipe deck per call.

    Ranking (highest first):
    1. What other group members liked (dominant)
    2. Genre matches with the user's preferences
    3. Mood/vibe matches with the user's preferences
    4. Popularity (baseline for cold start)

    The service holds no state between calls; pagination caching is the
    caller's job (see FeedSession).
    """

    DEFAULT_LIMIT = int(os.getenv("FEED_DEFAULT_LIMIT", 50))
    POOL_MULTIPLIER = 4              # Candidates fetched per requested item
    POOL_CAP = int(os.getenv("FEED_POOL_CAP", 200))
    STABLE_TIEBREAK = os.getenv("FEED_STABLE_TIEBREAK", "false").lower() == "true"

    # Scoring weights
    GROUP_INTEREST_WEIGHT = 1000
    GENRE_MATCH_WEIGHT = 100
    VIBE_MATCH_WEIGHT = 50

    # Scores closer than this to the head of their band are shuffled together
    TIE_BAND = 100

    @staticmethod
    def pool_size(limit: int) -> int:
        return min(limit * FeedService.POOL_MULTIPLIER, FeedService.POOL_CAP)

    @staticmethod
    def tally_group_interest(group_likes) -> Dict[int, int]:
        """Count yes votes per title from (title_id, user_id) pairs"""
        return dict(Counter(title_id for title_id, _ in group_likes))

    @staticmethod
    def score_title(
        title: Title,
        group_interest: int = 0,
        preferences: Optional[Preference] = None
    ) -> float:
        """
        Priority score for one candidate.

        Args:
            title: Candidate title
            group_interest: Number of other members who swiped yes on it
            preferences: Taste profile, or None in solo mode

        Returns:
            1000 * interest + 100 * genre matches + 50 * vibe matches + popularity
        """
        score = float(group_interest * FeedService.GROUP_INTEREST_WEIGHT)

        if preferences is not None:
            preferred_genres = set(preferences.genres or [])
            preferred_moods = set(preferences.moods or [])

            genre_matches = sum(1 for genre in (title.genres or []) if genre in preferred_genres)
            vibe_matches = sum(1 for vibe in (title.vibes or []) if vibe in preferred_moods)

            score += genre_matches * FeedService.GENRE_MATCH_WEIGHT
            score += vibe_matches * FeedService.VIBE_MATCH_WEIGHT

        score += title.popularity or 0.0
        return score

    @staticmethod
    def rank_items(
        items: List[FeedItem],
        rng: Optional[random.Random] = None,
        stable_tiebreak: bool = False
    ) -> List[FeedItem]:
        """
        Order items by score, highest first.

        Items whose score is within TIE_BAND of the first item of their band
        are shuffled among themselves, so the order inside a band changes on
        every call while bands keep their relative order. With stable_tiebreak
        the band is ordered by title id instead.
        """
        ordered = sorted(items, key=lambda item: (-item.priority_score, item.id))
        if stable_tiebreak:
            return ordered

        rng = rng or random
        ranked: List[FeedItem] = []
        band: List[FeedItem] = []

        for item in ordered:
            if band and band[0].priority_score - item.priority_score >= FeedService.TIE_BAND:
                rng.shuffle(band)
                ranked.extend(band)
                band = []
            band.append(item)

        rng.shuffle(band)
        ranked.extend(band)
        return ranked

    @staticmethod
    def generate_feed(
        db: Session,
        user_id: int,
        group_id: Optional[int] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        rng: Optional[random.Random] = None,
        stable_tiebreak: Optional[bool] = None
    ) -> List[FeedItem]:
        """
        Generate one page of the user's feed.

        Process:
        1. Load the user's preferences for the group (group mode only)
        2. Load titles the user already swiped in this context
        3. Tally yes swipes by other group members (group mode only)
        4. Fetch a candidate pool of unseen titles (4x limit, max 200)
        5. Score, rank with tie-band shuffle, slice [offset, offset + limit)

        Args:
            db: Database session
            user_id: Requesting user
            group_id: Group context, or None for solo mode
            limit: Page size (default 50)
            offset: Items already delivered in this browsing session
            rng: Random source for the tie-band shuffle
            stable_tiebreak: Order ties by title id instead of shuffling

        Returns:
            Up to `limit` FeedItems; [] when the deck is exhausted

        Raises:
            DataAccessError: Any store read failed
        """
        if limit is None:
            limit = FeedService.DEFAULT_LIMIT
        if stable_tiebreak is None:
            stable_tiebreak = FeedService.STABLE_TIEBREAK

        # Out-of-range paging degrades to an empty page
        if limit <= 0 or offset < 0:
            return []

        logger.info(f"Generating feed for user {user_id} (group={group_id}, limit={limit}, offset={offset})")

        try:
            preferences = None
            if group_id is not None:
                preferences = PreferenceStore(db).get(user_id, group_id)
                if preferences is None:
                    logger.warning(f"No preferences found for user {user_id} in group {group_id}")

            swipe_store = SwipeStore(db)
            swiped_ids = swipe_store.swiped_title_ids(user_id, group_id)
            logger.debug(f"User {user_id} has already swiped {len(swiped_ids)} titles")

            interest: Dict[int, int] = {}
            if group_id is not None:
                interest = FeedService.tally_group_interest(
                    swipe_store.group_yes_swipes(group_id, exclude_user_id=user_id)
                )
                logger.debug(
                    f"Group interest: {len(interest)} titles, max {max(interest.values(), default=0)}"
                )

            max_runtime = preferences.max_runtime_min if preferences is not None else None
            titles = TitleStore(db).query(
                exclude_ids=swiped_ids,
                max_runtime=max_runtime,
                range_start=0,
                range_end=FeedService.pool_size(limit) - 1
            )
        except DataAccessError as e:
            logger.error(f"Failed to generate feed for user {user_id} (group={group_id}): {str(e)}")
            raise

        if not titles:
            logger.warning(f"No titles available for user {user_id} (group={group_id}, swiped={len(swiped_ids)})")
            return []

        logger.debug(f"Fetched title pool of {len(titles)}")

        items = []
        for title in titles:
            group_interest = interest.get(title.id, 0)
            items.append(FeedItem(
                **TitleResponse.model_validate(title).model_dump(),
                priority_score=FeedService.score_title(title, group_interest, preferences),
                group_interest=group_interest
            ))

        ranked = FeedService.rank_items(items, rng=rng, stable_tiebreak=stable_tiebreak)
        page = ranked[offset:offset + limit]

        logger.info(
            f"Feed generated: scored={len(ranked)}, returned={len(page)}, "
            f"top_score={page[0].priority_score if page else None}, "
            f"with_group_interest={sum(1 for item in page if item.group_interest > 0)}"
        )
        return page
