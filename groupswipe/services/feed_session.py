"""
Feed Session - Caller-side swipe loop over the feed

Keeps the deck a client is swiping through: loads page 0, asks for more
when fewer than `refill_threshold` unseen items remain, and serves pages it
has already fetched from a FeedPageCache keyed by offset.

Usage:
    session = FeedSession(
        loader=lambda **kw: FeedService.generate_feed(db, **kw),
        user_id=user.id,
        group_id=group.id,
    )
    session.start()
    while (item := session.current()) is not None:
        ...  # show item, record swipe
        session.advance()
        if session.needs_refill():
            session.load_more()
"""
from typing import Callable, List, Optional
import logging
import os
import time

from groupswipe.schemas.feed import FeedItem
from groupswipe.utils.cache import FeedPageCache

logger = logging.getLogger(__name__)

FeedLoader = Callable[..., List[FeedItem]]


class SwipeCooldown:
    """
    Minimum interval between swipes from one client.
    A UX rate limit, not a correctness guard.
    """

    DEFAULT_INTERVAL_MS = int(os.getenv("SWIPE_COOLDOWN_MS", 300))

    def __init__(self, min_interval_ms: Optional[int] = None, clock: Callable[[], float] = time.monotonic):
        self.min_interval_ms = self.DEFAULT_INTERVAL_MS if min_interval_ms is None else min_interval_ms
        self._clock = clock
        self._last_swipe: Optional[float] = None

    def remaining_ms(self) -> float:
        if self._last_swipe is None:
            return 0.0
        elapsed_ms = (self._clock() - self._last_swipe) * 1000
        return max(0.0, self.min_interval_ms - elapsed_ms)

    def try_acquire(self) -> bool:
        """Claim the next swipe slot; False while still cooling down"""
        if self.remaining_ms() > 0:
            return False
        self._last_swipe = self._clock()
        return True


class FeedSession:
    """One user's deck in one context (group or solo)"""

    REFILL_THRESHOLD = int(os.getenv("FEED_REFILL_THRESHOLD", 5))

    def __init__(
        self,
        loader: FeedLoader,
        user_id: int,
        group_id: Optional[int] = None,
        page_size: int = 50,
        refill_threshold: Optional[int] = None,
        cache: Optional[FeedPageCache] = None
    ):
        self.loader = loader
        self.user_id = user_id
        self.group_id = group_id
        self.page_size = page_size
        self.refill_threshold = self.REFILL_THRESHOLD if refill_threshold is None else refill_threshold
        self.cache = cache if cache is not None else FeedPageCache()

        self.items: List[FeedItem] = []
        self.current_index = 0
        self.exhausted = False

    def _fetch(self, offset: int) -> List[FeedItem]:
        return self.loader(
            user_id=self.user_id,
            group_id=self.group_id,
            limit=self.page_size,
            offset=offset
        )

    def start(self) -> List[FeedItem]:
        """
        Load page 0 from a fresh ranking.

        Cached pages of this (user, group) are dropped first: their offsets
        index into an earlier ranking and may hold titles swiped since.
        """
        self.cache.clear_session(self.user_id, self.group_id)
        self.items = self._fetch(0)
        self.current_index = 0
        self.exhausted = not self.items
        logger.info(f"Feed session started for user {self.user_id} (group={self.group_id}): {len(self.items)} items")
        return self.items

    def current(self) -> Optional[FeedItem]:
        if self.current_index < len(self.items):
            return self.items[self.current_index]
        return None

    def advance(self) -> None:
        if self.current_index < len(self.items):
            self.current_index += 1

    @property
    def remaining(self) -> int:
        return len(self.items) - self.current_index

    def needs_refill(self) -> bool:
        return not self.exhausted and self.remaining < self.refill_threshold

    def load_more(self) -> List[FeedItem]:
        """
        Append the next page. The offset is the number of items delivered
        so far; a cached page for that offset is reused.

        Returns:
            The appended page; [] marks the deck as exhausted
        """
        offset = len(self.items)

        cached = self.cache.get(self.user_id, self.group_id, offset)
        if cached:
            logger.info(f"Using cached feed page at offset {offset} ({len(cached)} items)")
            self.items.extend(cached)
            return cached

        page = self._fetch(offset)
        if page:
            self.cache.set(self.user_id, self.group_id, offset, page)
            self.items.extend(page)
            logger.info(f"Loaded {len(page)} more feed items at offset {offset}")
        else:
            self.exhausted = True
            logger.info(f"No more feed items for user {self.user_id} (group={self.group_id})")
        return page

    def refresh(self) -> List[FeedItem]:
        """Full reload from page 0"""
        return self.start()
