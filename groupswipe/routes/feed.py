"""
Feed Routes
Endpoint for the ranked, paginated swipe deck
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from groupswipe.database import get_db
from groupswipe.models.profile import Profile
from groupswipe.schemas.feed import FeedItem
from groupswipe.services.feed_service import FeedService
from groupswipe.stores import GroupStore
from groupswipe.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/feed", tags=["Feed"])


@router.get("", response_model=List[FeedItem])
def get_feed(
    group_id: Optional[int] = Query(None, description="Group context; omit for solo mode"),
    limit: Optional[int] = Query(None, description="Page size (default 50)"),
    offset: int = Query(0, description="Items already delivered in this browsing session"),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get the next page of the current user's deck

    **Ranking:**
    - Titles other group members liked come first
    - Then genre and mood matches with the user's preferences
    - Popularity breaks the rest; near-equal titles are shuffled per request

    `offset` counts items already shown in this session, not a stable
    cursor: the ranking is recomputed on every call. An empty list means
    the deck is exhausted.

    **Example:**
    ```
    GET /api/feed?group_id=3&limit=50&offset=50
    ```
    """
    if group_id is not None and not GroupStore(db).is_member(group_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this group"
        )

    return FeedService.generate_feed(
        db,
        user_id=current_user.id,
        group_id=group_id,
        limit=limit,
        offset=offset
    )
