from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional

from groupswipe.schemas.match import MatchDecision


class SwipeCreate(BaseModel):
    """Schema for recording a swipe"""
    title_id: int = Field(..., description="Catalog title ID", gt=0)
    group_id: Optional[int] = Field(None, description="Group context; omit for solo swiping")
    decision: Literal["yes", "no"]


class SwipeResponse(BaseModel):
    id: int
    user_id: int
    group_id: Optional[int] = None
    title_id: int
    decision: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SwipeResult(BaseModel):
    """Stored swipe plus the match decision it triggered, if any"""
    swipe: SwipeResponse
    match: Optional[MatchDecision] = None
