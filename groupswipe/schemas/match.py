from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from groupswipe.schemas.feed import TitleResponse


class MatchDecision(BaseModel):
    """Outcome of evaluating a group's votes on one title"""
    is_match: bool
    total_members: int
    yes_votes: int = 0
    total_swipes: int = 0
    yes_voter_ids: List[int] = []
    yes_voter_names: List[str] = Field([], description="Display names aligned with yes_voter_ids")
    threshold: Optional[str] = None


class MatchMemberResponse(BaseModel):
    user_id: int
    display_name: str


class MatchResponse(BaseModel):
    """Schema for a stored match with its title and yes voters"""
    id: int
    group_id: int
    rule: str
    created_at: Optional[datetime] = None
    title: Optional[TitleResponse] = None
    members: List[MatchMemberResponse] = []
