"""
Feed Schemas - Pydantic models for titles and ranked feed items
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class TitleResponse(BaseModel):
    """Schema for a catalog title (matches database model)"""
    id: int
    kind: str = Field(..., description="'movie' or 'tv'")
    name: str
    year: Optional[int] = None
    runtime_min: Optional[int] = None
    poster_url: Optional[str] = None
    trailer_url: Optional[str] = None
    overview: Optional[str] = ""
    genres: List[str] = []
    vibes: List[str] = []
    popularity: float = 0.0
    rating: float = 0.0
    adult: bool = False

    @field_validator('genres', 'vibes', mode='before')
    @classmethod
    def empty_tags(cls, v):
        """Catalog rows may carry NULL tag lists"""
        return v or []

    class Config:
        from_attributes = True


class FeedItem(TitleResponse):
    """
    A title decorated with per-request ranking data.
    Never persisted; recomputed on every feed call.
    """
    priority_score: float = Field(..., description="Ranking score used to order the deck")
    group_interest: int = Field(0, description="How many other group members swiped yes")
