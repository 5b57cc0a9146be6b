"""
Rating Schemas - Star ratings and reactions on matched titles
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from groupswipe.schemas.validation import SafeStringMixin

MIN_STARS = 1
MAX_STARS = 5
MAX_REACTION_LENGTH = 500


class RatingCreate(BaseModel, SafeStringMixin):
    """Schema for creating/updating a rating of a match"""
    rating: int = Field(..., description="Stars (1-5)", ge=MIN_STARS, le=MAX_STARS)
    reaction: Optional[str] = Field(None, description="Free-text reaction", max_length=MAX_REACTION_LENGTH)

    @field_validator('reaction')
    @classmethod
    def clean_reaction(cls, v):
        if v is not None:
            v = v.strip()
        if not v:
            return None
        v = cls.validate_no_script(v)
        return cls.sanitize_html(v)


class RatingResponse(BaseModel):
    id: int
    group_id: int
    user_id: int
    title_id: int
    rating: int
    reaction: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserRatingForMatch(BaseModel):
    """
    The current user's rating of a match
    Returns null values if the user hasn't rated it yet
    """
    rating: Optional[int] = Field(None, description="User's stars (1-5) or None if not rated")
    reaction: Optional[str] = None
    rating_id: Optional[int] = Field(None, description="Rating ID if exists")
