from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


class ThresholdUpdate(BaseModel):
    """Schema for changing how many yes votes make a match"""
    match_threshold: Literal["majority", "unanimous"] = Field(..., description="Match rule for the group")


class GroupResponse(BaseModel):
    id: int
    name: str
    owner_id: Optional[int] = None
    match_threshold: str
    region: Optional[str] = None
    adult_content: Optional[bool] = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
