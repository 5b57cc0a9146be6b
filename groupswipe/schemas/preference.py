from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional


class PreferenceUpdate(BaseModel):
    """Schema for creating/replacing a user's taste profile in a group"""
    genres: List[str] = Field(default_factory=list, description="Preferred genre tags")
    moods: List[str] = Field(default_factory=list, description="Preferred mood/vibe tags")
    services: List[str] = Field(default_factory=list, description="Streaming services the user has")
    max_runtime_min: Optional[int] = Field(None, description="Longest acceptable runtime in minutes", gt=0)


class PreferenceResponse(BaseModel):
    user_id: int
    group_id: int
    genres: List[str] = []
    moods: List[str] = []
    services: List[str] = []
    max_runtime_min: Optional[int] = None
    updated_at: Optional[datetime] = None

    @field_validator('genres', 'moods', 'services', mode='before')
    @classmethod
    def empty_lists(cls, v):
        return v or []

    class Config:
        from_attributes = True
