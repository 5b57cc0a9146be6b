from sqlalchemy import Column, Integer, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from groupswipe.database import Base


class Preference(Base):
    __tablename__ = "preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    genres = Column(JSON, default=list)  # Genre tags, e.g. ['Drama', 'Sci-Fi']
    moods = Column(JSON, default=list)  # Vibe tags, e.g. ['Cozy']
    services = Column(JSON, default=list)  # Streaming services, e.g. ['netflix']
    max_runtime_min = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # One taste profile per user per group
    __table_args__ = (
        UniqueConstraint("user_id", "group_id", name="unique_user_group_preference"),
    )
