from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from groupswipe.database import Base


class MatchRating(Base):
    """
    A member's star rating of a matched title after the group watched it.
    """
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title_id = Column(Integer, ForeignKey("titles.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5 stars
    reaction = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    profile = relationship("Profile")

    # One rating per user per title per group
    __table_args__ = (
        UniqueConstraint("group_id", "user_id", "title_id", name="unique_group_user_title_rating"),
    )

    def __repr__(self):
        return f"<MatchRating(user_id={self.user_id}, group_id={self.group_id}, title_id={self.title_id}, rating={self.rating})>"
