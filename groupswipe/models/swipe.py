from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from groupswipe.database import Base

DECISION_YES = "yes"


class Swipe(Base):
    """
    A yes/no decision on a title, in a group context or solo (group_id NULL).
    Rows are append-only.
    """
    __tablename__ = "swipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=True, index=True)
    title_id = Column(Integer, ForeignKey("titles.id", ondelete="CASCADE"), nullable=False)
    decision = Column(String(3), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    profile = relationship("Profile")
    title = relationship("Title")

    __table_args__ = (
        UniqueConstraint("user_id", "group_id", "title_id", name="unique_user_group_title_swipe"),
        Index("idx_swipes_group_title", "group_id", "title_id"),
    )

    def __repr__(self):
        return f"<Swipe(user_id={self.user_id}, group_id={self.group_id}, title_id={self.title_id}, decision={self.decision})>"
