from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from groupswipe.database import Base


class Match(Base):
    """
    A title the whole group has voted on and that met the group's threshold.
    """
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    title_id = Column(Integer, ForeignKey("titles.id", ondelete="CASCADE"), nullable=False)
    rule = Column(String(10), nullable=False)  # Threshold in force when the match fired
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    title = relationship("Title")
    match_members = relationship("MatchMember", back_populates="match", cascade="all, delete-orphan")

    # A title matches at most once per group
    __table_args__ = (
        UniqueConstraint("group_id", "title_id", name="unique_group_title_match"),
    )

    def __repr__(self):
        return f"<Match(group_id={self.group_id}, title_id={self.title_id}, rule={self.rule})>"


class MatchMember(Base):
    """Yes voters of a match"""
    __tablename__ = "match_members"

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Integer, ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    match = relationship("Match", back_populates="match_members")
    profile = relationship("Profile")
