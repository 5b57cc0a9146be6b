from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from groupswipe.database import Base

THRESHOLD_MAJORITY = "majority"
THRESHOLD_UNANIMOUS = "unanimous"


class Group(Base):
    """
    A set of people swiping together.
    match_threshold decides how many yes votes make a match.
    """
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    owner_id = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    match_threshold = Column(String(10), nullable=False, default=THRESHOLD_MAJORITY)
    region = Column(String(5), default="US")
    adult_content = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    members = relationship("GroupMember", back_populates="group", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Group(id={self.id}, name={self.name}, threshold={self.match_threshold})>"


class GroupMember(Base):
    __tablename__ = "group_members"

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(10), default="member")  # 'owner' | 'member'
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    group = relationship("Group", back_populates="members")
    profile = relationship("Profile")

    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="unique_group_member"),
    )
