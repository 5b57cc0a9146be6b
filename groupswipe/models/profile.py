from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from groupswipe.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    display_name = Column(String(50), nullable=False)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
