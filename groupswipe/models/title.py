from sqlalchemy import Column, Integer, String, Float, Boolean, JSON, Text
from groupswipe.database import Base


class Title(Base):
    """
    Catalog entry (movie or show).
    Populated by the catalog import job; the feed only reads it.
    """
    __tablename__ = "titles"

    id = Column(Integer, primary_key=True, autoincrement=False)  # Assigned by the metadata provider
    kind = Column(String(10), nullable=False, default="movie")  # 'movie' | 'tv'
    name = Column(String, nullable=False)
    year = Column(Integer, nullable=True)
    runtime_min = Column(Integer, nullable=True, index=True)
    poster_url = Column(String, nullable=True)
    trailer_url = Column(String, nullable=True)
    overview = Column(Text, default="")
    genres = Column(JSON, default=list)  # ['Action', 'Comedy', ...]
    vibes = Column(JSON, default=list)  # ['Feel-good', 'Cozy', ...]
    popularity = Column(Float, default=0.0, index=True)
    rating = Column(Float, default=0.0)
    adult = Column(Boolean, default=False)

    def __repr__(self):
        return f"<Title(id={self.id}, name={self.name}, kind={self.kind})>"
