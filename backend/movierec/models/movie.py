import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime
from movierec.db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Movie(Base):
    __tablename__ = "movies"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    imdb_id = Column(String(20), unique=True, index=True, nullable=False)
    title = Column(String, index=True, nullable=False)
    year = Column(String(16), nullable=True)
    genre = Column(String, nullable=True)  # comma-delimited, e.g. "Crime, Drama"
    director = Column(String, nullable=True)
    actors = Column(String, nullable=True)
    plot = Column(Text, nullable=True)
    poster_url = Column(String, nullable=True)
    imdb_rating = Column(String(8), nullable=True)  # kept as OMDb formats it
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<Movie {self.imdb_id} {self.title!r}>"
