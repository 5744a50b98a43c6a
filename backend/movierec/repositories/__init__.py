from .base_repository import BaseRepository
from .movie_repository import MovieRepository, Created, Conflict, CreateResult
from .rating_repository import RatingRepository

__all__ = [
    "BaseRepository",
    "MovieRepository",
    "Created",
    "Conflict",
    "CreateResult",
    "RatingRepository"
]
