from movierec.db import Base
from .movie import Movie
from .rating import Rating

__all__ = ['Base', 'Movie', 'Rating']
