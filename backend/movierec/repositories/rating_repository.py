from typing import List, Set
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from movierec.repositories.base_repository import BaseRepository
from movierec.models.movie import Movie
from movierec.models.rating import Rating
from movierec.core.exceptions import InternalException
from movierec.core.genres import GenreHelper


class RatingRepository(BaseRepository[Rating]):
    """Read access to user ratings"""

    def __init__(self, db: Session):
        super().__init__(Rating, db)

    def get_ratings_by_user(self, user_id: str) -> List[Rating]:
        """Get all ratings for a user, newest first"""
        try:
            return (
                self.db.query(Rating)
                .filter(Rating.user_id == user_id)
                .order_by(Rating.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise InternalException(f"Rating query failed: {e}")

    def get_top_genres(self, user_id: str, min_score: int, limit: int) -> List[str]:
        """Most frequent genre tokens among the user's ratings >= min_score"""
        try:
            rows = (
                self.db.query(Movie.genre)
                .join(Rating, Rating.movie_id == Movie.id)
                .filter(Rating.user_id == user_id, Rating.score >= min_score)
                .all()
            )
        except SQLAlchemyError as e:
            raise InternalException(f"Top genre query failed: {e}")
        return GenreHelper.rank_genres((genre for (genre,) in rows), limit)

    def get_rated_movie_ids(self, user_id: str) -> Set[str]:
        """Surrogate ids of every movie the user has rated"""
        try:
            rows = self.db.query(Rating.movie_id).filter(Rating.user_id == user_id).all()
        except SQLAlchemyError as e:
            raise InternalException(f"Rated movie query failed: {e}")
        return {movie_id for (movie_id,) in rows}
