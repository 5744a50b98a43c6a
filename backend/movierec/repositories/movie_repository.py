from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from movierec.repositories.base_repository import BaseRepository
from movierec.models.movie import Movie
from movierec.core.exceptions import InternalException


@dataclass
class Created:
    movie: Movie


@dataclass
class Conflict:
    imdb_id: str


CreateResult = Union[Created, Conflict]

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class MovieRepository(BaseRepository[Movie]):
    """Local catalog store keyed by IMDb id"""

    def __init__(self, db: Session):
        super().__init__(Movie, db)

    def get_by_id(self, movie_id: str) -> Optional[Movie]:
        """Get movie by surrogate id"""
        return self.get(movie_id)

    def get_by_imdb_id(self, imdb_id: str) -> Optional[Movie]:
        """Get movie by IMDb id"""
        return self.filter_one_by(imdb_id=imdb_id)

    def get_by_genre(self, genre: str, limit: int = 20) -> List[Movie]:
        """Movies whose genre field contains the token, case-insensitive.

        Plain substring match: "War" also matches "Warfare".
        """
        try:
            return (
                self.db.query(Movie)
                .filter(Movie.genre.ilike(f"%{genre}%"))
                .order_by(Movie.created_at, Movie.imdb_id)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise InternalException(f"Movie genre query failed: {e}")

    def create(self, obj_in: Dict[str, Any]) -> CreateResult:
        """Insert a movie with ON CONFLICT (imdb_id) DO NOTHING.

        Conflict only when the unique IMDb id swallowed the insert; any other
        constraint failure is an internal error.
        """
        dialect = self.db.get_bind().dialect.name
        insert = _INSERTS.get(dialect)
        if insert is None:
            raise InternalException(f"Movie insert not supported on {dialect}")

        stmt = insert(Movie).values(**obj_in).on_conflict_do_nothing(index_elements=["imdb_id"])
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise InternalException(f"Movie insert failed: {e}")

        if result.rowcount == 0:
            return Conflict(obj_in["imdb_id"])
        movie = self.get_by_imdb_id(obj_in["imdb_id"])
        if movie is None:
            raise InternalException(f"Movie {obj_in['imdb_id']} inserted but could not be read back")
        return Created(movie)
