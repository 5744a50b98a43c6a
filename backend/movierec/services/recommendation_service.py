import logging
from typing import List, Optional, Sequence, Set

from movierec.core.deadline import Deadline, check_deadline
from movierec.core.exceptions import ExternalServiceException, NotFoundException, ValidationException
from movierec.core.genres import DEFAULT_GENRES
from movierec.models.movie import Movie
from movierec.repositories.movie_repository import MovieRepository
from movierec.repositories.rating_repository import RatingRepository
from movierec.services.movie_resolver import MovieResolver

logger = logging.getLogger(__name__)


class RecommendationService:
    """Genre-affinity recommendations for a single user.

    Algorithm:
    1. Take the user's top genres from ratings >= min_score (cold start falls
       back to the default genres).
    2. Exclude every movie the user already rated.
    3. Fill from the local store, genre by genre, in rank order.
    4. If still short, search OMDb by genre and resolve each hit.
    5. Return at most ``limit`` movies; fewer (or none) is still a success.
    """

    def __init__(
        self,
        rating_repo: RatingRepository,
        movie_repo: MovieRepository,
        resolver: MovieResolver,
        limit: int = 10,
        min_score: int = 7,
        top_genres: int = 3,
        genre_fetch_size: int = 20,
        default_genres: Optional[Sequence[str]] = None,
        logger: logging.Logger = logger,
    ):
        self.rating_repo = rating_repo
        self.movie_repo = movie_repo
        self.resolver = resolver
        self.limit = limit
        self.min_score = min_score
        self.top_genres = top_genres
        self.genre_fetch_size = genre_fetch_size
        self.default_genres = list(default_genres or DEFAULT_GENRES)
        self.logger = logger

    def get_affinity_genres(self, user_id: str, deadline: Optional[Deadline] = None) -> List[str]:
        """Ranked genres for the user, or the default set on cold start"""
        check_deadline(deadline)
        genres = self.rating_repo.get_top_genres(user_id, self.min_score, self.top_genres)
        if not genres:
            self.logger.info(f"no highly rated movies for user {user_id}, using default genres")
            return list(self.default_genres)
        return genres

    def recommend(self, user_id: str, deadline: Optional[Deadline] = None) -> List[Movie]:
        genres = self.get_affinity_genres(user_id, deadline)

        check_deadline(deadline)
        excluded = set(self.rating_repo.get_rated_movie_ids(user_id))

        recommendations: List[Movie] = []
        if self._fill_from_local(genres, excluded, recommendations, deadline):
            return recommendations

        self._fill_from_catalog(genres, excluded, recommendations, deadline)
        return recommendations

    def _accept(self, movie: Movie, excluded: Set[str], recommendations: List[Movie]) -> bool:
        """Append unless excluded; True once the list is full"""
        if movie.id in excluded:
            return False
        recommendations.append(movie)
        excluded.add(movie.id)
        return len(recommendations) >= self.limit

    def _fill_from_local(self, genres: List[str], excluded: Set[str],
                         recommendations: List[Movie], deadline: Optional[Deadline]) -> bool:
        for genre in genres:
            check_deadline(deadline)
            for movie in self.movie_repo.get_by_genre(genre.strip(), self.genre_fetch_size):
                if self._accept(movie, excluded, recommendations):
                    return True
        return False

    def _fill_from_catalog(self, genres: List[str], excluded: Set[str],
                           recommendations: List[Movie], deadline: Optional[Deadline]) -> bool:
        for genre in genres:
            try:
                page = self.resolver.search_by_title(genre.strip(), 1, deadline)
            except (NotFoundException, ExternalServiceException) as e:
                self.logger.warning(f"omdb genre search failed for {genre}: {e.message}")
                continue

            for hit in page.results:
                try:
                    movie = self.resolver.resolve_by_external_id(hit.imdb_id, deadline)
                except (NotFoundException, ExternalServiceException, ValidationException) as e:
                    self.logger.warning(f"skipping {hit.imdb_id}: {e.message}")
                    continue
                if self._accept(movie, excluded, recommendations):
                    return True
        return False
