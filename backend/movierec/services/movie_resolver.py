import logging
from typing import Optional

from movierec.core.cache import CacheService
from movierec.core.deadline import Deadline, check_deadline
from movierec.core.exceptions import ExternalServiceException, InternalException, NotFoundException
from movierec.core.interfaces import CacheInterface, CatalogClientInterface
from movierec.core.validation import InputValidator
from movierec.models.movie import Movie
from movierec.repositories.movie_repository import Conflict, MovieRepository
from movierec.schemas.catalog import OMDbFailure, OMDbMovieDetail, OMDbSearchPage, decode_detail, decode_search

logger = logging.getLogger(__name__)

CACHE_TTL_1D = 24 * 60 * 60
CACHE_TTL_7D = 7 * CACHE_TTL_1D


class MovieResolver:
    """Resolves movies through local store -> cache -> OMDb.

    The resolver is the only writer of externally-sourced movies. Concurrent
    resolutions of one IMDb id may all fetch upstream, but the store's unique
    constraint keeps a single row and the losers re-read it.
    """

    def __init__(
        self,
        movie_repo: MovieRepository,
        cache: CacheInterface,
        client: CatalogClientInterface,
        validator: Optional[InputValidator] = None,
        search_ttl: int = CACHE_TTL_1D,
        detail_ttl: int = CACHE_TTL_7D,
        logger: logging.Logger = logger,
    ):
        self.movie_repo = movie_repo
        self.cache = cache
        self.client = client
        self.validator = validator or InputValidator()
        self.search_ttl = search_ttl
        self.detail_ttl = detail_ttl
        self.logger = logger

    def get_movie(self, movie_id: str) -> Movie:
        """Get a locally stored movie by surrogate id"""
        movie = self.movie_repo.get_by_id(movie_id)
        if movie is None:
            raise NotFoundException(f"movie {movie_id} not found")
        return movie

    def search_by_title(self, query: str, page: int = 1, deadline: Optional[Deadline] = None) -> OMDbSearchPage:
        """Search OMDb by title, cache-aside over the raw response"""
        query, page = self.validator.search(query, page)
        cache_key = CacheService.search_key(query, page)

        check_deadline(deadline)
        cached = self.cache.get(cache_key)
        if cached is not None:
            outcome = self._decode_cached(cache_key, cached, decode_search)
            if outcome is not None:
                self.logger.debug(f"cache hit: {cache_key}")
                return outcome

        resp = self.client.search_by_title(query, page, deadline)
        self.cache.set(cache_key, resp.raw, self.search_ttl)
        return resp.payload

    def resolve_by_external_id(self, imdb_id: str, deadline: Optional[Deadline] = None) -> Movie:
        """Return the stored movie for an IMDb id, fetching and persisting it on first use"""
        imdb_id = self.validator.external_id(imdb_id)

        check_deadline(deadline)
        movie = self.movie_repo.get_by_imdb_id(imdb_id)
        if movie is not None:
            return movie

        detail = self._cached_detail(imdb_id, deadline)
        if detail is None:
            resp = self.client.get_detail(imdb_id, deadline)
            self.cache.set(CacheService.detail_key(imdb_id), resp.raw, self.detail_ttl)
            detail = resp.payload

        check_deadline(deadline)
        return self._persist(detail)

    def _cached_detail(self, imdb_id: str, deadline: Optional[Deadline]) -> Optional[OMDbMovieDetail]:
        cache_key = CacheService.detail_key(imdb_id)
        check_deadline(deadline)
        cached = self.cache.get(cache_key)
        if cached is None:
            return None
        detail = self._decode_cached(cache_key, cached, decode_detail)
        if detail is not None:
            self.logger.debug(f"cache hit for movie detail: {imdb_id}")
        return detail

    def _decode_cached(self, cache_key: str, cached: str, decode):
        """Decode a cached body; drop the entry if it is not a success payload"""
        try:
            outcome = decode(cached)
        except ExternalServiceException as e:
            outcome = None
            self.logger.warning(f"dropping undecodable cache entry {cache_key}: {e.message}")
        if isinstance(outcome, OMDbFailure):
            outcome = None
            self.logger.warning(f"dropping cached failure payload {cache_key}")
        if outcome is None:
            self.cache.delete(cache_key)
        return outcome

    def _persist(self, detail: OMDbMovieDetail) -> Movie:
        imdb_id = detail.imdb_id
        result = self.movie_repo.create({
            "imdb_id": imdb_id,
            "title": detail.title,
            "year": detail.year,
            "genre": detail.genre,
            "director": detail.director,
            "actors": detail.actors,
            "plot": detail.plot,
            "poster_url": detail.poster,
            "imdb_rating": detail.imdb_rating,
        })
        if isinstance(result, Conflict):
            self.logger.info(f"movie {imdb_id} already persisted, re-reading existing row")
            existing = self.movie_repo.get_by_imdb_id(imdb_id)
            if existing is None:
                raise InternalException(f"movie {imdb_id} conflicted on insert but could not be re-read")
            return existing
        return result.movie
