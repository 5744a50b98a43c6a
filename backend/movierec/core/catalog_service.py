import logging
from typing import Optional
from sqlalchemy.orm import Session

from .cache import CacheService
from .config import Settings, get_settings
from .interfaces import CacheInterface, CatalogClientInterface, OMDbConfig
from .omdb_client import OMDbClient
from .validation import InputValidator
from movierec.repositories.movie_repository import MovieRepository
from movierec.repositories.rating_repository import RatingRepository
from movierec.services.movie_resolver import MovieResolver
from movierec.services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from LOG_LEVEL"""
    level_name = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class CatalogServiceFactory:
    """Factory class for wiring the resolver and recommendation services"""

    @staticmethod
    def create_client(settings: Optional[Settings] = None) -> OMDbClient:
        """Create a new OMDb client instance"""
        settings = settings or get_settings()
        if not settings.OMDB_API_KEY:
            logger.warning("OMDB_API_KEY is not set; external lookups will fail")
        config = OMDbConfig(
            api_key=settings.OMDB_API_KEY,
            base_url=settings.OMDB_BASE_URL,
            timeout=settings.OMDB_TIMEOUT,
        )
        return OMDbClient(config)

    @staticmethod
    def create_cache(settings: Optional[Settings] = None) -> CacheService:
        settings = settings or get_settings()
        return CacheService(url=settings.REDIS_URL, compress=settings.CACHE_COMPRESS)

    @staticmethod
    def create_resolver(db: Session, settings: Optional[Settings] = None,
                        cache: Optional[CacheInterface] = None,
                        client: Optional[CatalogClientInterface] = None) -> MovieResolver:
        """Create a movie resolver bound to a database session"""
        settings = settings or get_settings()
        return MovieResolver(
            movie_repo=MovieRepository(db),
            cache=cache if cache is not None else CatalogServiceFactory.create_cache(settings),
            client=client if client is not None else CatalogServiceFactory.create_client(settings),
            validator=InputValidator(),
            search_ttl=settings.CACHE_SEARCH_TTL,
            detail_ttl=settings.CACHE_MOVIE_TTL,
        )

    @staticmethod
    def create_recommendation_service(db: Session, settings: Optional[Settings] = None,
                                      cache: Optional[CacheInterface] = None,
                                      client: Optional[CatalogClientInterface] = None) -> RecommendationService:
        """Create a recommendation service and its resolver on one session"""
        settings = settings or get_settings()
        resolver = CatalogServiceFactory.create_resolver(db, settings, cache, client)
        return RecommendationService(
            rating_repo=RatingRepository(db),
            movie_repo=MovieRepository(db),
            resolver=resolver,
            limit=settings.RECOMMENDATION_LIMIT,
            min_score=settings.RECOMMENDATION_MIN_SCORE,
            top_genres=settings.RECOMMENDATION_TOP_GENRES,
            genre_fetch_size=settings.RECOMMENDATION_GENRE_FETCH_SIZE,
            default_genres=settings.default_genres,
        )
