"""
Unit tests for service wiring, error payloads and response schemas.
"""

import logging
import tempfile
import unittest
from unittest.mock import patch

import movierec.db as db_module
from movierec import create_tables
from movierec.core.catalog_service import CatalogServiceFactory, configure_logging
from movierec.core.config import Settings
from movierec.core.exceptions import ExternalServiceException, NotFoundException
from movierec.core.omdb_client import OMDbClient
from movierec.models import Movie
from movierec.schemas.movie import MovieResponse, RecommendationResponse
from movierec.services.recommendation_service import RecommendationService

from fakes import FakeCatalogClient, InMemoryCache, SqliteDatabase, add_movie


class TestCatalogServiceFactory(unittest.TestCase):

    def setUp(self):
        self.database = SqliteDatabase()
        self.db = self.database.Session()
        self.settings = Settings(
            OMDB_API_KEY="key",
            OMDB_TIMEOUT=5,
            CACHE_SEARCH_TTL=100,
            CACHE_MOVIE_TTL=1000,
            RECOMMENDATION_LIMIT=4,
            RECOMMENDATION_DEFAULT_GENRES="Horror, Western",
        )

    def tearDown(self):
        self.db.close()
        self.database.close()

    def test_configure_logging(self):
        with patch("logging.basicConfig") as basic_config:
            configure_logging("debug")
        self.assertEqual(basic_config.call_args[1]["level"], logging.DEBUG)

    def test_client_uses_settings(self):
        client = CatalogServiceFactory.create_client(self.settings)
        self.assertIsInstance(client, OMDbClient)
        self.assertEqual(client.config.api_key, "key")
        self.assertEqual(client.config.timeout, 5)

    def test_recommendation_service_wiring(self):
        service = CatalogServiceFactory.create_recommendation_service(
            self.db, self.settings, cache=InMemoryCache(), client=FakeCatalogClient()
        )
        self.assertIsInstance(service, RecommendationService)
        self.assertEqual(service.limit, 4)
        self.assertEqual(service.default_genres, ["Horror", "Western"])
        self.assertEqual(service.resolver.search_ttl, 100)
        self.assertEqual(service.resolver.detail_ttl, 1000)

        horror = add_movie(self.db, "tt0081505", "The Shining", "Drama, Horror")
        self.assertEqual([m.id for m in service.recommend("someone")], [horror.id])


class TestErrorsAndSchemas(unittest.TestCase):

    def test_error_payloads(self):
        self.assertEqual(NotFoundException("movie not found").to_dict(), {
            "error_code": "NOT_FOUND",
            "message": "movie not found",
            "status_code": 404
        })
        self.assertEqual(ExternalServiceException().status_code, 502)

    def test_movie_response_from_orm(self):
        database = SqliteDatabase()
        db = database.Session()
        try:
            movie = add_movie(db, "tt0111161", "The Shawshank Redemption", "Drama")
            payload = RecommendationResponse(
                user_id="u", recommendations=[MovieResponse.model_validate(movie)], total=1
            )
            self.assertEqual(payload.recommendations[0].imdb_id, "tt0111161")
            self.assertEqual(payload.recommendations[0].imdb_rating, "7.5")
        finally:
            db.close()
            database.close()


class TestDatabaseBootstrap(unittest.TestCase):

    def test_create_tables_and_session_dependency(self):
        tmpdir = tempfile.TemporaryDirectory()
        settings = Settings(DATABASE_URL=f"sqlite:///{tmpdir.name}/movies.db")
        try:
            with patch("movierec.db.get_settings", return_value=settings), patch("movierec.db._engine", None):
                create_tables.main()
                sessions = db_module.get_db()
                db = next(sessions)
                self.assertEqual(db.query(Movie).count(), 0)
                sessions.close()
                db_module._engine.dispose()
        finally:
            tmpdir.cleanup()


if __name__ == '__main__':
    unittest.main()
