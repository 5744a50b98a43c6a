"""In-memory collaborators shared by the test modules."""

import json
import os
import tempfile
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from movierec.core.exceptions import ExternalServiceException, NotFoundException
from movierec.core.interfaces import CacheInterface, CatalogClientInterface, CatalogResponse
from movierec.db import Base
from movierec.models import Movie, Rating
from movierec.schemas.catalog import decode_detail, decode_search

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class InMemoryCache(CacheInterface):
    """Thread-safe dict cache with TTL, counting calls"""

    def __init__(self):
        self.store: Dict[str, tuple] = {}
        self.lock = threading.Lock()
        self.gets = 0
        self.sets: List[str] = []
        self.deletes: List[str] = []

    def get(self, key: str) -> Optional[str]:
        with self.lock:
            self.gets += 1
            entry = self.store.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at <= time.monotonic():
                del self.store[key]
                return None
            return value

    def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        with self.lock:
            self.sets.append(key)
            self.store[key] = (value, time.monotonic() + ttl_seconds)
        return True

    def delete(self, key: str) -> int:
        with self.lock:
            self.deletes.append(key)
            return 1 if self.store.pop(key, None) is not None else 0


def detail_payload(imdb_id: str, title: str, genre: str, year: str = "1994") -> dict:
    return {
        "Title": title,
        "Year": year,
        "Genre": genre,
        "Director": "Some Director",
        "Actors": "Actor One, Actor Two",
        "Plot": f"The plot of {title}.",
        "Poster": f"https://img.example/{imdb_id}.jpg",
        "imdbRating": "8.1",
        "imdbID": imdb_id,
        "Type": "movie",
        "Response": "True",
    }


class FakeCatalogClient(CatalogClientInterface):
    """Catalog client backed by dicts, recording every call"""

    def __init__(self, details: Optional[Dict[str, dict]] = None,
                 searches: Optional[Dict[str, List[str]]] = None,
                 failing_queries: Optional[set] = None,
                 barrier: Optional[threading.Barrier] = None):
        self.details = details or {}
        self.searches = searches or {}
        self.failing_queries = failing_queries or set()
        self.barrier = barrier
        self.lock = threading.Lock()
        self.search_calls: List[tuple] = []
        self.detail_calls: List[str] = []

    def search_by_title(self, query, page=1, deadline=None):
        with self.lock:
            self.search_calls.append((query, page))
        if query in self.failing_queries:
            raise ExternalServiceException("upstream down")
        ids = self.searches.get(query)
        if not ids:
            raise NotFoundException("no movies found: Movie not found!")
        hits = []
        for imdb_id in ids:
            detail = self.details.get(imdb_id, {"Title": imdb_id, "Year": "2000"})
            hits.append({
                "Title": detail["Title"],
                "Year": detail["Year"],
                "imdbID": imdb_id,
                "Type": "movie",
                "Poster": "N/A",
            })
        raw = json.dumps({"Search": hits, "totalResults": str(len(hits)), "Response": "True"})
        return CatalogResponse(decode_search(raw), raw)

    def get_detail(self, imdb_id, deadline=None):
        with self.lock:
            self.detail_calls.append(imdb_id)
        if self.barrier is not None:
            self.barrier.wait()
        if imdb_id not in self.details:
            raise NotFoundException("movie not found: Incorrect IMDb ID.")
        raw = json.dumps(self.details[imdb_id])
        return CatalogResponse(decode_detail(raw), raw)


class SqliteDatabase:
    """Throwaway on-disk SQLite database, one session per caller"""

    def __init__(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        path = os.path.join(self.tmpdir.name, "movies.db")
        self.engine = create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})
        Base.metadata.create_all(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def close(self):
        self.engine.dispose()
        self.tmpdir.cleanup()


def add_movie(db, imdb_id: str, title: str, genre: str, minute: int = 0) -> Movie:
    movie = Movie(
        imdb_id=imdb_id,
        title=title,
        year="2000",
        genre=genre,
        imdb_rating="7.5",
        created_at=BASE_TIME + timedelta(minutes=minute),
    )
    db.add(movie)
    db.commit()
    return movie


def add_rating(db, user_id: str, movie: Movie, score: int) -> Rating:
    rating = Rating(user_id=user_id, movie_id=movie.id, score=score)
    db.add(rating)
    db.commit()
    return rating
