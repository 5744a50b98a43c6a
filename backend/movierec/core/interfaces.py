from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from dataclasses import dataclass

from .deadline import Deadline
from ..schemas.catalog import OMDbMovieDetail, OMDbSearchPage

PayloadType = TypeVar("PayloadType")


@dataclass
class OMDbConfig:
    """Configuration class for OMDb API"""
    api_key: str
    base_url: str = "http://www.omdbapi.com"
    plot: str = "full"
    timeout: int = 10


@dataclass
class CatalogResponse(Generic[PayloadType]):
    """Decoded catalog payload plus the raw body it came from"""
    payload: PayloadType
    raw: str


class CacheInterface(ABC):
    """Abstract interface for the metadata cache"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        pass

    @abstractmethod
    def delete(self, key: str) -> int:
        pass


class CatalogClientInterface(ABC):
    """Abstract interface for the external catalog client"""

    @abstractmethod
    def search_by_title(self, query: str, page: int = 1,
                        deadline: Optional[Deadline] = None) -> CatalogResponse[OMDbSearchPage]:
        pass

    @abstractmethod
    def get_detail(self, imdb_id: str, deadline: Optional[Deadline] = None) -> CatalogResponse[OMDbMovieDetail]:
        pass
