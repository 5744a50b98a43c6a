import requests
import logging
from typing import Dict, Optional

from .deadline import Deadline
from .exceptions import ExternalServiceException, NotFoundException
from .interfaces import CatalogClientInterface, CatalogResponse, OMDbConfig
from ..schemas.catalog import OMDbFailure, OMDbMovieDetail, OMDbSearchPage, decode_detail, decode_search

logger = logging.getLogger(__name__)


class OMDbClient(CatalogClientInterface):
    """Concrete implementation of the OMDb client.

    One request per call, no retries. OMDb's ``Response: "False"`` answer
    becomes ``NotFoundException``; anything that goes wrong on the wire or
    in decoding becomes ``ExternalServiceException``.
    """

    def __init__(self, config: OMDbConfig, session: Optional[requests.Session] = None,
                 logger: logging.Logger = logger):
        self.config = config
        self.logger = logger
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })

    def make_request(self, params: Dict, deadline: Optional[Deadline] = None) -> str:
        """Make HTTP request to OMDb and return the raw body"""
        url = f"{self.config.base_url.rstrip('/')}/"
        params = dict(params)
        params["apikey"] = self.config.api_key
        timeout = deadline.timeout(self.config.timeout) if deadline else self.config.timeout

        try:
            self.logger.info(f"Making request to: {url}")
            response = self.session.get(url, params=params, timeout=timeout)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"omdb api call failed: {e}")
            raise ExternalServiceException(f"Request failed: {e}")

        if response.status_code != 200:
            self.logger.error(f"omdb api request failed: {response.status_code} - {response.text[:200]}")
            raise ExternalServiceException(f"OMDb returned HTTP {response.status_code}")
        return response.text

    def search_by_title(self, query: str, page: int = 1,
                        deadline: Optional[Deadline] = None) -> CatalogResponse[OMDbSearchPage]:
        """Search titles by free-text query"""
        raw = self.make_request({"s": query, "page": page}, deadline)
        outcome = decode_search(raw)
        if isinstance(outcome, OMDbFailure):
            raise NotFoundException(f"no movies found: {outcome.error}")
        return CatalogResponse(outcome, raw)

    def get_detail(self, imdb_id: str, deadline: Optional[Deadline] = None) -> CatalogResponse[OMDbMovieDetail]:
        """Get full movie detail by IMDb id"""
        raw = self.make_request({"i": imdb_id, "plot": self.config.plot}, deadline)
        outcome = decode_detail(raw)
        if isinstance(outcome, OMDbFailure):
            raise NotFoundException(f"movie not found: {outcome.error}")
        return CatalogResponse(outcome, raw)
