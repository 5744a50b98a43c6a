from typing import Tuple
from .exceptions import ValidationException


class InputValidator:
    """Checks caller input before any lookup is made"""

    def __init__(self, max_query_length: int = 200):
        self.max_query_length = max_query_length

    def external_id(self, imdb_id: str) -> str:
        if imdb_id is None or not str(imdb_id).strip():
            raise ValidationException("imdb_id is required")
        return str(imdb_id).strip()

    def search(self, query: str, page: int) -> Tuple[str, int]:
        if query is None or not query.strip():
            raise ValidationException("query parameter 'q' is required")
        if len(query) > self.max_query_length:
            raise ValidationException(f"query must be at most {self.max_query_length} characters")
        if page is None or page <= 0:
            page = 1
        return query.strip(), page
