from collections import Counter
from enum import Enum
from typing import Iterable, List


class MovieGenre(str, Enum):
    """OMDb genre tokens as they appear in the comma-delimited Genre field"""
    ACTION = "Action"
    ADVENTURE = "Adventure"
    ANIMATION = "Animation"
    BIOGRAPHY = "Biography"
    COMEDY = "Comedy"
    CRIME = "Crime"
    DOCUMENTARY = "Documentary"
    DRAMA = "Drama"
    FAMILY = "Family"
    FANTASY = "Fantasy"
    HISTORY = "History"
    HORROR = "Horror"
    MUSIC = "Music"
    MUSICAL = "Musical"
    MYSTERY = "Mystery"
    ROMANCE = "Romance"
    SCI_FI = "Sci-Fi"
    SPORT = "Sport"
    THRILLER = "Thriller"
    WAR = "War"
    WESTERN = "Western"


DEFAULT_GENRES = [MovieGenre.ACTION.value, MovieGenre.DRAMA.value, MovieGenre.COMEDY.value]


class GenreHelper:
    """Helpers for comma-delimited genre fields"""

    @staticmethod
    def split_genres(genre_field: str) -> List[str]:
        """Split a comma-delimited genre field into trimmed tokens"""
        if not genre_field:
            return []
        return [token.strip() for token in genre_field.split(",") if token.strip()]

    @staticmethod
    def rank_genres(genre_fields: Iterable[str], limit: int) -> List[str]:
        """Rank genre tokens by frequency, ties broken lexically.

        Each token in a field counts once for that field's movie.
        """
        counts = Counter()
        for field in genre_fields:
            counts.update(GenreHelper.split_genres(field))
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [genre for genre, _ in ranked[:limit]]
