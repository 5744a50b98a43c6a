import json
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field, ValidationError

from ..core.exceptions import ExternalServiceException

# OMDb Response Schemas
class OMDbSearchItem(BaseModel):
    """Single hit of an OMDb title search"""
    title: str = Field(..., alias="Title")
    year: Optional[str] = Field(None, alias="Year")
    imdb_id: str = Field(..., alias="imdbID")
    type: Optional[str] = Field(None, alias="Type")
    poster: Optional[str] = Field(None, alias="Poster")

    class Config:
        populate_by_name = True

class OMDbSearchPage(BaseModel):
    """Successful OMDb search response"""
    response: Literal["True"] = Field(..., alias="Response")
    results: List[OMDbSearchItem] = Field(default_factory=list, alias="Search")
    total_results: Optional[str] = Field(None, alias="totalResults")

    class Config:
        populate_by_name = True

class OMDbMovieDetail(BaseModel):
    """Successful OMDb detail response"""
    response: Literal["True"] = Field(..., alias="Response")
    imdb_id: str = Field(..., alias="imdbID")
    title: str = Field(..., alias="Title")
    year: Optional[str] = Field(None, alias="Year")
    rated: Optional[str] = Field(None, alias="Rated")
    released: Optional[str] = Field(None, alias="Released")
    runtime: Optional[str] = Field(None, alias="Runtime")
    genre: Optional[str] = Field(None, alias="Genre")
    director: Optional[str] = Field(None, alias="Director")
    writer: Optional[str] = Field(None, alias="Writer")
    actors: Optional[str] = Field(None, alias="Actors")
    plot: Optional[str] = Field(None, alias="Plot")
    language: Optional[str] = Field(None, alias="Language")
    country: Optional[str] = Field(None, alias="Country")
    awards: Optional[str] = Field(None, alias="Awards")
    poster: Optional[str] = Field(None, alias="Poster")
    imdb_rating: Optional[str] = Field(None, alias="imdbRating")
    type: Optional[str] = Field(None, alias="Type")

    class Config:
        populate_by_name = True

class OMDbFailure(BaseModel):
    """OMDb's own failure answer, e.g. "Movie not found!" """
    response: Literal["False"] = Field(..., alias="Response")
    error: str = Field("Unknown error", alias="Error")

    class Config:
        populate_by_name = True


SearchOutcome = Union[OMDbSearchPage, OMDbFailure]
DetailOutcome = Union[OMDbMovieDetail, OMDbFailure]


def _load(raw: str) -> dict:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ExternalServiceException(f"Malformed OMDb response: {e}")
    if not isinstance(data, dict):
        raise ExternalServiceException("Malformed OMDb response: expected an object")
    return data


def _decode(raw: str, success_model):
    data = _load(raw)
    flag = data.get("Response")
    try:
        if flag == "True":
            return success_model.model_validate(data)
        if flag == "False":
            return OMDbFailure.model_validate(data)
    except ValidationError as e:
        raise ExternalServiceException(f"Unexpected OMDb response shape: {e.error_count()} error(s)")
    raise ExternalServiceException(f"Unexpected OMDb response flag: {flag!r}")


def decode_search(raw: str) -> SearchOutcome:
    """Decode a raw search body into a success or failure variant"""
    return _decode(raw, OMDbSearchPage)


def decode_detail(raw: str) -> DetailOutcome:
    """Decode a raw detail body into a success or failure variant"""
    return _decode(raw, OMDbMovieDetail)
