from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

class MovieResponse(BaseModel):
    """Resolved movie as handed to the transport layer"""
    id: str
    imdb_id: str
    title: str
    year: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    actors: Optional[str] = None
    plot: Optional[str] = None
    poster_url: Optional[str] = None
    imdb_rating: Optional[str] = None
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class RecommendationResponse(BaseModel):
    """Recommendation list for a user"""
    user_id: str
    recommendations: List[MovieResponse]
    total: int
