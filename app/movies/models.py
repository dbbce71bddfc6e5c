from enum import Enum
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

def _omdb_value(value: Optional[str]) -> Optional[str]:
    return None if value in (None, "", "N/A") else value

class Movie(BaseModel):
    imdb_id: str = Field(..., alias="imdbID")
    title: str
    year: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    plot: Optional[str] = None
    poster: Optional[str] = None

    class Config:
        populate_by_name = True

    @classmethod
    def from_omdb(cls, payload: Dict[str, Any]) -> "Movie":
        return cls(
            imdb_id=payload["imdbID"],
            title=payload["Title"],
            year=_omdb_value(payload.get("Year")),
            genre=_omdb_value(payload.get("Genre")),
            director=_omdb_value(payload.get("Director")),
            plot=_omdb_value(payload.get("Plot")),
            poster=_omdb_value(payload.get("Poster"))
        )

class SearchType(str, Enum):
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"

class PlotLength(str, Enum):
    SHORT = "short"
    FULL = "full"

class SearchResponse(BaseModel):
    search_results: List[Dict[str, Any]] = Field(default_factory=list, alias="searchResults")
    direct_result: Optional[Dict[str, Any]] = Field(None, alias="directResult")

    class Config:
        populate_by_name = True
