from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, List

class ListCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    movies: List[str] = []
    public: bool = False

    class Config:
        extra = "forbid"

class MoviesAdd(BaseModel):
    movies: List[str]

    class Config:
        extra = "forbid"

class MovieList(BaseModel):
    id: str
    owner_id: str
    name: str
    movies: List[str] = []
    public: bool = False

class SyncResult(BaseModel):
    added: List[str] = []      # valid ids that were new to the list
    rejected: List[str] = []   # ids OMDb could not resolve

class ListCreated(BaseModel):
    movie_list: MovieList = Field(..., alias="list")
    rejected: List[str] = []

    class Config:
        populate_by_name = True
