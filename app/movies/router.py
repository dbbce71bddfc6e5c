from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..core.dependencies import get_omdb_client
from .models import PlotLength, SearchResponse, SearchType
from .omdb_client import OmdbClient
from .service import search_movies

router = APIRouter(tags=["movies"])

@router.get("/search", response_model=SearchResponse)
async def search(
    s: str = Query(..., min_length=1, description="Movie title to search for"),
    type: Optional[SearchType] = Query(None),
    y: Optional[int] = Query(None, ge=1800, le=3000, description="Year of release"),
    plot: Optional[PlotLength] = Query(None),
    page: int = Query(1, ge=1, le=100),
    omdb: OmdbClient = Depends(get_omdb_client)
):
    """Search movies by title, combined with the direct title match"""
    return await search_movies(omdb, s, type=type, year=y, plot=plot, page=page)
