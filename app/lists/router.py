from fastapi import APIRouter, Depends, Query
from typing import List

from ..core.dependencies import get_list_store, get_list_sync, require_user_id
from ..movies.models import Movie
from .models import ListCreate, ListCreated, MovieList, MoviesAdd, SyncResult
from .service import ListStore
from .sync import ListSyncService

router = APIRouter(prefix="/lists", tags=["lists"])

@router.post("", status_code=201, response_model=ListCreated)
async def create_list(
    body: ListCreate,
    user_id: str = Depends(require_user_id),
    sync: ListSyncService = Depends(get_list_sync)
):
    """Create a list; initial ids OMDb cannot resolve are reported, not stored"""
    return await sync.create_list(user_id, body.name, body.movies, body.public)

@router.get("", response_model=List[MovieList])
async def get_lists(
    user_id: str = Depends(require_user_id),
    lists: ListStore = Depends(get_list_store)
):
    return await lists.find_all_by_owner(user_id)

@router.post("/{name}/movies", response_model=SyncResult)
async def add_movies(
    name: str,
    body: MoviesAdd,
    user_id: str = Depends(require_user_id),
    sync: ListSyncService = Depends(get_list_sync)
):
    return await sync.add_movies(user_id, name, body.movies)

@router.get("/{name}/movies", response_model=List[Movie])
async def get_list_movies(
    name: str,
    user_id: str = Depends(require_user_id),
    sync: ListSyncService = Depends(get_list_sync)
):
    return await sync.list_movies(user_id, name)

@router.delete("/{name}/movies")
async def remove_movie(
    name: str,
    imdb_id: str = Query(..., alias="imdbID", min_length=1),
    user_id: str = Depends(require_user_id),
    lists: ListStore = Depends(get_list_store)
):
    await lists.remove_movie(user_id, name, imdb_id)
    return {"status": "success", "message": "Movie removed from the list"}

@router.delete("/{name}")
async def delete_list(
    name: str,
    user_id: str = Depends(require_user_id),
    lists: ListStore = Depends(get_list_store)
):
    await lists.delete(user_id, name)
    return {"status": "success", "message": "List deleted"}
