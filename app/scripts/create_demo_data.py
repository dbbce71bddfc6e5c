# app/scripts/create_demo_data.py
import asyncio

import httpx

from app.core.config import get_settings
from app.core.exceptions import ListNameTaken, UsernameTaken
from app.core.firebase import get_db
from app.lists.service import ListStore
from app.lists.sync import ListSyncService
from app.movies.omdb_client import OmdbClient
from app.movies.service import MovieCache
from app.user.service import CredentialStore

DEMO_USER = ("alice", "pw123")

# Demo lists: name -> (public, IMDb ids)
demo_lists = {
    "Favorites": (True, ["tt0111161", "tt0068646", "tt0468569"]),
    "Watch later": (False, ["tt0816692", "tt1375666"])
}

async def create_demo_data():
    """Create the demo user and lists through the services"""
    settings = get_settings()
    db = get_db()
    store = CredentialStore(db, rounds=settings.BCRYPT_ROUNDS)

    username, password = DEMO_USER
    try:
        user = await store.create(username, password)
        print(f"Created demo user: {username}")
    except UsernameTaken:
        user = await store.authenticate(username, password)
        print(f"Demo user {username} already exists")

    async with httpx.AsyncClient(
        base_url=settings.OMDB_BASE_URL,
        timeout=settings.OMDB_TIMEOUT_SECONDS
    ) as http:
        movies = MovieCache(db, OmdbClient(http, api_key=settings.OMDB_API_KEY))
        sync = ListSyncService(ListStore(db), movies)

        for name, (public, movie_ids) in demo_lists.items():
            try:
                created = await sync.create_list(user.id, name, movie_ids, public=public)
                print(f"Created list {name} with {len(created.movie_list.movies)} movies")
            except ListNameTaken:
                result = await sync.add_movies(user.id, name, movie_ids)
                print(f"List {name} exists, added {len(result.added)} movies")

if __name__ == "__main__":
    asyncio.run(create_demo_data())
