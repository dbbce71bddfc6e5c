"""Keeps movie lists in step with the movie cache.

Ids added to a list are resolved through the read-through ``MovieCache``
first, so a list only ever holds ids OMDb knows about and reading a list back
never needs the provider.
"""
import asyncio
import logging
import re
from typing import Iterable, List, Tuple

from ..core.exceptions import NotFound
from ..movies.models import Movie
from ..movies.service import MovieCache
from .models import ListCreated, SyncResult
from .service import ListStore, dedupe

logger = logging.getLogger(__name__)

IMDB_ID_PATTERN = re.compile(r"^tt\d+$")


def is_imdb_id(value: str) -> bool:
    return bool(IMDB_ID_PATTERN.match(value))


class ListSyncService:
    def __init__(self, lists: ListStore, movies: MovieCache):
        self.lists = lists
        self.movies = movies

    async def _resolves(self, imdb_id: str) -> bool:
        try:
            await self.movies.resolve(imdb_id)
        except NotFound:
            return False
        return True

    async def _partition(self, requested_ids: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Split ids into (valid, rejected), each without duplicates.

        Malformed ids are rejected without asking OMDb. Provider outages are
        not rejections and propagate.
        """
        candidates = dedupe(requested_ids)
        shaped = [imdb_id for imdb_id in candidates if is_imdb_id(imdb_id)]
        resolved = await asyncio.gather(*(self._resolves(imdb_id) for imdb_id in shaped))
        found = {imdb_id for imdb_id, ok in zip(shaped, resolved) if ok}

        valid = [imdb_id for imdb_id in candidates if imdb_id in found]
        rejected = [imdb_id for imdb_id in candidates if imdb_id not in found]
        if rejected:
            logger.warning(f"Invalid movie IDs found: {', '.join(rejected)}")
        return valid, rejected

    async def add_movies(self, owner_id: str, list_name: str, requested_ids: Iterable[str]) -> SyncResult:
        """Add the resolvable ids to a list.

        Ids already on the list are a no-op and unresolvable ids are reported
        in ``rejected``; neither fails the call.
        """
        movie_list = await self.lists.find_by_owner_and_name(owner_id, list_name)
        valid, rejected = await self._partition(requested_ids)

        added = [imdb_id for imdb_id in valid if imdb_id not in movie_list.movies]
        if added:
            # last write wins against a concurrent add on the same list
            await self.lists.replace_movies(owner_id, list_name, movie_list.movies + added)
            logger.info(f"Added {len(added)} movie(s) to list '{list_name}'")

        return SyncResult(added=sorted(added), rejected=sorted(rejected))

    async def create_list(
        self,
        owner_id: str,
        name: str,
        movies: Iterable[str] = (),
        public: bool = False
    ) -> ListCreated:
        # name problems answer before any provider lookups
        await self.lists.check_name_available(owner_id, name)
        valid, rejected = await self._partition(movies)
        movie_list = await self.lists.create(owner_id, name, valid, public)
        return ListCreated(movie_list=movie_list, rejected=sorted(rejected))

    async def list_movies(self, owner_id: str, list_name: str) -> List[Movie]:
        movie_list = await self.lists.find_by_owner_and_name(owner_id, list_name)

        invalid = [imdb_id for imdb_id in movie_list.movies if not is_imdb_id(imdb_id)]
        if invalid:
            logger.warning(f"Invalid movie IDs stored in list '{list_name}': {', '.join(invalid)}")

        valid = [imdb_id for imdb_id in movie_list.movies if is_imdb_id(imdb_id)]
        return await self.movies.get_cached(valid)
