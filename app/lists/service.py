import logging
from typing import Iterable, List

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.exceptions import ListNameTaken, ListNotFound, MovieNotInList, ValidationError
from .models import MovieList

logger = logging.getLogger(__name__)

LISTS_COLLECTION = 'lists'


def dedupe(movie_ids: Iterable[str]) -> List[str]:
    """Drop repeated ids, keeping the first occurrence of each."""
    return list(dict.fromkeys(movie_ids))


class ListStore:
    """Movie lists addressed by (owner, name).

    Every lookup is filtered on the owner, so another user's list behaves
    exactly like a missing one.
    """

    def __init__(self, db):
        self.db = db

    def _query(self, owner_id: str, name: str = None):
        query = self.db.collection(LISTS_COLLECTION).where(
            filter=FieldFilter('owner_id', '==', owner_id)
        )
        if name is not None:
            query = query.where(filter=FieldFilter('name', '==', name))
        return query

    async def _find_doc(self, owner_id: str, name: str):
        docs = await self._query(owner_id, name).limit(1).get()
        if not docs:
            raise ListNotFound()
        return docs[0]

    @staticmethod
    def _to_model(doc, movies: List[str] = None) -> MovieList:
        data = doc.to_dict()
        return MovieList(
            id=doc.id,
            owner_id=data['owner_id'],
            name=data['name'],
            movies=dedupe(data.get('movies', []) if movies is None else movies),
            public=data.get('public', False)
        )

    async def check_name_available(self, owner_id: str, name: str):
        if not name or not name.strip():
            raise ValidationError("List name is required")
        if await self._query(owner_id, name).limit(1).get():
            raise ListNameTaken()

    async def create(
        self,
        owner_id: str,
        name: str,
        initial_movie_ids: Iterable[str] = (),
        public: bool = False
    ) -> MovieList:
        await self.check_name_available(owner_id, name)

        movies = dedupe(initial_movie_ids)
        list_ref = self.db.collection(LISTS_COLLECTION).document()
        await list_ref.set({
            'owner_id': owner_id,
            'name': name,
            'movies': movies,
            'public': public,
            'created_at': firestore.SERVER_TIMESTAMP,
            'updated_at': firestore.SERVER_TIMESTAMP
        })
        logger.info(f"List '{name}' created for user {owner_id}")
        return MovieList(id=list_ref.id, owner_id=owner_id, name=name, movies=movies, public=public)

    async def find_all_by_owner(self, owner_id: str) -> List[MovieList]:
        lists = [self._to_model(doc) async for doc in self._query(owner_id).stream()]
        return sorted(lists, key=lambda movie_list: movie_list.name)

    async def find_by_owner_and_name(self, owner_id: str, name: str) -> MovieList:
        return self._to_model(await self._find_doc(owner_id, name))

    async def replace_movies(self, owner_id: str, name: str, movie_ids: Iterable[str]) -> MovieList:
        doc = await self._find_doc(owner_id, name)
        movies = dedupe(movie_ids)
        await doc.reference.update({
            'movies': movies,
            'updated_at': firestore.SERVER_TIMESTAMP
        })
        return self._to_model(doc, movies)

    async def remove_movie(self, owner_id: str, name: str, imdb_id: str) -> MovieList:
        doc = await self._find_doc(owner_id, name)
        movies = doc.to_dict().get('movies', [])
        if imdb_id not in movies:
            raise MovieNotInList()

        remaining = [movie_id for movie_id in movies if movie_id != imdb_id]
        await doc.reference.update({
            'movies': remaining,
            'updated_at': firestore.SERVER_TIMESTAMP
        })
        return self._to_model(doc, remaining)

    async def delete(self, owner_id: str, name: str):
        doc = await self._find_doc(owner_id, name)
        await doc.reference.delete()
        logger.info(f"List '{name}' deleted for user {owner_id}")
