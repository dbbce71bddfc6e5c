import logging
from typing import Iterable, List, Optional

from ..core.exceptions import MovieNotFound
from .models import Movie, PlotLength, SearchResponse, SearchType
from .omdb_client import OmdbClient

logger = logging.getLogger(__name__)

MOVIES_COLLECTION = 'movies'


class MovieCache:
    """Read-through cache of OMDb titles, keyed by IMDb id.

    Entries are written once and never refreshed. Writes are keyed upserts on
    the document id, so two requests racing on the same miss leave exactly
    one document holding one provider response.
    """

    def __init__(self, db, omdb: OmdbClient):
        self.db = db
        self.omdb = omdb

    def _ref(self, imdb_id: str):
        return self.db.collection(MOVIES_COLLECTION).document(imdb_id)

    async def get(self, imdb_id: str) -> Optional[Movie]:
        doc = await self._ref(imdb_id).get()
        if not doc.exists:
            return None
        return Movie(**doc.to_dict())

    async def resolve(self, imdb_id: str) -> Movie:
        """Return the cached movie, fetching and storing it on a miss.

        Raises ``MovieNotFound`` when OMDb does not know the id.
        """
        movie = await self.get(imdb_id)
        if movie is not None:
            return movie

        logger.info(f"Movie {imdb_id} not cached, fetching from OMDb")
        payload = await self.omdb.get_by_id(imdb_id)
        movie = Movie.from_omdb(payload)
        if movie.imdb_id != imdb_id:
            logger.warning(f"OMDb returned {movie.imdb_id} for {imdb_id}, keeping {imdb_id}")
            movie = movie.model_copy(update={"imdb_id": imdb_id})

        await self._ref(imdb_id).set(movie.model_dump())
        return movie

    async def get_cached(self, imdb_ids: Iterable[str]) -> List[Movie]:
        """Cached movies for ``imdb_ids`` in the given order; misses are skipped."""
        imdb_ids = list(imdb_ids)
        if not imdb_ids:
            return []

        found = {}
        async for doc in self.db.get_all([self._ref(imdb_id) for imdb_id in imdb_ids]):
            if doc.exists:
                found[doc.id] = Movie(**doc.to_dict())

        missing = [imdb_id for imdb_id in imdb_ids if imdb_id not in found]
        if missing:
            logger.warning(f"Movies missing from cache: {', '.join(missing)}")
        return [found[imdb_id] for imdb_id in imdb_ids if imdb_id in found]


async def search_movies(
    omdb: OmdbClient,
    query: str,
    type: Optional[SearchType] = None,
    year: Optional[int] = None,
    plot: Optional[PlotLength] = None,
    page: int = 1
) -> SearchResponse:
    """Search OMDb by title and add the direct title match, if any.

    A search OMDb reports as not found raises ``MovieNotFound`` with OMDb's
    own message.
    """
    results = await omdb.search(
        query,
        type=type.value if type else None,
        year=year,
        plot=plot.value if plot else None,
        page=page
    )

    try:
        direct = await omdb.get_by_title(query)
    except MovieNotFound:
        direct = None

    return SearchResponse(
        search_results=results.get("Search", []),
        direct_result=direct
    )
