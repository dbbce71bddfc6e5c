import asyncio
import unittest

from app.core.exceptions import MovieNotFound, NotFound, ProviderUnavailable
from app.movies.service import MOVIES_COLLECTION, MovieCache
from fakes import OMDB_MOVIES, FakeFirestore, FakeOmdb, omdb_payload


class MovieCacheTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = FakeFirestore()
        self.omdb = FakeOmdb()
        self.cache = MovieCache(self.db, self.omdb.client())

    @property
    def stored(self):
        return self.db.collection(MOVIES_COLLECTION).docs

    async def test_miss_fetches_and_stores_normalised_movie(self):
        movie = await self.cache.resolve("tt0111161")

        self.assertEqual(movie.imdb_id, "tt0111161")
        self.assertEqual(movie.title, "The Shawshank Redemption")
        self.assertEqual(movie.director, "Frank Darabont")
        self.assertIsNone(movie.plot)  # OMDb's "N/A"
        self.assertEqual(self.stored["tt0111161"]["title"], "The Shawshank Redemption")

    async def test_hit_does_not_call_provider(self):
        await self.cache.resolve("tt0111161")
        await self.cache.resolve("tt0111161")
        self.assertEqual(len(self.omdb.lookups("tt0111161")), 1)

    async def test_unknown_id_is_not_found_and_not_stored(self):
        with self.assertRaises(MovieNotFound) as ctx:
            await self.cache.resolve("tt9999999")
        self.assertIsInstance(ctx.exception, NotFound)
        self.assertEqual(ctx.exception.detail, "Incorrect IMDb ID.")
        self.assertNotIn("tt9999999", self.stored)

    async def test_provider_outage_is_not_a_miss(self):
        cache = MovieCache(self.db, FakeOmdb(status_code=503).client())
        with self.assertRaises(ProviderUnavailable):
            await cache.resolve("tt0111161")

    async def test_concurrent_misses_leave_one_entry_matching_provider(self):
        movies = await asyncio.gather(
            self.cache.resolve("tt0068646"),
            self.cache.resolve("tt0068646")
        )

        self.assertEqual(movies[0], movies[1])
        self.assertEqual(list(self.stored), ["tt0068646"])
        self.assertEqual(self.stored["tt0068646"]["title"], OMDB_MOVIES["tt0068646"]["Title"])
        self.assertEqual(self.stored["tt0068646"]["genre"], "Crime, Drama")

    async def test_provider_answering_another_id_is_stored_under_requested_id(self):
        self.omdb.movies["tt0000002"] = omdb_payload("tt0000003", "Merged Title")

        movie = await self.cache.resolve("tt0000002")

        self.assertEqual(movie.imdb_id, "tt0000002")
        self.assertEqual(self.stored["tt0000002"]["imdb_id"], "tt0000002")
        self.assertNotIn("tt0000003", self.stored)
        self.assertEqual((await self.cache.get("tt0000002")).title, "Merged Title")

    async def test_get_cached_keeps_order_and_skips_misses(self):
        await self.cache.resolve("tt0111161")
        await self.cache.resolve("tt0068646")
        requests_before = len(self.omdb.requests)

        movies = await self.cache.get_cached(["tt0068646", "tt0000001", "tt0111161"])

        self.assertEqual([m.imdb_id for m in movies], ["tt0068646", "tt0111161"])
        self.assertEqual(len(self.omdb.requests), requests_before)

    async def test_get_cached_empty(self):
        self.assertEqual(await self.cache.get_cached([]), [])


if __name__ == '__main__':
    unittest.main()
