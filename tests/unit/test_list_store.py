import unittest

from app.core.exceptions import Conflict, ListNotFound, MovieNotInList, NotFound, ValidationError
from app.lists.service import LISTS_COLLECTION, ListStore, dedupe
from fakes import FakeFirestore


class DedupeTests(unittest.TestCase):
    def test_keeps_first_occurrence_order(self):
        self.assertEqual(dedupe(["b", "a", "b", "c", "a"]), ["b", "a", "c"])


class ListStoreTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = FakeFirestore()
        self.store = ListStore(self.db)

    async def test_create_dedupes_initial_movies(self):
        movie_list = await self.store.create("u1", "Favorites", ["tt1", "tt2", "tt1"], public=True)

        self.assertEqual(movie_list.movies, ["tt1", "tt2"])
        self.assertTrue(movie_list.public)
        stored = self.db.collection(LISTS_COLLECTION).docs[movie_list.id]
        self.assertEqual(stored["movies"], ["tt1", "tt2"])
        self.assertEqual(stored["owner_id"], "u1")

    async def test_blank_name_rejected(self):
        with self.assertRaises(ValidationError):
            await self.store.create("u1", "  ")

    async def test_same_name_conflicts_only_for_same_owner(self):
        await self.store.create("u1", "Favorites")
        with self.assertRaises(Conflict):
            await self.store.create("u1", "Favorites")

        other = await self.store.create("u2", "Favorites")
        self.assertEqual(other.owner_id, "u2")

    async def test_other_owners_list_looks_missing(self):
        await self.store.create("u1", "Favorites", ["tt1"])

        for call in (
            self.store.find_by_owner_and_name("u2", "Favorites"),
            self.store.replace_movies("u2", "Favorites", ["tt2"]),
            self.store.remove_movie("u2", "Favorites", "tt1"),
            self.store.delete("u2", "Favorites"),
        ):
            with self.assertRaises(ListNotFound):
                await call

        movie_list = await self.store.find_by_owner_and_name("u1", "Favorites")
        self.assertEqual(movie_list.movies, ["tt1"])

    async def test_find_all_by_owner_is_scoped_and_sorted(self):
        await self.store.create("u1", "Watch later")
        await self.store.create("u1", "Favorites")
        await self.store.create("u2", "Other")

        lists = await self.store.find_all_by_owner("u1")
        self.assertEqual([l.name for l in lists], ["Favorites", "Watch later"])
        self.assertEqual(await self.store.find_all_by_owner("nobody"), [])

    async def test_replace_movies_is_full_replacement_without_duplicates(self):
        await self.store.create("u1", "Favorites", ["tt1", "tt2"])

        updated = await self.store.replace_movies("u1", "Favorites", ["tt3", "tt3", "tt1"])

        self.assertEqual(updated.movies, ["tt3", "tt1"])
        reloaded = await self.store.find_by_owner_and_name("u1", "Favorites")
        self.assertEqual(reloaded.movies, ["tt3", "tt1"])

    async def test_remove_movie_twice_is_not_found(self):
        await self.store.create("u1", "Favorites", ["tt1", "tt2"])

        updated = await self.store.remove_movie("u1", "Favorites", "tt1")
        self.assertEqual(updated.movies, ["tt2"])

        with self.assertRaises(MovieNotInList) as ctx:
            await self.store.remove_movie("u1", "Favorites", "tt1")
        self.assertIsInstance(ctx.exception, NotFound)

    async def test_delete(self):
        await self.store.create("u1", "Favorites")
        await self.store.delete("u1", "Favorites")

        self.assertEqual(self.db.collection(LISTS_COLLECTION).docs, {})
        with self.assertRaises(ListNotFound):
            await self.store.delete("u1", "Favorites")


if __name__ == '__main__':
    unittest.main()
