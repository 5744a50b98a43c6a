"""
Unit tests for the Redis-backed metadata cache.
"""

import unittest
import zlib
from unittest.mock import MagicMock

import redis

from movierec.core.cache import CacheService


class TestCacheService(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.cache = CacheService(client=self.client, compress=True)

    def test_keys_are_namespaced(self):
        """Identical queries map to identical keys."""
        self.assertEqual(CacheService.search_key("Drama", 1), "omdb:search:Drama:1")
        self.assertEqual(CacheService.detail_key("tt0111161"), "omdb:detail:tt0111161")

    def test_miss_returns_none(self):
        self.client.get.return_value = None
        self.assertIsNone(self.cache.get("omdb:detail:tt0000001"))

    def test_set_compresses_and_get_round_trips(self):
        stored = {}
        self.client.setex.side_effect = lambda key, ttl, payload: stored.update({key: payload})
        self.client.get.side_effect = lambda key: stored.get(key)

        self.assertTrue(self.cache.set("omdb:search:Drama:1", '{"Response":"True"}', 60))
        self.client.setex.assert_called_once()
        key, ttl, payload = self.client.setex.call_args[0]
        self.assertEqual(ttl, 60)
        self.assertEqual(zlib.decompress(payload), b'{"Response":"True"}')
        self.assertEqual(self.cache.get("omdb:search:Drama:1"), '{"Response":"True"}')

    def test_uncompressed_value_is_still_readable(self):
        self.client.get.return_value = b'{"Response":"True"}'
        self.assertEqual(self.cache.get("any"), '{"Response":"True"}')

    def test_get_failure_degrades_to_miss(self):
        self.client.get.side_effect = redis.ConnectionError("connection refused")
        with self.assertLogs("movierec.core.cache", level="WARNING"):
            self.assertIsNone(self.cache.get("omdb:detail:tt0111161"))

    def test_set_failure_is_swallowed(self):
        self.client.setex.side_effect = redis.TimeoutError("timed out")
        with self.assertLogs("movierec.core.cache", level="WARNING"):
            self.assertFalse(self.cache.set("k", "v", 10))

    def test_delete_failure_is_swallowed(self):
        self.client.delete.side_effect = redis.ConnectionError("gone")
        with self.assertLogs("movierec.core.cache", level="WARNING"):
            self.assertEqual(self.cache.delete("k"), 0)

    def test_delete_returns_count(self):
        self.client.delete.return_value = 1
        self.assertEqual(self.cache.delete("k"), 1)


if __name__ == '__main__':
    unittest.main()
