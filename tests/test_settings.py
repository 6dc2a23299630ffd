# tests/test_settings.py

"""Tests for runtime configuration defaults."""

import unittest

from config import Settings, _database_name


class TestSettings(unittest.TestCase):

    def test_database_name_from_uri(self) -> None:
        self.assertEqual(_database_name("mongodb://127.0.0.1:27017/shop"), "shop")

    def test_database_name_fallback(self) -> None:
        self.assertEqual(_database_name("mongodb://127.0.0.1:27017"), "ecommercestore")
        self.assertEqual(_database_name("mongodb://127.0.0.1:27017/"), "ecommercestore")

    def test_token_lifetime_is_one_hour(self) -> None:
        self.assertEqual(Settings.TOKEN_TTL_SECONDS, 3600)

    def test_api_prefix(self) -> None:
        self.assertEqual(Settings.API_PREFIX, "/api")


if __name__ == "__main__":
    unittest.main()
