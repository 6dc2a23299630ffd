# tests/test_database.py

"""Tests for the document store wrapper and its helpers."""

import unittest
from datetime import datetime
from unittest.mock import MagicMock, patch

from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from database import ORDERS, USERS, Database, doc_to_dict, parse_object_id
from errors import StoreError
from factories import make_database
from schemas import Product


class TestHelpers(unittest.TestCase):
    """doc_to_dict and parse_object_id."""

    def test_doc_to_dict_renames_id_and_formats_values(self) -> None:
        oid = ObjectId()
        when = datetime(2026, 1, 2, 3, 4, 5)
        out = doc_to_dict({"_id": oid, "orderDate": when, "items": [{"productId": "p1"}]})
        self.assertEqual(out["id"], str(oid))
        self.assertNotIn("_id", out)
        self.assertEqual(out["orderDate"], "2026-01-02T03:04:05")
        self.assertEqual(out["items"], [{"productId": "p1"}])

    def test_parse_object_id(self) -> None:
        oid = ObjectId()
        self.assertEqual(parse_object_id(str(oid)), oid)
        self.assertIs(parse_object_id(oid), oid)
        self.assertIsNone(parse_object_id("p1"))
        self.assertIsNone(parse_object_id(None))


class TestDatabase(unittest.TestCase):
    """Connection lifecycle and document helpers."""

    def test_create_and_get_documents(self) -> None:
        database = make_database()
        new_id = database.create_document("products", Product(name="A", category="Groceries", price=1))
        self.assertTrue(ObjectId.is_valid(new_id))
        docs = database.get_documents("products", {"category": "Groceries"})
        self.assertEqual([d["name"] for d in docs], ["A"])

    def test_get_documents_sorted(self) -> None:
        database = make_database()
        for n in (2, 3, 1):
            database.create_document(ORDERS, {"n": n})
        docs = database.get_documents(ORDERS, sort=[("n", -1)])
        self.assertEqual([d["n"] for d in docs], [3, 2, 1])

    def test_email_index_is_unique(self) -> None:
        database = make_database()
        database.create_document(USERS, {"email": "a@b.com"})
        with self.assertRaises(DuplicateKeyError):
            database.create_document(USERS, {"email": "a@b.com"})

    def test_unconnected_store_raises(self) -> None:
        database = Database("mongodb://localhost:1/x", "x")
        self.assertFalse(database.connected)
        with self.assertRaises(StoreError):
            database.collection("products")

    @patch("database.MongoClient")
    def test_connect_failure_is_fatal(self, client_cls: MagicMock) -> None:
        """A failed ping raises instead of leaving a half-open store."""
        client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError("no server")
        database = Database("mongodb://localhost:1/x", "x", timeout_ms=10)
        with self.assertRaises(StoreError):
            database.connect()
        self.assertFalse(database.connected)

    @patch("database.MongoClient")
    def test_connect_pings_and_indexes(self, client_cls: MagicMock) -> None:
        database = Database("mongodb://db:27017/shop", "shop", timeout_ms=10).connect()
        client_cls.assert_called_once_with("mongodb://db:27017/shop", serverSelectionTimeoutMS=10)
        client_cls.return_value.admin.command.assert_called_once_with("ping")
        self.assertTrue(database.connected)
        database.close()
        self.assertFalse(database.connected)


if __name__ == "__main__":
    unittest.main()
