# tests/test_catalog.py

"""Tests for catalog queries and admin product management."""

import unittest
from unittest.mock import patch

from bson import ObjectId
from pymongo.errors import PyMongoError

from catalog import AdminCatalogService, CatalogQueryService
from database import PRODUCTS
from errors import NotFoundError, StoreError, ValidationError
from factories import make_database
from schemas import Category


class TestCatalogQueries(unittest.TestCase):
    """Category-scoped and full listings."""

    def setUp(self) -> None:
        self.database = make_database()
        self.database.collection(PRODUCTS).insert_many([
            {"name": "Milk", "category": "Groceries", "price": 1.2},
            {"name": "Bread", "category": "Groceries", "price": 3.75},
            {"name": "Pan", "category": "Kitchen utensils", "price": 25.0},
        ])
        self.catalog = CatalogQueryService(self.database)

    def test_list_by_category_exact_match(self) -> None:
        names = sorted(p["name"] for p in self.catalog.list_by_category("Groceries"))
        self.assertEqual(names, ["Bread", "Milk"])

    def test_category_match_is_case_sensitive(self) -> None:
        self.assertEqual(self.catalog.list_by_category("groceries"), [])

    def test_unknown_category_returns_empty(self) -> None:
        self.assertEqual(self.catalog.list_by_category(Category.FASHION.label), [])

    def test_products_expose_string_id(self) -> None:
        product = self.catalog.list_by_category("Kitchen utensils")[0]
        self.assertIsInstance(product["id"], str)
        self.assertNotIn("_id", product)

    def test_list_all(self) -> None:
        self.assertEqual(len(self.catalog.list_all()), 3)

    def test_get_product(self) -> None:
        product_id = self.catalog.list_all()[0]["id"]
        self.assertEqual(self.catalog.get_product(product_id)["id"], product_id)

    def test_get_product_unknown_or_malformed_id(self) -> None:
        for product_id in (str(ObjectId()), "not-an-id"):
            with self.subTest(product_id=product_id):
                with self.assertRaises(NotFoundError):
                    self.catalog.get_product(product_id)

    def test_store_failure(self) -> None:
        with patch.object(self.database, "get_documents", side_effect=PyMongoError("down")):
            with self.assertRaises(StoreError) as ctx:
                self.catalog.list_by_category("Groceries")
        self.assertEqual(ctx.exception.message, "Error fetching Groceries products.")


class TestCategoryEnum(unittest.TestCase):
    """Route slugs and stored category strings."""

    def test_seven_categories(self) -> None:
        self.assertEqual(len(Category), 7)

    def test_slugs_and_labels(self) -> None:
        self.assertEqual(Category.SNACKS.slug, "snacls")
        self.assertEqual(Category.APPLIANCES.label, "Home appliances")
        self.assertEqual(len({c.slug for c in Category}), 7)


class TestAdminCatalog(unittest.TestCase):
    """Create, update and delete products."""

    def setUp(self) -> None:
        self.database = make_database()
        self.admin = AdminCatalogService(self.database)
        self.product = self.admin.create_product(
            {"name": "Whisk", "category": "Kitchen utensils", "price": 8.5}
        )

    def test_create_returns_record_with_id(self) -> None:
        self.assertTrue(ObjectId.is_valid(self.product["id"]))
        self.assertEqual(self.product["name"], "Whisk")
        self.assertIsNone(self.product["description"])
        self.assertEqual(self.database.collection(PRODUCTS).count_documents({}), 1)

    def test_create_requires_name_category_price(self) -> None:
        base = {"name": "Pen", "category": "Stationary", "price": 1.0}
        for missing in ("name", "category", "price"):
            fields = {k: v for k, v in base.items() if k != missing}
            with self.subTest(missing=missing):
                with self.assertRaises(ValidationError):
                    self.admin.create_product(fields)

    def test_create_rejects_negative_price(self) -> None:
        with self.assertRaises(ValidationError):
            self.admin.create_product({"name": "Pen", "category": "Stationary", "price": -1})

    def test_category_not_restricted_to_known_values(self) -> None:
        product = self.admin.create_product({"name": "Kite", "category": "Toys", "price": 9})
        self.assertEqual(product["category"], "Toys")

    def test_non_finite_price_rejected(self) -> None:
        for price in (float("inf"), float("nan")):
            with self.subTest(price=price):
                with self.assertRaises(ValidationError):
                    self.admin.create_product({"name": "Pen", "category": "Stationary", "price": price})
                with self.assertRaises(ValidationError):
                    self.admin.update_product(self.product["id"], {"price": price})

    def test_partial_update_merges_fields(self) -> None:
        updated = self.admin.update_product(self.product["id"], {"price": 9.25})
        self.assertEqual(updated["price"], 9.25)
        self.assertEqual(updated["name"], "Whisk")
        self.assertEqual(updated["category"], "Kitchen utensils")

    def test_update_revalidates_merged_record(self) -> None:
        with self.assertRaises(ValidationError):
            self.admin.update_product(self.product["id"], {"name": None})
        with self.assertRaises(ValidationError):
            self.admin.update_product(self.product["id"], {"price": -5})

    def test_update_unknown_product(self) -> None:
        for product_id in (str(ObjectId()), "nope"):
            with self.subTest(product_id=product_id):
                with self.assertRaises(NotFoundError):
                    self.admin.update_product(product_id, {"price": 1})

    def test_delete(self) -> None:
        result = self.admin.delete_product(self.product["id"])
        self.assertEqual(result, {"message": "Product deleted successfully."})
        self.assertEqual(self.database.collection(PRODUCTS).count_documents({}), 0)

    def test_delete_twice_is_not_found(self) -> None:
        self.admin.delete_product(self.product["id"])
        with self.assertRaises(NotFoundError):
            self.admin.delete_product(self.product["id"])


if __name__ == "__main__":
    unittest.main()
