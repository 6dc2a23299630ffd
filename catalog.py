import logging
from typing import Any, Dict, List

from pydantic import ValidationError as SchemaError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from database import PRODUCTS, Database, doc_to_dict, parse_object_id
from errors import NotFoundError, StoreError, ValidationError
from schemas import Product, ProductUpdate

logger = logging.getLogger("storefront.catalog")


def _schema_message(error: SchemaError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "product"
    return f"Invalid product data: {field} {first.get('msg', 'is invalid').lower()}."


class CatalogQueryService:
    """Read side of the catalog, open to every client."""

    def __init__(self, database: Database):
        self.database = database

    def list_by_category(self, category_name: str) -> List[dict]:
        try:
            docs = self.database.get_documents(PRODUCTS, {"category": category_name})
        except PyMongoError as e:
            logger.error("Error fetching %s: %s", category_name, e, exc_info=True)
            raise StoreError(f"Error fetching {category_name} products.") from e
        return [doc_to_dict(d) for d in docs]

    def list_all(self) -> List[dict]:
        try:
            docs = self.database.get_documents(PRODUCTS)
        except PyMongoError as e:
            logger.error("Error fetching all products: %s", e, exc_info=True)
            raise StoreError("Error fetching all products.") from e
        return [doc_to_dict(d) for d in docs]

    def get_product(self, product_id: str) -> dict:
        oid = parse_object_id(product_id)
        if oid is None:
            raise NotFoundError("Product not found.")
        try:
            doc = self.database.collection(PRODUCTS).find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Error fetching product %s: %s", product_id, e, exc_info=True)
            raise StoreError("Error fetching product.") from e
        if not doc:
            raise NotFoundError("Product not found.")
        return doc_to_dict(doc)


class AdminCatalogService:
    """Create, update and delete products. Callers must hold a session."""

    def __init__(self, database: Database):
        self.database = database

    def create_product(self, fields: Dict[str, Any]) -> dict:
        try:
            product = Product(**fields)
        except SchemaError as e:
            raise ValidationError(_schema_message(e))

        doc = product.model_dump()
        try:
            result = self.database.collection(PRODUCTS).insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to create product %r: %s", product.name, e, exc_info=True)
            raise StoreError("Failed to create product.") from e
        doc["_id"] = result.inserted_id
        logger.info("Product created: %s (%s)", product.name, result.inserted_id)
        return doc_to_dict(doc)

    def update_product(self, product_id: str, fields: Dict[str, Any]) -> dict:
        oid = parse_object_id(product_id)
        if oid is None:
            raise NotFoundError("Product not found.")

        try:
            changes = ProductUpdate(**fields).model_dump(exclude_unset=True)
        except SchemaError as e:
            raise ValidationError(_schema_message(e))

        collection = self.database.collection(PRODUCTS)
        try:
            current = collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to load product %s: %s", product_id, e, exc_info=True)
            raise StoreError("Failed to update product.") from e
        if not current:
            raise NotFoundError("Product not found.")

        merged = {k: v for k, v in current.items() if k != "_id"}
        merged.update(changes)
        try:
            validated = Product(**merged).model_dump()
        except SchemaError as e:
            raise ValidationError(_schema_message(e))

        try:
            updated = collection.find_one_and_update(
                {"_id": oid},
                {"$set": validated},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update product %s: %s", product_id, e, exc_info=True)
            raise StoreError("Failed to update product.") from e
        if not updated:
            raise NotFoundError("Product not found.")
        logger.info("Product updated: %s fields=%s", product_id, sorted(changes))
        return doc_to_dict(updated)

    def delete_product(self, product_id: str) -> Dict[str, str]:
        oid = parse_object_id(product_id)
        if oid is None:
            raise NotFoundError("Product not found.")
        try:
            deleted = self.database.collection(PRODUCTS).find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            logger.error("Failed to delete product %s: %s", product_id, e, exc_info=True)
            raise StoreError("Failed to delete product.") from e
        if not deleted:
            raise NotFoundError("Product not found.")
        logger.info("Product deleted: %s", product_id)
        return {"message": "Product deleted successfully."}
