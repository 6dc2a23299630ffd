import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from errors import StoreError

logger = logging.getLogger("storefront.database")

PRODUCTS = "products"
USERS = "users"
ORDERS = "orders"


# ---------- Helpers ----------

def doc_to_dict(doc: dict) -> dict:
    out = {}
    for k, v in doc.items():
        if isinstance(v, ObjectId):
            out[k] = str(v)
        elif isinstance(v, datetime):
            out[k] = v.isoformat()
        elif isinstance(v, list):
            out[k] = [doc_to_dict(i) if isinstance(i, dict) else i for i in v]
        else:
            out[k] = v
    if "_id" in out:
        out["id"] = out.pop("_id")
    return out


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return the ObjectId for ``value``, or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


# ---------- Store ----------

class Database:
    """Handle on the document store, created once at startup and shared by the services."""

    def __init__(self, uri: str, name: str, client: Optional[MongoClient] = None, timeout_ms: int = 5000):
        self.uri = uri
        self.name = name
        self.timeout_ms = timeout_ms
        self.client = client
        self.db = client[name] if client is not None else None

    @classmethod
    def from_client(cls, client, name: str) -> "Database":
        """Wrap an already built client (in-memory clients in tests)."""
        database = cls(uri="", name=name, client=client)
        database.ensure_indexes()
        return database

    @property
    def connected(self) -> bool:
        return self.db is not None

    def connect(self) -> "Database":
        if self.connected:
            return self
        try:
            client = MongoClient(self.uri, serverSelectionTimeoutMS=self.timeout_ms)
            client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", e)
            raise StoreError("Could not connect to the database.") from e
        self.client = client
        self.db = client[self.name]
        self.ensure_indexes()
        logger.info("MongoDB connected successfully (database=%s)", self.name)
        return self

    def ensure_indexes(self) -> None:
        try:
            self.db[USERS].create_index([("email", ASCENDING)], unique=True)
            self.db[ORDERS].create_index([("orderDate", DESCENDING)])
            self.db[PRODUCTS].create_index([("category", ASCENDING)])
        except PyMongoError as e:
            logger.error("Index creation failed: %s", e)
            raise StoreError("Could not prepare the database.") from e

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None

    def collection(self, name: str):
        if self.db is None:
            raise StoreError("Database not configured.")
        return self.db[name]

    # ---------- Document helpers ----------

    def create_document(self, collection_name: str, data: Union[BaseModel, Dict[str, Any]]) -> str:
        """Insert one document and return its generated id as a string."""
        if isinstance(data, BaseModel):
            data = data.model_dump()
        result = self.collection(collection_name).insert_one(dict(data))
        return str(result.inserted_id)

    def get_documents(
        self,
        collection_name: str,
        filter_dict: Optional[Dict[str, Any]] = None,
        sort: Optional[List[Tuple[str, int]]] = None,
    ) -> List[dict]:
        cursor = self.collection(collection_name).find(filter_dict or {})
        if sort:
            cursor = cursor.sort(sort)
        return list(cursor)
