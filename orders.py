"""Checkout and order administration.

Orders keep the totals and line-item prices the client sent at checkout.
Nothing is re-priced against the catalog, so later product edits never
change historical orders.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError as SchemaError
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from database import ORDERS, Database, doc_to_dict, parse_object_id
from errors import NotFoundError, StoreError, ValidationError
from schemas import ANONYMOUS_CUSTOMER, DEFAULT_ORDER_STATUS, CartItem, Order, OrderItem

logger = logging.getLogger("storefront.orders")


class OrderService:
    def __init__(self, database: Database):
        self.database = database

    def place_order(
        self,
        customer_name: Optional[str],
        items: Optional[List[CartItem]],
        grand_total: Optional[float],
    ) -> str:
        """Persist a checkout as a new order and return its id."""
        if not items or grand_total is None or not customer_name or not customer_name.strip():
            raise ValidationError("Order data is incomplete.")

        try:
            order = Order(
                customerName=customer_name,
                userId=ANONYMOUS_CUSTOMER,
                items=[
                    OrderItem(productId=item.id, name=item.name, price=item.price, quantity=item.quantity)
                    for item in items
                ],
                totalAmount=grand_total,
                orderDate=datetime.now(timezone.utc),
                status=DEFAULT_ORDER_STATUS,
            )
        except SchemaError:
            raise ValidationError("Order data is invalid.")
        try:
            order_id = self.database.create_document(ORDERS, order)
        except PyMongoError as e:
            logger.error("Error placing order for %s: %s", customer_name, e, exc_info=True)
            raise StoreError("Failed to place order due to database error.") from e

        logger.info("Order placed successfully for %s. Order ID: %s", customer_name, order_id)
        return order_id

    def list_orders(self) -> List[dict]:
        try:
            docs = self.database.get_documents(ORDERS, sort=[("orderDate", DESCENDING)])
        except PyMongoError as e:
            logger.error("Failed to fetch order history: %s", e, exc_info=True)
            raise StoreError("Failed to fetch order history.") from e
        return [doc_to_dict(d) for d in docs]

    def update_status(self, order_id: str, new_status: Optional[str]) -> dict:
        # Any status string and any transition is accepted.
        if not new_status or not new_status.strip():
            raise ValidationError("Status field is required.")

        oid = parse_object_id(order_id)
        if oid is None:
            raise NotFoundError("Order not found.")
        try:
            doc = self.database.collection(ORDERS).find_one_and_update(
                {"_id": oid},
                {"$set": {"status": new_status}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update order %s status: %s", order_id, e, exc_info=True)
            raise StoreError("Failed to update order status.") from e
        if not doc:
            raise NotFoundError("Order not found.")

        logger.info("Order %s status set to %s", order_id, new_status)
        return doc_to_dict(doc)
