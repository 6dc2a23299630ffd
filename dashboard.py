import logging

from pymongo.errors import PyMongoError

from database import ORDERS, PRODUCTS, Database
from errors import StoreError
from schemas import PENDING_STATUSES, DashboardStats

logger = logging.getLogger("storefront.dashboard")


class DashboardService:
    """Summary figures for the admin dashboard, computed fresh on every call."""

    def __init__(self, database: Database):
        self.database = database

    def compute_stats(self) -> DashboardStats:
        try:
            product_count = self.database.collection(PRODUCTS).count_documents({})
            revenue = list(self.database.collection(ORDERS).aggregate([
                {"$group": {"_id": None, "totalRevenue": {"$sum": "$totalAmount"}}},
            ]))
            pending = self.database.collection(ORDERS).count_documents(
                {"status": {"$in": list(PENDING_STATUSES)}}
            )
        except PyMongoError as e:
            logger.error("Error fetching dashboard stats: %s", e, exc_info=True)
            raise StoreError("Error aggregating dashboard statistics.") from e

        total_revenue = revenue[0]["totalRevenue"] if revenue else 0
        return DashboardStats(
            productCount=product_count,
            totalRevenue=total_revenue or 0,
            pendingOrders=pending,
        )
