from typing import Optional

from pymongo import DESCENDING
from pymongo.collection import Collection

from app.db import get_sales_collection
from app.models import PaymentType, SaleEntry


class SalesStore:
    def __init__(self, collection: Optional[Collection] = None) -> None:
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is not None:
            return self._collection
        return get_sales_collection()

    # ── writes ────────────────────────────────────────────────────────────────

    def insert(self, entry: SaleEntry) -> None:
        self.collection.insert_one(entry.to_document())

    def update(
        self,
        sale_id: str,
        product_name: str,
        amount: float,
        payment_type: PaymentType,
    ) -> None:
        # date and createdAt are never part of an update
        self.collection.update_one(
            {"id": sale_id},
            {"$set": {
                "productName": product_name,
                "amount": amount,
                "paymentType": payment_type.value,
            }},
        )

    def delete(self, sale_id: str) -> None:
        self.collection.delete_one({"id": sale_id})

    def clear(self) -> None:
        self.collection.delete_many({})

    # ── reads ─────────────────────────────────────────────────────────────────

    def find_all(self) -> list[dict]:
        return list(self.collection.find({}).sort("createdAt", DESCENDING))


# module-level singleton used by the app
store = SalesStore()
