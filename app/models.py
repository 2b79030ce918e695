import math
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from bson.decimal128 import Decimal128
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PaymentType(str, Enum):
    CASH = "cash"
    QR = "qr"
    LOAN = "loan"

    @classmethod
    def coerce(cls, value: Any) -> "PaymentType":
        """Return the matching member, or CASH for anything absent or unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.CASH


class PeriodFilter(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_WEEK = "lastWeek"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"


class PaymentFilter(str, Enum):
    ALL = "all"
    CASH = "cash"
    QR = "qr"
    LOAN = "loan"


# ── Coercion helpers ─────────────────────────────────────────────────────────

def coerce_amount(value: Any) -> float:
    """Numeric amount; unparseable, missing or non-finite input becomes 0."""
    if isinstance(value, Decimal128):
        value = value.to_decimal()
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_millis(value: Any) -> int:
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


# ── Records ──────────────────────────────────────────────────────────────────

class CamelModel(BaseModel):
    # field names are snake_case in Python, camelCase on the wire and in Mongo
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SaleEntry(CamelModel):
    id: str
    product_name: str = ""
    amount: float = 0.0
    payment_type: PaymentType = PaymentType.CASH
    date: str = ""           # YYYY-MM-DD business day
    created_at: int = 0      # ms since epoch, sort key

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "SaleEntry":
        sale_id = doc.get("id")
        if sale_id is None:
            sale_id = doc.get("_id", "")
        return cls(
            id=_as_text(sale_id),
            product_name=_as_text(doc.get("productName")),
            amount=coerce_amount(doc.get("amount")),
            payment_type=PaymentType.coerce(doc.get("paymentType")),
            date=_as_text(doc.get("date")),
            created_at=_as_millis(doc.get("createdAt")),
        )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class SaleInput(CamelModel):
    # lenient on purpose: the actions coerce and validate
    product_name: Any = ""
    amount: Any = 0
    payment_type: Any = None


# ── Response models ──────────────────────────────────────────────────────────

class SalesList(CamelModel):
    entries: list[SaleEntry] = []
    error: Optional[str] = None

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class ActionResult(CamelModel):
    success: bool
    entries: list[SaleEntry] = []
    error: Optional[str] = None

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class SalesSummary(CamelModel):
    period: PeriodFilter
    payment: PaymentFilter
    start: date
    end: date
    entries: list[SaleEntry]
    count: int
    total: Decimal
