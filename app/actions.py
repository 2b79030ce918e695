"""
Sales actions.

Each action performs at most one store operation and then re-reads the whole
collection, so callers always receive a complete refreshed snapshot instead of
a delta. Store failures never escape: they come back as ``error`` on the
result, next to a best-effort re-read of the entries.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping, Union

from app.errors import ValidationError, describe_store_error
from app.models import (
    ActionResult,
    PaymentType,
    SaleEntry,
    SaleInput,
    SalesList,
    coerce_amount,
)
from app.store import SalesStore
from app.store import store as default_store

log = logging.getLogger("sales_tracker.sales")

AMOUNT_ERROR = "Amount must be greater than 0"

SaleData = Union[SaleInput, Mapping[str, Any], None]


def _new_id() -> str:
    return str(uuid.uuid4())


def _parse_input(data: SaleData) -> SaleInput:
    if isinstance(data, SaleInput):
        return data
    return SaleInput.model_validate(dict(data or {}))


def _clean_name(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validated_amount(value: Any) -> float:
    amount = coerce_amount(value)
    if amount <= 0:
        raise ValidationError(AMOUNT_ERROR)
    return amount


def _rejected(exc: ValidationError, store: SalesStore) -> ActionResult:
    log.warning("sale_rejected reason=%s", exc)
    return ActionResult(success=False, entries=list_sales(store).entries, error=str(exc))


def _failed(exc: Exception, fallback: str, store: SalesStore) -> ActionResult:
    refreshed = list_sales(store)
    message = describe_store_error(exc, "") or refreshed.error or fallback
    return ActionResult(success=False, entries=refreshed.entries, error=message)


def _succeeded(store: SalesStore) -> ActionResult:
    refreshed = list_sales(store)
    return ActionResult(success=True, entries=refreshed.entries, error=refreshed.error)


# ── Actions ──────────────────────────────────────────────────────────────────

def list_sales(store: SalesStore = default_store) -> SalesList:
    """All entries, most recent first."""
    try:
        docs = store.find_all()
    except Exception as exc:
        log.exception("list_sales failed")
        return SalesList(entries=[], error=describe_store_error(exc, "Failed to load sales"))
    return SalesList(entries=[SaleEntry.from_document(doc) for doc in docs])


def add_sale(
    data: SaleData,
    store: SalesStore = default_store,
    *,
    clock: Callable[[], datetime] = datetime.now,
    id_factory: Callable[[], str] = _new_id,
) -> ActionResult:
    sale = _parse_input(data)
    try:
        amount = validated_amount(sale.amount)
    except ValidationError as exc:
        return _rejected(exc, store)

    moment = clock()
    entry = SaleEntry(
        id=id_factory(),
        product_name=_clean_name(sale.product_name),
        amount=amount,
        payment_type=PaymentType.coerce(sale.payment_type),
        date=moment.date().isoformat(),
        created_at=int(moment.timestamp() * 1000),
    )
    try:
        store.insert(entry)
    except Exception as exc:
        log.exception("add_sale failed id=%s", entry.id)
        return _failed(exc, "Failed to add sale", store)

    log.info(
        "sale_added id=%s amount=%.2f payment=%s date=%s",
        entry.id, entry.amount, entry.payment_type.value, entry.date,
    )
    return _succeeded(store)


def update_sale(
    sale_id: str,
    data: SaleData,
    store: SalesStore = default_store,
) -> ActionResult:
    """Rewrite name, amount and payment type of one entry; a missing id is not an error."""
    sale = _parse_input(data)
    try:
        amount = validated_amount(sale.amount)
    except ValidationError as exc:
        return _rejected(exc, store)

    payment_type = PaymentType.coerce(sale.payment_type)
    try:
        store.update(str(sale_id), _clean_name(sale.product_name), amount, payment_type)
    except Exception as exc:
        log.exception("update_sale failed id=%s", sale_id)
        return _failed(exc, "Failed to update sale", store)

    log.info("sale_updated id=%s amount=%.2f payment=%s", sale_id, amount, payment_type.value)
    return _succeeded(store)


def delete_sale(sale_id: str, store: SalesStore = default_store) -> ActionResult:
    try:
        store.delete(str(sale_id))
    except Exception as exc:
        log.exception("delete_sale failed id=%s", sale_id)
        return _failed(exc, "Failed to delete sale", store)

    log.info("sale_deleted id=%s", sale_id)
    return _succeeded(store)
