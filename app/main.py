from contextlib import asynccontextmanager
from datetime import date
from typing import Optional

from fastapi import FastAPI, Query

from app.actions import add_sale, delete_sale, list_sales, update_sale
from app.config import get_settings
from app.db import close_client
from app.logging_config import setup_logging
from app.models import PaymentFilter, PeriodFilter, SaleInput
from app.store import store
from app.summary import summarize


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    yield
    close_client()


app = FastAPI(
    title="Sales Tracker",
    version="1.0.0",
    description="Log retail sales and view totals by period and payment method",
    lifespan=lifespan,
)


@app.get("/health", summary="Liveness probe")
def health():
    return {"status": "ok"}


# ── Sales ────────────────────────────────────────────────────────────────────
# Action results always come back as 200; failures travel in the body.

@app.get("/api/v1/sales", summary="List all sales, most recent first")
def get_sales():
    return list_sales(store).to_response()


@app.post("/api/v1/sales", summary="Record a sale for today")
def post_sale(sale: SaleInput):
    return add_sale(sale, store).to_response()


@app.put("/api/v1/sales/{sale_id}", summary="Edit product, amount and payment type")
def put_sale(sale_id: str, sale: SaleInput):
    return update_sale(sale_id, sale, store).to_response()


@app.delete("/api/v1/sales/{sale_id}", summary="Delete a sale")
def remove_sale(sale_id: str):
    return delete_sale(sale_id, store).to_response()


# ── Totals ───────────────────────────────────────────────────────────────────

@app.get("/api/v1/sales/summary", summary="Filtered sales and their total")
def get_summary(
    period: PeriodFilter = Query(default=PeriodFilter.TODAY),
    payment: PaymentFilter = Query(default=PaymentFilter.ALL),
    as_of: Optional[date] = Query(default=None, description="Reference day (defaults to today)"),
):
    listed = list_sales(store)
    result = summarize(listed.entries, period, payment, as_of or date.today())
    body = result.model_dump(by_alias=True, mode="json")
    if listed.error:
        body["error"] = listed.error
    return body
