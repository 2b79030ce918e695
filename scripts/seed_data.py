"""
Deterministic demo-data generator.

Produces sales spread over the last 60 days:
  - product names drawn from a small grocery list
  - amounts between 0.50 and 80.00
  - payment types ~60 % cash, ~30 % qr, ~10 % loan
  - one business day per entry, createdAt inside that day

Run ``python -m scripts.seed_data`` to seed the configured database.
"""

import logging
import random
import uuid
from datetime import date, datetime, time, timedelta
from typing import Optional

from app.models import PaymentType, SaleEntry
from app.store import SalesStore

log = logging.getLogger("sales_tracker.seed")

SEED = 42
DAYS_BACK = 60

PRODUCTS = [
    "Rice", "Cooking oil", "Sugar", "Eggs", "Bread", "Milk",
    "Tea", "Soap", "Noodles", "Salt", "Flour", "",
]

_PAYMENT_WEIGHTS = [
    (PaymentType.CASH, 0.6),
    (PaymentType.QR, 0.3),
    (PaymentType.LOAN, 0.1),
]


def _pick_payment(rng: random.Random) -> PaymentType:
    types, weights = zip(*_PAYMENT_WEIGHTS)
    return rng.choices(types, weights=weights, k=1)[0]


def make_entries(count: int = 40, today: Optional[date] = None) -> list[SaleEntry]:
    rng = random.Random(SEED)
    today = today or date.today()
    entries = []
    for _ in range(count):
        day = today - timedelta(days=rng.randint(0, DAYS_BACK - 1))
        moment = datetime.combine(day, time(8)) + timedelta(seconds=rng.randint(0, 12 * 3600))
        entries.append(SaleEntry(
            id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
            product_name=rng.choice(PRODUCTS),
            amount=round(rng.uniform(0.5, 80.0), 2),
            payment_type=_pick_payment(rng),
            date=day.isoformat(),
            created_at=int(moment.timestamp() * 1000),
        ))
    return entries


def seed(store: SalesStore, count: int = 40, today: Optional[date] = None) -> int:
    entries = make_entries(count, today)
    for entry in entries:
        store.insert(entry)
    log.info("seeded count=%s", len(entries))
    return len(entries)


if __name__ == "__main__":
    from app.config import get_settings
    from app.logging_config import setup_logging
    from app.store import store

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    seed(store)
