from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from app.models import PaymentFilter, PeriodFilter, SaleEntry, SalesSummary

_ZERO = Decimal("0.00")
_TWO_DP = Decimal("0.01")


def _as_day(now: Union[date, datetime, None]) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def _parse_day(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return None


def period_bounds(period: PeriodFilter, today: date) -> tuple[date, date]:
    """Inclusive (start, end) calendar days covered by ``period``."""
    period = PeriodFilter(period)
    if period is PeriodFilter.TODAY:
        return today, today
    if period is PeriodFilter.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if period is PeriodFilter.LAST_WEEK:
        return today - timedelta(days=7), today
    if period is PeriodFilter.THIS_MONTH:
        return today.replace(day=1), today
    # last month: first day of previous month → day before the 1st of this one
    end = today.replace(day=1) - timedelta(days=1)
    return end.replace(day=1), end


def filter_entries(
    entries: Iterable[SaleEntry],
    period: PeriodFilter,
    payment: PaymentFilter = PaymentFilter.ALL,
    now: Union[date, datetime, None] = None,
) -> list[SaleEntry]:
    start, end = period_bounds(period, _as_day(now))
    payment = PaymentFilter(payment)

    # ── 1. Business day inside the window ────────────────────────────────────
    in_range = []
    for entry in entries:
        day = _parse_day(entry.date)
        if day is not None and start <= day <= end:
            in_range.append(entry)

    # ── 2. Payment partition ─────────────────────────────────────────────────
    if payment is PaymentFilter.ALL:
        return in_range
    return [e for e in in_range if e.payment_type.value == payment.value]


def summarize(
    entries: Iterable[SaleEntry],
    period: PeriodFilter = PeriodFilter.TODAY,
    payment: PaymentFilter = PaymentFilter.ALL,
    now: Union[date, datetime, None] = None,
) -> SalesSummary:
    today = _as_day(now)
    start, end = period_bounds(period, today)
    visible = filter_entries(entries, period, payment, today)
    total = sum((Decimal(str(e.amount)) for e in visible), _ZERO).quantize(_TWO_DP)
    return SalesSummary(
        period=PeriodFilter(period),
        payment=PaymentFilter(payment),
        start=start,
        end=end,
        entries=visible,
        count=len(visible),
        total=total,
    )
