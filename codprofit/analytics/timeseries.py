"""
Daily Time Series

Day-bucketed revenue, profit and expense for charting. Every calendar day in
the requested range is present, including days without activity.

Ad spend in the series is taxed per platform: TikTok spend is tax exempt,
which differs from the uniform rate used by the dashboard metrics.
"""

from datetime import date, datetime, timedelta
from typing import Dict, FrozenSet, List, Optional, Sequence, Union

import structlog

from codprofit.domain.enums import AdPlatform
from codprofit.domain.models import AdSpend, Order
from codprofit.domain.results import TimeSeriesPoint

logger = structlog.get_logger(__name__)

DateLike = Union[date, str]

TAX_EXEMPT_PLATFORMS: FrozenSet[str] = frozenset({AdPlatform.TIKTOK.value})


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Return a date for a date or ISO string, None when it cannot be read"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def date_label(day: date) -> str:
    """Short chart label, e.g. 'Jan 5'"""
    return f"{day:%b} {day.day}"


def ad_spend_tax(ad: AdSpend, ads_tax_rate: float) -> float:
    if ad.platform in TAX_EXEMPT_PLATFORMS:
        return 0.0
    return ad.amount_spent * (ads_tax_rate / 100)


def build_daily_series(
    orders: Sequence[Order],
    ad_spend: Sequence[AdSpend],
    start_date: Optional[DateLike],
    end_date: Optional[DateLike],
    ads_tax_rate: float = 0.0,
) -> List[TimeSeriesPoint]:
    """
    Bucket orders and ad spend into one point per day of [start_date, end_date].

    Orders are bucketed by their creation date. Dispatched orders book their
    full cost (shipping, overhead, item COGS, courier tax) as expense; only
    delivered orders book revenue. Records dated outside the range are
    ignored.

    Returns:
        Points in date order, or an empty list for an invalid range
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None or start > end:
        logger.warning("Invalid date range for time series", start=start_date, end=end_date)
        return []

    revenue: Dict[date, float] = {}
    profit: Dict[date, float] = {}
    expense: Dict[date, float] = {}

    day = start
    while day <= end:
        revenue[day] = profit[day] = expense[day] = 0.0
        day += timedelta(days=1)

    for order in orders:
        key = order.created_at
        if key not in revenue:
            continue

        delivered = order.status.is_delivered
        if delivered:
            revenue[key] += order.cod_amount

        if order.status.is_dispatched:
            order_expense = (
                order.shipping_cost
                + order.overhead_cost
                + order.items_cost
                + order.tax_amount
            )
            expense[key] += order_expense
            if delivered:
                profit[key] += order.cod_amount - order_expense
            else:
                profit[key] -= order_expense

    for ad in ad_spend:
        key = ad.date
        if key not in expense:
            continue
        amount_with_tax = ad.amount_spent + ad_spend_tax(ad, ads_tax_rate)
        expense[key] += amount_with_tax
        profit[key] -= amount_with_tax

    return [
        TimeSeriesPoint(
            date=day,
            date_label=date_label(day),
            revenue=revenue[day],
            profit=profit[day],
            expense=expense[day],
        )
        for day in revenue
    ]
