"""Inclusive date-range filters applied before aggregation."""

from datetime import date
from typing import List, Sequence

from codprofit.domain.models import AdSpend, Order


def filter_orders_by_date(orders: Sequence[Order], start: date, end: date) -> List[Order]:
    return [order for order in orders if start <= order.created_at <= end]


def filter_ad_spend_by_date(ad_spend: Sequence[AdSpend], start: date, end: date) -> List[AdSpend]:
    return [ad for ad in ad_spend if start <= ad.date <= end]
