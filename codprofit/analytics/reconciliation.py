"""
Store-to-Courier Reconciliation

Follows storefront orders through fulfillment and courier delivery, per
product title. Storefront and courier orders are joined on the order number
("#1001" and "1001" match).
"""

from datetime import date
from typing import Dict, List, Optional, Sequence

import structlog

from codprofit.domain.enums import OrderStatus
from codprofit.domain.models import Order, ShopifyOrder
from codprofit.domain.results import ReconciliationStats

logger = structlog.get_logger(__name__)


def _order_number(value: str) -> str:
    return value.replace("#", "").strip()


def calculate_reconciliation(
    shopify_orders: Sequence[ShopifyOrder],
    courier_orders: Sequence[Order],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
) -> List[ReconciliationStats]:
    """
    Build the ordered-to-delivered funnel for each product title.

    Each storefront order counts once, under the title of its first line
    item; orders without lines are skipped. Cancelled orders count only as
    cancelled. Courier-side stages come from the courier order with the
    same order number, if any.

    Args:
        shopify_orders: Storefront orders; duplicates by id are counted once
        courier_orders: Courier orders carrying ``shopify_order_number``
        start_date: Inclusive window start on the storefront order date
        end_date: Inclusive window end
        search: Case-insensitive substring filter on the title

    Returns:
        List of ReconciliationStats, most ordered first
    """
    courier_by_number: Dict[str, Order] = {}
    for order in courier_orders:
        if order.shopify_order_number:
            courier_by_number[_order_number(order.shopify_order_number)] = order

    unique: Dict[str, ShopifyOrder] = {}
    for order in shopify_orders:
        if start_date and order.created_at < start_date:
            continue
        if end_date and order.created_at > end_date:
            continue
        unique.setdefault(order.id, order)

    stats: Dict[str, ReconciliationStats] = {}
    unmatched = 0

    for order in unique.values():
        if not order.line_items:
            continue

        title = order.line_items[0].title
        stat = stats.get(title)
        if stat is None:
            stat = stats[title] = ReconciliationStats(key=title, title=title)
        stat.total_ordered += 1

        if order.is_cancelled:
            stat.cancelled += 1
            continue

        if order.is_fulfilled:
            stat.fulfilled += 1
        else:
            stat.pending_fulfillment += 1

        courier_order = courier_by_number.get(_order_number(order.name))
        if courier_order is None:
            unmatched += 1
            continue

        status = courier_order.status
        if status.is_dispatched:
            stat.dispatched += 1
        if status is OrderStatus.IN_TRANSIT:
            stat.in_transit += 1
        elif status.is_delivered:
            stat.delivered += 1
        elif status.is_rto:
            stat.rto += 1

    results = list(stats.values())
    if search:
        needle = search.lower()
        results = [s for s in results if needle in s.title.lower()]

    logger.debug(
        "Reconciliation calculated",
        store_orders=len(unique),
        products=len(results),
        without_courier_order=unmatched,
    )

    return sorted(results, key=lambda s: s.total_ordered, reverse=True)
