"""
Dashboard Metrics

Portfolio-wide cash-basis profit and loss.

Revenue is recognized only on delivery, while shipping, overhead and COGS
accrue as soon as an order is dispatched. The cost of dispatched inventory
that has not been delivered is tracked separately as cash-in-transit stock.
"""

from typing import Sequence

import structlog

from codprofit.domain.enums import OrderStatus, PaymentStatus
from codprofit.domain.models import AdSpend, Order
from codprofit.domain.results import DashboardMetrics
from .ratios import percentage

logger = structlog.get_logger(__name__)


def calculate_metrics(
    orders: Sequence[Order],
    ad_spend: Sequence[AdSpend],
    ads_tax_rate: float = 0.0,
) -> DashboardMetrics:
    """
    Aggregate orders and ad spend into a single metrics snapshot.

    Args:
        orders: Orders in the reporting window
        ad_spend: Ad spend in the reporting window
        ads_tax_rate: Percentage tax applied uniformly to all ad spend

    Returns:
        DashboardMetrics
    """
    gross_revenue = 0.0
    total_cogs = 0.0
    cash_in_transit_stock = 0.0
    total_shipping_expense = 0.0
    total_overhead_cost = 0.0
    total_courier_tax = 0.0
    pending_remittance = 0.0

    dispatched_orders = 0
    delivered_orders = 0
    rto_orders = 0
    in_transit_orders = 0
    booked_orders = 0
    unbooked_orders = 0
    cancelled_orders = 0

    for order in orders:
        status = order.status

        if status is OrderStatus.IN_TRANSIT:
            in_transit_orders += 1
        elif status is OrderStatus.BOOKED:
            booked_orders += 1
        elif status is OrderStatus.PENDING:
            unbooked_orders += 1
        elif status is OrderStatus.CANCELLED:
            cancelled_orders += 1

        # Revenue, courier tax and remittance only on delivery
        if status.is_delivered:
            delivered_orders += 1
            gross_revenue += order.cod_amount
            total_courier_tax += order.tax_amount
            if order.payment_status is PaymentStatus.UNPAID:
                pending_remittance += order.cod_amount
        elif status.is_rto:
            rto_orders += 1

        if not status.is_dispatched:
            continue

        dispatched_orders += 1
        total_shipping_expense += order.shipping_cost
        total_overhead_cost += order.overhead_cost

        order_cost = order.items_cost
        total_cogs += order_cost
        if not status.is_delivered:
            cash_in_transit_stock += order_cost

    raw_ad_spend = sum(ad.amount_spent for ad in ad_spend)
    total_ads_tax = raw_ad_spend * (ads_tax_rate / 100)
    total_ad_spend = raw_ad_spend + total_ads_tax

    net_profit = (
        gross_revenue
        - total_cogs
        - total_shipping_expense
        - total_overhead_cost
        - total_courier_tax
        - total_ad_spend
    )
    gross_profit = net_profit + cash_in_transit_stock

    total_investment = total_cogs + total_shipping_expense + total_overhead_cost + total_ad_spend

    metrics = DashboardMetrics(
        total_orders=len(orders),
        dispatched_orders=dispatched_orders,
        delivered_orders=delivered_orders,
        rto_orders=rto_orders,
        in_transit_orders=in_transit_orders,
        booked_orders=booked_orders,
        unbooked_orders=unbooked_orders,
        cancelled_orders=cancelled_orders,
        gross_revenue=gross_revenue,
        total_cogs=total_cogs,
        total_shipping_expense=total_shipping_expense,
        total_overhead_cost=total_overhead_cost,
        total_courier_tax=total_courier_tax,
        raw_ad_spend=raw_ad_spend,
        total_ads_tax=total_ads_tax,
        total_ad_spend=total_ad_spend,
        cash_in_transit_stock=cash_in_transit_stock,
        pending_remittance=pending_remittance,
        net_profit=net_profit,
        gross_profit=gross_profit,
        rto_rate=percentage(rto_orders, delivered_orders + rto_orders),
        roi=percentage(net_profit, total_investment),
    )

    logger.debug(
        "Dashboard metrics calculated",
        orders=metrics.total_orders,
        dispatched=dispatched_orders,
        net_profit=net_profit,
    )

    return metrics
