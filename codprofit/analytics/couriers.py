"""
Courier Performance

Per-carrier delivery success, RTO counts, shipping spend and COD cash still
held by the courier.
"""

from typing import Dict, List, Sequence

import structlog

from codprofit.domain.enums import CourierName, OrderStatus, PaymentStatus
from codprofit.domain.models import Order
from codprofit.domain.results import CourierStats
from .ratios import percentage

logger = structlog.get_logger(__name__)


def calculate_courier_performance(orders: Sequence[Order]) -> List[CourierStats]:
    """
    Build one stats record per known courier, best delivery rate first.

    Couriers with no dispatched orders are still listed with zeroed stats.
    Pending, booked and cancelled orders are not counted.
    """
    stats: Dict[CourierName, CourierStats] = {
        courier: CourierStats(name=courier.value) for courier in CourierName
    }

    for order in orders:
        if not order.status.is_dispatched:
            continue

        s = stats[order.courier]
        s.total_orders += 1
        s.shipping_spend += order.courier_fee + order.rto_penalty

        if order.status.is_delivered:
            s.delivered += 1
            if order.payment_status is PaymentStatus.UNPAID:
                s.cash_pending += order.cod_amount
        elif order.status.is_rto:
            s.rto += 1
        elif order.status is OrderStatus.IN_TRANSIT:
            s.in_transit += 1

    for s in stats.values():
        s.delivery_rate = percentage(s.delivered, s.delivered + s.rto)

    logger.debug("Courier performance calculated", couriers=len(stats), orders=len(orders))

    return sorted(stats.values(), key=lambda s: s.delivery_rate, reverse=True)
