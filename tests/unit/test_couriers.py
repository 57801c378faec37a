"""
Unit Tests - Courier Performance
"""
from codprofit.analytics.couriers import calculate_courier_performance
from codprofit.domain import CourierName, OrderStatus, PaymentStatus


def _by_name(stats):
    return {s.name: s for s in stats}


class TestCalculateCourierPerformance:
    """Tests for calculate_courier_performance"""

    def test_all_couriers_seeded(self):
        """Test every known courier is listed with no orders"""
        stats = calculate_courier_performance([])

        assert {s.name for s in stats} == {c.value for c in CourierName}
        assert all(s.total_orders == 0 and s.delivery_rate == 0 for s in stats)

    def test_counts_and_cash(self, make_order):
        """Test delivered, RTO and pending cash per courier"""
        orders = [
            make_order(OrderStatus.DELIVERED, courier=CourierName.POSTEX, cod_amount=2000, courier_fee=170, packaging_cost=45),
            make_order(OrderStatus.DELIVERED, courier=CourierName.POSTEX, cod_amount=3000, payment_status=PaymentStatus.REMITTED),
            make_order(OrderStatus.RTO_INITIATED, courier=CourierName.POSTEX, courier_fee=170, rto_penalty=85),
            make_order(OrderStatus.IN_TRANSIT, courier=CourierName.POSTEX, courier_fee=170),
        ]

        postex = _by_name(calculate_courier_performance(orders))["PostEx"]

        assert postex.total_orders == 4
        assert postex.delivered == 2
        assert postex.rto == 1
        assert postex.in_transit == 1
        assert postex.cash_pending == 2000
        assert postex.shipping_spend == 170 + 170 + 85 + 170
        assert round(postex.delivery_rate, 2) == 66.67

    def test_undispatched_orders_not_counted(self, make_order):
        """Test pending, booked and cancelled orders are skipped"""
        orders = [
            make_order(status, courier=CourierName.TRAX, courier_fee=180)
            for status in (OrderStatus.PENDING, OrderStatus.BOOKED, OrderStatus.CANCELLED)
        ]

        trax = _by_name(calculate_courier_performance(orders))["Trax"]

        assert trax.total_orders == 0
        assert trax.shipping_spend == 0

    def test_sorted_by_delivery_rate(self, make_order):
        """Test couriers are ordered by delivery rate"""
        orders = [
            make_order(OrderStatus.DELIVERED, courier=CourierName.LEOPARDS),
            make_order(OrderStatus.RETURNED, courier=CourierName.TCS),
            make_order(OrderStatus.DELIVERED, courier=CourierName.TCS),
        ]

        stats = calculate_courier_performance(orders)

        assert stats[0].name == "Leopards"
        assert stats[0].delivery_rate == 100
        assert stats[1].name == "TCS"
        assert stats[1].delivery_rate == 50
        rates = [s.delivery_rate for s in stats]
        assert rates == sorted(rates, reverse=True)
        assert all(0 <= r <= 100 for r in rates)
