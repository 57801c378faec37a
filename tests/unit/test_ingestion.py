"""
Unit Tests - Ingestion
"""
from datetime import date

import polars as pl
import pytest
from pydantic import ValidationError

from codprofit.domain import CourierName, Order, OrderItem, OrderStatus, PaymentStatus
from codprofit.ingestion import (
    ad_spend_from_frame,
    normalize_courier_status,
    orders_from_frames,
    products_from_frames,
)


class TestOrdersFromFrames:
    """Tests for orders_from_frames"""

    def test_builds_orders_with_items(self, sample_orders_df, sample_items_df):
        """Test orders are built with their lines in frame order"""
        orders = orders_from_frames(sample_orders_df, sample_items_df)

        assert [o.id for o in orders] == ["ord-1", "ord-2", "ord-3"]
        assert [len(o.items) for o in orders] == [2, 1, 1]
        assert orders[0].status == OrderStatus.DELIVERED
        assert orders[0].courier == CourierName.TCS
        assert orders[0].items[1].quantity == 2

    def test_nulls_default_to_zero(self, sample_orders_df, sample_items_df):
        """Test null money columns become 0"""
        orders = orders_from_frames(sample_orders_df, sample_items_df)

        pending = orders[2]
        assert pending.status == OrderStatus.PENDING
        assert pending.cod_amount == 0
        assert pending.courier_fee == 0
        assert orders[1].items[0].cogs_at_time_of_order == 0
        assert orders[2].items[0].sku is None

    def test_timestamps_truncated_to_date(self, sample_orders_df):
        """Test timestamps become calendar dates"""
        orders = orders_from_frames(sample_orders_df)

        assert orders[1].created_at == date(2024, 1, 2)
        assert all(o.items == () for o in orders)

    def test_unknown_status_rejected(self, sample_orders_df):
        """Test unknown statuses fail validation"""
        df = sample_orders_df.with_columns(pl.Series("status", ["delivered", "lost", "pending"]))

        with pytest.raises(ValueError, match="Orders validation failed"):
            orders_from_frames(df)

    def test_negative_amount_rejected(self, sample_orders_df):
        """Test negative amounts fail validation"""
        df = sample_orders_df.with_columns(pl.Series("courier_fee", [250.0, -10.0, 0.0]))

        with pytest.raises(ValueError):
            orders_from_frames(df)

    def test_orphan_items_rejected(self, sample_orders_df, sample_items_df):
        """Test lines for unknown orders fail validation"""
        items = sample_items_df.with_columns(pl.Series("order_id", ["ord-1", "ord-1", "ord-2", "ord-99"]))

        with pytest.raises(ValueError, match="Order items validation failed"):
            orders_from_frames(sample_orders_df, items)


class TestProductsAndAdSpend:
    """Tests for products_from_frames and ad_spend_from_frame"""

    def test_products_with_history(self):
        """Test products get string ids and their cost history"""
        products_df = pl.DataFrame({
            "id": [1, 2],
            "sku": ["SKU-001", "SKU-002"],
            "title": ["Earbuds", "Watch"],
            "current_cogs": [1200.0, None],
        })
        history_df = pl.DataFrame({
            "product_id": [1, 1],
            "date": ["2024-01-01", "2024-03-01"],
            "cogs": [1100.0, 1200.0],
        })

        products = products_from_frames(products_df, history_df)

        assert products[0].id == "1"
        assert len(products[0].cost_history) == 2
        assert products[1].current_cogs == 0
        assert products[1].cost_history == ()

    def test_ad_spend(self):
        """Test ad spend nulls default to 0"""
        df = pl.DataFrame({
            "id": ["a1", "a2"],
            "date": ["2024-01-01", "2024-01-02"],
            "platform": ["Facebook", "TikTok"],
            "amount_spent": [1500.0, None],
            "purchases": [3, None],
            "product_id": ["prod-1", None],
        })

        ads = ad_spend_from_frame(df)

        assert ads[0].product_id == "prod-1"
        assert ads[1].amount_spent == 0
        assert ads[1].purchases == 0


class TestModels:
    """Tests for model constraints"""

    def test_quantity_must_be_positive(self):
        """Test zero quantity is rejected"""
        with pytest.raises(ValidationError):
            OrderItem(product_id="p", quantity=0)

    def test_money_must_be_non_negative(self):
        """Test negative money is rejected"""
        with pytest.raises(ValidationError):
            Order(id="o", status="DELIVERED", courier="TCS", created_at="2024-01-01", cod_amount=-1)

    def test_defaults(self):
        """Test order defaults and courier aliasing"""
        order = Order(id="o", status="BOOKED", courier="M&P", created_at="2024-01-01T09:00:00")

        assert order.payment_status == PaymentStatus.UNPAID
        assert order.courier == CourierName.MNP
        assert order.shipping_cost == 0
        assert order.items_cost == 0


class TestNormalizeCourierStatus:
    """Tests for normalize_courier_status"""

    @pytest.mark.parametrize("raw,expected", [
        ("OK", OrderStatus.DELIVERED),
        ("RO", OrderStatus.RETURNED),
        ("Shipment Delivered", OrderStatus.DELIVERED),
        ("Booked", OrderStatus.BOOKED),
        ("Arrived at facility", OrderStatus.IN_TRANSIT),
    ])
    def test_tcs(self, raw, expected):
        """Test TCS codes and free text"""
        assert normalize_courier_status(CourierName.TCS, raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("Unbooked", OrderStatus.PENDING),
        ("Out For Return", OrderStatus.RTO_INITIATED),
        ("Returned", OrderStatus.RETURNED),
        ("PostEx Warehouse", OrderStatus.IN_TRANSIT),
    ])
    def test_postex(self, raw, expected):
        """Test PostEx status names"""
        assert normalize_courier_status(CourierName.POSTEX, raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("RETURNED TO SHIPPER", OrderStatus.RETURNED),
        ("REFUSED BY CONSIGNEE", OrderStatus.RTO_INITIATED),
        ("ON ROUTE", OrderStatus.IN_TRANSIT),
        ("RECEIVED AT TERMINAL", OrderStatus.BOOKED),
    ])
    def test_daewoo(self, raw, expected):
        """Test Daewoo keyword rules"""
        assert normalize_courier_status(CourierName.DAEWOO, raw) == expected

    def test_generic_courier(self):
        """Test couriers without dedicated rules"""
        assert normalize_courier_status(CourierName.LEOPARDS, "Cancelled by shipper") == OrderStatus.CANCELLED
        assert normalize_courier_status(CourierName.TRAX, "") == OrderStatus.IN_TRANSIT
