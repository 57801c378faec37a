"""
Test Suite Configuration
"""
from datetime import date
from typing import Callable, List

import polars as pl
import pytest

from codprofit.config import Settings
from codprofit.domain import (
    AdSpend,
    CostHistoryEntry,
    CourierName,
    Order,
    OrderItem,
    OrderStatus,
    Product,
)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(APP_ENV="testing", DEBUG=True)


@pytest.fixture
def make_item() -> Callable[..., OrderItem]:
    """Factory for order items with sensible defaults"""
    def factory(**overrides) -> OrderItem:
        fields = {
            "product_id": "prod-1",
            "sku": "SKU-001",
            "product_name": "Wireless Earbuds Pro",
            "quantity": 1,
            "sale_price": 3500.0,
            "cogs_at_time_of_order": 1200.0,
        }
        fields.update(overrides)
        return OrderItem(**fields)
    return factory


@pytest.fixture
def make_order(make_item) -> Callable[..., Order]:
    """Factory for orders; costs default to 0 and a single default item"""
    counter = {"n": 0}

    def factory(status: OrderStatus = OrderStatus.DELIVERED, **overrides) -> Order:
        counter["n"] += 1
        fields = {
            "id": f"ord-{counter['n']}",
            "status": status,
            "courier": CourierName.TCS,
            "created_at": date(2024, 1, 10),
            "items": [make_item()],
        }
        fields.update(overrides)
        return Order(**fields)
    return factory


@pytest.fixture
def make_ad() -> Callable[..., AdSpend]:
    """Factory for ad spend entries"""
    counter = {"n": 0}

    def factory(**overrides) -> AdSpend:
        counter["n"] += 1
        fields = {
            "id": f"ad-{counter['n']}",
            "date": date(2024, 1, 10),
            "platform": "Facebook",
            "amount_spent": 0.0,
        }
        fields.update(overrides)
        return AdSpend(**fields)
    return factory


@pytest.fixture
def sample_products() -> List[Product]:
    """Small catalog: two variants in one group and an ungrouped product"""
    return [
        Product(
            id="prod-1",
            sku="SKU-001",
            variant_fingerprint="earbuds-black",
            title="Wireless Earbuds Pro - Black",
            group_id="grp-earbuds",
            group_name="Wireless Earbuds Pro",
            current_cogs=1200.0,
        ),
        Product(
            id="prod-2",
            sku="SKU-002",
            variant_fingerprint="earbuds-white",
            title="Wireless Earbuds Pro - White",
            group_id="grp-earbuds",
            group_name="Wireless Earbuds Pro",
            current_cogs=1250.0,
        ),
        Product(
            id="prod-3",
            sku="SKU-003",
            title="Leather Wallet",
            current_cogs=450.0,
            cost_history=[
                CostHistoryEntry(date=date(2024, 1, 1), cogs=400.0),
                CostHistoryEntry(date=date(2024, 3, 1), cogs=450.0),
            ],
        ),
    ]


@pytest.fixture
def sample_orders_df() -> pl.DataFrame:
    """Orders frame as exported by the order sync"""
    return pl.DataFrame({
        "id": ["ord-1", "ord-2", "ord-3"],
        "status": ["delivered", "IN_TRANSIT", "pending"],
        "payment_status": ["UNPAID", "UNPAID", "UNPAID"],
        "courier": ["TCS", "PostEx", "Trax"],
        "created_at": ["2024-01-01", "2024-01-02T10:30:00", "2024-01-03"],
        "cod_amount": [3500.0, 1500.0, None],
        "courier_fee": [250.0, 170.0, None],
        "rto_penalty": [0.0, None, None],
        "packaging_cost": [45.0, 45.0, 45.0],
        "overhead_cost": [0.0, 0.0, 0.0],
        "tax_amount": [100.0, None, None],
    })


@pytest.fixture
def sample_items_df() -> pl.DataFrame:
    """Order lines frame keyed by order_id"""
    return pl.DataFrame({
        "order_id": ["ord-1", "ord-1", "ord-2", "ord-3"],
        "product_id": ["prod-1", "prod-3", "prod-3", "prod-2"],
        "sku": ["SKU-001", "SKU-003", "SKU-003", None],
        "product_name": ["Earbuds", "Wallet", "Wallet", "Earbuds"],
        "quantity": [1, 2, 1, 1],
        "sale_price": [2500.0, 500.0, 1500.0, 3500.0],
        "cogs_at_time_of_order": [1200.0, 400.0, None, 1250.0],
    })
