"""
Computed Result Records

Created fresh on every aggregation call and handed to presentation code.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Union


@dataclass(frozen=True)
class DashboardMetrics:
    """Portfolio-wide cash-basis P&L snapshot"""
    total_orders: int
    dispatched_orders: int
    delivered_orders: int
    rto_orders: int
    in_transit_orders: int
    booked_orders: int
    unbooked_orders: int  # PENDING
    cancelled_orders: int

    gross_revenue: float
    total_cogs: float
    total_shipping_expense: float  # Forward + return + packaging
    total_overhead_cost: float
    total_courier_tax: float
    raw_ad_spend: float
    total_ads_tax: float
    total_ad_spend: float  # Including ads tax

    cash_in_transit_stock: float
    pending_remittance: float

    net_profit: float
    gross_profit: float
    rto_rate: float
    roi: float


@dataclass
class CourierStats:
    """Delivery and cash statistics for one courier"""
    name: str
    total_orders: int = 0
    delivered: int = 0
    rto: int = 0
    in_transit: int = 0
    delivery_rate: float = 0.0
    cash_pending: float = 0.0
    shipping_spend: float = 0.0


@dataclass
class ProductPerformance:
    """P&L for one product variant, with its share of order-level costs"""
    key: str
    id: str
    title: str
    sku: str
    group_id: Optional[str] = None
    group_name: Optional[str] = None
    in_catalog: bool = True  # False for records synthesized from order items

    units_sold: int = 0
    units_returned: int = 0
    units_in_transit: int = 0

    gross_revenue: float = 0.0
    cogs_total: float = 0.0
    cash_in_stock: float = 0.0
    shipping_cost_allocation: float = 0.0
    overhead_allocation: float = 0.0
    tax_allocation: float = 0.0
    ad_spend_allocation: float = 0.0
    marketing_purchases: int = 0

    net_profit: float = 0.0
    gross_profit: float = 0.0
    rto_rate: float = 0.0

    @property
    def dispatched_units(self) -> int:
        return self.units_sold + self.units_returned + self.units_in_transit

    @property
    def expenses(self) -> float:
        return (
            self.cogs_total
            + self.shipping_cost_allocation
            + self.overhead_allocation
            + self.tax_allocation
            + self.ad_spend_allocation
        )


@dataclass
class ProductGroupPerformance:
    """Variants sharing a product group, rolled up"""
    group_id: str
    title: str
    variants: List[ProductPerformance] = field(default_factory=list)

    units_sold: int = 0
    units_returned: int = 0
    units_in_transit: int = 0

    gross_revenue: float = 0.0
    cogs_total: float = 0.0
    cash_in_stock: float = 0.0
    shipping_cost_allocation: float = 0.0
    overhead_allocation: float = 0.0
    tax_allocation: float = 0.0
    ad_spend_allocation: float = 0.0
    marketing_purchases: int = 0

    net_profit: float = 0.0
    gross_profit: float = 0.0
    rto_rate: float = 0.0


ProfitabilityRow = Union[ProductGroupPerformance, ProductPerformance]


@dataclass
class ReconciliationStats:
    """Store-to-courier funnel for one product title"""
    key: str
    title: str
    total_ordered: int = 0
    pending_fulfillment: int = 0
    fulfilled: int = 0
    cancelled: int = 0
    dispatched: int = 0
    in_transit: int = 0
    delivered: int = 0
    rto: int = 0

    @property
    def confirmation_rate(self) -> float:
        return self.fulfilled / self.total_ordered * 100 if self.total_ordered else 0.0

    @property
    def delivery_rate(self) -> float:
        return self.delivered / self.dispatched * 100 if self.dispatched else 0.0


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One calendar day of chart data"""
    date: date
    date_label: str  # e.g. "Jan 5"
    revenue: float = 0.0
    profit: float = 0.0
    expense: float = 0.0


@dataclass
class DashboardReport:
    """Everything the dashboard needs for one date range"""
    start_date: date
    end_date: date
    ads_tax_rate: float
    metrics: DashboardMetrics
    couriers: List[CourierStats]
    products: List[ProductPerformance]
    product_groups: List[ProfitabilityRow]
    daily: List[TimeSeriesPoint]
