"""
Product Performance

Per-variant profit and loss. Order-level costs (shipping, overhead, courier
tax) are shared across the order's line items using an even per-unit
allocation: each cost is divided by the number of lines in the order and
multiplied by the line quantity, regardless of the line's price or cost.
Directly attributed ad spend is charged to the product it targets.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from codprofit.domain.models import AdSpend, Order, OrderItem, Product
from codprofit.domain.results import (
    ProductGroupPerformance,
    ProductPerformance,
    ProfitabilityRow,
)
from .costing import get_cost_at_date
from .ratios import percentage

logger = structlog.get_logger(__name__)


class ProductResolver:
    """
    Match order items to catalog products.

    Candidates are tried in order: variant fingerprint, SKU, product id.
    The first catalog entry carrying a value wins.
    """

    def __init__(self, products: Sequence[Product]):
        self._by_fingerprint: Dict[str, Product] = {}
        self._by_sku: Dict[str, Product] = {}
        self._by_id: Dict[str, Product] = {}

        for product in products:
            if product.variant_fingerprint:
                self._by_fingerprint.setdefault(product.variant_fingerprint, product)
            if product.sku:
                self._by_sku.setdefault(product.sku, product)
            self._by_id.setdefault(product.id, product)

    def resolve(self, item: OrderItem) -> Optional[Product]:
        candidates = (
            (self._by_fingerprint, item.variant_fingerprint),
            (self._by_sku, item.sku),
            (self._by_id, item.product_id),
        )
        for index, value in candidates:
            if value and value in index:
                return index[value]
        return None


@dataclass
class _AdTotals:
    amount_spent: float = 0.0
    purchases: int = 0


def _ad_totals_by_product(ad_spend: Sequence[AdSpend]) -> Dict[str, _AdTotals]:
    totals: Dict[str, _AdTotals] = {}
    for ad in ad_spend:
        if not ad.product_id:
            continue
        bucket = totals.setdefault(ad.product_id, _AdTotals())
        bucket.amount_spent += ad.amount_spent
        bucket.purchases += ad.purchases
    return totals


def _catalog_record(product: Product, ads: _AdTotals, ads_tax_rate: float) -> ProductPerformance:
    return ProductPerformance(
        key=product.lookup_key,
        id=product.id,
        title=product.title,
        sku=product.sku,
        group_id=product.group_id,
        group_name=product.group_name,
        ad_spend_allocation=ads.amount_spent * (1 + ads_tax_rate / 100),
        marketing_purchases=ads.purchases,
    )


def _adhoc_record(item: OrderItem) -> ProductPerformance:
    return ProductPerformance(
        key=item.lookup_key,
        id=item.product_id,
        title=item.product_name,
        sku=item.sku or "N/A",
        in_catalog=False,
    )


def _finalize(record: ProductPerformance) -> ProductPerformance:
    record.net_profit = record.gross_revenue - record.expenses - record.cash_in_stock
    record.gross_profit = record.net_profit + record.cash_in_stock
    record.rto_rate = percentage(record.units_returned, record.units_sold + record.units_returned)
    return record


def calculate_product_performance(
    orders: Sequence[Order],
    products: Sequence[Product],
    ad_spend: Sequence[AdSpend] = (),
    ads_tax_rate: float = 0.0,
) -> List[ProductPerformance]:
    """
    Calculate P&L per product variant, most profitable first.

    Every catalog product gets a record, even without orders. Order items
    that match no catalog product get a synthesized record costed at the
    item's own COGS snapshot.

    Args:
        orders: Orders in the reporting window
        products: Product catalog
        ad_spend: Ad spend; only entries with a product_id are allocated
        ads_tax_rate: Percentage tax added on top of attributed ad spend

    Returns:
        List of ProductPerformance sorted by net profit descending
    """
    ads_by_product = _ad_totals_by_product(ad_spend)
    records: Dict[str, ProductPerformance] = {}
    for product in products:
        ads = ads_by_product.get(product.id, _AdTotals())
        records[product.id] = _catalog_record(product, ads, ads_tax_rate)

    resolver = ProductResolver(products)
    adhoc: Dict[str, ProductPerformance] = {}

    for order in orders:
        item_count = len(order.items)
        if item_count == 0:
            continue

        status = order.status
        chargeable = status.is_chargeable
        shipping_per_item = order.shipping_cost / item_count if chargeable else 0.0
        overhead_per_item = order.overhead_cost / item_count if chargeable else 0.0
        tax_per_item = order.tax_amount / item_count if status.is_delivered else 0.0

        for item in order.items:
            product = resolver.resolve(item)
            if product is not None:
                record = records[product.id]
                unit_cost = get_cost_at_date(product, order.created_at)
            else:
                record = adhoc.get(item.lookup_key)
                if record is None:
                    logger.warning(
                        "Order item matches no catalog product",
                        order_id=order.id,
                        sku=item.sku,
                        product_id=item.product_id,
                    )
                    record = adhoc[item.lookup_key] = _adhoc_record(item)
                unit_cost = item.cogs_at_time_of_order

            qty = item.quantity

            if chargeable:
                record.overhead_allocation += overhead_per_item * qty

            if status.is_rto:
                # Stock stuck in the network until received back
                record.units_returned += qty
                record.shipping_cost_allocation += shipping_per_item * qty
                record.cash_in_stock += unit_cost * qty
            elif status.is_delivered:
                record.units_sold += qty
                record.gross_revenue += item.sale_price * qty
                record.cogs_total += unit_cost * qty
                record.shipping_cost_allocation += shipping_per_item * qty
                record.tax_allocation += tax_per_item * qty
            elif chargeable:
                record.units_in_transit += qty
                record.shipping_cost_allocation += shipping_per_item * qty
                record.cash_in_stock += unit_cost * qty

    results = [_finalize(r) for r in list(records.values()) + list(adhoc.values())]

    logger.debug(
        "Product performance calculated",
        catalog_products=len(records),
        unmatched_products=len(adhoc),
        orders=len(orders),
    )

    return sorted(results, key=lambda r: r.net_profit, reverse=True)


_SUMMED_FIELDS: Tuple[str, ...] = (
    "units_sold",
    "units_returned",
    "units_in_transit",
    "gross_revenue",
    "cogs_total",
    "cash_in_stock",
    "shipping_cost_allocation",
    "overhead_allocation",
    "tax_allocation",
    "ad_spend_allocation",
    "marketing_purchases",
    "net_profit",
    "gross_profit",
)


def group_product_performance(stats: Sequence[ProductPerformance]) -> List[ProfitabilityRow]:
    """
    Roll variants up into their product groups.

    Records without dispatched units and without ad spend are dropped.
    Variants with a group id and name are summed into a
    ProductGroupPerformance; the rest are returned unchanged.

    Returns:
        Groups and ungrouped products, sorted by net profit descending
    """
    groups: Dict[str, ProductGroupPerformance] = {}
    singles: List[ProductPerformance] = []

    for stat in stats:
        if stat.dispatched_units == 0 and stat.ad_spend_allocation == 0:
            continue

        if not (stat.group_id and stat.group_name):
            singles.append(stat)
            continue

        group = groups.get(stat.group_id)
        if group is None:
            group = groups[stat.group_id] = ProductGroupPerformance(
                group_id=stat.group_id,
                title=stat.group_name,
            )
        group.variants.append(stat)
        for name in _SUMMED_FIELDS:
            setattr(group, name, getattr(group, name) + getattr(stat, name))

    for group in groups.values():
        group.rto_rate = percentage(group.units_returned, group.units_sold + group.units_returned)

    rows: List[ProfitabilityRow] = [*groups.values(), *singles]
    return sorted(rows, key=lambda row: row.net_profit, reverse=True)
