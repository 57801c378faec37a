"""
Profit Analytics Module
"""
from .costing import get_cost_at_date
from .couriers import calculate_courier_performance
from .filters import filter_ad_spend_by_date, filter_orders_by_date
from .metrics import calculate_metrics
from .products import ProductResolver, calculate_product_performance, group_product_performance
from .reconciliation import calculate_reconciliation
from .report import build_dashboard_report
from .timeseries import build_daily_series

__all__ = [
    "get_cost_at_date",
    "calculate_courier_performance",
    "filter_ad_spend_by_date",
    "filter_orders_by_date",
    "calculate_metrics",
    "ProductResolver",
    "calculate_product_performance",
    "group_product_performance",
    "calculate_reconciliation",
    "build_dashboard_report",
    "build_daily_series",
]
