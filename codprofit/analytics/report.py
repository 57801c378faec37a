"""
Dashboard Report

Runs every aggregator over one date window so presentation code gets a
consistent set of numbers.
"""

from datetime import date, timedelta
from typing import Optional, Sequence

import structlog

from codprofit.config import get_settings, report_log_context
from codprofit.domain.models import AdSpend, Order, Product
from codprofit.domain.results import DashboardReport
from .couriers import calculate_courier_performance
from .filters import filter_ad_spend_by_date, filter_orders_by_date
from .metrics import calculate_metrics
from .products import calculate_product_performance, group_product_performance
from .timeseries import build_daily_series

logger = structlog.get_logger(__name__)


def build_dashboard_report(
    orders: Sequence[Order],
    ad_spend: Sequence[AdSpend],
    products: Sequence[Product],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    ads_tax_rate: Optional[float] = None,
) -> DashboardReport:
    """
    Build the full dashboard for an inclusive date window.

    Args:
        orders: All known orders
        ad_spend: All known ad spend
        products: Product catalog
        start_date: Window start; defaults to ``default_range_days`` before end
        end_date: Window end; defaults to today
        ads_tax_rate: Ads tax percentage; defaults to the configured rate

    Returns:
        DashboardReport
    """
    analytics = get_settings().analytics
    end = end_date or date.today()
    start = start_date or end - timedelta(days=analytics.default_range_days)
    rate = analytics.ads_tax_rate if ads_tax_rate is None else ads_tax_rate

    window_orders = filter_orders_by_date(orders, start, end)
    window_ads = filter_ad_spend_by_date(ad_spend, start, end)

    with report_log_context(report_start=start.isoformat(), report_end=end.isoformat(), ads_tax_rate=rate):
        logger.info(
            "Building dashboard report",
            orders=len(window_orders),
            ad_entries=len(window_ads),
        )

        product_stats = calculate_product_performance(window_orders, products, window_ads, rate)

        return DashboardReport(
            start_date=start,
            end_date=end,
            ads_tax_rate=rate,
            metrics=calculate_metrics(window_orders, window_ads, rate),
            couriers=calculate_courier_performance(window_orders),
            products=product_stats,
            product_groups=group_product_performance(product_stats),
            daily=build_daily_series(window_orders, window_ads, start, end, rate),
        )
