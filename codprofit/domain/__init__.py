"""
Domain Models Module
"""
from .enums import AdPlatform, CourierName, OrderStatus, PaymentStatus
from .models import (
    AdSpend,
    CampaignMapping,
    CostHistoryEntry,
    Order,
    OrderItem,
    Product,
    ShopifyLineItem,
    ShopifyOrder,
)
from .results import (
    CourierStats,
    DashboardMetrics,
    DashboardReport,
    ProductGroupPerformance,
    ProductPerformance,
    ReconciliationStats,
    TimeSeriesPoint,
)

__all__ = [
    "AdPlatform",
    "CourierName",
    "OrderStatus",
    "PaymentStatus",
    "AdSpend",
    "CampaignMapping",
    "CostHistoryEntry",
    "Order",
    "OrderItem",
    "Product",
    "ShopifyLineItem",
    "ShopifyOrder",
    "CourierStats",
    "DashboardMetrics",
    "DashboardReport",
    "ProductGroupPerformance",
    "ProductPerformance",
    "ReconciliationStats",
    "TimeSeriesPoint",
]
