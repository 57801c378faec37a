"""
Input Data Models

Read-only records handed to the analytics core by upstream ingestion.
Numeric fields default to 0 and must be non-negative; timestamps are
truncated to calendar dates.
"""

import datetime as dt
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import CourierName, OrderStatus, PaymentStatus


def _to_date(value: Any) -> Any:
    """Coerce datetimes and ISO timestamp strings to a calendar date"""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return dt.datetime.fromisoformat(value.strip()).date()
    return value


class CostHistoryEntry(BaseModel):
    """Product cost in force from a given date"""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    cogs: float = Field(default=0.0, ge=0)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        return _to_date(v)


class OrderItem(BaseModel):
    """Single order line with the cost snapshot taken at order time"""
    model_config = ConfigDict(frozen=True)

    product_id: str
    sku: Optional[str] = None
    variant_fingerprint: Optional[str] = None
    product_name: str = ""
    quantity: int = Field(default=1, gt=0)
    sale_price: float = Field(default=0.0, ge=0)
    cogs_at_time_of_order: float = Field(default=0.0, ge=0)

    @property
    def line_cost(self) -> float:
        return self.cogs_at_time_of_order * self.quantity

    @property
    def lookup_key(self) -> str:
        return self.variant_fingerprint or self.sku or self.product_id


class Order(BaseModel):
    """Courier order with its costs and line items"""
    model_config = ConfigDict(frozen=True)

    id: str
    status: OrderStatus
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    courier: CourierName
    created_at: dt.date
    shopify_order_number: Optional[str] = None  # Storefront order name, e.g. "#1001"

    cod_amount: float = Field(default=0.0, ge=0)
    courier_fee: float = Field(default=0.0, ge=0)
    rto_penalty: float = Field(default=0.0, ge=0)
    packaging_cost: float = Field(default=0.0, ge=0)
    overhead_cost: float = Field(default=0.0, ge=0)
    tax_amount: float = Field(default=0.0, ge=0)

    items: Tuple[OrderItem, ...] = ()

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, v: Any) -> Any:
        return _to_date(v)

    @property
    def shipping_cost(self) -> float:
        """Forward fee, return penalty and packaging"""
        return self.courier_fee + self.rto_penalty + self.packaging_cost

    @property
    def items_cost(self) -> float:
        return sum(item.line_cost for item in self.items)


class AdSpend(BaseModel):
    """Daily campaign spend reported by an ad platform"""
    model_config = ConfigDict(frozen=True)

    id: str
    date: dt.date
    platform: str
    amount_spent: float = Field(default=0.0, ge=0)
    campaign_id: Optional[str] = None
    campaign_name: Optional[str] = None
    purchases: int = Field(default=0, ge=0)
    product_id: Optional[str] = None  # Direct attribution

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        return _to_date(v)


class Product(BaseModel):
    """Catalog product or variant with its cost history"""
    model_config = ConfigDict(frozen=True)

    id: str
    sku: str = ""
    variant_fingerprint: Optional[str] = None
    title: str = ""
    group_id: Optional[str] = None
    group_name: Optional[str] = None
    current_cogs: float = Field(default=0.0, ge=0)
    cost_history: Tuple[CostHistoryEntry, ...] = ()

    @property
    def lookup_key(self) -> str:
        return self.variant_fingerprint or self.sku or self.id


class CampaignMapping(BaseModel):
    """Links an ad campaign to the product it promotes"""
    model_config = ConfigDict(frozen=True)

    campaign_id: str
    campaign_name: Optional[str] = None
    product_id: Optional[str] = None  # None clears the link
    platform: str = "Facebook"


class ShopifyLineItem(BaseModel):
    """Storefront order line"""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    title: str
    quantity: int = Field(default=1, gt=0)
    sku: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    product_id: Optional[str] = None
    variant_id: Optional[str] = None

    @field_validator("id", "product_id", "variant_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v


class ShopifyOrder(BaseModel):
    """Order as placed on the storefront, before courier booking"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str  # e.g. "#1001"; matches Order.shopify_order_number
    created_at: dt.date
    fulfillment_status: Optional[str] = None
    cancel_reason: Optional[str] = None
    total_price: float = Field(default=0.0, ge=0)
    line_items: Tuple[ShopifyLineItem, ...] = ()

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, v: Any) -> Any:
        return _to_date(v)

    @property
    def is_cancelled(self) -> bool:
        return self.cancel_reason is not None

    @property
    def is_fulfilled(self) -> bool:
        return self.fulfillment_status == "fulfilled"
