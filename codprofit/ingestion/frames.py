"""
Frame Ingestion

Turns polars frames (exported orders, order lines, ad spend, catalog) into
the domain models the analytics core consumes. Frames are validated first,
null numeric columns are filled with 0 and identifier columns are cast to
strings.
"""

from typing import Any, Dict, List, Optional, Type

import polars as pl
import structlog
from pydantic import BaseModel

from codprofit.domain.models import AdSpend, CostHistoryEntry, Order, OrderItem, Product
from codprofit.quality.validators import (
    ValidationStatus,
    create_order_items_validator,
    create_orders_validator,
)

logger = structlog.get_logger(__name__)

ORDER_FILL_VALUES: Dict[str, Any] = {
    "cod_amount": 0.0,
    "courier_fee": 0.0,
    "rto_penalty": 0.0,
    "packaging_cost": 0.0,
    "overhead_cost": 0.0,
    "tax_amount": 0.0,
}

ITEM_FILL_VALUES: Dict[str, Any] = {
    "sale_price": 0.0,
    "cogs_at_time_of_order": 0.0,
}

AD_SPEND_FILL_VALUES: Dict[str, Any] = {
    "amount_spent": 0.0,
    "purchases": 0,
}

PRODUCT_FILL_VALUES: Dict[str, Any] = {
    "current_cogs": 0.0,
}

ID_COLUMNS = ["id", "order_id", "product_id", "campaign_id", "group_id"]


def _fill_nulls(df: pl.DataFrame, fill_values: Dict[str, Any]) -> pl.DataFrame:
    """Fill null values with specified defaults"""
    for col, value in fill_values.items():
        if col in df.columns:
            df = df.with_columns(pl.col(col).fill_null(value).alias(col))
    return df


def _cast_ids(df: pl.DataFrame) -> pl.DataFrame:
    present = [col for col in ID_COLUMNS if col in df.columns]
    if not present:
        return df
    return df.with_columns([pl.col(col).cast(pl.Utf8) for col in present])


def _model_fields(row: Dict[str, Any], model: Type[BaseModel]) -> Dict[str, Any]:
    """Keep the row's non-null values for fields the model declares"""
    return {k: v for k, v in row.items() if k in model.model_fields and v is not None}


def _raise_on_failure(kind: str, result) -> None:
    if result.status == ValidationStatus.FAILED:
        failures = [c.message for c in result.checks if not c.passed]
        raise ValueError(f"{kind} validation failed: {failures}")


def prepare_orders_frame(orders_df: pl.DataFrame) -> pl.DataFrame:
    """Normalize an orders frame: string ids, upper-case status, zero-filled money"""
    df = _cast_ids(orders_df)
    for col in ("status", "payment_status"):
        if col in df.columns:
            df = df.with_columns(pl.col(col).str.strip_chars().str.to_uppercase().alias(col))
    return _fill_nulls(df, ORDER_FILL_VALUES)


def orders_from_frames(
    orders_df: pl.DataFrame,
    items_df: Optional[pl.DataFrame] = None,
    validate: bool = True,
) -> List[Order]:
    """
    Build Order models from an orders frame and an optional items frame.

    Args:
        orders_df: One row per order; columns named after Order fields
        items_df: One row per order line with an ``order_id`` column
        validate: Run data quality checks and raise on failure

    Returns:
        Orders in frame order, each with its items in frame order

    Raises:
        ValueError: If validation fails
        pydantic.ValidationError: If a row cannot form a valid model
    """
    orders_df = prepare_orders_frame(orders_df)
    if validate:
        _raise_on_failure("Orders", create_orders_validator().validate(orders_df))

    items_by_order: Dict[str, List[OrderItem]] = {}
    if items_df is not None:
        items_df = _fill_nulls(_cast_ids(items_df), ITEM_FILL_VALUES)
        if validate:
            _raise_on_failure("Order items", create_order_items_validator(orders_df).validate(items_df))
        for row in items_df.iter_rows(named=True):
            item = OrderItem(**_model_fields(row, OrderItem))
            items_by_order.setdefault(row["order_id"], []).append(item)

    orders = []
    for row in orders_df.iter_rows(named=True):
        fields = _model_fields(row, Order)
        fields["items"] = items_by_order.get(row["id"], [])
        orders.append(Order(**fields))

    logger.info(
        "Orders ingested",
        orders=len(orders),
        items=sum(len(o.items) for o in orders),
    )
    return orders


def ad_spend_from_frame(df: pl.DataFrame) -> List[AdSpend]:
    """Build AdSpend models from a frame of daily campaign spend"""
    df = _fill_nulls(_cast_ids(df), AD_SPEND_FILL_VALUES)
    entries = [AdSpend(**_model_fields(row, AdSpend)) for row in df.iter_rows(named=True)]
    logger.info("Ad spend ingested", entries=len(entries))
    return entries


def _history_by_product(cost_history_df: Optional[pl.DataFrame]) -> Dict[str, List[CostHistoryEntry]]:
    history: Dict[str, List[CostHistoryEntry]] = {}
    if cost_history_df is None:
        return history
    df = _cast_ids(cost_history_df)
    for row in df.drop_nulls(["product_id", "date"]).iter_rows(named=True):
        entry = CostHistoryEntry(**_model_fields(row, CostHistoryEntry))
        history.setdefault(row["product_id"], []).append(entry)
    return history


def products_from_frames(
    products_df: pl.DataFrame,
    cost_history_df: Optional[pl.DataFrame] = None,
) -> List[Product]:
    """
    Build Product models with their cost history.

    Args:
        products_df: One row per product variant
        cost_history_df: Rows of ``product_id``, ``date``, ``cogs``
    """
    df = _fill_nulls(_cast_ids(products_df), PRODUCT_FILL_VALUES)
    history = _history_by_product(cost_history_df)

    products = []
    for row in df.iter_rows(named=True):
        fields = _model_fields(row, Product)
        fields["cost_history"] = history.get(row["id"], [])
        products.append(Product(**fields))

    logger.info("Products ingested", products=len(products))
    return products
