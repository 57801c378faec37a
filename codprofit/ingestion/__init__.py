"""
Data Ingestion Module
"""
from .frames import ad_spend_from_frame, orders_from_frames, products_from_frames
from .status_mapping import normalize_courier_status

__all__ = [
    "ad_spend_from_frame",
    "orders_from_frames",
    "products_from_frames",
    "normalize_courier_status",
]
