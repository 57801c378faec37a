"""
Closed enumerations for order lifecycle, remittance and couriers.

Status classification (dispatched, RTO) is declared per member in
lookup tables that cover the whole enumeration, so every status has exactly
one answer.
"""

from enum import Enum
from typing import Dict


class OrderStatus(str, Enum):
    """Courier-side lifecycle of an order"""
    PENDING = "PENDING"  # Not yet booked with a courier
    BOOKED = "BOOKED"  # Booked, not picked up
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"  # COD collected
    RTO_INITIATED = "RTO_INITIATED"
    RETURNED = "RETURNED"  # RTO received back by seller
    CANCELLED = "CANCELLED"

    @property
    def is_dispatched(self) -> bool:
        """Handed to the courier network; shipping, overhead and COGS accrue."""
        return _DISPATCHED[self]

    @property
    def is_chargeable(self) -> bool:
        """Cost accrual uses the same rule as dispatch."""
        return _DISPATCHED[self]

    @property
    def is_delivered(self) -> bool:
        return self is OrderStatus.DELIVERED

    @property
    def is_rto(self) -> bool:
        return _RTO[self]


_DISPATCHED: Dict[OrderStatus, bool] = {
    OrderStatus.PENDING: False,
    OrderStatus.BOOKED: False,
    OrderStatus.IN_TRANSIT: True,
    OrderStatus.DELIVERED: True,
    OrderStatus.RTO_INITIATED: True,
    OrderStatus.RETURNED: True,
    OrderStatus.CANCELLED: False,
}

_RTO: Dict[OrderStatus, bool] = {
    OrderStatus.PENDING: False,
    OrderStatus.BOOKED: False,
    OrderStatus.IN_TRANSIT: False,
    OrderStatus.DELIVERED: False,
    OrderStatus.RTO_INITIATED: True,
    OrderStatus.RETURNED: True,
    OrderStatus.CANCELLED: False,
}


class PaymentStatus(str, Enum):
    """COD remittance state"""
    UNPAID = "UNPAID"  # Courier still holds the cash
    REMITTED = "REMITTED"


class CourierName(str, Enum):
    """Carriers known to the platform"""
    TRAX = "Trax"
    LEOPARDS = "Leopards"
    TCS = "TCS"
    POSTEX = "PostEx"
    MNP = "M&P"
    CALLCOURIER = "CallCourier"
    DAEWOO = "Daewoo"


class AdPlatform(str, Enum):
    """Ad platforms with native integrations"""
    FACEBOOK = "Facebook"
    TIKTOK = "TikTok"
    GOOGLE = "Google"
