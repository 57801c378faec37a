"""
Courier Status Mapping

Maps free-text tracking statuses reported by couriers onto OrderStatus.
Each carrier words its statuses differently; carriers without dedicated
rules use the generic keyword rules.
"""

from typing import Callable, Dict

from codprofit.domain.enums import CourierName, OrderStatus


def _generic_status(raw: str) -> OrderStatus:
    s = raw.lower()
    if "delivered" in s:
        return OrderStatus.DELIVERED
    if "return" in s or "rto" in s:
        return OrderStatus.RETURNED
    if "cancel" in s:
        return OrderStatus.CANCELLED
    if "booked" in s:
        return OrderStatus.BOOKED
    return OrderStatus.IN_TRANSIT


# Short codes used in TCS tracking payloads
_TCS_CODES: Dict[str, OrderStatus] = {
    "ok": OrderStatus.DELIVERED,
    "ro": OrderStatus.RETURNED,
    "cr": OrderStatus.RETURNED,
}


def _tcs_status(raw: str) -> OrderStatus:
    code = raw.strip().lower()
    if code in _TCS_CODES:
        return _TCS_CODES[code]
    return _generic_status(raw)


_POSTEX_STATUSES: Dict[str, OrderStatus] = {
    "delivered": OrderStatus.DELIVERED,
    "returned": OrderStatus.RETURNED,
    "out for return": OrderStatus.RTO_INITIATED,
    "return to shipper": OrderStatus.RTO_INITIATED,
    "cancelled": OrderStatus.CANCELLED,
    "unbooked": OrderStatus.PENDING,
    "booked": OrderStatus.BOOKED,
}


def _postex_status(raw: str) -> OrderStatus:
    # Warehouse, pickup, out-for-delivery and attempted all count as moving
    return _POSTEX_STATUSES.get(raw.strip().lower(), OrderStatus.IN_TRANSIT)


def _daewoo_status(raw: str) -> OrderStatus:
    s = raw.upper()
    if "DELIVERED" in s:
        return OrderStatus.DELIVERED
    if any(word in s for word in ("RETURN", "RTO", "REFUSED", "CANCEL")):
        if "ORIGIN" in s or "SHIPPER" in s:
            return OrderStatus.RETURNED
        return OrderStatus.RTO_INITIATED
    if any(word in s for word in ("ON ROUTE", "TRANSIT", "ARRIVAL", "DEPARTURE")):
        return OrderStatus.IN_TRANSIT
    return OrderStatus.BOOKED


_MAPPERS: Dict[CourierName, Callable[[str], OrderStatus]] = {
    CourierName.TCS: _tcs_status,
    CourierName.POSTEX: _postex_status,
    CourierName.DAEWOO: _daewoo_status,
}


def normalize_courier_status(courier: CourierName, raw_status: str) -> OrderStatus:
    """
    Translate a courier's tracking text into an OrderStatus.

    Args:
        courier: Carrier that reported the status
        raw_status: Tracking text as returned by the carrier

    Returns:
        OrderStatus
    """
    mapper = _MAPPERS.get(CourierName(courier), _generic_status)
    return mapper(raw_status or "")
