"""Guarded ratio helpers shared by the aggregators."""


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when there is nothing to divide by"""
    if whole <= 0:
        return 0.0
    return (part / whole) * 100
