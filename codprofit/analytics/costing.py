"""
Historical Costing

Point-in-time COGS lookup so older orders are costed at the price that was
in force when they were placed.
"""

from datetime import date

from codprofit.domain.models import Product


def get_cost_at_date(product: Product, reference_date: date) -> float:
    """
    Resolve the product cost applicable on a given date.

    Uses the most recent cost history entry dated on or before
    ``reference_date``. Dates earlier than the whole history clamp to the
    oldest known entry; a product without history uses ``current_cogs``.

    Args:
        product: Catalog product
        reference_date: Usually the order's creation date

    Returns:
        Unit cost
    """
    if not product.cost_history:
        return product.current_cogs

    newest_first = sorted(product.cost_history, key=lambda entry: entry.date, reverse=True)

    for entry in newest_first:
        if entry.date <= reference_date:
            return entry.cogs

    return newest_first[-1].cogs
