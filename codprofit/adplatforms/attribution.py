"""
Ad Spend Attribution

Links fetched campaign spend to products and spreads manually entered
lump sums into daily AdSpend entries.
"""

import uuid
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Set

import structlog

from codprofit.domain.models import AdSpend, CampaignMapping

logger = structlog.get_logger(__name__)


def apply_campaign_mappings(
    ad_spend: Sequence[AdSpend],
    mappings: Iterable[CampaignMapping],
) -> List[AdSpend]:
    """
    Stamp each entry with the product its campaign is mapped to.

    Entries whose campaign has a mapping take the mapping's product_id,
    including None for a cleared mapping. Entries without a mapping are
    returned unchanged.
    """
    by_campaign: Dict[str, CampaignMapping] = {}
    for mapping in mappings:
        by_campaign.setdefault(mapping.campaign_id, mapping)

    mapped = []
    for ad in ad_spend:
        mapping = by_campaign.get(ad.campaign_id) if ad.campaign_id else None
        if mapping is None:
            mapped.append(ad)
        else:
            mapped.append(ad.model_copy(update={"product_id": mapping.product_id}))
    return mapped


def unmapped_campaign_ids(ad_spend: Iterable[AdSpend]) -> Set[str]:
    """Campaigns with spend that is not yet attributed to a product"""
    return {ad.campaign_id for ad in ad_spend if ad.campaign_id and not ad.product_id}


def split_ad_spend(
    total: float,
    start_date: date,
    end_date: date,
    platform: str,
    product_id: Optional[str] = None,
) -> List[AdSpend]:
    """
    Spread a lump-sum spend evenly over an inclusive date range.

    Args:
        total: Amount spent over the whole range
        start_date: First day of the campaign
        end_date: Last day of the campaign
        platform: Ad platform name
        product_id: Product the spend is attributed to

    Returns:
        One AdSpend entry per day

    Raises:
        ValueError: If the range is inverted or the total is negative
    """
    if end_date < start_date:
        raise ValueError("End date cannot be before start date")
    if total < 0:
        raise ValueError("Total spend cannot be negative")

    days = (end_date - start_date).days + 1
    daily_amount = total / days

    entries = [
        AdSpend(
            id=str(uuid.uuid4()),
            date=start_date + timedelta(days=offset),
            platform=platform,
            amount_spent=daily_amount,
            product_id=product_id or None,
        )
        for offset in range(days)
    ]

    logger.info(
        "Manual ad spend split",
        platform=platform,
        days=days,
        daily_amount=daily_amount,
        product_id=product_id,
    )
    return entries
