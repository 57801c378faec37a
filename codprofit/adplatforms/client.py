"""
Ad Platform Client Contract

Clients fetch daily campaign spend per ad account. Transport lives in the
concrete subclasses; this module owns the parallel multi-account fetch and
the conversion of platform report rows into AdSpend records.
"""

import asyncio
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, Iterable, List, Sequence

import structlog

from codprofit.domain.enums import AdPlatform
from codprofit.domain.models import AdSpend

logger = structlog.get_logger(__name__)


class AdAccountClient(ABC):
    """
    Abstract base class for ad-platform clients.

    Subclasses implement ``fetch_account``, which raises
    SessionExpiredError or PermissionDeniedError on auth failures.
    """

    platform: str = ""

    @abstractmethod
    async def fetch_account(self, account_id: str, start_date: date, end_date: date) -> List[AdSpend]:
        """Fetch spend for one account over an inclusive date range"""
        pass

    async def fetch_accounts(
        self,
        account_ids: Sequence[str],
        start_date: date,
        end_date: date,
    ) -> List[AdSpend]:
        """
        Fetch several accounts in parallel.

        Best effort: an account that fails is logged and contributes no rows,
        so the result may under-report spend.
        """
        results = await asyncio.gather(
            *(self.fetch_account(account_id, start_date, end_date) for account_id in account_ids),
            return_exceptions=True,
        )

        spend: List[AdSpend] = []
        failed = 0
        for account_id, result in zip(account_ids, results):
            if isinstance(result, Exception):
                failed += 1
                logger.warning(
                    "Ad account fetch failed",
                    platform=self.platform,
                    account_id=account_id,
                    error=str(result),
                    error_type=type(result).__name__,
                )
                continue
            if isinstance(result, BaseException):
                raise result
            spend.extend(result)

        logger.info(
            "Ad accounts fetched",
            platform=self.platform,
            accounts=len(account_ids),
            failed=failed,
            entries=len(spend),
        )
        return spend


def facebook_insights_to_ad_spend(rows: Iterable[Dict[str, Any]]) -> List[AdSpend]:
    """Convert campaign-level Graph API insight rows (time_increment=1)"""
    return [
        AdSpend(
            id=f"fb-{row.get('campaign_id')}-{row['date_start']}",
            date=row["date_start"],
            platform=AdPlatform.FACEBOOK.value,
            amount_spent=float(row.get("spend") or 0),
            campaign_id=row.get("campaign_id"),
            campaign_name=row.get("campaign_name"),
        )
        for row in rows
    ]


def tiktok_report_to_ad_spend(rows: Iterable[Dict[str, Any]], exchange_rate: float = 1.0) -> List[AdSpend]:
    """
    Convert TikTok integrated report rows (campaign_id x stat_time_day).

    Spend is reported in the advertiser currency and converted with
    ``exchange_rate``, truncated to whole units.
    """
    entries = []
    for row in rows:
        metrics = row.get("metrics", {})
        dimensions = row.get("dimensions", {})
        day = str(dimensions["stat_time_day"]).split(" ")[0]
        entries.append(
            AdSpend(
                id=f"tt-{dimensions.get('campaign_id')}-{day}",
                date=day,
                platform=AdPlatform.TIKTOK.value,
                amount_spent=float(int(float(metrics.get("spend") or 0) * exchange_rate)),
                campaign_id=dimensions.get("campaign_id"),
                campaign_name=metrics.get("campaign_name"),
                purchases=int(float(metrics.get("conversion") or 0)),
            )
        )
    return entries
