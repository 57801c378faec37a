"""
Ad Platform Integration Module
"""
from .attribution import apply_campaign_mappings, split_ad_spend, unmapped_campaign_ids
from .client import AdAccountClient, facebook_insights_to_ad_spend, tiktok_report_to_ad_spend
from .errors import (
    AdPlatformError,
    PermissionDeniedError,
    SessionExpiredError,
    classify_platform_error,
)

__all__ = [
    "apply_campaign_mappings",
    "split_ad_spend",
    "unmapped_campaign_ids",
    "AdAccountClient",
    "facebook_insights_to_ad_spend",
    "tiktok_report_to_ad_spend",
    "AdPlatformError",
    "PermissionDeniedError",
    "SessionExpiredError",
    "classify_platform_error",
]
