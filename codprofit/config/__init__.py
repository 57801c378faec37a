"""
COD Profit Analytics
Configuration Module
"""
from .settings import AnalyticsSettings, Settings, get_settings
from .logging import configure_logging, get_logger, report_log_context

__all__ = [
    "AnalyticsSettings",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "report_log_context",
]
