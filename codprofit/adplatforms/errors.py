"""
Ad Platform Errors

Failure kinds surfaced by ad-platform clients. Callers tell an expired
session (re-authenticate) apart from missing permissions (re-grant scopes).
"""

from typing import Any, Dict, FrozenSet, Optional

from codprofit.domain.enums import AdPlatform


class AdPlatformError(Exception):
    """Any failure reported by an ad platform"""

    def __init__(self, message: str, platform: Optional[str] = None, code: Optional[int] = None):
        super().__init__(message)
        self.platform = platform
        self.code = code


class SessionExpiredError(AdPlatformError):
    """Access token expired or revoked"""


class PermissionDeniedError(AdPlatformError):
    """Token lacks the scope needed to read ad insights"""


FACEBOOK_SESSION_CODES: FrozenSet[int] = frozenset({102, 190})
FACEBOOK_PERMISSION_CODES: FrozenSet[int] = frozenset({10, 200, 294})

TIKTOK_SESSION_CODES: FrozenSet[int] = frozenset({40100, 40104, 40105})
TIKTOK_PERMISSION_CODES: FrozenSet[int] = frozenset({40001, 40002})


def _error_code(payload: Dict[str, Any]) -> Optional[int]:
    try:
        return int(payload.get("code"))
    except (TypeError, ValueError):
        return None


def classify_platform_error(platform: str, payload: Dict[str, Any]) -> AdPlatformError:
    """
    Build the exception matching an error payload.

    Facebook nests the error under ``error``; TikTok reports ``code`` and
    ``message`` at the top level.

    Args:
        platform: Platform name, e.g. "Facebook"
        payload: Decoded JSON error body

    Returns:
        SessionExpiredError, PermissionDeniedError or AdPlatformError
    """
    if platform == AdPlatform.FACEBOOK.value:
        body = payload.get("error", payload)
        session_codes, permission_codes = FACEBOOK_SESSION_CODES, FACEBOOK_PERMISSION_CODES
    else:
        body = payload
        session_codes, permission_codes = TIKTOK_SESSION_CODES, TIKTOK_PERMISSION_CODES

    code = _error_code(body)
    message = str(body.get("message") or "Unknown error")

    if code in session_codes:
        return SessionExpiredError(f"{platform} session expired: {message}", platform, code)
    if code in permission_codes:
        return PermissionDeniedError(f"{platform} permission error: {message}", platform, code)
    return AdPlatformError(f"{platform} API error: {message}", platform, code)
