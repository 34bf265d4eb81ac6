"""Central error mapping for service results.

Single source of truth for mapping symbolic error codes returned by the
API service to HTTP statuses. Response shaping must import from here
instead of hardcoding status numbers per route.
"""

from __future__ import annotations

from typing import Optional

DEFAULT_ERROR_STATUS = 500

STANDARD_ERROR_CODES: dict[str, int] = {
    "NotModified": 304,
    "InvalidRequest": 400,
    "NotAuthenticated": 401,
    "NotAuthorized": 403,
    "NotFound": 404,
    "Conflict": 409,
    "RequestTooLarge": 413,
    "TooManyRequests": 429,
    "InternalError": 500,
    "ServiceUnavailable": 503,
    "NotAdmin": 403,
}


def status_for_error_code(code: Optional[str]) -> int:
    """Return the HTTP status for a symbolic error code (500 when unknown)."""
    if not code:
        return DEFAULT_ERROR_STATUS
    return STANDARD_ERROR_CODES.get(code, DEFAULT_ERROR_STATUS)


__all__ = ["STANDARD_ERROR_CODES", "DEFAULT_ERROR_STATUS", "status_for_error_code"]
