"""
Domain exceptions.

Raised by the statistics layer and mapped to JSON responses by the
handlers registered in :mod:`app.main`.  An empty result set is never
an error: aggregates over no records are zero-valued.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal error"

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.error)
        self.detail = detail or self.error


class InvalidIdentity(AppError):
    """Owner identity is missing or malformed; rejected before querying."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid owner identity"


class StoreUnavailable(AppError):
    """The record store is unreachable or a query failed.  Never retried here."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error = "Record store unavailable"
