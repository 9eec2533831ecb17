from typing import Dict, Optional

from fastapi import status


class InventoryHistoryError(Exception):
    """Base error for the history read path; carries the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: Optional[Dict[str, str]] = None

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class UnauthorizedError(InventoryHistoryError):
    """No effective organization scope could be determined for the caller."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(InventoryHistoryError):
    """Caller asked for an organization it may not read."""

    status_code = status.HTTP_403_FORBIDDEN


class StoreUnavailableError(InventoryHistoryError):
    """The transaction store failed to answer."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
