"""Tracks the HTTP status of an in-flight navigation"""

import logging
from typing import Optional

from .constants import JSON_MIME_TYPE
from .models import PendingResponse, RouteCategory

logger = logging.getLogger(__name__)


def is_json_error_response(category: RouteCategory, status: int, mime_type: Optional[str]) -> bool:
    """Check whether a response is an internal-route JSON application error

    Status 500 is excluded: server errors go through the transport failure path.
    """
    return (
        status >= 400
        and status != 500
        and category == RouteCategory.INTERNAL_ROUTES
        and mime_type == JSON_MIME_TYPE
    )


class ResponseStatusTracker:
    """Holds at most one pending status between a response and its finish event"""

    def __init__(self):
        self._pending: Optional[PendingResponse] = None

    @property
    def pending(self) -> Optional[PendingResponse]:
        return self._pending

    def record(self, url: str, status: int) -> None:
        if self._pending is not None:
            logger.debug(f"Replacing pending status {self._pending.status} with {status}")
        self._pending = PendingResponse(url=url, status=status)

    def consume(self) -> Optional[PendingResponse]:
        """Return the pending response and clear it"""
        pending, self._pending = self._pending, None
        return pending

    def clear(self) -> None:
        self._pending = None
