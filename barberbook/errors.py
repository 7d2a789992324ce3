# barberbook/errors.py
"""
Domain errors for the booking API.

Each error knows the HTTP status it maps to; the API layer renders them
through a single exception handler registered in main.py.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BarberbookError(Exception):
    """Base class for every error raised by barberbook."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class InvalidInterval(BarberbookError, ValueError):
    """A time interval with end <= start, or one that leaves the day."""

    status_code = 422


class InvalidRequest(BarberbookError, ValueError):
    """Caller supplied parameters that cannot be computed with."""

    status_code = 422


class SlotFormatError(BarberbookError, ValueError):
    """A slot time outside of a 24-hour day."""

    status_code = 422


class NotFound(BarberbookError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(BarberbookError):
    status_code = status.HTTP_409_CONFLICT


class SlotUnavailable(Conflict):
    """The requested start time is not a free slot for the barber."""
