"""
Exceptions raised by the Highrise sync pipeline.
"""

from typing import Optional


class HighriseSyncError(Exception):
    """Base class for errors raised while syncing recordings."""


class FetchError(HighriseSyncError):
    """A GET against the CRM failed (non-2xx, transport error or bad XML)."""

    def __init__(
        self, message: str, status: Optional[int] = None, body: str = ""
    ):
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self):
        message = super().__str__()
        if self.status is not None:
            return f"{message} (status {self.status})"
        return message


class ParseError(HighriseSyncError):
    """A recording body could not be parsed."""


class DeliveryError(HighriseSyncError):
    """A webhook POST failed."""

    def __init__(
        self, message: str, status: Optional[int] = None, body: str = ""
    ):
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self):
        message = super().__str__()
        if self.status is not None:
            return f"{message} (status {self.status})"
        return message


# Errors confined to a single recording; they skip the recording, never the cycle
PER_RECORD_ERRORS = (FetchError, ParseError, DeliveryError)

__all__ = [
    "HighriseSyncError",
    "FetchError",
    "ParseError",
    "DeliveryError",
    "PER_RECORD_ERRORS",
]
