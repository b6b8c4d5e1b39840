"""
Module: errors.py
Description: Call-level exceptions raised by the GCM sender.

Per-target delivery failures are never raised; they are reported inside
the Response. Only the failures below reach the caller.
"""

from typing import Optional


class GcmError(Exception):
    """Base class for all sender errors."""


class InvalidRequest(GcmError, ValueError):
    """The sender or message is malformed. No request was made."""


class InvalidArgument(GcmError, ValueError):
    """An argument to a send call is out of range (e.g. negative retries)."""


class TransportFailure(GcmError):
    """
    A round could not be completed.

    Raised for network errors, timeouts, non-200 responses and replies
    that cannot be decoded. Any progress from earlier rounds of the same
    call is discarded.

    Attributes:
        status_code: HTTP status code when the gateway answered, else None
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
