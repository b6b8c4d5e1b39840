"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the data models exchanged with the gateway:
- Message, Notification: Outbound request body
- Result, Response, ErrorReason: Per-target and per-send outcomes

All models are exported here for convenient importing.
"""

from .message import Message, Notification
from .response import ErrorReason, Response, Result

__all__ = [
    "ErrorReason",
    "Message",
    "Notification",
    "Response",
    "Result",
]
