"""
Package: gcmsender
Description: Bulk push-notification client for the GCM/FCM legacy HTTP API.

Sends one message to up to 1000 registration ids and retries only the
targets the gateway reports as temporarily unavailable.

Example:
    >>> sender = new_client(FCM_SEND_ENDPOINT, api_key)
    >>> message = Message(registration_ids=ids, data={"score": "5x1"})
    >>> response = sender.send(message, retries=2)
"""

from .config.settings import FCM_SEND_ENDPOINT, GCM_SEND_ENDPOINT, Settings
from .delivery.backoff import BackoffPolicy
from .delivery.sender import Sender, new_client
from .delivery.transport import HttpTransport, Transport
from .errors import GcmError, InvalidArgument, InvalidRequest, TransportFailure
from .models import ErrorReason, Message, Notification, Response, Result

__all__ = [
    "BackoffPolicy",
    "ErrorReason",
    "FCM_SEND_ENDPOINT",
    "GCM_SEND_ENDPOINT",
    "GcmError",
    "HttpTransport",
    "InvalidArgument",
    "InvalidRequest",
    "Message",
    "Notification",
    "Response",
    "Result",
    "Sender",
    "Settings",
    "Transport",
    "TransportFailure",
    "new_client",
]
