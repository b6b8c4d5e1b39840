"""
Module: response.py
Description: Gateway reply models.

Key Components:
- ErrorReason: Closed set of per-target error codes
- Result: Outcome for one registration id
- Response: Results of a round, or of a whole retried send

Dependencies: pydantic, enum, typing
"""

from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator


class ErrorReason(str, Enum):
    """Per-target error codes returned by the gateway."""

    MISSING_REGISTRATION = "MissingRegistration"
    INVALID_REGISTRATION = "InvalidRegistration"
    NOT_REGISTERED = "NotRegistered"
    INVALID_PACKAGE_NAME = "InvalidPackageName"
    MISMATCH_SENDER_ID = "MismatchSenderId"
    MESSAGE_TOO_BIG = "MessageTooBig"
    INVALID_DATA_KEY = "InvalidDataKey"
    INVALID_TTL = "InvalidTtl"
    UNAVAILABLE = "Unavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    DEVICE_MESSAGE_RATE_EXCEEDED = "DeviceMessageRateExceeded"
    TOPICS_MESSAGE_RATE_EXCEEDED = "TopicsMessageRateExceeded"
    INVALID_APNS_CREDENTIAL = "InvalidApnsCredential"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, code: str) -> "ErrorReason":
        """Map a raw error code to a reason, falling back to UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    def is_retryable(self) -> bool:
        """True if the target may be re-sent in a later round."""
        return self is ErrorReason.UNAVAILABLE


class Result(BaseModel):
    """
    Delivery outcome for a single registration id.

    A result with a message_id is a success; registration_id is then set
    only when the gateway reports a canonical replacement id. A result
    with an error is a failure. A result with neither was never resolved.
    """

    message_id: Optional[str] = None
    registration_id: Optional[str] = None
    error: Optional[ErrorReason] = None

    @field_validator('error', mode='before')
    @classmethod
    def validate_error(cls, v: Any) -> Optional[ErrorReason]:
        """Accept unknown error codes instead of rejecting the reply."""
        if v is None or v == "":
            return None
        if isinstance(v, ErrorReason):
            return v
        return ErrorReason.parse(str(v))

    @classmethod
    def unresolved(cls) -> "Result":
        """Placeholder for a target with no recorded outcome."""
        return cls()

    @property
    def succeeded(self) -> bool:
        return bool(self.message_id)

    @property
    def has_canonical_id(self) -> bool:
        return self.succeeded and bool(self.registration_id)

    @property
    def is_retryable(self) -> bool:
        return self.error is not None and self.error.is_retryable()

    @property
    def is_unresolved(self) -> bool:
        return not self.message_id and self.error is None


class Response(BaseModel):
    """
    Gateway response for a multicast send.

    For a single round, results align with the targets sent in that
    round. For a retried send, results align with the message's full
    target list and multicast_id is the id of the last round.

    Attributes:
        multicast_id: Gateway-assigned id of the batch
        success: Number of delivered targets
        failure: Number of failed or unresolved targets
        canonical_ids: Number of successes carrying a canonical id
        results: Per-target outcomes in target order
    """

    multicast_id: int = Field(default=0, description="Gateway batch id")
    success: int = Field(default=0, ge=0)
    failure: int = Field(default=0, ge=0)
    canonical_ids: int = Field(default=0, ge=0)
    results: List[Result] = Field(default_factory=list)
