"""
Module: delivery/validation.py
Description: Request checks run before any network activity.

Every send path calls these first, so a malformed request fails
without touching the transport.
"""

from typing import Optional

from gcmsender.errors import InvalidArgument, InvalidRequest
from gcmsender.models.message import Message

# Max number of registration ids in one message.
MAX_REGISTRATION_IDS = 1000

# Max time the gateway stores a message for an offline device (4 weeks).
MAX_TIME_TO_LIVE = 2419200


def check_sender(api_key: Optional[str]) -> None:
    """
    Validate the sender's credentials.

    Raises:
        InvalidRequest: If the API key is missing or blank
    """
    if not api_key or not api_key.strip():
        raise InvalidRequest("the sender's API key must not be empty")


def check_message(message: Optional[Message]) -> None:
    """
    Validate a message's target list and time_to_live bounds.

    Args:
        message: Message about to be sent

    Raises:
        InvalidRequest: If the message is missing, has no targets, has more
            than MAX_REGISTRATION_IDS targets, or time_to_live is outside
            [0, MAX_TIME_TO_LIVE]
    """
    if message is None:
        raise InvalidRequest("the message must not be None")
    if not message.registration_ids:
        raise InvalidRequest("the message must specify at least one registration ID")
    if len(message.registration_ids) > MAX_REGISTRATION_IDS:
        raise InvalidRequest(
            f"the message may specify at most {MAX_REGISTRATION_IDS} registration IDs"
        )
    ttl = message.time_to_live
    if ttl is not None and (ttl < 0 or ttl > MAX_TIME_TO_LIVE):
        raise InvalidRequest(
            "the message's time_to_live must be an integer "
            f"between 0 and {MAX_TIME_TO_LIVE} (4 weeks)"
        )


def check_retries(retries: int) -> None:
    """Reject a negative retry budget."""
    if retries < 0:
        raise InvalidArgument("'retries' must not be negative")
