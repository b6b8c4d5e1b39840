"""
Module: delivery/sender.py
Description: Multicast send with partial-failure retries.

Sends a message to many registration ids and, when some of them fail
with a recoverable error, re-sends only to those targets using
exponential backoff. Results from every round are merged into a single
response aligned with the message's target list.

Key Components:
- Sender: Validates, sends and retries multicast messages
- new_client(): Checked constructor for an endpoint and API key

Calls block the caller through every round and backoff sleep, which
can add up to several seconds. The caller's Message is never modified.

Dependencies: tenacity, httpx (via transport)
"""

import time
from typing import Callable, List, Optional

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt
)

from gcmsender.config.settings import DEFAULT_RETRIES, GCM_SEND_ENDPOINT, Settings
from gcmsender.delivery.backoff import BackoffPolicy, BackoffWait
from gcmsender.delivery.reconciler import ResultReconciler
from gcmsender.delivery.transport import HttpTransport, Transport
from gcmsender.delivery.validation import check_message, check_retries, check_sender
from gcmsender.errors import InvalidRequest
from gcmsender.models.message import Message
from gcmsender.models.response import Response
from gcmsender.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


class Sender:
    """
    Client for the gateway's multicast send API.

    Attributes:
        api_key: Server API key
        url: Gateway send endpoint
        transport: Performs each round's HTTP exchange
        backoff: Delay policy between retry rounds
        retries: Retry budget used when send() is not given one

    A sender that builds its own HttpTransport owns it; close the sender
    (or use it as a context manager) to release the connection pool.
    """

    def __init__(
        self,
        api_key: str,
        url: str = GCM_SEND_ENDPOINT,
        transport: Optional[Transport] = None,
        backoff: Optional[BackoffPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
        retries: int = DEFAULT_RETRIES,
        timeout: float = 10.0
    ):
        """
        Initialize the sender.

        Args:
            api_key: Server API key, checked on every send
            url: Gateway endpoint; GCM_SEND_ENDPOINT when empty
            transport: Round transport; an HttpTransport when omitted
            backoff: Backoff policy; default delays when omitted
            sleep: Blocking sleep used between rounds (seconds)
            retries: Default retry budget for send()
            timeout: HTTP timeout for the HttpTransport built when
                transport is omitted
        """
        self.api_key = api_key
        self.url = url or GCM_SEND_ENDPOINT
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(timeout_seconds=timeout)
        self.backoff = backoff or BackoffPolicy()
        self._sleep = sleep
        self.retries = retries

    def __enter__(self) -> "Sender":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this sender created it."""
        if self._owns_transport:
            self.transport.close()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "Sender":
        """Build a sender from Settings and apply its log level."""
        configure_logging(settings.log_level)
        kwargs.setdefault('timeout', settings.timeout)
        kwargs.setdefault('retries', settings.retries)
        return cls(api_key=settings.api_key, url=settings.endpoint, **kwargs)

    def send_no_retry(self, message: Message) -> Response:
        """
        Send a message once, without retrying unavailable targets.

        Raises:
            InvalidRequest: If the sender or message is malformed
            TransportFailure: If the round fails
        """
        check_sender(self.api_key)
        check_message(message)

        return self._send_round(message, 0)

    def send(self, message: Message, retries: Optional[int] = None) -> Response:
        """
        Send a message, retrying targets that fail with a recoverable error.

        Round 0 goes to every target. Each later round goes only to the
        targets that came back Unavailable in the round before it, after
        a jittered backoff sleep, for at most `retries` extra rounds.

        Args:
            message: Message to send; it is not modified
            retries: Maximum number of rounds after the first;
                self.retries when omitted

        Returns:
            Response aligned with message.registration_ids. Targets still
            failing after the budget is spent report their last error.

        Raises:
            InvalidRequest: If the sender or message is malformed
            InvalidArgument: If retries is negative
            TransportFailure: If any round fails; earlier rounds' results
                are discarded
        """
        if retries is None:
            retries = self.retries

        check_sender(self.api_key)
        check_message(message)
        check_retries(retries)

        reconciler = ResultReconciler(message.registration_ids)
        rounds: List[Response] = []

        def is_single_round(response: Response) -> bool:
            # Round 0 stands alone when nothing failed or no retries are allowed
            return len(rounds) == 1 and (response.failure == 0 or retries == 0)

        def send_round() -> int:
            if rounds:
                batch = message.with_targets(reconciler.pending)
            else:
                batch = message
            response = self._send_round(batch, len(rounds))
            rounds.append(response)

            if is_single_round(response):
                return 0
            return reconciler.update(response)

        retrying = Retrying(
            stop=stop_after_attempt(retries + 1),
            wait=BackoffWait(self.backoff),
            retry=retry_if_result(lambda pending: pending > 0),
            sleep=self._sleep,
            before_sleep=_log_backoff,
            # Budget spent with targets still pending is not an error
            retry_error_callback=lambda retry_state: retry_state.outcome.result()
        )
        retrying(send_round)

        last = rounds[-1]
        if is_single_round(last):
            return last

        response = reconciler.finalize(last.multicast_id)

        logger.info(
            "Multicast send finished",
            rounds=len(rounds),
            targets=len(message.registration_ids),
            success=response.success,
            failure=response.failure,
            canonical_ids=response.canonical_ids,
            unresolved=len(reconciler.pending)
        )

        return response

    def _send_round(self, message: Message, round_number: int) -> Response:
        logger.debug(
            "Sending round",
            round=round_number,
            targets=len(message.registration_ids),
            endpoint=self.url
        )

        response = self.transport.exchange(self.url, self.api_key, message)

        logger.info(
            "Round sent",
            round=round_number,
            multicast_id=response.multicast_id,
            success=response.success,
            failure=response.failure
        )

        return response


def _log_backoff(retry_state: RetryCallState) -> None:
    logger.info(
        "Backing off before retry",
        round=retry_state.attempt_number,
        pending=retry_state.outcome.result(),
        sleep_seconds=retry_state.next_action.sleep
    )


def new_client(url: str, api_key: str) -> Sender:
    """
    Create a sender for the given endpoint and API key.

    Args:
        url: Gateway send endpoint (http or https)
        api_key: Server API key

    Returns:
        Sender using a default HttpTransport

    Raises:
        InvalidRequest: If either input is empty or the URL is malformed
    """
    if not url:
        raise InvalidRequest("missing GCM/FCM endpoint url")
    if not api_key:
        raise InvalidRequest("missing API key")

    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidRequest(f"failed to parse URL {url!r}: {e}") from e
    if parsed.scheme not in ('http', 'https') or not parsed.host:
        raise InvalidRequest(f"failed to parse URL {url!r}: must be an HTTP/HTTPS URL")

    return Sender(api_key=api_key, url=url)
