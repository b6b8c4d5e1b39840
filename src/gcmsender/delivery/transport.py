"""
Module: delivery/transport.py
Description: HTTP exchange with the gateway.

Performs one POST per round and decodes the reply. Unlike per-target
failures, anything that goes wrong here fails the whole round.
"""

import time
from typing import Optional, Protocol

import httpx

from gcmsender.errors import TransportFailure
from gcmsender.models.message import Message
from gcmsender.models.response import Response
from gcmsender.utils.logger import get_logger

logger = get_logger(__name__)


class Transport(Protocol):
    """Anything that can perform one send round against the gateway."""

    def exchange(self, endpoint: str, api_key: str, message: Message) -> Response:
        ...


class HttpTransport:
    """
    Synchronous httpx transport for the legacy HTTP protocol.

    Handles authorization headers, status checks and reply decoding.
    Pass an httpx.Client to control pooling, proxies or (in tests) the
    underlying transport.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout_seconds: float = 10.0
    ):
        """
        Initialize the transport.

        Args:
            client: Preconfigured httpx client; one is created if omitted
            timeout_seconds: HTTP timeout used when creating the client
        """
        self.timeout = httpx.Timeout(timeout_seconds, connect=timeout_seconds)
        self.client = client or httpx.Client(timeout=self.timeout)

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def exchange(self, endpoint: str, api_key: str, message: Message) -> Response:
        """
        POST a message to the gateway and decode the reply.

        Args:
            endpoint: Gateway send URL
            api_key: Server API key
            message: Message for this round

        Returns:
            Response whose results align with message.registration_ids

        Raises:
            TransportFailure: On network errors, timeouts, non-200
                status, undecodable replies or a result count mismatch
        """
        targets = len(message.registration_ids)

        started = time.perf_counter()
        try:
            response = self.client.post(
                endpoint,
                json=message.to_payload(),
                headers={
                    'Authorization': f'key={api_key}',
                    'Content-Type': 'application/json'
                }
            )

        except httpx.TimeoutException as e:
            logger.warning("Gateway request timeout", endpoint=endpoint, targets=targets)
            raise TransportFailure(f"request to {endpoint} timed out") from e

        except httpx.HTTPError as e:
            logger.warning(
                "Gateway request failed",
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__
            )
            raise TransportFailure(f"request to {endpoint} failed: {e}") from e

        if response.status_code != httpx.codes.OK:
            logger.warning(
                "Gateway HTTP error",
                endpoint=endpoint,
                status_code=response.status_code,
                response=response.text[:500]  # Truncate large responses
            )
            raise TransportFailure(
                f"invalid status code {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code
            )

        try:
            parsed = Response.model_validate_json(response.content)
        except ValueError as e:
            logger.warning("Gateway reply could not be decoded", error=str(e))
            raise TransportFailure("malformed gateway reply") from e

        if len(parsed.results) != targets:
            raise TransportFailure(
                f"gateway returned {len(parsed.results)} results for {targets} registration IDs"
            )

        logger.debug(
            "Gateway reply received",
            multicast_id=parsed.multicast_id,
            success=parsed.success,
            failure=parsed.failure,
            response_time_ms=(time.perf_counter() - started) * 1000
        )

        return parsed
