"""
Module: delivery/reconciler.py
Description: Merges per-round results into one response.

Tracks which targets are still pending across the rounds of a single
send call, and builds the final response aligned with the original
target list.
"""

from typing import Dict, List

from gcmsender.errors import TransportFailure
from gcmsender.models.response import Response, Result
from gcmsender.utils.logger import get_logger

logger = get_logger(__name__)


class ResultReconciler:
    """
    Running per-target state for one send call.

    Attributes:
        registration_ids: Original target list, never modified
        pending: Targets to send in the next round
        results: Latest recorded result per target
    """

    def __init__(self, registration_ids: List[str]):
        self.registration_ids = list(registration_ids)
        self.pending: List[str] = list(registration_ids)
        self.results: Dict[str, Result] = {}

    def update(self, response: Response) -> int:
        """
        Record a round's results and compute the next round's targets.

        Results are aligned with the current pending list. Targets whose
        error is retryable stay pending; all others are resolved and are
        not sent again.

        Args:
            response: Gateway response for the targets in self.pending

        Returns:
            Number of targets still pending

        Raises:
            TransportFailure: If the result count does not match the
                number of targets sent
        """
        if len(response.results) != len(self.pending):
            raise TransportFailure(
                f"gateway returned {len(response.results)} results "
                f"for {len(self.pending)} registration IDs"
            )

        unresolved = []
        for registration_id, result in zip(self.pending, response.results):
            self.results[registration_id] = result
            if result.is_retryable:
                unresolved.append(registration_id)

        logger.debug(
            "Round results recorded",
            sent=len(self.pending),
            pending=len(unresolved)
        )

        self.pending = unresolved
        return len(unresolved)

    def finalize(self, multicast_id: int) -> Response:
        """
        Build the aggregated response in original target order.

        A target keeps the last result observed for it, so one still
        pending after the retry budget runs out reports its last error.
        Targets with no recorded result get Result.unresolved() and
        count as failures.

        Args:
            multicast_id: Multicast id of the most recent round

        Returns:
            Response covering every original target
        """
        final_results = []
        success = 0
        failure = 0
        canonical_ids = 0

        for registration_id in self.registration_ids:
            result = self.results.get(registration_id)
            if result is None:
                result = Result.unresolved()
            final_results.append(result)
            if result.succeeded:
                success += 1
                if result.has_canonical_id:
                    canonical_ids += 1
            else:
                failure += 1

        return Response(
            multicast_id=multicast_id,
            success=success,
            failure=failure,
            canonical_ids=canonical_ids,
            results=final_results
        )
