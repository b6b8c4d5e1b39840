"""
Module: delivery/backoff.py
Description: Exponential backoff with jitter between retry rounds.

Key Components:
- BackoffPolicy: Pure delay calculation in milliseconds
- BackoffWait: tenacity wait strategy driven by a BackoffPolicy

Each sleep is drawn from [delay/2, delay/2 + delay) so many senders
retrying at once spread out instead of hitting the gateway together.

Dependencies: tenacity, random
"""

import random
from typing import Optional, Tuple

from tenacity import RetryCallState
from tenacity.wait import wait_base

# Initial delay before the first retry, without jitter (ms).
BACKOFF_INITIAL_DELAY = 1000

# Maximum delay before a retry (ms).
MAX_BACKOFF_DELAY = 1024000


class BackoffPolicy:
    """
    Jittered exponential backoff.

    Holds no per-call state; the caller keeps the current delay and
    feeds it back into next_delay(). Deterministic for a seeded rng.
    """

    def __init__(
        self,
        initial_delay: int = BACKOFF_INITIAL_DELAY,
        max_delay: int = MAX_BACKOFF_DELAY,
        rng: Optional[random.Random] = None
    ):
        if initial_delay <= 0:
            raise ValueError("initial_delay must be positive")
        if max_delay < initial_delay:
            raise ValueError("max_delay must not be less than initial_delay")

        self.initial_delay = initial_delay
        self.max_delay = max_delay
        self.rng = rng or random.Random()

    def next_delay(self, current_delay: int) -> Tuple[int, int]:
        """
        Compute the sleep for this round and the delay for the next one.

        Args:
            current_delay: Base delay in milliseconds

        Returns:
            Tuple of (sleep_ms, new_delay) where sleep_ms is in
            [current_delay/2, current_delay/2 + current_delay) and
            new_delay is min(2 * current_delay, max_delay)
        """
        # Round the lower half up so an odd delay never sleeps below delay/2
        sleep_ms = -(-current_delay // 2) + self.rng.randrange(current_delay)
        new_delay = min(2 * current_delay, self.max_delay)
        return sleep_ms, new_delay


class BackoffWait(wait_base):
    """
    tenacity wait strategy backed by a BackoffPolicy.

    Create one per send call: it carries the current delay between
    rounds of that call only.
    """

    def __init__(self, policy: BackoffPolicy):
        self.policy = policy
        self.current_delay = policy.initial_delay

    def __call__(self, retry_state: RetryCallState) -> float:
        sleep_ms, self.current_delay = self.policy.next_delay(self.current_delay)
        return sleep_ms / 1000.0
