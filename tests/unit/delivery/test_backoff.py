"""
Module: test_backoff.py
Description: Unit tests for backoff delay calculation.
"""

import random

import pytest

from gcmsender.delivery.backoff import (
    BACKOFF_INITIAL_DELAY,
    MAX_BACKOFF_DELAY,
    BackoffPolicy,
    BackoffWait
)


class TestBackoffPolicy:
    """Test cases for BackoffPolicy.next_delay()."""

    @pytest.mark.parametrize("delay", [1, 2, 3, 1000, 4096, 777777, MAX_BACKOFF_DELAY])
    def test_sleep_within_jitter_window(self, delay):
        """Sleep is drawn from [d/2, d/2 + d)."""
        policy = BackoffPolicy(initial_delay=1, rng=random.Random(7))
        for _ in range(200):
            sleep_ms, _ = policy.next_delay(delay)
            assert delay / 2 <= sleep_ms < delay / 2 + delay

    @pytest.mark.parametrize("delay", [1, 3, 1001])
    def test_odd_delay_rounds_lower_bound_up(self, delay):
        """The shortest sleep for an odd delay is (d + 1) / 2, not d // 2."""
        class LowestDraw(random.Random):
            def randrange(self, *args, **kwargs):
                return 0

        policy = BackoffPolicy(initial_delay=1, rng=LowestDraw())
        sleep_ms, _ = policy.next_delay(delay)
        assert sleep_ms == (delay + 1) // 2
        assert sleep_ms >= delay / 2

    def test_next_delay_doubles(self):
        policy = BackoffPolicy()
        _, new_delay = policy.next_delay(1000)
        assert new_delay == 2000

    def test_next_delay_capped(self):
        policy = BackoffPolicy()
        _, new_delay = policy.next_delay(MAX_BACKOFF_DELAY - 1)
        assert new_delay == MAX_BACKOFF_DELAY

    def test_delay_never_exceeds_cap(self):
        """Repeated doubling settles at max_delay."""
        policy = BackoffPolicy(rng=random.Random(1))
        delay = BACKOFF_INITIAL_DELAY
        for _ in range(50):
            _, delay = policy.next_delay(delay)
            assert delay <= MAX_BACKOFF_DELAY
        assert delay == MAX_BACKOFF_DELAY

    def test_deterministic_for_seeded_rng(self):
        first = BackoffPolicy(rng=random.Random(123))
        second = BackoffPolicy(rng=random.Random(123))
        assert [first.next_delay(1000) for _ in range(5)] == \
            [second.next_delay(1000) for _ in range(5)]

    def test_defaults(self):
        policy = BackoffPolicy()
        assert policy.initial_delay == 1000
        assert policy.max_delay == 1024000

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            BackoffPolicy(initial_delay=0)
        with pytest.raises(ValueError):
            BackoffPolicy(initial_delay=1000, max_delay=500)


class TestBackoffWait:
    """Test cases for the tenacity wait adapter."""

    def test_returns_seconds_and_advances_delay(self):
        wait = BackoffWait(BackoffPolicy(rng=random.Random(5)))

        first = wait(None)
        assert 0.5 <= first < 1.5
        assert wait.current_delay == 2000

        second = wait(None)
        assert 1.0 <= second < 3.0
        assert wait.current_delay == 4000

    def test_each_wait_starts_from_initial_delay(self):
        policy = BackoffPolicy(rng=random.Random(5))
        wait = BackoffWait(policy)
        wait(None)
        wait(None)

        fresh = BackoffWait(policy)
        assert fresh.current_delay == BACKOFF_INITIAL_DELAY
