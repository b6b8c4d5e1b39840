"""
Module: conftest.py
Description: Shared pytest fixtures for GCM sender tests.

Provides scripted transports, sample messages and a recording sleep so
retry tests run instantly and never touch the network.
"""

import random

import pytest

from gcmsender.delivery.backoff import BackoffPolicy
from gcmsender.delivery.sender import Sender
from gcmsender.models.message import Message, Notification
from tests.support import API_KEY, IsolatedSettings, RecordingSleep


@pytest.fixture
def test_settings():
    """Provide settings that don't depend on the environment."""
    return IsolatedSettings(api_key=API_KEY)


@pytest.fixture
def registration_ids():
    return ["reg-a", "reg-b", "reg-c"]


@pytest.fixture
def sample_message(registration_ids):
    """Provide a typical multicast message."""
    return Message(
        registration_ids=registration_ids,
        collapse_key="score_update",
        time_to_live=3600,
        data={"score": "5x1", "time": "15:10"},
        notification=Notification(title="Match update", body="5x1")
    )


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def seeded_backoff():
    """Backoff policy with a fixed random source."""
    return BackoffPolicy(rng=random.Random(42))


@pytest.fixture
def make_sender(recording_sleep, seeded_backoff):
    """Factory for a Sender wired to a scripted transport and no real sleeps."""

    def _make(transport, api_key=API_KEY, **kwargs):
        return Sender(
            api_key=api_key,
            url="https://gateway.test/send",
            transport=transport,
            backoff=seeded_backoff,
            sleep=recording_sleep,
            **kwargs
        )

    return _make
