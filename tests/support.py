"""
Module: support.py
Description: Test doubles and result builders shared by the test suite.

Imported as tests.support; fixtures that wrap these live in conftest.py.
"""

from pydantic_settings import SettingsConfigDict

from gcmsender.config.settings import Settings
from gcmsender.models.response import ErrorReason, Response, Result

API_KEY = "test-api-key"


class IsolatedSettings(Settings):
    """Test settings that skip .env file loading."""

    model_config = SettingsConfigDict(
        env_prefix="GCM_",
        env_file=None,
        case_sensitive=False,
        extra="ignore"
    )


def ok(message_id="0:1", registration_id=None):
    return Result(message_id=message_id, registration_id=registration_id)


def fail(reason):
    return Result(error=reason)


def unavailable():
    return fail(ErrorReason.UNAVAILABLE)


def make_response(results, multicast_id=1000):
    """Build a round response with summary counts derived from results."""
    success = sum(1 for r in results if r.succeeded)
    return Response(
        multicast_id=multicast_id,
        success=success,
        failure=len(results) - success,
        canonical_ids=sum(1 for r in results if r.has_canonical_id),
        results=results
    )


class ScriptedTransport:
    """
    Transport that replays one scripted outcome per round.

    Each outcome is either an exception to raise or a callable mapping the
    round's registration ids to a list of Results. Every message passed
    in is recorded, along with a snapshot of its targets.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.sent_targets = []
        self.closed = 0

    def exchange(self, endpoint, api_key, message):
        self.calls.append((endpoint, api_key, message))
        self.sent_targets.append(list(message.registration_ids))

        outcome = self.outcomes[len(self.calls) - 1]
        if isinstance(outcome, Exception):
            raise outcome

        return make_response(
            outcome(message.registration_ids),
            multicast_id=1000 + len(self.calls)
        )

    def close(self):
        self.closed += 1


class RecordingSleep:
    """Sleep replacement that records requested durations."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)
