from datetime import timedelta

import pytest

from pkg_token_validation.adapters.memory.replay_cache import InMemoryTokenReplayCache
from pkg_token_validation.domain.constants import ReplayCacheOutcome
from pkg_token_validation.domain.exceptions import (
    InvalidArgumentError,
    NoExpirationError,
    TokenReplayAddFailedError,
    TokenReplayDetectedError,
)
from pkg_token_validation.domain.policy import ValidationPolicy
from pkg_token_validation.domain.validators import validate_token_replay

from conftest import NOW, StubReplayCache, fixed_clock

TOMORROW = NOW + timedelta(days=1)


def _policy(cache=None, **kwargs):
    return ValidationPolicy(
        validate_token_replay=True,
        token_replay_cache=cache,
        clock=fixed_clock,
        **kwargs,
    )


@pytest.mark.parametrize(
    "raw_token, expiration, policy, expected",
    [
        (None, None, _policy(), InvalidArgumentError),
        ("", None, _policy(), InvalidArgumentError),
        ("token", TOMORROW, None, InvalidArgumentError),
        ("token", None, _policy(StubReplayCache(find=True, add=True)), NoExpirationError),
        ("token", TOMORROW, _policy(StubReplayCache(find=True, add=True)), TokenReplayDetectedError),
        ("token", TOMORROW, _policy(StubReplayCache(find=False, add=False)), TokenReplayAddFailedError),
        ("token", TOMORROW, _policy(StubReplayCache(find=False, add=True)), None),
        (None, None, ValidationPolicy(validate_token_replay=False), None),
        ("token", None, ValidationPolicy(validate_token_replay=False), None),
    ],
)
def test_validate_token_replay(raw_token, expiration, policy, expected):
    if expected is None:
        validate_token_replay(expiration, raw_token, policy)
    else:
        with pytest.raises(expected):
            validate_token_replay(expiration, raw_token, policy)


def test_successful_validation_records_token():
    cache = StubReplayCache(find=False, add=True)
    validate_token_replay(TOMORROW, "token", _policy(cache))

    assert cache.added == [("token", TOMORROW)]


def test_replayed_token_is_not_added_again():
    cache = StubReplayCache(find=True, add=True)
    with pytest.raises(TokenReplayDetectedError):
        validate_token_replay(TOMORROW, "token", _policy(cache))

    assert cache.added == []


def test_missing_cache_skips_replay_tracking(caplog):
    validate_token_replay(TOMORROW, "token", _policy())

    assert "no replay cache" in caplog.text


def test_second_presentation_is_detected_with_memory_cache():
    policy = _policy(InMemoryTokenReplayCache(clock=fixed_clock))

    validate_token_replay(TOMORROW, "token", policy)
    with pytest.raises(TokenReplayDetectedError):
        validate_token_replay(TOMORROW, "token", policy)

    validate_token_replay(TOMORROW, "other-token", policy)


def test_override_receives_token_and_expiration(token):
    seen = []

    def record(expiration, raw_token, security_token, policy):
        seen.append((expiration, raw_token, security_token))

    policy = _policy(StubReplayCache(find=True), token_replay_validator=record)
    validate_token_replay(TOMORROW, "token", policy, token)

    assert seen == [(TOMORROW, "token", token)]


def test_override_returning_false_is_replay():
    policy = ValidationPolicy(
        validate_token_replay=False,
        token_replay_validator=lambda expiration, raw, token, policy: False,
    )

    with pytest.raises(TokenReplayDetectedError):
        validate_token_replay(TOMORROW, "token", policy)


def test_full_memory_cache_is_add_failure_not_replay(caplog):
    policy = _policy(InMemoryTokenReplayCache(max_entries=1, clock=fixed_clock))
    validate_token_replay(TOMORROW, "first", policy)

    with pytest.raises(TokenReplayAddFailedError):
        validate_token_replay(TOMORROW, "never-seen", policy)

    with pytest.raises(TokenReplayDetectedError):
        validate_token_replay(TOMORROW, "first", policy)

    assert "Replay cache is full" in caplog.text


class AtomicStubCache:
    def __init__(self, outcome):
        self.outcome = outcome

    def try_add_if_absent(self, token, expires_on):
        return self.outcome


@pytest.mark.parametrize(
    "outcome, expected",
    [
        (ReplayCacheOutcome.ADDED, None),
        (ReplayCacheOutcome.ALREADY_PRESENT, TokenReplayDetectedError),
        (ReplayCacheOutcome.REJECTED, TokenReplayAddFailedError),
    ],
)
def test_atomic_cache_outcomes(outcome, expected):
    policy = _policy(AtomicStubCache(outcome))
    if expected is None:
        validate_token_replay(TOMORROW, "token", policy)
    else:
        with pytest.raises(expected):
            validate_token_replay(TOMORROW, "token", policy)
