from datetime import timedelta

import pytest

from pkg_token_validation.domain.exceptions import (
    InvalidArgumentError,
    InvalidLifetimeError,
    NoExpirationError,
    TokenExpiredError,
    TokenNotYetValidError,
)
from pkg_token_validation.domain.policy import ValidationPolicy
from pkg_token_validation.domain.validators import validate_lifetime

from conftest import NOW, fixed_clock

NO_SKEW = ValidationPolicy(clock=fixed_clock, clock_skew=timedelta(0))
FIVE_MINUTES = ValidationPolicy(clock=fixed_clock, clock_skew=timedelta(minutes=5))


@pytest.mark.parametrize(
    "not_before, expires, policy, expected",
    [
        (NOW - timedelta(hours=2), NOW + timedelta(hours=1), NO_SKEW, None),
        (NOW + timedelta(hours=1), NOW, NO_SKEW, InvalidLifetimeError),
        (NOW + timedelta(hours=1), NOW + timedelta(hours=2), NO_SKEW, TokenNotYetValidError),
        (NOW - timedelta(hours=2), NOW - timedelta(hours=1), NO_SKEW, TokenExpiredError),
        (NOW + timedelta(minutes=2), NOW + timedelta(hours=1), FIVE_MINUTES, None),
        (NOW - timedelta(minutes=2), NOW - timedelta(minutes=1), FIVE_MINUTES, None),
        (NOW + timedelta(minutes=6), NOW + timedelta(hours=1), FIVE_MINUTES, TokenNotYetValidError),
        (NOW - timedelta(hours=2), NOW - timedelta(minutes=6), FIVE_MINUTES, TokenExpiredError),
        (None, NOW + timedelta(hours=1), NO_SKEW, None),
        (None, NOW - timedelta(seconds=1), NO_SKEW, TokenExpiredError),
        (NOW, NOW, FIVE_MINUTES, InvalidLifetimeError),
    ],
)
def test_validate_lifetime(token, not_before, expires, policy, expected):
    if expected is None:
        validate_lifetime(not_before, expires, token, policy)
    else:
        with pytest.raises(expected):
            validate_lifetime(not_before, expires, token, policy)


def test_missing_policy_is_invalid_argument(token):
    with pytest.raises(InvalidArgumentError):
        validate_lifetime(None, None, token, None)


def test_disabled_validation_accepts_anything():
    policy = ValidationPolicy(validate_lifetime=False, clock=fixed_clock)
    validate_lifetime(None, None, None, policy)
    validate_lifetime(NOW + timedelta(hours=1), NOW, None, policy)


def test_missing_token_is_invalid_argument():
    with pytest.raises(InvalidArgumentError):
        validate_lifetime(None, NOW + timedelta(hours=1), None, NO_SKEW)


def test_missing_expiration(token):
    with pytest.raises(NoExpirationError):
        validate_lifetime(None, None, token, NO_SKEW)


def test_missing_expiration_allowed_when_not_required(token):
    policy = NO_SKEW.clone(require_expiration_time=False)
    validate_lifetime(None, None, token, policy)

    with pytest.raises(TokenNotYetValidError):
        validate_lifetime(NOW + timedelta(minutes=1), None, token, policy)


def test_invalid_lifetime_is_checked_before_current_time(token):
    not_before = NOW - timedelta(hours=1)
    expires = NOW - timedelta(hours=2)

    with pytest.raises(InvalidLifetimeError) as exc_info:
        validate_lifetime(not_before, expires, token, NO_SKEW)

    assert exc_info.value.properties == {"not_before": not_before, "expires": expires}


def test_diagnostics_carry_offending_values(token):
    not_before = NOW + timedelta(hours=1)
    with pytest.raises(TokenNotYetValidError) as exc_info:
        validate_lifetime(not_before, NOW + timedelta(hours=2), token, NO_SKEW)
    assert exc_info.value.properties == {"not_before": not_before}

    expires = NOW - timedelta(hours=1)
    with pytest.raises(TokenExpiredError) as exc_info:
        validate_lifetime(NOW - timedelta(hours=2), expires, token, NO_SKEW)
    assert exc_info.value.properties == {"expires": expires}


def test_skew_boundaries_are_inclusive(token):
    validate_lifetime(NOW + timedelta(minutes=5), NOW + timedelta(hours=1), token, FIVE_MINUTES)
    validate_lifetime(NOW - timedelta(hours=1), NOW - timedelta(minutes=5), token, FIVE_MINUTES)


def test_naive_datetimes_are_treated_as_utc(token):
    naive_nbf = (NOW - timedelta(hours=1)).replace(tzinfo=None)
    naive_exp = (NOW + timedelta(hours=1)).replace(tzinfo=None)
    validate_lifetime(naive_nbf, naive_exp, token, NO_SKEW)


def test_override_replaces_builtin_check(token):
    seen = []

    def record(not_before, expires, token, policy):
        seen.append((not_before, expires))

    policy = NO_SKEW.clone(lifetime_validator=record)
    validate_lifetime(NOW + timedelta(hours=1), NOW, token, policy)

    assert seen == [(NOW + timedelta(hours=1), NOW)]


def test_override_returning_false_rejects(token):
    policy = NO_SKEW.clone(lifetime_validator=lambda nbf, exp, token, policy: False)

    with pytest.raises(InvalidLifetimeError):
        validate_lifetime(NOW - timedelta(hours=1), NOW + timedelta(hours=1), token, policy)
