from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..clock import as_utc
from ..entities import SecurityToken
from ..exceptions import (
    InvalidArgumentError,
    InvalidLifetimeError,
    NoExpirationError,
    TokenExpiredError,
    TokenNotYetValidError,
)
from ..policy import ValidationPolicy
from ._common import rejected, require_policy, run_override


def validate_lifetime(
        not_before: Optional[datetime],
        expires: Optional[datetime],
        token: Optional[SecurityToken],
        policy: Optional[ValidationPolicy],
) -> None:
    """
    Check that the current time falls inside [not_before - skew, expires + skew].

    `not_before >= expires` is rejected regardless of the current time.
    Naive datetimes are treated as UTC.

    Raises:
        InvalidArgumentError
        NoExpirationError
        InvalidLifetimeError
        TokenNotYetValidError
        TokenExpiredError
    """
    policy = require_policy(policy)

    if policy.lifetime_validator is not None:
        run_override(
            "lifetime",
            policy.lifetime_validator,
            (not_before, expires, token, policy),
            lambda: InvalidLifetimeError(
                "Lifetime rejected by custom validator",
                not_before=not_before,
                expires=expires,
            ),
        )
        return

    if not policy.validate_lifetime:
        return

    if token is None:
        raise rejected(InvalidArgumentError("token"))

    if expires is None:
        if policy.require_expiration_time:
            raise rejected(NoExpirationError("Token has no expiration time"))
        expires_utc = None
    else:
        expires_utc = as_utc(expires)

    not_before_utc = as_utc(not_before) if not_before is not None else None

    if not_before_utc is not None and expires_utc is not None and not_before_utc >= expires_utc:
        raise rejected(InvalidLifetimeError(
            f"Token not_before ({not_before_utc.isoformat()}) is not before "
            f"its expiration ({expires_utc.isoformat()})",
            not_before=not_before,
            expires=expires,
        ))

    now = policy.now()
    skew = policy.clock_skew

    if not_before_utc is not None and not_before_utc > now + skew:
        raise rejected(TokenNotYetValidError(
            f"Token is not valid yet. not_before: {not_before_utc.isoformat()}, "
            f"current time: {now.isoformat()}",
            not_before=not_before,
        ))

    if expires_utc is not None and expires_utc < now - skew:
        raise rejected(TokenExpiredError(
            f"Token has expired. expires: {expires_utc.isoformat()}, "
            f"current time: {now.isoformat()}",
            expires=expires,
        ))
