from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..clock import as_utc
from ..constants import SigningKeyFailure
from ..entities import SecurityToken
from ..exceptions import InvalidArgumentError, InvalidSigningKeyError
from ..policy import ValidationPolicy
from ._common import rejected, require_policy, run_override


def _window(key: Any) -> tuple[Optional[datetime], Optional[datetime]]:
    not_before = getattr(key, "not_before", None)
    not_after = getattr(key, "not_after", None)
    return (
        as_utc(not_before) if isinstance(not_before, datetime) else None,
        as_utc(not_after) if isinstance(not_after, datetime) else None,
    )


def validate_issuer_signing_key(
        key: Any,
        token: Optional[SecurityToken],
        policy: Optional[ValidationPolicy],
) -> None:
    """
    Check that the key that signed the token is itself currently valid.

    Any object exposing `not_before` / `not_after` datetimes (SigningKey,
    X509SigningKey, ...) has its window checked; other keys pass.

    Raises:
        InvalidArgumentError
        InvalidSigningKeyError
    """
    policy = require_policy(policy)

    if policy.issuer_signing_key_validator is not None:
        run_override(
            "issuer signing key",
            policy.issuer_signing_key_validator,
            (key, token, policy),
            lambda: InvalidSigningKeyError(
                f"Signing key {key} rejected by custom validator",
                reason=SigningKeyFailure.REJECTED,
            ),
        )
        return

    if not policy.validate_issuer_signing_key:
        return

    if key is None:
        raise rejected(InvalidArgumentError("key"))
    if token is None:
        raise rejected(InvalidArgumentError("token"))

    not_before, not_after = _window(key)
    now = policy.now()

    if not_after is not None and now > not_after:
        raise rejected(InvalidSigningKeyError(
            f"Signing key {key} expired at {not_after.isoformat()}",
            reason=SigningKeyFailure.EXPIRED,
            not_before=not_before,
            not_after=not_after,
        ))

    if not_before is not None and now < not_before:
        raise rejected(InvalidSigningKeyError(
            f"Signing key {key} is not valid before {not_before.isoformat()}",
            reason=SigningKeyFailure.NOT_YET_VALID,
            not_before=not_before,
            not_after=not_after,
        ))
