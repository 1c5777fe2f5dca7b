from __future__ import annotations

from typing import Optional, Sequence

from ..entities import SecurityToken
from ..exceptions import InvalidArgumentError, InvalidAudienceError
from ..policy import ValidationPolicy
from ..value_objects import serialize_as_delimited_string
from ._common import rejected, require_policy, run_override


def _configured_audiences(policy: ValidationPolicy) -> list[str]:
    configured: list[str] = []
    if policy.valid_audience is not None:
        configured.append(policy.valid_audience)
    if policy.valid_audiences is not None:
        configured.extend(a for a in policy.valid_audiences if a is not None)
    return configured


def validate_audience(
        audiences: Optional[Sequence[str]],
        token: Optional[SecurityToken],
        policy: Optional[ValidationPolicy],
) -> None:
    """
    Check that at least one of the token's audiences is accepted by the policy.

    Comparison is exact and case-sensitive. Empty or whitespace-only
    entries never match. When the policy configures neither
    `valid_audience` nor `valid_audiences`, any non-empty audience list is
    accepted unless `accept_unconstrained_audience` is turned off.

    Raises:
        InvalidArgumentError
        InvalidAudienceError
    """
    policy = require_policy(policy)

    if policy.audience_validator is not None:
        run_override(
            "audience",
            policy.audience_validator,
            (audiences, token, policy),
            lambda: InvalidAudienceError(
                "Audience rejected by custom validator",
                invalid_audience=serialize_as_delimited_string(audiences),
            ),
        )
        return

    if not policy.validate_audience:
        return

    if audiences is None:
        raise rejected(InvalidArgumentError("audiences"))

    invalid_audience = serialize_as_delimited_string(audiences)
    usable = [a for a in audiences if a and a.strip()]
    if not usable:
        raise rejected(InvalidAudienceError(
            "Token has no usable audience",
            invalid_audience=invalid_audience,
        ))

    if policy.valid_audience is None and policy.valid_audiences is None:
        if policy.accept_unconstrained_audience:
            return
        raise rejected(InvalidAudienceError(
            "No valid audience is configured",
            invalid_audience=invalid_audience,
        ))

    configured = _configured_audiences(policy)
    if any(a in configured for a in usable):
        return

    raise rejected(InvalidAudienceError(
        f"Audience validation failed. Audiences: {invalid_audience!r}",
        invalid_audience=invalid_audience,
    ))
