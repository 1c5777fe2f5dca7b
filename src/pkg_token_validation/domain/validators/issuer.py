from __future__ import annotations

from typing import Optional

from ..entities import SecurityToken
from ..exceptions import InvalidArgumentError, InvalidIssuerError
from ..policy import ValidationPolicy
from ._common import rejected, require_policy, run_override


def validate_issuer(
        issuer: Optional[str],
        token: Optional[SecurityToken],
        policy: Optional[ValidationPolicy],
) -> None:
    """
    Check that the token's issuer is one the policy trusts.

    Comparison is exact and case-sensitive; empty entries in
    `valid_issuers` never match. When neither `valid_issuer` nor
    `valid_issuers` is configured, any non-empty issuer is accepted unless
    `accept_unconstrained_issuer` is turned off.

    Raises:
        InvalidArgumentError
        InvalidIssuerError
    """
    policy = require_policy(policy)

    if policy.issuer_validator is not None:
        run_override(
            "issuer",
            policy.issuer_validator,
            (issuer, token, policy),
            lambda: InvalidIssuerError("Issuer rejected by custom validator", invalid_issuer=issuer),
        )
        return

    if not policy.validate_issuer:
        return

    if not issuer:
        raise rejected(InvalidArgumentError("issuer"))

    if policy.valid_issuer is None and policy.valid_issuers is None:
        if policy.accept_unconstrained_issuer:
            return
        raise rejected(InvalidIssuerError("No valid issuer is configured", invalid_issuer=issuer))

    if issuer == policy.valid_issuer:
        return

    if policy.valid_issuers is not None and any(v and v == issuer for v in policy.valid_issuers):
        return

    raise rejected(InvalidIssuerError(
        f"Issuer validation failed. Issuer: {issuer!r}",
        invalid_issuer=issuer,
    ))
