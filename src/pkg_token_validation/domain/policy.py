from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Callable, Collection, Optional, Sequence

from .clock import as_utc, utc_now
from .constants import DEFAULT_CLOCK_SKEW
from .entities import SecurityToken
from .ports import TokenReplayCache


# Override signatures mirror the built-in validator each one replaces.
AudienceValidator = Callable[[Optional[Sequence[str]], Optional[SecurityToken], "ValidationPolicy"], Any]
IssuerValidator = Callable[[Optional[str], Optional[SecurityToken], "ValidationPolicy"], Any]
LifetimeValidator = Callable[
    [Optional[datetime], Optional[datetime], Optional[SecurityToken], "ValidationPolicy"], Any
]
IssuerSigningKeyValidator = Callable[[Any, Optional[SecurityToken], "ValidationPolicy"], Any]
TokenReplayValidator = Callable[
    [Optional[datetime], Optional[str], Optional[SecurityToken], "ValidationPolicy"], Any
]


@dataclass(slots=True)
class ValidationPolicy:
    """
    Which checks run against a token, and the reference values they use.

    Setting one of the `*_validator` overrides replaces the matching
    built-in check entirely. An override rejects by raising a
    TokenValidationError or by returning False.

    Overrides take precedence over the `validate_*` flags: a configured
    override runs even when its flag is False, so turning a check off
    means clearing both the flag and the override.

    WARNING: with `accept_unconstrained_audience` / `accept_unconstrained_issuer`
    left at True (the default), a policy that configures no valid audience
    or no valid issuer accepts ANY audience or issuer. Configure the valid
    values, or turn these flags off, for anything exposed to untrusted
    callers.
    """

    # Audience
    validate_audience: bool = True
    valid_audience: Optional[str] = None
    valid_audiences: Optional[Collection[Optional[str]]] = None
    accept_unconstrained_audience: bool = True

    # Issuer
    validate_issuer: bool = True
    valid_issuer: Optional[str] = None
    valid_issuers: Optional[Collection[Optional[str]]] = None
    accept_unconstrained_issuer: bool = True

    # Lifetime
    validate_lifetime: bool = True
    require_expiration_time: bool = True
    clock_skew: timedelta = DEFAULT_CLOCK_SKEW

    # Signing key
    validate_issuer_signing_key: bool = False

    # Replay
    validate_token_replay: bool = False
    token_replay_cache: Optional[TokenReplayCache] = None

    # Overrides
    audience_validator: Optional[AudienceValidator] = None
    issuer_validator: Optional[IssuerValidator] = None
    lifetime_validator: Optional[LifetimeValidator] = None
    issuer_signing_key_validator: Optional[IssuerSigningKeyValidator] = None
    token_replay_validator: Optional[TokenReplayValidator] = None

    clock: Callable[[], datetime] = utc_now

    def __post_init__(self) -> None:
        if self.clock_skew < timedelta(0):
            raise ValueError(f"clock_skew must not be negative: {self.clock_skew!r}")

    def now(self) -> datetime:
        return as_utc(self.clock())

    def clone(self, **changes: Any) -> "ValidationPolicy":
        return replace(self, **changes)
