from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..clock import as_utc
from ..constants import ReplayCacheOutcome
from ..entities import SecurityToken
from ..exceptions import (
    InvalidArgumentError,
    NoExpirationError,
    TokenReplayAddFailedError,
    TokenReplayDetectedError,
)
from ..policy import ValidationPolicy
from ..ports import AtomicTokenReplayCache
from ._common import rejected, require_policy, run_override

logger = logging.getLogger(__name__)


def validate_token_replay(
        expiration_time: Optional[datetime],
        raw_token: Optional[str],
        policy: Optional[ValidationPolicy],
        token: Optional[SecurityToken] = None,
) -> None:
    """
    Reject tokens that were already accepted once, then record this one.

    Caches providing `try_add_if_absent` are used through that single
    atomic call, whose outcome tells a replay apart from a refused insert. Otherwise `try_find` then `try_add` is used, which is only
    safe if the cache's `try_add` refuses tokens that are already present.

    Raises:
        InvalidArgumentError
        NoExpirationError
        TokenReplayDetectedError
        TokenReplayAddFailedError
    """
    policy = require_policy(policy)

    if policy.token_replay_validator is not None:
        run_override(
            "token replay",
            policy.token_replay_validator,
            (expiration_time, raw_token, token, policy),
            lambda: TokenReplayDetectedError("Token replay rejected by custom validator"),
        )
        return

    if not policy.validate_token_replay:
        return

    if not raw_token:
        raise rejected(InvalidArgumentError("raw_token"))

    if expiration_time is None:
        raise rejected(NoExpirationError("Token replay validation requires an expiration time"))

    cache = policy.token_replay_cache
    if cache is None:
        logger.warning("Token replay validation is enabled but no replay cache is configured")
        return

    expires_on = as_utc(expiration_time)

    if isinstance(cache, AtomicTokenReplayCache):
        outcome = cache.try_add_if_absent(raw_token, expires_on)
        if outcome is ReplayCacheOutcome.ALREADY_PRESENT:
            raise rejected(TokenReplayDetectedError("Token replay detected"))
        if outcome is not ReplayCacheOutcome.ADDED:
            raise rejected(TokenReplayAddFailedError("Token could not be added to the replay cache"))
        return

    if cache.try_find(raw_token):
        raise rejected(TokenReplayDetectedError("Token replay detected"))

    if not cache.try_add(raw_token, expires_on):
        raise rejected(TokenReplayAddFailedError("Token could not be added to the replay cache"))
