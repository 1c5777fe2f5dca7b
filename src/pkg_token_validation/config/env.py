from __future__ import annotations

import os
from datetime import timedelta
from typing import Mapping, Optional

from ..adapters.memory.replay_cache import InMemoryTokenReplayCache
from ..domain.constants import DEFAULT_CLOCK_SKEW
from ..domain.policy import ValidationPolicy


def policy_from_env(environ: Optional[Mapping[str, str]] = None) -> ValidationPolicy:
    """
    Build a ValidationPolicy from TOKEN_* environment variables.

    Unset variables keep the ValidationPolicy defaults.
    """
    env = os.environ if environ is None else environ

    def _bool(key: str, default: bool) -> bool:
        raw = env.get(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _split_csv(key: str) -> Optional[list[str]]:
        raw = env.get(key)
        if not raw:
            return None
        return [x.strip() for x in raw.split(",") if x and x.strip()]

    def _skew(key: str) -> timedelta:
        raw = env.get(key)
        if raw is None or not raw.strip():
            return DEFAULT_CLOCK_SKEW
        try:
            seconds = int(raw)
        except ValueError:
            raise RuntimeError(f"{key} must be an integer number of seconds, got {raw!r}") from None
        if seconds < 0:
            raise RuntimeError(f"{key} must not be negative, got {seconds}")
        return timedelta(seconds=seconds)

    validate_replay = _bool("TOKEN_VALIDATE_REPLAY", False)

    return ValidationPolicy(
        validate_audience=_bool("TOKEN_VALIDATE_AUDIENCE", True),
        valid_audiences=_split_csv("TOKEN_VALID_AUDIENCES"),
        validate_issuer=_bool("TOKEN_VALIDATE_ISSUER", True),
        valid_issuers=_split_csv("TOKEN_VALID_ISSUERS"),
        validate_lifetime=_bool("TOKEN_VALIDATE_LIFETIME", True),
        require_expiration_time=_bool("TOKEN_REQUIRE_EXPIRATION", True),
        clock_skew=_skew("TOKEN_CLOCK_SKEW_SECONDS"),
        validate_issuer_signing_key=_bool("TOKEN_VALIDATE_SIGNING_KEY", False),
        validate_token_replay=validate_replay,
        token_replay_cache=InMemoryTokenReplayCache() if validate_replay else None,
    )
