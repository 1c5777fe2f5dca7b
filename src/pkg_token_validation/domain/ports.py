from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from .constants import ReplayCacheOutcome
from .entities import SecurityToken


class TokenReplayCache(Protocol):
    """
    Port for remembering tokens that were already accepted.

    `try_find` and `try_add` are two separate calls, so an implementation
    used from several threads must make `try_add` atomic with respect to
    concurrent calls for the same token (return False when the token is
    already present). New implementations should also provide
    `AtomicTokenReplayCache.try_add_if_absent`.
    """

    def try_add(self, token: str, expires_on: datetime) -> bool:
        """Record the token until `expires_on`. Returns False if it could not be recorded."""
        ...

    def try_find(self, token: str) -> bool:
        """Return True if the token was already recorded."""
        ...


@runtime_checkable
class AtomicTokenReplayCache(Protocol):
    """
    Replay cache exposing a single check-and-insert operation.
    """

    def try_add_if_absent(self, token: str, expires_on: datetime) -> ReplayCacheOutcome:
        """
        Record the token unless already present.

        ALREADY_PRESENT means the token was seen before; REJECTED means the
        cache could not record a new token (e.g. it is full).
        """
        ...


class TokenReader(Protocol):
    """
    Port for turning a raw token string into a SecurityToken.

    Implementations live in the adapters layer (e.g. the PyJWT reader).
    """

    def read(self, token: str) -> SecurityToken:
        ...
