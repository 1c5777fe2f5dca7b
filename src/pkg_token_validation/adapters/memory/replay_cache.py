from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from ...domain.clock import as_utc, utc_now
from ...domain.constants import ReplayCacheOutcome

logger = logging.getLogger(__name__)


class InMemoryTokenReplayCache:
    """
    Thread-safe, process-local replay cache.

    Tokens are remembered until `expires_on + retention`; stale entries are
    purged lazily under the lock. For several validator processes, back the
    ports with a shared store instead.
    """

    def __init__(
            self,
            *,
            retention: timedelta = timedelta(0),
            max_entries: Optional[int] = None,
            clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._retention = retention
        self._max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def try_find(self, token: str) -> bool:
        with self._lock:
            self._purge()
            return token in self._entries

    def try_add(self, token: str, expires_on: datetime) -> bool:
        # Refuses tokens already present, so find-then-add cannot record twice.
        return self.try_add_if_absent(token, expires_on) is ReplayCacheOutcome.ADDED

    def try_add_if_absent(self, token: str, expires_on: datetime) -> ReplayCacheOutcome:
        with self._lock:
            self._purge()
            if token in self._entries:
                return ReplayCacheOutcome.ALREADY_PRESENT
            if self._max_entries is not None and len(self._entries) >= self._max_entries:
                logger.warning("Replay cache is full (%d entries)", self._max_entries)
                return ReplayCacheOutcome.REJECTED
            self._entries[token] = as_utc(expires_on) + self._retention
            return ReplayCacheOutcome.ADDED

    def __len__(self) -> int:
        with self._lock:
            self._purge()
            return len(self._entries)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _purge(self) -> None:
        """Drop entries past their expiry. Called under lock."""
        now = as_utc(self._clock())
        stale = [t for t, until in self._entries.items() if now > until]
        for t in stale:
            del self._entries[t]
