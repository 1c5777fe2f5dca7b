from datetime import datetime, timezone

import pytest

from pkg_token_validation.domain.entities import SecurityToken


NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


class StubReplayCache:
    """Two-call replay cache returning canned answers."""

    def __init__(self, find: bool = False, add: bool = True) -> None:
        self.find = find
        self.add = add
        self.added = []

    def try_add(self, token, expires_on):
        self.added.append((token, expires_on))
        return self.add

    def try_find(self, token):
        return self.find


@pytest.fixture
def token():
    return SecurityToken(raw="header.payload.signature")
