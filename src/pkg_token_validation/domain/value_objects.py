# src/pkg_token_validation/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional


# --- Signing keys ---------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SigningKey:
    """
    Minimal description of the key that signed a token.

    Only the key's own validity window matters to the validators; the
    cryptographic material is handled by whoever verified the signature.
    Both bounds are optional; a key without any bound has no validity
    window and is always trusted by the signing-key check.
    """
    key_id: Optional[str] = None
    not_before: Optional[datetime] = None
    not_after: Optional[datetime] = None

    def __str__(self) -> str:
        return self.key_id or "<anonymous key>"


# --- Diagnostics helpers --------------------------------------------------


def serialize_as_delimited_string(values: Iterable[Optional[str]] | None) -> str:
    """
    Render a list of strings as one comma-delimited diagnostic value.

    `None` becomes "null" (for the list itself or any entry), an empty
    list becomes "empty".
    """
    if values is None:
        return "null"
    rendered = ["null" if v is None else v for v in values]
    if not rendered:
        return "empty"
    return ", ".join(rendered)
