from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import ValidationErrorKind
from .exceptions import TokenValidationError


@dataclass(frozen=True, slots=True)
class SecurityToken:
    """
    Already-parsed token as handed over by a token reader.

    The validators only look at these fields; `claims` keeps the full
    payload for callers that need more.
    """
    raw: Optional[str] = None
    issuer: Optional[str] = None
    audiences: Tuple[str, ...] = ()
    not_before: Optional[datetime] = None
    expires: Optional[datetime] = None
    signing_key: Any = None
    claims: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ValidationResult:
    """
    Outcome of running the validation pipeline against one token.
    """
    token: Optional[SecurityToken] = None
    error: Optional[TokenValidationError] = None

    @classmethod
    def success(cls, token: SecurityToken) -> "ValidationResult":
        return cls(token=token)

    @classmethod
    def failure(cls, error: TokenValidationError, token: Optional[SecurityToken] = None) -> "ValidationResult":
        return cls(token=token, error=error)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ValidationErrorKind]:
        return self.error.kind if self.error is not None else None

    @property
    def properties(self) -> Dict[str, Any]:
        return dict(self.error.properties) if self.error is not None else {}

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
