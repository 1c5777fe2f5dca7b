from __future__ import annotations

from typing import Any, ClassVar, Dict

from .constants import ValidationErrorKind


class AuthenticationError(Exception):
    """Raised when authentication fails."""
    pass


class TokenValidationError(AuthenticationError):
    """
    Base class for every rejection raised by a token validator.

    `properties` carries the offending values so callers can branch on
    them without parsing the message.
    """
    kind: ClassVar[ValidationErrorKind]

    def __init__(self, message: str, **properties: Any) -> None:
        super().__init__(message)
        self.properties: Dict[str, Any] = dict(properties)


class InvalidArgumentError(TokenValidationError, ValueError):
    """Raised when a required input is missing."""
    kind = ValidationErrorKind.INVALID_ARGUMENT

    def __init__(self, argument: str, message: str | None = None) -> None:
        super().__init__(message or f"Argument {argument!r} is required", argument=argument)


class InvalidTokenError(TokenValidationError):
    """Raised when token is malformed or rejected by a validation check."""
    kind = ValidationErrorKind.INVALID_TOKEN


class InvalidAudienceError(InvalidTokenError):
    kind = ValidationErrorKind.INVALID_AUDIENCE


class InvalidIssuerError(InvalidTokenError):
    kind = ValidationErrorKind.INVALID_ISSUER


class NoExpirationError(InvalidTokenError):
    kind = ValidationErrorKind.NO_EXPIRATION


class InvalidLifetimeError(InvalidTokenError):
    kind = ValidationErrorKind.INVALID_LIFETIME


class TokenNotYetValidError(InvalidTokenError):
    kind = ValidationErrorKind.NOT_YET_VALID


class TokenExpiredError(InvalidTokenError):
    """Raised when token has expired."""
    kind = ValidationErrorKind.EXPIRED


class InvalidSigningKeyError(InvalidTokenError):
    """Raised when the key that signed the token is itself not trusted."""
    kind = ValidationErrorKind.INVALID_SIGNING_KEY


class TokenReplayDetectedError(InvalidTokenError):
    kind = ValidationErrorKind.REPLAY_DETECTED


class TokenReplayAddFailedError(InvalidTokenError):
    kind = ValidationErrorKind.REPLAY_ADD_FAILED
