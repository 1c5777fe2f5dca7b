"""
pkg_token_validation

Clean-architecture token validation core: audience, issuer, lifetime,
signing-key and replay checks driven by a ValidationPolicy, usable from
any token handler or framework integration.
"""

__version__ = "0.1.0"

from .domain.constants import DEFAULT_CLOCK_SKEW, ReplayCacheOutcome, SigningKeyFailure, ValidationErrorKind
from .domain.entities import SecurityToken, ValidationResult
from .domain.exceptions import (
    AuthenticationError,
    TokenValidationError,
    InvalidArgumentError,
    InvalidTokenError,
    InvalidAudienceError,
    InvalidIssuerError,
    NoExpirationError,
    InvalidLifetimeError,
    TokenNotYetValidError,
    TokenExpiredError,
    InvalidSigningKeyError,
    TokenReplayDetectedError,
    TokenReplayAddFailedError,
)
from .domain.policy import ValidationPolicy
from .domain.ports import AtomicTokenReplayCache, TokenReader, TokenReplayCache
from .domain.value_objects import SigningKey
from .domain.validators import (
    validate_audience,
    validate_issuer,
    validate_lifetime,
    validate_issuer_signing_key,
    validate_token_replay,
)

from .application.use_cases.validate_token import ValidateTokenUseCase

from .adapters.jwt.token_reader import JWTTokenReader
from .adapters.memory.replay_cache import InMemoryTokenReplayCache
from .adapters.x509.signing_key import X509SigningKey

from .config.env import policy_from_env

__all__ = [
    "__version__",
    # domain core
    "DEFAULT_CLOCK_SKEW",
    "ReplayCacheOutcome",
    "SigningKeyFailure",
    "ValidationErrorKind",
    "SecurityToken",
    "ValidationResult",
    "ValidationPolicy",
    "SigningKey",
    "TokenReplayCache",
    "AtomicTokenReplayCache",
    "TokenReader",
    # validators
    "validate_audience",
    "validate_issuer",
    "validate_lifetime",
    "validate_issuer_signing_key",
    "validate_token_replay",
    # exceptions
    "AuthenticationError",
    "TokenValidationError",
    "InvalidArgumentError",
    "InvalidTokenError",
    "InvalidAudienceError",
    "InvalidIssuerError",
    "NoExpirationError",
    "InvalidLifetimeError",
    "TokenNotYetValidError",
    "TokenExpiredError",
    "InvalidSigningKeyError",
    "TokenReplayDetectedError",
    "TokenReplayAddFailedError",
    # use cases
    "ValidateTokenUseCase",
    # adapters
    "JWTTokenReader",
    "InMemoryTokenReplayCache",
    "X509SigningKey",
    # config
    "policy_from_env",
]
