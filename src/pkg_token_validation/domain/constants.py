from datetime import timedelta
from enum import Enum


DEFAULT_CLOCK_SKEW = timedelta(minutes=5)


class ValidationErrorKind(Enum):
    INVALID_TOKEN = "invalid_token"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_AUDIENCE = "invalid_audience"
    INVALID_ISSUER = "invalid_issuer"
    NO_EXPIRATION = "no_expiration"
    INVALID_LIFETIME = "invalid_lifetime"
    NOT_YET_VALID = "not_yet_valid"
    EXPIRED = "expired"
    INVALID_SIGNING_KEY = "invalid_signing_key"
    REPLAY_DETECTED = "replay_detected"
    REPLAY_ADD_FAILED = "replay_add_failed"


class SigningKeyFailure(Enum):
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    REJECTED = "rejected"


class ReplayCacheOutcome(Enum):
    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    REJECTED = "rejected"
