"""
Built-in token validation checks.

Each check is a plain function that returns None when the token passes
and raises a TokenValidationError subclass when it does not.
"""

from .audience import validate_audience
from .issuer import validate_issuer
from .lifetime import validate_lifetime
from .replay import validate_token_replay
from .signing_key import validate_issuer_signing_key

__all__ = [
    "validate_audience",
    "validate_issuer",
    "validate_lifetime",
    "validate_issuer_signing_key",
    "validate_token_replay",
]
