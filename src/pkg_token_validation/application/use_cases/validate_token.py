from __future__ import annotations

import logging
from dataclasses import dataclass

from ...domain.entities import SecurityToken, ValidationResult
from ...domain.exceptions import TokenValidationError
from ...domain.policy import ValidationPolicy
from ...domain.validators import (
    validate_audience,
    validate_issuer,
    validate_issuer_signing_key,
    validate_lifetime,
    validate_token_replay,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidateTokenUseCase:
    """
    Application use case:
    - Run every configured check against an already-parsed SecurityToken
    - Stop at the first failure

    Order: lifetime, audience, issuer, signing key, replay. Replay runs
    last so that a token rejected by any other check is never recorded in
    the replay cache.
    """

    policy: ValidationPolicy

    def execute(self, token: SecurityToken) -> ValidationResult:
        """
        Validate a token and return a ValidationResult.

        Only TokenValidationError is turned into a failed result; anything
        else raised by a check or an override propagates.
        """
        try:
            self.validate(token)
        except TokenValidationError as exc:
            logger.info("Token validation failed: %s", exc.kind.value)
            return ValidationResult.failure(exc, token)
        return ValidationResult.success(token)

    def validate(self, token: SecurityToken) -> SecurityToken:
        """
        Raises:
            TokenValidationError (first failing check)

        Returns:
            The same SecurityToken if every check passes (for chaining).
        """
        policy = self.policy

        validate_lifetime(token.not_before, token.expires, token, policy)
        validate_audience(list(token.audiences), token, policy)
        validate_issuer(token.issuer, token, policy)
        validate_issuer_signing_key(token.signing_key, token, policy)
        validate_token_replay(token.expires, token.raw, policy, token)

        return token
