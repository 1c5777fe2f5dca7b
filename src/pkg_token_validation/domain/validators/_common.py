from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..exceptions import InvalidArgumentError, TokenValidationError
from ..policy import ValidationPolicy

logger = logging.getLogger(__name__)


def require_policy(policy: Optional[ValidationPolicy]) -> ValidationPolicy:
    if policy is None:
        raise InvalidArgumentError("policy")
    return policy


def run_override(
        name: str,
        override: Callable[..., Any],
        args: tuple,
        on_reject: Callable[[], TokenValidationError],
) -> None:
    """
    Delegate a check to a caller-supplied validator.

    A TokenValidationError raised by the override propagates unchanged; a
    False return value is turned into the error built by `on_reject`.
    """
    if override(*args) is False:
        error = on_reject()
        logger.debug("%s override rejected token: %s", name, error.kind.value)
        raise error


def rejected(error: TokenValidationError) -> TokenValidationError:
    logger.debug("Token rejected: %s %s", error.kind.value, error.properties)
    return error
