from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple

import jwt
from jwt.exceptions import DecodeError

from ...domain.entities import SecurityToken
from ...domain.exceptions import InvalidArgumentError
from ...domain.ports import TokenReader


def _numeric_date(claims: Mapping[str, Any], name: str) -> Optional[datetime]:
    value = claims.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(name, f"Claim {name!r} is not a NumericDate: {value!r}")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidArgumentError(name, f"Claim {name!r} is out of range: {value!r}") from exc


def _audiences(claims: Mapping[str, Any]) -> Tuple[str, ...]:
    aud_claim = claims.get("aud")
    if aud_claim is None:
        return ()
    if isinstance(aud_claim, str):
        return (aud_claim,)
    if not isinstance(aud_claim, list) or not all(isinstance(a, str) for a in aud_claim):
        raise InvalidArgumentError("aud", f"Claim 'aud' must be a string or a list of strings: {aud_claim!r}")
    return tuple(aud_claim)


class JWTTokenReader(TokenReader):
    """
    Adapter implementing TokenReader port using PyJWT.

    Infrastructure layer:
    - Knows about JWT structure.
    - Does NOT verify the signature; that is the job of whoever hands the
      verified key over as `signing_key`.
    """

    def read(self, token: str, signing_key: Any = None) -> SecurityToken:
        """
        Extract the claims the validators need from a compact JWT.

        Raises:
            InvalidArgumentError
        """
        if not token:
            raise InvalidArgumentError("token")

        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except DecodeError as exc:
            raise InvalidArgumentError("token", f"Token is not a readable JWT: {exc}") from exc

        issuer = claims.get("iss")
        return SecurityToken(
            raw=token,
            issuer=issuer if isinstance(issuer, str) else None,
            audiences=_audiences(claims),
            not_before=_numeric_date(claims, "nbf"),
            expires=_numeric_date(claims, "exp"),
            signing_key=signing_key,
            claims=claims,
        )
