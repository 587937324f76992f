"""
Opedia Blogs API — Bearer Token Signing and Verification
==========================================================

What:  Issues and verifies HS256 JSON Web Tokens.
How:   PyJWT encodes caller-supplied claims with the shared secret and a
       one-hour `exp`. Verification checks signature and expiry only.

The token endpoint signs whatever claims it is given. Nothing ties a token
to a stored user; routes that need an identity read it from the claims
(POST /blogs/{id}/comments uses the `email` claim).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from opedia_blogs.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized access"
FORBIDDEN_MESSAGE = "Forbidden access"

_DECODE_OPTIONS = {
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_iat": False,
}


class TokenService:
    """
    Signs and verifies access tokens with a shared secret.

    Attributes:
        secret:     HMAC key (ACCESS_TOKEN_SECRET)
        algorithm:  JWT algorithm, HS256 by default
        expires_in: Lifetime added to the issue time to produce `exp`
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=1),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, claims: Dict[str, Any]) -> str:
        """
        Sign `claims` into a token.

        `iat` is added when absent; `exp` is always replaced with
        issue time + expires_in.

        Raises:
            ValidationError: a registered claim has a type the signer refuses,
                             such as a non-string `iss` (→ 400)
        """
        now = datetime.now(timezone.utc)
        payload = dict(claims)
        payload.setdefault("iat", now)
        payload["exp"] = now + self.expires_in
        try:
            return jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                message=f"Claims cannot be signed: {e}",
                context={"claims": sorted(claims)},
            )

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify a token and return its claims.

        Only the signature, `exp` and `nbf` are checked. Other registered
        claims (`aud`, `iss`, `sub`, `jti`, `iat`) are whatever the caller
        put into POST /jwt and are returned untouched.

        Raises:
            AuthenticationError: bad signature, malformed token, or expired (→ 401)
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected: %s", e)
            raise AuthenticationError(
                message=FORBIDDEN_MESSAGE,
                context={"reason": type(e).__name__},
            )


def bearer_token(authorization: str) -> str:
    """Second space-separated part of the header, or '' when there is none."""
    parts = authorization.split(" ")
    return parts[1] if len(parts) > 1 else ""
