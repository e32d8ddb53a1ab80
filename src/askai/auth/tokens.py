"""Short-lived bearer tokens signed with a shared secret.

Tokens are stateless: nothing is stored server-side, so verification only
needs the secret.
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import jwt

from ..config import TOKEN_TTL_SECONDS
from ..errors import AuthError, ValidationError
from .models import TOKEN_AUDIENCE, TOKEN_SUBJECT, AccessTokenClaims

logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


class TokenIssuer:
    """Issues and verifies access tokens.

    Hidden design decisions:
    - Signing algorithm and claim encoding
    - Expiry enforcement
    """

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        """Initialize the issuer.

        Args:
            secret: Shared signing secret
            ttl_seconds: Token lifetime (default: 10 minutes)
            clock: Source of the issuance timestamp
        """
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def issue(self, license_cert: str | None) -> str:
        """Sign a token for the given license certificate.

        Raises:
            ValidationError: If license_cert is absent or empty
        """
        if not license_cert or not isinstance(license_cert, str):
            raise ValidationError("licenseCert required")

        issued_at = int(self._clock())
        payload: dict[str, Any] = {
            "sub": TOKEN_SUBJECT,
            "aud": TOKEN_AUDIENCE,
            "licenseCert": license_cert,
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str | None) -> AccessTokenClaims:
        """Decode and validate a token.

        Raises:
            AuthError: If the token is missing, malformed, expired or was
                signed with another secret
        """
        if not token:
            raise AuthError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                audience=TOKEN_AUDIENCE,
                options={"require": ["exp", "sub", "aud"]},
            )
        except jwt.PyJWTError as e:
            logger.info("token rejected: %s", e)
            raise AuthError() from e

        if payload.get("sub") != TOKEN_SUBJECT or not payload.get("licenseCert"):
            logger.info("token rejected: unexpected claims")
            raise AuthError()

        return AccessTokenClaims(
            sub=payload["sub"],
            aud=payload["aud"],
            licenseCert=payload["licenseCert"],
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    @staticmethod
    def bearer_token(authorization: str | None) -> str:
        """Extract the token from an ``Authorization: Bearer`` header value."""
        header = authorization or ""
        return header[7:] if header.startswith("Bearer ") else ""
