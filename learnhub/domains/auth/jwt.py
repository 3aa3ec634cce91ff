# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity token signing and validation.

The local identity provider issues one signed token per sign-in. The token
is what the token bridge mirrors into the session cookie, and what a later
request presents to restore its identity.

Example:
    >>> manager = IdentityTokenManager(get_settings().jwt)
    >>> token = manager.issue(subject="uid-1", email="ada@example.com")
    >>> manager.decode(token).sub
    'uid-1'
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel

from learnhub.core.config.settings import JWTSettings

logger = logging.getLogger(__name__)


class IdentityClaims(BaseModel):
    """Claims carried by an identity token.

    Attributes:
        sub: Subject id.
        email: Email address, if known.
        name: Display name, if known.
        provider: Sign-in method ("password" or "google.com").
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: Token id.
    """

    sub: str
    email: str | None = None
    name: str | None = None
    provider: str = "password"
    exp: int
    iat: int
    jti: str


class TokenError(Exception):
    """Base exception for identity token operations."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class InvalidTokenError(TokenError):
    """Raised when a token is malformed or its signature does not verify."""


class IdentityTokenManager:
    """Issues and validates identity tokens.

    Attributes:
        _settings: JWT configuration settings.
    """

    def __init__(self, settings: JWTSettings) -> None:
        self._settings = settings

    def issue(
        self,
        subject: str,
        email: str | None = None,
        name: str | None = None,
        provider: str = "password",
    ) -> str:
        """Issue a signed identity token.

        Args:
            subject: Subject id.
            email: Email address.
            name: Display name.
            provider: Sign-in method.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(timezone.utc)
        exp = now + timedelta(minutes=self._settings.token_expire_minutes)

        payload = {
            "sub": subject,
            "email": email,
            "name": name,
            "provider": provider,
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def decode(self, token: str) -> IdentityClaims:
        """Decode and validate an identity token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JoseJWTError as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}") from e

        try:
            return IdentityClaims.model_validate(payload)
        except ValueError as e:
            raise InvalidTokenError(f"Invalid token claims: {str(e)}") from e

    @staticmethod
    def fingerprint(token: str) -> str:
        """Short SHA-256 fingerprint of a token, safe to log."""
        return hashlib.sha256(token.encode()).hexdigest()[:12]
