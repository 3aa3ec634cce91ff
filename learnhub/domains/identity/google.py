# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Google ID token verification for federated sign-in."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from learnhub.domains.identity.provider import AuthErrorKind, IdentityProviderError

logger = logging.getLogger(__name__)

GOOGLE_PROVIDER_ID = "google.com"


@dataclass(frozen=True)
class FederatedIdentity:
    """Identity asserted by a federated provider.

    Attributes:
        provider_id: Federated provider id.
        subject: Subject id at the federated provider.
        email: Email address, if shared.
        name: Display name, if shared.
        email_verified: Whether the provider vouches for the email address.
    """

    provider_id: str
    subject: str
    email: str | None = None
    name: str | None = None
    email_verified: bool = False


class FederatedVerifier(Protocol):
    """Verifies a federated credential."""

    async def verify(self, credential: str) -> FederatedIdentity:
        """Verify the credential and return the asserted identity.

        Raises:
            IdentityProviderError: If the credential is rejected.
        """
        ...


class GoogleTokenVerifier:
    """Verifies Google ID tokens with google-auth.

    Attributes:
        _client_id: OAuth client id the token must be issued for. When None,
            the audience is not checked.
    """

    def __init__(self, client_id: str | None = None) -> None:
        self._client_id = client_id
        self._request = google_requests.Request()

    async def verify(self, credential: str) -> FederatedIdentity:
        """Verify a Google ID token.

        Raises:
            IdentityProviderError: FEDERATED_REJECTED for invalid tokens,
                NETWORK if Google's certificates cannot be fetched.
        """
        try:
            claims = await asyncio.to_thread(
                google_id_token.verify_oauth2_token,
                credential,
                self._request,
                self._client_id,
            )
        except google_exceptions.TransportError as e:
            logger.warning("Could not reach Google to verify token: %s", str(e))
            raise IdentityProviderError(
                AuthErrorKind.NETWORK,
                "Could not reach Google. Please try again.",
            ) from e
        except ValueError as e:
            logger.info("Google ID token rejected: %s", str(e))
            raise IdentityProviderError(
                AuthErrorKind.FEDERATED_REJECTED,
                "Google sign-in was rejected",
            ) from e

        return FederatedIdentity(
            provider_id=GOOGLE_PROVIDER_ID,
            subject=claims["sub"],
            email=claims.get("email"),
            name=claims.get("name"),
            email_verified=claims.get("email_verified") is True,
        )
