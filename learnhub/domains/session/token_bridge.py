# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Token bridge: mirrors the identity token into the session cookie.

Request handlers that never run the identity provider's client (server
rendering, API calls) recognize a signed-in session by this cookie. Only its
presence or absence is part of the contract.

Both operations are idempotent: establishing the same token twice writes the
cookie once, and clearing an absent cookie does nothing.
"""

import logging

from learnhub.core.config.settings import SessionCookieSettings
from learnhub.domains.auth.jwt import IdentityTokenManager
from learnhub.domains.identity.provider import IdentityHandle
from learnhub.domains.session.transport import SessionTransport

logger = logging.getLogger(__name__)


class TokenBridge:
    """Writes and clears the session cookie on a transport."""

    def __init__(self, transport: SessionTransport, settings: SessionCookieSettings) -> None:
        self._transport = transport
        self._settings = settings

    @property
    def is_established(self) -> bool:
        """Whether the session cookie is present."""
        return self._transport.get(self._settings.name) is not None

    async def establish(self, handle: IdentityHandle) -> None:
        """Write the handle's token to the session cookie."""
        if self._transport.get(self._settings.name) == handle.token:
            return

        self._transport.set(
            self._settings.name,
            handle.token,
            max_age=self._settings.max_age_seconds,
            secure=self._settings.secure,
            httponly=self._settings.httponly,
            samesite=self._settings.samesite,
            path=self._settings.path,
        )
        logger.debug(
            "Session cookie established for %s (token %s)",
            handle.uid,
            IdentityTokenManager.fingerprint(handle.token),
        )

    async def clear(self) -> None:
        """Remove the session cookie if present."""
        if self._transport.get(self._settings.name) is None:
            return

        self._transport.delete(self._settings.name, path=self._settings.path)
        logger.debug("Session cookie cleared")
