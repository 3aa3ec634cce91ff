# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection functions.

Every auth request gets its own AuthContext. The identity client is restored
from the session cookie the client sent, and the token bridge writes to the
response being built, so the initial reconciliation of the request is the
page-load reconciliation of a browser session.
"""

import logging
from dataclasses import dataclass, field
from typing import AsyncGenerator

from fastapi import Depends, Request, Response

from learnhub.core.config import Settings
from learnhub.domains.identity.local import LocalIdentityBackend
from learnhub.domains.profile.store import DocumentStore
from learnhub.domains.registration.notifications import NotificationBuffer
from learnhub.domains.session.context import AuthContext
from learnhub.domains.session.token_bridge import TokenBridge
from learnhub.domains.session.transport import CookieTransport
from learnhub.utils.logging import clear_context

logger = logging.getLogger(__name__)


# =========================================================================
# Application State
# =========================================================================


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_identity_backend(request: Request) -> LocalIdentityBackend:
    """Get the shared identity backend."""
    return request.app.state.identity_backend


def get_document_store(request: Request) -> DocumentStore:
    """Get the profile document store."""
    return request.app.state.document_store


# =========================================================================
# Session Scope
# =========================================================================


@dataclass
class ResponseNavigator:
    """Records the navigation requested during a request.

    Attributes:
        redirect_to: Last path navigated to, returned to the client.
    """

    redirect_to: str | None = None

    def navigate(self, path: str) -> None:
        self.redirect_to = path


@dataclass
class SessionScope:
    """Per-request session objects shared by the auth endpoints."""

    auth: AuthContext
    settings: Settings
    notifier: NotificationBuffer = field(default_factory=NotificationBuffer)
    navigator: ResponseNavigator = field(default_factory=ResponseNavigator)


async def get_session_scope(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_app_settings),
    backend: LocalIdentityBackend = Depends(get_identity_backend),
    store: DocumentStore = Depends(get_document_store),
) -> AsyncGenerator[SessionScope, None]:
    """Open an AuthContext for the request.

    The context is reconciled with the cookie the client sent before the
    endpoint runs, and closed once the endpoint returns.

    Yields:
        SessionScope for the request.
    """
    clear_context()
    navigator = ResponseNavigator()
    identity = backend.client(token=request.cookies.get(settings.session.name))
    bridge = TokenBridge(CookieTransport(request, response), settings.session)
    auth = AuthContext(identity, store, bridge, settings, navigator=navigator)

    try:
        async with auth:
            await auth.wait_until_idle()
            yield SessionScope(auth=auth, settings=settings, navigator=navigator)
    finally:
        clear_context()
