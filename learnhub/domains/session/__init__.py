# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session layer: auth context and token bridge.

Exports:
    AuthContext: Session reconciler for one application instance.
    TokenBridge: Session cookie writer.
    CookieTransport, MemoryTransport: Cookie jars the bridge writes to.
    SessionError and subclasses: Failures of AuthContext operations.
"""

from learnhub.domains.session.context import AuthContext, Navigator
from learnhub.domains.session.errors import (
    IdentitySessionError,
    SessionError,
    StoreSessionError,
)
from learnhub.domains.session.token_bridge import TokenBridge
from learnhub.domains.session.transport import (
    CookieTransport,
    MemoryTransport,
    SessionTransport,
)

__all__ = [
    "AuthContext",
    "Navigator",
    "TokenBridge",
    "CookieTransport",
    "MemoryTransport",
    "SessionTransport",
    "SessionError",
    "IdentitySessionError",
    "StoreSessionError",
]
