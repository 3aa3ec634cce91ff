# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider contract and implementations.

Exports:
    IdentityProvider: Protocol consumed by the session layer.
    IdentityHandle: Authenticated principal.
    IdentityProviderError: Provider failure with an optional user message.
    StateSubscription: Serialized state change delivery.
    LocalIdentityBackend: Shared account registry and token issuer.
    IdentityClient: Per-session provider client.
    GoogleTokenVerifier: Google ID token verification.
"""

from learnhub.domains.identity.google import (
    FederatedIdentity,
    FederatedVerifier,
    GoogleTokenVerifier,
)
from learnhub.domains.identity.local import IdentityClient, LocalIdentityBackend
from learnhub.domains.identity.provider import (
    AuthErrorKind,
    IdentityHandle,
    IdentityProvider,
    IdentityProviderError,
    StateCallback,
    StateSubscription,
)

__all__ = [
    "AuthErrorKind",
    "FederatedIdentity",
    "FederatedVerifier",
    "GoogleTokenVerifier",
    "IdentityClient",
    "IdentityHandle",
    "IdentityProvider",
    "IdentityProviderError",
    "LocalIdentityBackend",
    "StateCallback",
    "StateSubscription",
]
