# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across the unit tests: test settings,
the local identity backend, an in-memory document store, a cookie jar and a
scriptable fake identity provider.
"""

import asyncio
from typing import Any

import pytest
from pydantic import SecretStr

from learnhub.core.config import (
    IdentitySettings,
    JWTSettings,
    SessionCookieSettings,
    Settings,
)
from learnhub.domains.auth.jwt import IdentityTokenManager
from learnhub.domains.auth.password import PasswordHasher
from learnhub.domains.identity.google import GOOGLE_PROVIDER_ID, FederatedIdentity
from learnhub.domains.identity.local import LocalIdentityBackend
from learnhub.domains.identity.provider import (
    AuthErrorKind,
    IdentityHandle,
    IdentityProviderError,
    StateCallback,
    StateSubscription,
)
from learnhub.domains.profile.store import InMemoryDocumentStore
from learnhub.domains.session.token_bridge import TokenBridge
from learnhub.domains.session.transport import MemoryTransport


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_environment() -> dict[str, str]:
    """Provide test environment variables.

    Returns:
        Dictionary of environment variables for testing.
    """
    return {
        "ENVIRONMENT": "test",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "JWT_SECRET_KEY": "test-secret-key-for-testing-only",
        "JWT_ALGORITHM": "HS256",
        "SESSION_COOKIE_SECURE": "false",
        "IDENTITY_BCRYPT_ROUNDS": "4",
        "STORE_BACKEND": "memory",
    }


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: fast hashing and cookies usable over plain HTTP."""
    return Settings(
        environment="test",
        debug=True,
        jwt=JWTSettings(secret_key=SecretStr("test-secret-key-for-testing-only")),
        session=SessionCookieSettings(secure=False),
        identity=IdentitySettings(bcrypt_rounds=4),
    )


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )


# =============================================================================
# Identity Fixtures
# =============================================================================


class FakeFederatedVerifier:
    """Accepts credentials registered in ``identities``."""

    def __init__(self) -> None:
        self.identities: dict[str, FederatedIdentity] = {}

    async def verify(self, credential: str) -> FederatedIdentity:
        identity = self.identities.get(credential)
        if identity is None:
            raise IdentityProviderError(AuthErrorKind.FEDERATED_REJECTED, "Google sign-in was rejected")
        return identity


class FakeIdentityProvider:
    """Scriptable identity provider recording every call.

    Attributes:
        calls: (operation, *args) tuples in call order.
        fail_with: Error raised by the next operations, if set.
        gate: When set, create_account waits for it before returning.
    """

    def __init__(self) -> None:
        self.current: IdentityHandle | None = None
        self.accounts: dict[str, IdentityHandle] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.fail_with: IdentityProviderError | None = None
        self.gate: asyncio.Event | None = None
        self._subscriptions: list[StateSubscription] = []

    async def create_account(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> IdentityHandle:
        self.calls.append(("create_account", email, password, display_name))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        if email in self.accounts:
            raise IdentityProviderError(
                AuthErrorKind.EMAIL_ALREADY_IN_USE,
                "An account with this email already exists",
            )
        number = len(self.accounts) + 1
        handle = IdentityHandle(
            uid=f"uid-{number}",
            token=f"token-{number}",
            email=email,
            display_name=display_name,
        )
        self.accounts[email] = handle
        self.emit(handle)
        return handle

    async def sign_in(self, email: str, password: str) -> IdentityHandle:
        self.calls.append(("sign_in", email, password))
        if self.fail_with is not None:
            raise self.fail_with
        handle = self.accounts.get(email)
        if handle is None:
            raise IdentityProviderError(AuthErrorKind.INVALID_CREDENTIAL, "Invalid email or password")
        self.emit(handle)
        return handle

    async def sign_in_federated(self, credential: str) -> IdentityHandle:
        self.calls.append(("sign_in_federated", credential))
        if self.fail_with is not None:
            raise self.fail_with
        handle = IdentityHandle(
            uid=f"google-{credential}",
            token=f"token-google-{credential}",
            email=f"{credential}@gmail.com",
            display_name="Grace Hopper",
            provider_id=GOOGLE_PROVIDER_ID,
        )
        self.emit(handle)
        return handle

    async def sign_out(self) -> None:
        self.calls.append(("sign_out",))
        self.emit(None)

    def subscribe_state_changes(self, callback: StateCallback) -> StateSubscription:
        subscription = StateSubscription(callback, on_close=self._subscriptions.remove)
        self._subscriptions.append(subscription)
        subscription.push(self.current)
        return subscription

    def emit(self, handle: IdentityHandle | None) -> None:
        """Deliver a state change to every subscriber."""
        self.current = handle
        for subscription in list(self._subscriptions):
            subscription.push(handle)


@pytest.fixture
def fake_identity() -> FakeIdentityProvider:
    """Provide a fake identity provider that accepts any new email."""
    return FakeIdentityProvider()


@pytest.fixture
def federated_verifier() -> FakeFederatedVerifier:
    """Provide a federated verifier with a verified and an unverified Google credential."""
    verifier = FakeFederatedVerifier()
    verifier.identities["google-credential"] = FederatedIdentity(
        provider_id=GOOGLE_PROVIDER_ID,
        subject="google-subject-1",
        email="grace@navy.mil",
        name="Grace Hopper",
        email_verified=True,
    )
    verifier.identities["unverified-credential"] = FederatedIdentity(
        provider_id=GOOGLE_PROVIDER_ID,
        subject="google-subject-2",
        email="grace@navy.mil",
        name="Not Grace",
    )
    return verifier


@pytest.fixture
def token_manager(settings: Settings) -> IdentityTokenManager:
    """Provide an identity token manager with test settings."""
    return IdentityTokenManager(settings.jwt)


@pytest.fixture
def identity_backend(
    token_manager: IdentityTokenManager,
    federated_verifier: FakeFederatedVerifier,
) -> LocalIdentityBackend:
    """Provide a local identity backend with cheap bcrypt rounds."""
    return LocalIdentityBackend(
        token_manager,
        PasswordHasher(rounds=4),
        federated_verifier=federated_verifier,
    )


# =============================================================================
# Store and Session Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def transport() -> MemoryTransport:
    """Provide an empty cookie jar."""
    return MemoryTransport()


@pytest.fixture
def token_bridge(transport: MemoryTransport, settings: Settings) -> TokenBridge:
    """Provide a token bridge writing to the memory transport."""
    return TokenBridge(transport, settings.session)
