# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-process identity provider.

LocalIdentityBackend holds the account registry shared by every session:
bcrypt password hashes, links to federated identities, and the token
manager that signs identity tokens. IdentityClient is the per-session view
of the backend, the object an AuthContext subscribes to. A client created
with a token from an earlier sign-in starts out signed in as that principal.

Example:
    backend = LocalIdentityBackend(IdentityTokenManager(settings.jwt), PasswordHasher())
    client = backend.client(token=request.cookies.get("session"))
    handle = await client.create_account("ada@example.com", "secret1", "Ada")
"""

import asyncio
import logging
from dataclasses import dataclass
from uuid import uuid4

from email_validator import EmailNotValidError, validate_email

from learnhub.domains.auth.jwt import IdentityTokenManager, TokenError
from learnhub.domains.auth.password import MAX_PASSWORD_BYTES, PasswordHasher
from learnhub.domains.identity.google import FederatedVerifier
from learnhub.domains.identity.provider import (
    AuthErrorKind,
    IdentityHandle,
    IdentityProviderError,
    StateCallback,
    StateSubscription,
)

logger = logging.getLogger(__name__)

PASSWORD_PROVIDER_ID = "password"


@dataclass
class _Account:
    uid: str
    email: str | None
    display_name: str | None
    password_hash: str | None = None


class LocalIdentityBackend:
    """Account registry and token issuer shared across sessions.

    Attributes:
        _tokens: Signs and validates identity tokens.
        _hasher: Hashes and verifies passwords.
        _min_password_length: Provider-side weak password threshold.
        _federated_verifier: Verifies federated credentials, if configured.
    """

    def __init__(
        self,
        tokens: IdentityTokenManager,
        hasher: PasswordHasher,
        min_password_length: int = 6,
        federated_verifier: FederatedVerifier | None = None,
    ) -> None:
        self._tokens = tokens
        self._hasher = hasher
        self._min_password_length = min_password_length
        self._federated_verifier = federated_verifier
        self._accounts: dict[str, _Account] = {}
        self._uid_by_email: dict[str, str] = {}
        self._uid_by_federated: dict[tuple[str, str], str] = {}

    def client(self, token: str | None = None) -> "IdentityClient":
        """Create a per-session client, optionally restoring a prior sign-in."""
        return IdentityClient(self, self.restore(token) if token else None)

    async def create_account(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> IdentityHandle:
        """Register a new email/password account.

        Raises:
            IdentityProviderError: INVALID_EMAIL, WEAK_PASSWORD or
                EMAIL_ALREADY_IN_USE.
        """
        normalized = self._normalize_email(email)
        if len(password) < self._min_password_length:
            raise IdentityProviderError(
                AuthErrorKind.WEAK_PASSWORD,
                f"Password should be at least {self._min_password_length} characters",
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise IdentityProviderError(
                AuthErrorKind.WEAK_PASSWORD,
                f"Password should be at most {MAX_PASSWORD_BYTES} bytes",
            )
        if normalized in self._uid_by_email:
            raise IdentityProviderError(
                AuthErrorKind.EMAIL_ALREADY_IN_USE,
                "An account with this email already exists",
            )

        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        # Re-check after the hashing await; another session may have won.
        if normalized in self._uid_by_email:
            raise IdentityProviderError(
                AuthErrorKind.EMAIL_ALREADY_IN_USE,
                "An account with this email already exists",
            )

        account = _Account(
            uid=uuid4().hex,
            email=normalized,
            display_name=display_name or None,
            password_hash=password_hash,
        )
        self._accounts[account.uid] = account
        self._uid_by_email[normalized] = account.uid
        logger.info("Account created: %s", account.uid)
        return self._handle_for(account, PASSWORD_PROVIDER_ID)

    async def authenticate(self, email: str, password: str) -> IdentityHandle:
        """Check email/password credentials.

        Raises:
            IdentityProviderError: INVALID_EMAIL or INVALID_CREDENTIAL.
        """
        normalized = self._normalize_email(email)
        uid = self._uid_by_email.get(normalized)
        account = self._accounts.get(uid) if uid else None
        password_hash = account.password_hash if account else None

        valid = await asyncio.to_thread(self._hasher.verify, password, password_hash or "")
        if account is None or not valid:
            raise IdentityProviderError(
                AuthErrorKind.INVALID_CREDENTIAL,
                "Invalid email or password",
            )
        return self._handle_for(account, PASSWORD_PROVIDER_ID)

    async def authenticate_federated(self, credential: str) -> IdentityHandle:
        """Sign in with a federated credential, linking or creating an account.

        An unseen federated subject is linked to the existing account with
        the same email only when the provider has verified that email.
        Otherwise it gets a new account, which is indexed by email only if
        the email is verified.

        Raises:
            IdentityProviderError: FEDERATED_REJECTED if federated sign-in is
                not configured or the credential does not verify.
        """
        if self._federated_verifier is None:
            raise IdentityProviderError(
                AuthErrorKind.FEDERATED_REJECTED,
                "Federated sign-in is not enabled",
            )

        identity = await self._federated_verifier.verify(credential)
        key = (identity.provider_id, identity.subject)

        uid = self._uid_by_federated.get(key)
        if uid is None and identity.email and identity.email_verified:
            uid = self._uid_by_email.get(identity.email.lower())
        if uid is None:
            account = _Account(
                uid=uuid4().hex,
                email=identity.email.lower() if identity.email else None,
                display_name=identity.name,
            )
            self._accounts[account.uid] = account
            if account.email and identity.email_verified:
                self._uid_by_email[account.email] = account.uid
            logger.info("Account created from %s sign-in: %s", identity.provider_id, account.uid)
        else:
            account = self._accounts[uid]
            if not account.display_name and identity.name:
                account.display_name = identity.name
        self._uid_by_federated[key] = account.uid

        return self._handle_for(account, identity.provider_id)

    def restore(self, token: str) -> IdentityHandle | None:
        """Resolve a previously issued token to a handle.

        Returns None when the token is expired, invalid, or names an unknown
        account.
        """
        try:
            claims = self._tokens.decode(token)
        except TokenError as e:
            logger.debug("Session token not restored: %s", str(e))
            return None

        account = self._accounts.get(claims.sub)
        if account is None:
            logger.debug("Session token names unknown account: %s", claims.sub)
            return None

        return IdentityHandle(
            uid=account.uid,
            token=token,
            email=account.email,
            display_name=account.display_name,
            provider_id=claims.provider,
        )

    def _handle_for(self, account: _Account, provider_id: str) -> IdentityHandle:
        token = self._tokens.issue(
            subject=account.uid,
            email=account.email,
            name=account.display_name,
            provider=provider_id,
        )
        return IdentityHandle(
            uid=account.uid,
            token=token,
            email=account.email,
            display_name=account.display_name,
            provider_id=provider_id,
        )

    @staticmethod
    def _normalize_email(email: str) -> str:
        try:
            return validate_email(email, check_deliverability=False).normalized.lower()
        except EmailNotValidError as e:
            raise IdentityProviderError(
                AuthErrorKind.INVALID_EMAIL,
                "The email address is badly formatted",
            ) from e


class IdentityClient:
    """Per-session identity provider client.

    Implements the IdentityProvider protocol on top of a shared
    LocalIdentityBackend and notifies subscribers whenever the signed-in
    principal changes.
    """

    def __init__(
        self,
        backend: LocalIdentityBackend,
        current: IdentityHandle | None = None,
    ) -> None:
        self._backend = backend
        self._current = current
        self._subscriptions: list[StateSubscription] = []

    @property
    def current_user(self) -> IdentityHandle | None:
        """Currently signed-in principal, if any."""
        return self._current

    async def create_account(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> IdentityHandle:
        handle = await self._backend.create_account(email, password, display_name)
        self._set_current(handle)
        return handle

    async def sign_in(self, email: str, password: str) -> IdentityHandle:
        handle = await self._backend.authenticate(email, password)
        self._set_current(handle)
        return handle

    async def sign_in_federated(self, credential: str) -> IdentityHandle:
        handle = await self._backend.authenticate_federated(credential)
        self._set_current(handle)
        return handle

    async def sign_out(self) -> None:
        self._set_current(None)

    def subscribe_state_changes(self, callback: StateCallback) -> StateSubscription:
        subscription = StateSubscription(callback, on_close=self._subscriptions.remove)
        self._subscriptions.append(subscription)
        subscription.push(self._current)
        return subscription

    def _set_current(self, handle: IdentityHandle | None) -> None:
        self._current = handle
        for subscription in list(self._subscriptions):
            subscription.push(handle)
