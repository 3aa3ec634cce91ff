# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Auth context: keeps the local user profile in step with the identity
provider and the profile document store.

An AuthContext owns exactly one identity state subscription for its
lifetime. Every state change is reconciled:

- signed in: the token bridge writes the session cookie, the stored profile
  is fetched and overlaid on a default skeleton, or the default is written
  first when the subject has no profile yet, then the profile is exposed;
- signed out: the session cookie is cleared and the profile dropped.

If the document store fails during reconciliation the context falls back to
the signed-out state and records the error in ``last_error``.

Example:
    async with AuthContext(identity, store, bridge, settings) as auth:
        await auth.wait_until_idle()
        if auth.user is None:
            await auth.sign_up("ada@example.com", "secret1", "Ada")
"""

from types import TracebackType
from typing import Protocol, Self

from learnhub.core.config.settings import Settings
from learnhub.domains.identity.provider import (
    IdentityHandle,
    IdentityProvider,
    IdentityProviderError,
    StateSubscription,
)
from learnhub.domains.profile.builder import build_default_profile, merge_profile, new_profile
from learnhub.domains.profile.store import DocumentStore, StoreError
from learnhub.domains.session.errors import (
    FEDERATED_SIGN_IN_FAILED,
    PROFILE_LOAD_FAILED,
    SIGN_IN_FAILED,
    SIGN_UP_FAILED,
    IdentitySessionError,
    SessionError,
    StoreSessionError,
)
from learnhub.domains.session.token_bridge import TokenBridge
from learnhub.models.user import UserProfile
from learnhub.utils.logging import bind_context, get_logger

logger = get_logger(__name__)


class Navigator(Protocol):
    """Moves the client to another area of the application."""

    def navigate(self, path: str) -> None:
        """Navigate to ``path``."""
        ...


class AuthContext:
    """Session state for one application instance.

    Attributes:
        user: Reconciled profile of the signed-in user, or None.
        loading: True until the first state change has been reconciled, and
            while a sign-up is in progress.
        last_error: Failure of the most recent reconciliation, if any.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        store: DocumentStore,
        token_bridge: TokenBridge,
        settings: Settings,
        navigator: Navigator | None = None,
    ) -> None:
        self._identity = identity
        self._store = store
        self._token_bridge = token_bridge
        self._settings = settings
        self._navigator = navigator
        self._subscription: StateSubscription | None = None

        self.user: UserProfile | None = None
        self.loading = True
        self.last_error: SessionError | None = None

    @property
    def is_authenticated(self) -> bool:
        """Whether a profile is currently exposed."""
        return self.user is not None

    @property
    def _users(self) -> str:
        return self._settings.store.users_collection

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Subscribe to identity state changes.

        Raises:
            RuntimeError: If the context was already started.
        """
        if self._subscription is not None:
            raise RuntimeError("AuthContext already started")
        self._subscription = self._identity.subscribe_state_changes(self._on_identity_change)

    def close(self) -> None:
        """Release the subscription. Safe to call more than once."""
        if self._subscription is not None:
            self._subscription.unsubscribe()

    async def aclose(self) -> None:
        """Release the subscription and wait for its dispatcher to stop."""
        if self._subscription is not None:
            await self._subscription.aclose()

    async def wait_until_idle(self) -> None:
        """Wait until every pending state change has been reconciled."""
        if self._subscription is not None:
            await self._subscription.idle()

    async def __aenter__(self) -> Self:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # =========================================================================
    # Reconciliation
    # =========================================================================

    async def _on_identity_change(self, handle: IdentityHandle | None) -> None:
        try:
            if handle is None:
                await self._token_bridge.clear()
                self.user = None
                logger.debug("Identity signed out")
                return

            bind_context(subject_id=handle.uid)
            await self._token_bridge.establish(handle)
            try:
                self.user = await self._reconcile(handle)
                self.last_error = None
            except StoreError as e:
                logger.error("Profile reconciliation failed", subject_id=handle.uid, error=str(e))
                self.last_error = StoreSessionError(PROFILE_LOAD_FAILED)
                self.last_error.__cause__ = e
                await self._token_bridge.clear()
                self.user = None
        finally:
            self.loading = False

    async def _reconcile(self, handle: IdentityHandle) -> UserProfile:
        stored = await self._store.get(self._users, handle.uid)
        default = build_default_profile(handle)

        if stored is None:
            await self._store.set(self._users, handle.uid, default.to_document())
            logger.info("Profile created on first sign-in", subject_id=handle.uid)
            return default

        return merge_profile(default, stored)

    # =========================================================================
    # Operations
    # =========================================================================

    async def sign_up(self, email: str, password: str, display_name: str) -> UserProfile:
        """Create an account and its profile document, then expose it.

        The profile is written only after the account exists, and exposed only
        after the write succeeds. On success the navigator is sent to the
        authenticated area.

        Raises:
            IdentitySessionError: The identity provider rejected the account.
            StoreSessionError: The profile document could not be written. The
                account exists; its profile is written by the next
                reconciliation for that subject.
        """
        self.loading = True
        try:
            try:
                handle = await self._identity.create_account(email, password, display_name)
            except IdentityProviderError as e:
                raise IdentitySessionError(e.message or SIGN_UP_FAILED) from e

            profile = new_profile(handle.uid, display_name, handle.email or email)
            try:
                await self._store.set(self._users, handle.uid, profile.to_document())
            except StoreError as e:
                raise StoreSessionError(SIGN_UP_FAILED) from e

            self.user = profile
            logger.info("Account created", subject_id=handle.uid)
            if self._navigator is not None:
                self._navigator.navigate(self._settings.session.post_auth_path)
            return profile
        except SessionError as e:
            logger.warning("Sign up failed", error=str(e.__cause__), kind=e.kind.value)
            raise
        finally:
            self.loading = False

    async def sign_in(self, email: str, password: str) -> IdentityHandle:
        """Sign in with email and password.

        The profile is exposed once the resulting state change is reconciled.

        Raises:
            IdentitySessionError: The credentials were rejected.
        """
        try:
            return await self._identity.sign_in(email, password)
        except IdentityProviderError as e:
            logger.warning("Sign in failed", error=str(e), kind=e.kind.value)
            raise IdentitySessionError(e.message or SIGN_IN_FAILED) from e

    async def sign_in_federated(self, credential: str) -> IdentityHandle:
        """Sign in with a federated (Google) credential.

        Raises:
            IdentitySessionError: The credential was rejected.
        """
        try:
            return await self._identity.sign_in_federated(credential)
        except IdentityProviderError as e:
            logger.warning("Federated sign in failed", error=str(e), kind=e.kind.value)
            raise IdentitySessionError(e.message or FEDERATED_SIGN_IN_FAILED) from e

    async def sign_out(self) -> None:
        """Sign out; reconciliation clears the session cookie."""
        await self._identity.sign_out()
