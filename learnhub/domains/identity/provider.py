# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider contract.

The session layer talks to the identity provider only through the
IdentityProvider protocol: account creation, sign-in, sign-out and a
subscription to identity state changes. State changes are delivered through
a StateSubscription, which runs callbacks one at a time in the order the
changes happened.

Example:
    async def on_change(handle: IdentityHandle | None) -> None:
        print("signed in" if handle else "signed out")

    subscription = provider.subscribe_state_changes(on_change)
    await provider.sign_in("ada@example.com", "secret1")
    await subscription.idle()
    subscription.unsubscribe()
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityHandle:
    """An authenticated principal for the current session.

    Attributes:
        uid: Subject id assigned by the provider.
        token: Signed identity token.
        email: Email address, if the provider knows it.
        display_name: Display name, if the provider knows it.
        provider_id: Sign-in method that produced the handle.
    """

    uid: str
    token: str
    email: str | None = None
    display_name: str | None = None
    provider_id: str = "password"


class AuthErrorKind(str, Enum):
    """Failure categories reported by identity providers."""

    EMAIL_ALREADY_IN_USE = "email-already-in-use"
    WEAK_PASSWORD = "weak-password"
    INVALID_EMAIL = "invalid-email"
    INVALID_CREDENTIAL = "invalid-credential"
    FEDERATED_REJECTED = "federated-rejected"
    NETWORK = "network-request-failed"


class IdentityProviderError(Exception):
    """Raised by identity providers.

    Attributes:
        kind: Failure category.
        message: Human-readable message safe to show to the user, if any.
    """

    def __init__(self, kind: AuthErrorKind, message: str | None = None) -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message


StateCallback = Callable[[IdentityHandle | None], Awaitable[None]]


class StateSubscription:
    """Serialized delivery of identity state changes to one callback.

    Changes are queued and delivered by a single task, so at most one
    callback invocation is in flight. After unsubscribe() no further
    callbacks run; calling it again is a no-op. Calling the subscription
    object itself also unsubscribes.

    Must be created inside a running event loop.
    """

    def __init__(
        self,
        callback: StateCallback,
        on_close: Callable[["StateSubscription"], None] | None = None,
    ) -> None:
        self._callback = callback
        self._on_close = on_close
        self._queue: asyncio.Queue[tuple[IdentityHandle | None]] = asyncio.Queue()
        self._closed = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    @property
    def closed(self) -> bool:
        """Whether the subscription has been released."""
        return self._closed

    def push(self, handle: IdentityHandle | None) -> None:
        """Queue a state change for delivery."""
        if self._closed:
            return
        self._queue.put_nowait((handle,))

    async def idle(self) -> None:
        """Wait until every queued state change has been delivered."""
        if self._closed:
            return
        await self._queue.join()

    def unsubscribe(self) -> None:
        """Release the subscription."""
        if self._closed:
            return
        self._closed = True
        self._task.cancel()
        # Unblock anyone waiting in idle().
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
        if self._on_close is not None:
            self._on_close(self)
        logger.debug("Identity state subscription released")

    __call__ = unsubscribe

    async def aclose(self) -> None:
        """Release the subscription and wait for the dispatcher task to finish."""
        self.unsubscribe()
        await asyncio.gather(self._task, return_exceptions=True)

    async def _run(self) -> None:
        while True:
            (handle,) = await self._queue.get()
            try:
                await self._callback(handle)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Identity state callback failed")
            finally:
                self._queue.task_done()


class IdentityProvider(Protocol):
    """Operations the session layer consumes from an identity provider."""

    async def create_account(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> IdentityHandle:
        """Create credentials and sign the new account in."""
        ...

    async def sign_in(self, email: str, password: str) -> IdentityHandle:
        """Sign in with email and password."""
        ...

    async def sign_in_federated(self, credential: str) -> IdentityHandle:
        """Sign in with a credential issued by a federated provider."""
        ...

    async def sign_out(self) -> None:
        """Sign the current principal out."""
        ...

    def subscribe_state_changes(self, callback: StateCallback) -> StateSubscription:
        """Subscribe to identity state changes.

        The current state is delivered first.
        """
        ...
