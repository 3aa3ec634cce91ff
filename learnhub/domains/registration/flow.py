# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration and login flows.

The flows sit between a submitted form and the AuthContext. Registration
validates passwords locally, in a fixed order, before anything reaches the
identity provider:

1. password and confirmation must match;
2. the password must be at least ``min_password_length`` characters.

While an operation is pending the flow is busy and refuses further
submissions. Every step returns a tagged FlowOutcome, so a rejected form is
never confused with a provider or store failure.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from learnhub.domains.registration.notifications import Notifier
from learnhub.domains.session.context import AuthContext
from learnhub.domains.session.errors import SessionError
from learnhub.models.auth import LoginForm, OutcomeKind, RegistrationForm
from learnhub.models.user import UserProfile

logger = logging.getLogger(__name__)

PASSWORDS_DONT_MATCH = "Passwords don't match"
ACCOUNT_CREATED = "Account created successfully!"
SIGNED_IN = "Signed in successfully!"
SIGNED_IN_WITH_GOOGLE = "Signed in with Google successfully!"


@dataclass(frozen=True)
class ValidationFailure:
    """Local rejection of a form."""

    message: str


@dataclass(frozen=True)
class FlowOutcome:
    """Tagged result of a flow step.

    Attributes:
        kind: What happened.
        message: Message shown to the user, if any.
        user: Profile exposed by the operation, if any.
    """

    kind: OutcomeKind
    message: str | None = None
    user: UserProfile | None = None

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.OK


def password_too_short(min_length: int) -> str:
    """Rejection message for passwords under the minimum length."""
    return f"Password must be at least {min_length} characters"


def validate_registration(
    form: RegistrationForm,
    min_password_length: int = 6,
) -> ValidationFailure | None:
    """Validate a registration form.

    Returns:
        The first failure, or None if the form is acceptable.
    """
    if form.password != form.confirm_password:
        return ValidationFailure(PASSWORDS_DONT_MATCH)
    if len(form.password) < min_password_length:
        return ValidationFailure(password_too_short(min_password_length))
    return None


class _BusyFlow:
    """Runs one operation at a time and reports its outcome to the notifier."""

    def __init__(self, auth: AuthContext, notifier: Notifier) -> None:
        self._auth = auth
        self._notifier = notifier
        self.busy = False

    async def _run(
        self,
        operation: Callable[[], Awaitable[object]],
        success_message: str,
        action: str,
    ) -> FlowOutcome:
        if self.busy:
            return FlowOutcome(OutcomeKind.BUSY)

        self.busy = True
        try:
            await operation()
        except SessionError as e:
            logger.info("%s failed: %s", action, e.user_message)
            self._notifier.error(e.user_message)
            return FlowOutcome(e.kind, e.user_message)
        finally:
            self.busy = False

        self._notifier.success(success_message)
        return FlowOutcome(OutcomeKind.OK, success_message, self._auth.user)

    async def continue_with_federated(self, credential: str) -> FlowOutcome:
        """Federated sign-in; skips local form validation."""
        return await self._run(
            lambda: self._auth.sign_in_federated(credential),
            SIGNED_IN_WITH_GOOGLE,
            "Federated sign in",
        )


class RegistrationFlow(_BusyFlow):
    """Registration form handling."""

    def __init__(
        self,
        auth: AuthContext,
        notifier: Notifier,
        min_password_length: int = 6,
    ) -> None:
        super().__init__(auth, notifier)
        self._min_password_length = min_password_length

    async def submit(self, form: RegistrationForm) -> FlowOutcome:
        """Validate the form and create the account.

        A rejected form is reported to the notifier and never reaches the
        identity provider.
        """
        if self.busy:
            return FlowOutcome(OutcomeKind.BUSY)

        failure = validate_registration(form, self._min_password_length)
        if failure is not None:
            self._notifier.error(failure.message)
            return FlowOutcome(OutcomeKind.VALIDATION, failure.message)

        return await self._run(
            lambda: self._auth.sign_up(form.email, form.password, form.name),
            ACCOUNT_CREATED,
            "Sign up",
        )


class LoginFlow(_BusyFlow):
    """Email/password login form handling."""

    async def submit(self, form: LoginForm) -> FlowOutcome:
        """Sign in with the submitted credentials."""
        return await self._run(
            lambda: self._auth.sign_in(form.email, form.password),
            SIGNED_IN,
            "Sign in",
        )
