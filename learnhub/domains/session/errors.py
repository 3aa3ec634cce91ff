# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Errors raised by AuthContext operations.

Each error carries the message to show the user and the outcome kind, so
callers never have to inspect the underlying provider or store error. The
underlying error is always available as ``__cause__``.
"""

from learnhub.models.auth import OutcomeKind

SIGN_UP_FAILED = "Failed to create account"
SIGN_IN_FAILED = "Failed to sign in"
FEDERATED_SIGN_IN_FAILED = "Failed to sign in with Google"
PROFILE_LOAD_FAILED = "Failed to load your profile"


class SessionError(Exception):
    """Base error for session operations.

    Attributes:
        user_message: Human-readable message safe to show to the user.
        kind: Outcome kind the failure maps to.
    """

    kind: OutcomeKind = OutcomeKind.IDENTITY

    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


class IdentitySessionError(SessionError):
    """The identity provider rejected or failed the operation."""

    kind = OutcomeKind.IDENTITY


class StoreSessionError(SessionError):
    """The document store failed during the operation."""

    kind = OutcomeKind.STORE
