# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and response models for the authentication flows."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from learnhub.models.user import UserProfile


class RegistrationForm(BaseModel):
    """Registration form submission.

    Email format and password policy are not checked here: the registration
    flow validates passwords in a fixed order and the identity provider owns
    email validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", description="Full name")
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")
    confirm_password: str = Field(..., alias="confirmPassword", description="Password again")


class LoginForm(BaseModel):
    """Email and password sign-in form."""

    email: str
    password: str


class FederatedSignInRequest(BaseModel):
    """Federated sign-in with a credential issued by the external provider."""

    model_config = ConfigDict(populate_by_name=True)

    id_token: str = Field(..., alias="idToken", description="Google ID token")


class NotificationLevel(str, Enum):
    """Severity of a user-visible notification."""

    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """Transient user-visible message (rendered as a toast by clients)."""

    level: NotificationLevel
    message: str


class OutcomeKind(str, Enum):
    """Tagged result of a flow step.

    VALIDATION outcomes never reach the network; IDENTITY and STORE outcomes
    come from the identity provider and the document store respectively.
    """

    OK = "ok"
    VALIDATION = "validation"
    IDENTITY = "identity"
    STORE = "store"
    BUSY = "busy"


class SessionResponse(BaseModel):
    """Response body of every auth endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    outcome: OutcomeKind
    user: UserProfile | None = None
    authenticated: bool = False
    redirect_to: str | None = Field(default=None, alias="redirectTo")
    notifications: list[Notification] = Field(default_factory=list)
