# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models shared across LearnHub."""

from learnhub.models.auth import (
    FederatedSignInRequest,
    LoginForm,
    Notification,
    NotificationLevel,
    OutcomeKind,
    RegistrationForm,
    SessionResponse,
)
from learnhub.models.user import Course, UserProfile, UserRole

__all__ = [
    "Course",
    "UserProfile",
    "UserRole",
    "RegistrationForm",
    "LoginForm",
    "FederatedSignInRequest",
    "Notification",
    "NotificationLevel",
    "OutcomeKind",
    "SessionResponse",
]
