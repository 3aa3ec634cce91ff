# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Registration and login flows.

Exports:
    RegistrationFlow: Registration form handling.
    LoginFlow: Login form handling.
    validate_registration: Local password checks.
    FlowOutcome: Tagged result of a flow step.
    Notifier, NotificationBuffer: User-visible notifications.
"""

from learnhub.domains.registration.flow import (
    FlowOutcome,
    LoginFlow,
    RegistrationFlow,
    ValidationFailure,
    validate_registration,
)
from learnhub.domains.registration.notifications import NotificationBuffer, Notifier

__all__ = [
    "FlowOutcome",
    "LoginFlow",
    "RegistrationFlow",
    "ValidationFailure",
    "validate_registration",
    "NotificationBuffer",
    "Notifier",
]
