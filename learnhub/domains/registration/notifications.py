# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User-visible notifications raised by the flows."""

from typing import Protocol

from learnhub.models.auth import Notification, NotificationLevel


class Notifier(Protocol):
    """Shows transient messages to the user."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class NotificationBuffer:
    """Collects notifications so the HTTP layer can return them."""

    def __init__(self) -> None:
        self.items: list[Notification] = []

    def success(self, message: str) -> None:
        self.items.append(Notification(level=NotificationLevel.SUCCESS, message=message))

    def error(self, message: str) -> None:
        self.items.append(Notification(level=NotificationLevel.ERROR, message=message))

    def messages(self, level: NotificationLevel | None = None) -> list[str]:
        """Messages collected so far, optionally filtered by level."""
        return [n.message for n in self.items if level is None or n.level == level]
