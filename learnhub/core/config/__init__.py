# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for LearnHub.

Pydantic-based settings loaded from environment variables.

Example:
    >>> from learnhub.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from learnhub.core.config.settings import (
    APISettings,
    CORSSettings,
    IdentitySettings,
    JWTSettings,
    RedisSettings,
    SessionCookieSettings,
    Settings,
    StoreSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "APISettings",
    "CORSSettings",
    "IdentitySettings",
    "JWTSettings",
    "RedisSettings",
    "SessionCookieSettings",
    "StoreSettings",
]
