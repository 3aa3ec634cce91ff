# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Credential primitives used by the local identity provider.

Exports:
    IdentityTokenManager: Identity token issuing and validation.
    PasswordHasher: bcrypt password hashing.
"""

from learnhub.domains.auth.jwt import (
    IdentityClaims,
    IdentityTokenManager,
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
)
from learnhub.domains.auth.password import PasswordHasher

__all__ = [
    "IdentityClaims",
    "IdentityTokenManager",
    "InvalidTokenError",
    "TokenError",
    "TokenExpiredError",
    "PasswordHasher",
]
