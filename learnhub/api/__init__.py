# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""LearnHub API package.

This package contains the FastAPI application and all API routes.
"""

from learnhub.api.app import create_app

__all__ = ["create_app"]
