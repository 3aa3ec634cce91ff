# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services for LearnHub.

Packages:
    auth: Identity token signing and password hashing.
    identity: Identity provider protocol and the local provider.
    profile: Profile document stores and the default/merge policy.
    session: Auth context (session reconciler) and token bridge.
    registration: Registration and login flows.
"""
