# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User profile documents.

Exports:
    DocumentStore: Protocol consumed by the session layer.
    InMemoryDocumentStore: Process-local store.
    RedisDocumentStore: Redis-backed store.
    StoreError: Document store failure.
    build_default_profile, merge_profile, new_profile: Profile policy.
"""

from learnhub.domains.profile.builder import build_default_profile, merge_profile, new_profile
from learnhub.domains.profile.redis_store import RedisDocumentStore
from learnhub.domains.profile.store import (
    Document,
    DocumentStore,
    InMemoryDocumentStore,
    StoreError,
)

__all__ = [
    "Document",
    "DocumentStore",
    "InMemoryDocumentStore",
    "RedisDocumentStore",
    "StoreError",
    "build_default_profile",
    "merge_profile",
    "new_profile",
]
