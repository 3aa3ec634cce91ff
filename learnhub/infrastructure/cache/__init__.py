# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Redis infrastructure.

Usage:
    client = RedisClient(settings)
    await client.connect()
    await client.set_json("doc:users:abc", profile)
    await client.close()
"""

from learnhub.infrastructure.cache.redis_client import RedisClient, RedisError

__all__ = [
    "RedisClient",
    "RedisError",
]
