# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Redis-backed document store.

Each document is one JSON string under ``doc:{collection}:{id}``.
"""

import logging

from learnhub.domains.profile.store import Document, StoreError
from learnhub.infrastructure.cache import RedisClient, RedisError

logger = logging.getLogger(__name__)


class RedisDocumentStore:
    """DocumentStore implementation on top of RedisClient."""

    def __init__(self, client: RedisClient) -> None:
        self._client = client

    @staticmethod
    def _key(collection: str, document_id: str) -> str:
        return f"doc:{collection}:{document_id}"

    async def get(self, collection: str, document_id: str) -> Document | None:
        try:
            document = await self._client.get_json(self._key(collection, document_id))
        except RedisError as e:
            raise StoreError(f"Failed to read {collection}/{document_id}", e) from e

        if document is not None and not isinstance(document, dict):
            raise StoreError(f"Document {collection}/{document_id} is not an object")
        return document

    async def set(self, collection: str, document_id: str, value: Document) -> None:
        try:
            await self._client.set_json(self._key(collection, document_id), value)
        except RedisError as e:
            raise StoreError(f"Failed to write {collection}/{document_id}", e) from e
        logger.debug("Document written: %s/%s", collection, document_id)
