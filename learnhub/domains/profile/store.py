# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Document store contract and in-memory implementation.

Profile documents are plain JSON-compatible dicts addressed by
(collection, id). Stores return copies, so callers can never mutate stored
state by accident.
"""

import copy
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class StoreError(Exception):
    """Raised when a document store operation fails.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying error, if any.
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class DocumentStore(Protocol):
    """Operations the session layer consumes from a document store."""

    async def get(self, collection: str, document_id: str) -> Document | None:
        """Fetch a document, or None when it does not exist.

        Raises:
            StoreError: If the store cannot be read.
        """
        ...

    async def set(self, collection: str, document_id: str, value: Document) -> None:
        """Create or replace a document.

        Raises:
            StoreError: If the store cannot be written.
        """
        ...


class InMemoryDocumentStore:
    """Process-local document store for development and tests."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = {}

    async def get(self, collection: str, document_id: str) -> Document | None:
        document = self._collections.get(collection, {}).get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def set(self, collection: str, document_id: str, value: Document) -> None:
        self._collections.setdefault(collection, {})[document_id] = copy.deepcopy(value)
        logger.debug("Document written: %s/%s", collection, document_id)

    def count(self, collection: str) -> int:
        """Number of documents in a collection."""
        return len(self._collections.get(collection, {}))
