"""
Resource Importer — Firestore Storage
======================================
Persists :class:`~src.resource_importer.models.Resource` documents in a
Cloud Firestore collection, one document per resource keyed by its id.

``ResourceStore`` is the contract the importer depends on; any object with
``save`` and ``get`` works, which lets tests substitute an in-memory dict.
Every client failure (API errors, expired credentials, transport errors)
is translated to :class:`~shared.python.exceptions.StorageError`, so a
failed write stays local to the row being imported.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from shared.python.exceptions import StorageError
from src.resource_importer.models import Resource

logger = logging.getLogger("resource_importer.store")

DEFAULT_COLLECTION = "resources"


class ResourceStore(Protocol):
    def save(self, resource: Resource) -> None: ...

    def get(self, resource_id: str) -> Resource | None: ...


def _describe(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}"


class FirestoreResourceStore:
    """Stores resources in a Firestore collection.

    Args:
        client: A ``google.cloud.firestore.Client`` (as returned by
                ``firebase_admin.firestore.client``).
        collection: Name of the target collection.
    """

    def __init__(self, client: Any, collection: str = DEFAULT_COLLECTION) -> None:
        self.client = client
        self.collection = collection

    def _document(self, resource_id: str) -> Any:
        return self.client.collection(self.collection).document(resource_id)

    def save(self, resource: Resource) -> None:
        """Write *resource* under its id, replacing any existing document.

        Raises:
            StorageError: If the write fails for any reason.
        """
        try:
            self._document(resource.id).set(resource.to_dict())
        except Exception as exc:
            raise StorageError(resource.id, _describe(exc)) from exc
        logger.debug("Saved %s/%s", self.collection, resource.id)

    def get(self, resource_id: str) -> Resource | None:
        """Read a resource back, or ``None`` if no such document exists.

        Raises:
            StorageError: If the read fails for any reason.
            RecordError: If the stored document is not a valid resource.
        """
        try:
            snapshot = self._document(resource_id).get()
        except Exception as exc:
            raise StorageError(resource_id, _describe(exc)) from exc

        if not snapshot.exists:
            return None
        return Resource.from_dict(snapshot.to_dict())
