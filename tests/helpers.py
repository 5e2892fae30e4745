"""Test doubles and response builders shared across test modules."""

from __future__ import annotations

from typing import Any

from shared.python.exceptions import StorageError
from src.resource_importer.models import Resource

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

HEADER = [
    "Source Service", "Contact", "Agency/Provider", "Website",
    "Address", "Latitude", "Longitude / Information", "Hours",
]

FOOD_BANK_ROW = [
    "Food Bank", "555-1234", "Helping Hands", "example.org",
    "123 Main St", "", "Info text", "9-5 M-F",
]


class InMemoryStore:
    """Dict-backed stand-in for the Firestore store.

    Args:
        fail_on: Number of initial ``save`` calls that raise
                 :class:`StorageError`.
    """

    def __init__(self, fail_on: int = 0) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.save_calls = 0
        self._fail_on = fail_on

    def save(self, resource: Resource) -> None:
        self.save_calls += 1
        if self.save_calls <= self._fail_on:
            raise StorageError(resource.id, "deadline exceeded")
        self.documents[resource.id] = resource.to_dict()

    def get(self, resource_id: str) -> Resource | None:
        doc = self.documents.get(resource_id)
        return Resource.from_dict(doc) if doc is not None else None


def google_ok(lat: float, lng: float) -> dict:
    """Build a mock Google Geocoding JSON response."""
    return {
        "status": "OK",
        "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}],
    }


# ---------------------------------------------------------------------------
# Firestore client double (collection -> document -> set/get)
# ---------------------------------------------------------------------------


class _Snapshot:
    def __init__(self, data: dict[str, Any] | None) -> None:
        self._data = data
        self.exists = data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return self._data


class _Document:
    def __init__(self, client: "FakeFirestoreClient", path: tuple[str, str]) -> None:
        self._client = client
        self._path = path

    def set(self, data: dict[str, Any]) -> None:
        if self._client.error is not None:
            raise self._client.error
        self._client.data[self._path] = dict(data)

    def get(self) -> _Snapshot:
        if self._client.error is not None:
            raise self._client.error
        return _Snapshot(self._client.data.get(self._path))


class _Collection:
    def __init__(self, client: "FakeFirestoreClient", name: str) -> None:
        self._client = client
        self._name = name

    def document(self, doc_id: str) -> _Document:
        return _Document(self._client, (self._name, doc_id))


class FakeFirestoreClient:
    """Minimal Firestore client; set ``error`` to make every call raise it."""

    def __init__(self) -> None:
        self.data: dict[tuple[str, str], dict[str, Any]] = {}
        self.error: Exception | None = None

    def collection(self, name: str) -> _Collection:
        return _Collection(self, name)
