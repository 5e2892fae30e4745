"""
Resource Importer
==================
Imports resource listings from a spreadsheet into Cloud Firestore,
geocoding rows without coordinates and tagging each with a geohash.

Public API::

    from src.resource_importer import ResourceImporter, ingest, Resource
"""

from src.resource_importer.geocoder import GeocoderBackend, GoogleBackend, geocode
from src.resource_importer.importer import (
    ColumnMap,
    ImportSummary,
    ResourceImporter,
    RowOutcome,
    SkipReason,
    ingest,
)
from src.resource_importer.models import GeoPoint, Resource
from src.resource_importer.store import FirestoreResourceStore, ResourceStore

__all__ = [
    "ColumnMap",
    "FirestoreResourceStore",
    "GeoPoint",
    "GeocoderBackend",
    "GoogleBackend",
    "ImportSummary",
    "Resource",
    "ResourceImporter",
    "ResourceStore",
    "RowOutcome",
    "SkipReason",
    "geocode",
    "ingest",
]
__version__ = "1.0.0"
