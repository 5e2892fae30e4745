"""
Resource Importer — Record Model
=================================
Immutable value types for one imported resource listing and its location.

Classes:
    GeoPoint    WGS84 latitude/longitude pair.
    Resource    One service/resource listing as stored in Firestore.

The geohash is never stored on a :class:`Resource`; it is derived from
``coordinates`` on every access, so the two can never disagree.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping

from shared.python.exceptions import MissingRequiredFieldError, RecordError
from shared.python.validators import Validators
from src.resource_importer.geohash import encode as encode_geohash

DEFAULT_SOURCE_SERVICE = "Unknown Service"
DEFAULT_AGENCY_PROVIDER = "Unknown Provider"
DEFAULT_HOURS_OF_OPERATION = "Hours not specified"

_REQUIRED_FIELDS = ("id", "sourceService", "agencyProvider", "hoursOfOperation")


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 coordinate pair in decimal degrees."""

    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GeoPoint:
        """Build a point from ``{"latitude": ..., "longitude": ...}``.

        Raises:
            RecordError: If either key is missing, not numeric, or outside
                WGS84 bounds.
        """
        try:
            latitude, longitude = float(data["latitude"]), float(data["longitude"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RecordError(f"Invalid coordinates mapping: {data!r}") from exc
        if not Validators.is_valid_coordinate(latitude, longitude):
            raise RecordError(f"Coordinates out of range: ({latitude}, {longitude})")
        return cls(latitude, longitude)


@dataclass(frozen=True)
class Resource:
    """One service or resource listing.

    Attributes:
        id: Opaque identifier generated at import time.
        source_service: Category label, ``"Unknown Service"`` when unknown.
        agency_provider: Providing organisation, ``"Unknown Provider"``
            when unknown.
        hours_of_operation: Free-text schedule, ``"Hours not specified"``
            when unknown.
        contact: Optional contact details.
        website: Optional URL.
        address: Optional street address, used for geocoding.
        information: Optional free-text notes.
        coordinates: Location, or ``None`` until resolved.
    """

    id: str
    source_service: str = DEFAULT_SOURCE_SERVICE
    agency_provider: str = DEFAULT_AGENCY_PROVIDER
    hours_of_operation: str = DEFAULT_HOURS_OF_OPERATION
    contact: str | None = None
    website: str | None = None
    address: str | None = None
    information: str | None = None
    coordinates: GeoPoint | None = None

    @property
    def geohash(self) -> str | None:
        """Geohash of :attr:`coordinates`, or ``None`` when unlocated."""
        if self.coordinates is None:
            return None
        return encode_geohash(self.coordinates.latitude, self.coordinates.longitude)

    def with_coordinates(self, coordinates: GeoPoint) -> Resource:
        """Return a copy of this resource located at *coordinates*."""
        return dataclasses.replace(self, coordinates=coordinates)

    # ------------------------------------------------------------------
    # Firestore representation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return the document stored for this resource.

        Absent optional values are written as ``None`` so every document
        carries the same set of keys.
        """
        return {
            "id": self.id,
            "sourceService": self.source_service,
            "contact": self.contact,
            "agencyProvider": self.agency_provider,
            "website": self.website,
            "address": self.address,
            "information": self.information,
            "hoursOfOperation": self.hours_of_operation,
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            "geohash": self.geohash,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Resource:
        """Rebuild a resource from its stored document.

        A stored ``geohash`` is ignored; it is recomputed from
        ``coordinates``.

        Raises:
            MissingRequiredFieldError: If ``id``, ``sourceService``,
                ``agencyProvider`` or ``hoursOfOperation`` is absent.
            RecordError: If ``coordinates`` is present but malformed or
                out of range.
        """
        for key in _REQUIRED_FIELDS:
            if data.get(key) is None:
                raise MissingRequiredFieldError(key)

        raw_coordinates = data.get("coordinates")
        coordinates = GeoPoint.from_dict(raw_coordinates) if raw_coordinates is not None else None

        return cls(
            id=data["id"],
            source_service=data["sourceService"],
            agency_provider=data["agencyProvider"],
            hours_of_operation=data["hoursOfOperation"],
            contact=data.get("contact"),
            website=data.get("website"),
            address=data.get("address"),
            information=data.get("information"),
            coordinates=coordinates,
        )
