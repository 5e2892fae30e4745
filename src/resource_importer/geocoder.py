"""
Resource Importer — Geocoding Client
=====================================
Resolves a free-text address to a WGS84 coordinate pair through the Google
Maps Geocoding API.

Architecture:
    ``GeocoderBackend`` is an abstract strategy so the importer can be
    driven by any provider (or a test double).  A backend either returns a
    :class:`~src.resource_importer.models.GeoPoint` or raises a
    :class:`~shared.python.exceptions.GeocodingError` subclass; there is no
    retry, caching or rate limiting here.

Usage::

    from src.resource_importer.geocoder import GoogleBackend

    point = GoogleBackend(api_key="...").geocode("1600 Amphitheatre Pkwy")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from shared.python.exceptions import (
    GeocodingTransportError,
    MalformedResponseError,
    ProviderRejectedError,
)
from src.resource_importer.models import GeoPoint

logger = logging.getLogger("resource_importer.geocoder")

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
STATUS_OK = "OK"


class GeocoderBackend(ABC):
    """Abstract strategy for a geocoding provider."""

    @abstractmethod
    def geocode(self, address: str) -> GeoPoint:
        """Geocode a single address string.

        Raises:
            GeocodingError: Any subclass; callers treat all of them alike.
        """


class GoogleBackend(GeocoderBackend):
    """Geocoder backend powered by the Google Maps Geocoding API.

    Args:
        api_key: Google Maps API key with the Geocoding API enabled.
        session: Optional :class:`requests.Session` to reuse connections.
        timeout: Seconds before the request is abandoned.  ``None`` keeps
                 the transport default.

    Reference:
        https://developers.google.com/maps/documentation/geocoding
    """

    def __init__(
        self,
        api_key: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()

    def geocode(self, address: str) -> GeoPoint:
        """Geocode *address* via the Google Maps Geocoding API.

        Raises:
            GeocodingTransportError: On connection errors or HTTP errors.
            MalformedResponseError: If the body is not the expected JSON.
            ProviderRejectedError: If ``status`` is anything but ``OK``.
        """
        params = {"address": address, "key": self.api_key}
        try:
            response = self._session.get(GOOGLE_GEOCODE_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise GeocodingTransportError(f"Geocoding request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Geocoding response is not valid JSON.") from exc

        return parse_google_response(data)

    def close(self) -> None:
        self._session.close()


def parse_google_response(data: Any) -> GeoPoint:
    """Extract the first result's location from a decoded response body.

    Raises:
        MalformedResponseError: If ``status`` or the location is missing.
        ProviderRejectedError: If ``status`` is not ``OK``.
    """
    if not isinstance(data, dict) or "status" not in data:
        raise MalformedResponseError("Geocoding response has no status field.")

    status = data["status"]
    if status != STATUS_OK:
        raise ProviderRejectedError(str(status))

    try:
        location = data["results"][0]["geometry"]["location"]
        return GeoPoint(float(location["lat"]), float(location["lng"]))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise MalformedResponseError(
            f"Geocoding response lacks results[0].geometry.location: {exc!r}"
        ) from exc


def geocode(address: str, api_key: str, session: requests.Session | None = None) -> GeoPoint:
    """Geocode *address* with a one-off :class:`GoogleBackend`."""
    logger.debug("Geocoding %r", address)
    return GoogleBackend(api_key, session=session).geocode(address)
