"""
Resource Importer — Geohash Encoding
=====================================
Thin wrapper over :mod:`geohash2` that adds input validation.  Nearby
points share a common prefix; precision 9 gives cells of roughly 5 m.

Usage::

    from src.resource_importer.geohash import encode, decode

    code = encode(42.6, -5.6, precision=5)   # "ezs42"
    lat, lon = decode(code)                  # centre of that cell
"""

from __future__ import annotations

import math

import geohash2

BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
DEFAULT_PRECISION = 9


def encode(latitude: float, longitude: float, precision: int = DEFAULT_PRECISION) -> str:
    """Encode a WGS84 coordinate pair as a geohash string.

    Args:
        latitude: Degrees in ``[-90, 90]``.
        longitude: Degrees in ``[-180, 180]``.
        precision: Number of characters in the result.

    Returns:
        The geohash, *precision* characters long.

    Raises:
        ValueError: If a coordinate is out of range or not finite, or
            *precision* < 1.
    """
    if precision < 1:
        raise ValueError(f"precision must be >= 1, got {precision}")
    if not (math.isfinite(latitude) and -90.0 <= latitude <= 90.0):
        raise ValueError(f"latitude out of range: {latitude}")
    if not (math.isfinite(longitude) and -180.0 <= longitude <= 180.0):
        raise ValueError(f"longitude out of range: {longitude}")
    return geohash2.encode(latitude, longitude, precision=precision)


def _normalise(geohash: str) -> str:
    if not geohash:
        raise ValueError("geohash must not be empty")
    code = geohash.lower()
    for char in code:
        if char not in BASE32:
            raise ValueError(f"invalid geohash character {char!r} in {geohash!r}")
    return code


def decode_bounds(geohash: str) -> tuple[float, float, float, float]:
    """Return the cell covered by *geohash*.

    Returns:
        ``(lat_min, lat_max, lon_min, lon_max)``.

    Raises:
        ValueError: If *geohash* is empty or contains a character outside
            the geohash alphabet.
    """
    lat, lon, lat_err, lon_err = geohash2.decode_exactly(_normalise(geohash))
    return lat - lat_err, lat + lat_err, lon - lon_err, lon + lon_err


def decode(geohash: str) -> tuple[float, float]:
    """Return the ``(latitude, longitude)`` centre of the *geohash* cell."""
    lat, lon, _, _ = geohash2.decode_exactly(_normalise(geohash))
    return lat, lon
