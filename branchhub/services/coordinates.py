"""Coordinate parsing and distance helpers."""

from __future__ import annotations

import math

from branchhub.core.exceptions import InvalidCoordinateError

EARTH_RADIUS_KM = 6371.0


def parse_coordinates(value: str | None) -> tuple[float, float]:
    """Parse a ``"lat, lng"`` string into two finite floats."""
    if not value:
        raise InvalidCoordinateError(value or "")

    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise InvalidCoordinateError(value)

    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise InvalidCoordinateError(value) from exc

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidCoordinateError(value)
    return latitude, longitude


def format_coordinates(latitude: float, longitude: float) -> str:
    """Render coordinates in the feed's ``"lat, lng"`` form."""
    return f"{latitude!r}, {longitude!r}"


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
