"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Polygon

from ..errors import InvalidCoordinate
from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def ensure_finite(lat: float, lng: float) -> None:
    try:
        finite = math.isfinite(lat) and math.isfinite(lng)
    except TypeError:
        finite = False
    if not finite:
        raise InvalidCoordinate(lat, lng)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates, rejecting non-finite input."""

    ensure_finite(a.lat, a.lng)
    ensure_finite(b.lat, b.lng)
    if a == b:
        return 0.0
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def destination_point(origin: Coordinate, bearing_deg: float, distance: float) -> Coordinate:
    """Point reached by travelling `distance` km from origin on the given initial bearing."""

    delta = distance / EARTH_RADIUS_KM
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin.lat)
    lambda1 = math.radians(origin.lng)

    phi2 = math.asin(math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta))
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return Coordinate(lat=math.degrees(phi2), lng=(math.degrees(lambda2) + 540) % 360 - 180)


def circle_polygon(center: Coordinate, radius_km: float, segments: int = 64) -> Polygon:
    """Approximate a geodesic circle as a shapely polygon in (lng, lat) order."""

    if segments < 3:
        raise ValueError("segments must be >= 3")
    ring = [destination_point(center, 360.0 * i / segments, radius_km) for i in range(segments)]
    return Polygon([(point.lng, point.lat) for point in ring])

