# app/services/geofence.py
"""
Great-circle distance and safe-zone geofencing.

Points and zones are anything with ``lat``/``lng`` attributes in degrees;
zones additionally carry ``radius_m``.
"""
from dataclasses import dataclass
from datetime import datetime
from math import atan2, cos, radians, sin, sqrt
from typing import Optional, Sequence, Tuple

from app.core.config import settings
from app.reference.safe_zones import SafeZone

EARTH_RADIUS_M = 6_371_000


@dataclass(frozen=True)
class Point:
    lat: float
    lng: float


@dataclass(frozen=True)
class GeofenceResult:
    zone: SafeZone
    distance_m: float
    within_geofence: bool
    used_default_location: bool
    location: Point


def default_location() -> Point:
    return Point(lat=settings.DEFAULT_LAT, lng=settings.DEFAULT_LNG)


def haversine_distance(a, b) -> float:
    """Distance in meters between two lat/lng points."""
    lat1, lng1, lat2, lng2 = map(radians, [a.lat, a.lng, b.lat, b.lng])
    dlat = lat2 - lat1
    dlng = lng2 - lng1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    c = 2 * atan2(sqrt(h), sqrt(1 - h))

    return EARTH_RADIUS_M * c


def nearest(point, zones: Sequence[SafeZone]) -> Tuple[SafeZone, float]:
    """
    Zone closest to ``point`` and its distance. Ties keep the earlier zone.
    Raises ValueError for an empty zone list.
    """
    if not zones:
        raise ValueError("nearest() needs at least one zone")

    best = None
    best_distance = float("inf")
    for zone in zones:
        dist = haversine_distance(point, zone)
        if dist < best_distance:
            best, best_distance = zone, dist
    return best, best_distance


def within_geofence(distance_m: float, zone: SafeZone) -> bool:
    return distance_m <= zone.radius_m


def is_open(zone: SafeZone, at: Optional[datetime] = None) -> bool:
    if zone.open_time is None or zone.close_time is None:
        return True
    current = (at or datetime.now()).time()
    return zone.open_time <= current < zone.close_time


def evaluate(point: Optional[Point], zones: Sequence[SafeZone]) -> GeofenceResult:
    """Nearest zone for ``point``, falling back to the default location when it is unknown."""
    used_default = point is None
    location = default_location() if used_default else point
    zone, distance = nearest(location, zones)
    return GeofenceResult(
        zone=zone,
        distance_m=distance,
        within_geofence=within_geofence(distance, zone),
        used_default_location=used_default,
        location=location,
    )
