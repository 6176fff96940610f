# app/reference/safe_zones.py
from dataclasses import dataclass
from datetime import time
from typing import List, Optional

ZONE_TYPES = ("library", "cafe", "study_hall", "campus", "other")


@dataclass(frozen=True)
class SafeZone:
    """A sanctioned meeting point for in-person sessions."""
    id: str
    name: str
    description: str
    lat: float
    lng: float
    radius_m: float = 100.0
    type: str = "other"
    open_time: Optional[time] = None
    close_time: Optional[time] = None

    def __post_init__(self):
        if self.radius_m <= 0:
            raise ValueError(f"Safe zone {self.id!r} must have a positive radius")
        if self.type not in ZONE_TYPES:
            raise ValueError(f"Unknown safe zone type {self.type!r}")


SAFE_ZONES: List[SafeZone] = [
    SafeZone(
        id="1",
        name="Campus Library",
        description="Main university library with study rooms",
        lat=37.7749,
        lng=-122.4194,
        type="library",
        open_time=time(8, 0),
        close_time=time(22, 0),
    ),
    SafeZone(
        id="2",
        name="Student Coffee House",
        description="Popular cafe for study groups",
        lat=37.7759,
        lng=-122.4184,
        type="cafe",
        open_time=time(7, 0),
        close_time=time(20, 0),
    ),
    SafeZone(
        id="3",
        name="Student Center",
        description="Main student activity center",
        lat=37.7739,
        lng=-122.4204,
        type="campus",
        open_time=time(6, 0),
        close_time=time(23, 0),
    ),
    SafeZone(
        id="4",
        name="Study Hall",
        description="24/7 study space for students",
        lat=37.7769,
        lng=-122.4174,
        type="study_hall",
    ),
]


def get_zone(zone_id: str) -> Optional[SafeZone]:
    for zone in SAFE_ZONES:
        if zone.id == zone_id:
            return zone
    return None
