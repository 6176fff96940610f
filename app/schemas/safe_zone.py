# app/schemas/safe_zone.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class SafeZoneResponse(BaseModel):
    id: str
    name: str
    description: str
    lat: float
    lng: float
    radius_m: float
    type: str
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    open_now: bool


class LocationIn(BaseModel):
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)


class NearestZoneResponse(BaseModel):
    zone: SafeZoneResponse
    distance_m: float
    within_geofence: bool
    used_default_location: bool
    lat: float
    lng: float


class CheckInRequest(BaseModel):
    session_id: int
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class CheckInResponse(BaseModel):
    session_id: int
    zone: SafeZoneResponse
    distance_m: float
    checked_in_at: datetime


class MapConfigResponse(BaseModel):
    enabled: bool
    api_key: Optional[str] = None
    center_lat: float
    center_lng: float
    message: Optional[str] = None
