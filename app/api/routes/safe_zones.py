# app/api/routes/safe_zones.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.core.config import settings
from app.core.security import get_current_user
from app.db.base import get_db
from app.db.models.user import User
from app.reference.safe_zones import SAFE_ZONES, SafeZone, get_zone
from app.schemas.safe_zone import (
    CheckInRequest,
    CheckInResponse,
    LocationIn,
    MapConfigResponse,
    NearestZoneResponse,
    SafeZoneResponse,
)
from app.services import analytics, geofence
from app.services.sessions import SessionWorkflow

router = APIRouter(prefix="/safe-zones", tags=["safe-zones"])


def _zone_response(zone: SafeZone) -> SafeZoneResponse:
    return SafeZoneResponse(
        id=zone.id,
        name=zone.name,
        description=zone.description,
        lat=zone.lat,
        lng=zone.lng,
        radius_m=zone.radius_m,
        type=zone.type,
        open_time=zone.open_time.strftime("%H:%M") if zone.open_time else None,
        close_time=zone.close_time.strftime("%H:%M") if zone.close_time else None,
        open_now=geofence.is_open(zone),
    )


@router.get("", response_model=List[SafeZoneResponse])
def list_safe_zones():
    return [_zone_response(z) for z in SAFE_ZONES]


@router.get("/map-config", response_model=MapConfigResponse)
def map_config():
    if not settings.maps_enabled:
        return MapConfigResponse(
            enabled=False,
            center_lat=settings.DEFAULT_LAT,
            center_lng=settings.DEFAULT_LNG,
            message="Google Maps API Key Required. Set MAPS_API_KEY to use the Safe Zone Map.",
        )
    return MapConfigResponse(
        enabled=True,
        api_key=settings.MAPS_API_KEY,
        center_lat=settings.DEFAULT_LAT,
        center_lng=settings.DEFAULT_LNG,
    )


# Location is optional: without it the default campus coordinate is used
@router.post("/nearest", response_model=NearestZoneResponse)
def nearest_safe_zone(location: LocationIn):
    point = None
    if location.lat is not None and location.lng is not None:
        point = geofence.Point(lat=location.lat, lng=location.lng)

    result = geofence.evaluate(point, SAFE_ZONES)
    return NearestZoneResponse(
        zone=_zone_response(result.zone),
        distance_m=result.distance_m,
        within_geofence=result.within_geofence,
        used_default_location=result.used_default_location,
        lat=result.location.lat,
        lng=result.location.lng,
    )


@router.post("/check-in", response_model=CheckInResponse)
def check_in(
    payload: CheckInRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    workflow = SessionWorkflow(db)
    record = workflow.get(payload.session_id)
    if current_user.id not in (record.student_id, record.tutor_id):
        raise HTTPException(status_code=403, detail="Not your session")

    zone, distance = geofence.nearest(geofence.Point(lat=payload.lat, lng=payload.lng), SAFE_ZONES)
    if not geofence.within_geofence(distance, zone):
        raise HTTPException(
            status_code=400,
            detail=f"You are {distance:.0f} m from {zone.name}; move within {zone.radius_m:.0f} m to start the session",
        )

    record = workflow.check_in(record, zone.id)
    analytics.log_session_start(record.id, zone.name)

    return CheckInResponse(
        session_id=record.id,
        zone=_zone_response(zone),
        distance_m=distance,
        checked_in_at=record.checked_in_at,
    )


@router.get("/{zone_id}", response_model=SafeZoneResponse)
def get_safe_zone(zone_id: str):
    zone = get_zone(zone_id)
    if not zone:
        raise HTTPException(status_code=404, detail="Safe zone not found")
    return _zone_response(zone)
