"""API routes for delivery zones."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...data.zones_repository import get_zones
from ...errors import InvalidCoordinate
from ...schemas.common import CoordinateModel
from ...schemas.zoning import ZoneModel, ZoneResolveRequest, ZoneResolveResponse, ZoneTableResponse
from ...services.export.geojson import zones_to_feature_collection
from ...services.zoning.service import get_resolver, resolve_zone

router = APIRouter(prefix="/zones", tags=["zones"])


@router.get("", response_model=ZoneTableResponse)
def list_zones() -> ZoneTableResponse:
    """Zone table in priority order, with circle overlays for maps."""
    zones = get_zones()
    return ZoneTableResponse(
        fallback_policy=get_resolver().policy,
        zones=[
            ZoneModel(
                code=zone.code,
                name=zone.name,
                center=CoordinateModel.from_domain(zone.center),
                radius_km=zone.radius_km,
            )
            for zone in zones
        ],
        geojson=zones_to_feature_collection(zones),
    )


@router.post("/resolve", response_model=ZoneResolveResponse, status_code=status.HTTP_200_OK)
def resolve(payload: ZoneResolveRequest) -> ZoneResolveResponse:
    try:
        resolution = resolve_zone(payload.location.to_domain())
    except InvalidCoordinate as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return ZoneResolveResponse(
        zone_code=resolution.code,
        zone_name=resolution.zone.name if resolution.zone else None,
        in_named_zone=resolution.matched,
        distance_km=round(resolution.distance_km, 3) if resolution.distance_km is not None else None,
        fallback_policy=resolution.policy or get_resolver().policy,
    )
