"""Pydantic request/response models for zone endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from .common import CoordinateModel


class ZoneModel(BaseModel):
    code: str
    name: str
    center: CoordinateModel
    radius_km: float


class ZoneTableResponse(BaseModel):
    fallback_policy: str
    zones: list[ZoneModel]
    geojson: dict


class ZoneResolveRequest(BaseModel):
    location: CoordinateModel


class ZoneResolveResponse(BaseModel):
    zone_code: str
    zone_name: Optional[str] = None
    in_named_zone: bool
    distance_km: Optional[float] = None
    fallback_policy: str
