"""Resolve coordinates to delivery zone codes."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Sequence

from ...config import settings
from ...data.zones_repository import get_zones
from ...models.domain import Coordinate, Zone
from ..geospatial import distance_km, ensure_finite
from .base import ZoneFallback, ZoneResolution
from .dispatcher import get_fallback


class ZoneResolver:
    """Map a coordinate to the first zone in table order that contains it.

    Overlapping zones are decided by table order, not by the nearest centre.
    A resolver is bound to one fallback policy for its lifetime so the same
    coordinate always gets the same answer.
    """

    def __init__(self, fallback: ZoneFallback):
        self.fallback = fallback

    @property
    def policy(self) -> str:
        return self.fallback.name

    def locate(self, point: Coordinate, zones: Sequence[Zone]) -> ZoneResolution:
        ensure_finite(point.lat, point.lng)
        for zone in zones:
            distance = distance_km(point, zone.center)
            if distance <= zone.radius_km:
                return ZoneResolution(code=zone.code, zone=zone, distance_km=distance, policy=self.policy)

        code = self.fallback.code_for(point)
        logging.info(f"Point ({point.lat}, {point.lng}) outside {len(zones)} zones; {self.policy} fallback -> {code}")
        return ZoneResolution(code=code, policy=self.policy)

    def resolve(self, point: Coordinate, zones: Sequence[Zone]) -> str:
        return self.locate(point, zones).code


@lru_cache(maxsize=1)
def get_resolver() -> ZoneResolver:
    """Resolver configured for this deployment."""
    fallback = get_fallback(settings.zone_fallback, grid_size=settings.grid_size_degrees)
    logging.info(f"Zone resolver using '{fallback.name}' fallback policy")
    return ZoneResolver(fallback)


def resolve_zone(point: Coordinate, zones: Sequence[Zone] | None = None) -> ZoneResolution:
    return get_resolver().locate(point, get_zones() if zones is None else zones)
