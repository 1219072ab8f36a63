"""Delivery zone table: built-in Satara zones, optionally replaced by a JSON file."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from ..config import settings
from ..models.domain import Coordinate, Zone

SATARA_ZONES: tuple[Zone, ...] = (
    Zone(code="ST-CENTRAL", name="Satara Central", center=Coordinate(17.688, 74.006), radius_km=2.5),
    Zone(code="ST-KARANJE", name="Karanje", center=Coordinate(17.6915, 74.0005), radius_km=2.5),
    Zone(code="ST-SADAR", name="Sadar Bazar", center=Coordinate(17.6862, 74.0123), radius_km=2.5),
    Zone(code="ST-RADHIKA", name="Radhika Road", center=Coordinate(17.6819, 74.0201), radius_km=2.5),
    Zone(code="ST-PANCHGANI-RD", name="Panchgani Road", center=Coordinate(17.6748, 74.027), radius_km=2.5),
)


def _zone_from_record(record: dict[str, Any]) -> Zone:
    center = record.get("center") or {}
    lat = center.get("lat", record.get("latitude"))
    lng = center.get("lng", record.get("longitude"))
    radius = record.get("radiusKm", record.get("radius_km"))
    if lat is None or lng is None or radius is None:
        raise ValueError(f"Zone record missing center or radius: {record!r}")
    radius_km = float(radius)
    if radius_km < 0:
        raise ValueError(f"Zone radius must be >= 0: {record!r}")
    return Zone(
        code=str(record["code"]).strip(),
        name=str(record.get("name") or record["code"]).strip(),
        center=Coordinate(lat=float(lat), lng=float(lng)),
        radius_km=radius_km,
    )


def parse_zone_table(records: Iterable[dict[str, Any]]) -> tuple[Zone, ...]:
    """Build an ordered zone table, rejecting duplicate codes."""
    zones: list[Zone] = []
    seen: set[str] = set()
    for record in records:
        zone = _zone_from_record(record)
        if zone.code in seen:
            raise ValueError(f"Duplicate zone code in table: {zone.code}")
        seen.add(zone.code)
        zones.append(zone)
    return tuple(zones)


def _load_zones_from_file(source: Path) -> tuple[Zone, ...]:
    if not source.exists():
        raise FileNotFoundError(f"Zone table not found: {source}")
    with source.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    records = payload.get("zones", []) if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise ValueError(f"Zone table '{source}' must be a list of zones.")
    return parse_zone_table(records)


@functools.lru_cache(maxsize=1)
def get_zones(source: Optional[Path] = None) -> tuple[Zone, ...]:
    """Return the ordered zone table for this deployment. Table order decides overlaps."""
    path = source or settings.zone_table_file
    if path is None:
        return SATARA_ZONES
    zones = _load_zones_from_file(path)
    logging.info(f"Loaded {len(zones)} delivery zones from {path}")
    return zones
