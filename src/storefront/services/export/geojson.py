"""GeoJSON export of the delivery zone table for map overlays."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from shapely.geometry import mapping

from ...models.domain import Zone
from ..geospatial import circle_polygon


def generate_zone_color(index: int) -> str:
    """Generate distinct colors for zones."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
    ]
    return colors[index % len(colors)]


def zone_to_feature(zone: Zone, index: int = 0, segments: int = 64) -> Dict[str, Any]:
    polygon = circle_polygon(zone.center, zone.radius_km, segments=segments)
    return {
        "type": "Feature",
        "geometry": mapping(polygon),
        "properties": {
            "code": zone.code,
            "name": zone.name,
            "radius_km": zone.radius_km,
            "center": [zone.center.lng, zone.center.lat],
            "priority": index,
            "color": generate_zone_color(index),
        },
    }


def zones_to_feature_collection(zones: Sequence[Zone], segments: int = 64) -> Dict[str, Any]:
    """Circle polygons in table order; ``priority`` is the tie-break rank for overlaps."""
    features: List[Dict[str, Any]] = [
        zone_to_feature(zone, index=index, segments=segments) for index, zone in enumerate(zones)
    ]
    return {"type": "FeatureCollection", "features": features}
