"""Export helpers for delivery zone overlays."""

from .geojson import generate_zone_color, zone_to_feature, zones_to_feature_collection

__all__ = [
    "generate_zone_color",
    "zone_to_feature",
    "zones_to_feature_collection",
]
