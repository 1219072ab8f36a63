"""Shared request/response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.domain import Coordinate


class CoordinateModel(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    lng: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)

    def to_domain(self) -> Coordinate:
        return Coordinate(lat=self.lat, lng=self.lng)

    @classmethod
    def from_domain(cls, coordinate: Coordinate) -> "CoordinateModel":
        return cls(lat=coordinate.lat, lng=coordinate.lng)
