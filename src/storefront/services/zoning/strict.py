"""Strict fallback: refuse points outside the named zones."""

from __future__ import annotations

from ...models.domain import OUT_OF_SERVICE, Coordinate
from .base import ZoneFallback


class OutOfServiceFallback(ZoneFallback):
    """Every unmatched point maps to the OUT_OF_SERVICE sentinel."""

    name = "strict"

    def code_for(self, point: Coordinate) -> str:
        return OUT_OF_SERVICE
