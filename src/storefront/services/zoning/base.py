"""Base classes for zone fallback policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...models.domain import Coordinate, Zone


class ZoneFallback(ABC):
    """Contract for deciding the zone code of a point outside every named zone."""

    name: str

    @abstractmethod
    def code_for(self, point: Coordinate) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ZoneResolution:
    """Container for the outcome of resolving one point."""

    code: str
    zone: Optional[Zone] = None
    distance_km: Optional[float] = None
    policy: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.zone is not None
