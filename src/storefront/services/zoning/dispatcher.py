"""Factory for zone fallback policies based on deployment configuration."""

from __future__ import annotations

from typing import Any

from .base import ZoneFallback
from .grid import GridFallback
from .strict import OutOfServiceFallback


def get_fallback(policy: str, **kwargs: Any) -> ZoneFallback:
    match policy:
        case "strict":
            return OutOfServiceFallback()
        case "grid":
            grid_kwargs = {k: v for k, v in kwargs.items() if k in {"grid_size", "prefix"}}
            return GridFallback(**grid_kwargs)
        case _:
            raise ValueError(f"Unknown zone fallback policy '{policy}'.")
