"""Cart services."""

from .aggregate import CartAggregate
from .registry import CartRegistry

__all__ = ["CartAggregate", "CartRegistry"]
