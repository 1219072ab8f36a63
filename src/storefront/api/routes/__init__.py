"""Route group exports."""

from . import cart, checkout, health, products, zones

__all__ = ["cart", "checkout", "health", "products", "zones"]
