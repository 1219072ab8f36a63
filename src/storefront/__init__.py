"""Grocery storefront core: delivery zones, carts, pricing and checkout."""

__version__ = "0.1.0"
