"""Exception hierarchy for the storefront core."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for all storefront errors."""


class InvalidCoordinate(StorefrontError, ValueError):
    """Raised when a latitude or longitude is not a finite number."""

    def __init__(self, lat: object, lng: object) -> None:
        super().__init__(f"Coordinate must be finite, got lat={lat!r} lng={lng!r}")
        self.lat = lat
        self.lng = lng


class ProductNotFound(StorefrontError, LookupError):
    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class CheckoutError(StorefrontError):
    """A checkout attempt that the customer can correct and retry."""


class EmptyCart(CheckoutError):
    def __init__(self, message: str = "Cannot check out an empty cart.") -> None:
        super().__init__(message)


class MissingLocation(CheckoutError):
    def __init__(self, reason: str | None = None) -> None:
        message = "Delivery orders need the customer's location."
        if reason:
            message = f"{message} Location unavailable: {reason}."
        super().__init__(message)
        self.reason = reason


class OutOfServiceArea(CheckoutError):
    def __init__(self, zone_code: str) -> None:
        super().__init__(f"Delivery is not available at this location ({zone_code}). Choose store pickup instead.")
        self.zone_code = zone_code


class PaymentMethodUnavailable(CheckoutError):
    def __init__(self, method: str) -> None:
        super().__init__(f"Payment method '{method}' is currently not available. Please use Cash on Delivery.")
        self.method = method


class InvalidContact(CheckoutError):
    """Missing phone number or delivery address."""
