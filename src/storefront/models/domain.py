"""Domain models for the storefront core: zones, cart lines, priced orders."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Optional

DeliveryOption = Literal["delivery", "pickup"]

OUT_OF_SERVICE = "OUT_OF_SERVICE"


def _money(value: float) -> float:
    return round(value, 2)


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in degrees, exactly as received from the location source."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Zone:
    """Named circular delivery-service area."""

    code: str
    name: str
    center: Coordinate
    radius_km: float


@dataclass(frozen=True, slots=True)
class LocationFix:
    """Outcome of one location acquisition: a coordinate or the reason there is none."""

    coordinate: Optional[Coordinate] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.coordinate is not None


@dataclass(frozen=True, slots=True)
class Product:
    """Catalog record used to build cart lines."""

    product_id: str
    name: str
    unit_price: float
    unit_weight: float = 0.0
    image_ref: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LineItem:
    """One product entry in a cart, keyed by product_id."""

    product_id: str
    name: str
    unit_price: float
    quantity: int
    unit_weight: float = 0.0
    image_ref: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product, quantity: int) -> "LineItem":
        return cls(
            product_id=product.product_id,
            name=product.name,
            unit_price=product.unit_price,
            quantity=quantity,
            unit_weight=product.unit_weight,
            image_ref=product.image_ref,
        )

    @property
    def line_total(self) -> float:
        return _money(self.unit_price * self.quantity)


@dataclass(frozen=True, slots=True)
class CartSnapshot:
    """Ordered cart contents. Totals are derived from the items on every read."""

    items: tuple[LineItem, ...] = ()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> float:
        return _money(sum(item.unit_price * item.quantity for item in self.items))

    @property
    def total_weight(self) -> float:
        return sum(item.unit_weight * item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __contains__(self, product_id: object) -> bool:
        return any(item.product_id == product_id for item in self.items)


@dataclass(frozen=True, slots=True)
class PricingBreakdown:
    subtotal: float
    item_count: int
    total_weight: float
    delivery_charge: float
    handling_charge: float
    small_cart_charge: float
    grand_total: float
    delivery_savings: float = 0.0


@dataclass(frozen=True, slots=True)
class OrderContact:
    """Who receives the order and where."""

    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PricedOrder:
    """Submittable order. Never mutated once built; a new order supersedes it."""

    items: CartSnapshot
    subtotal: float
    delivery_charge: float
    handling_charge: float
    small_cart_charge: float
    grand_total: float
    zone_code: str
    delivery_option: DeliveryOption
    location: Optional[Coordinate] = None
    payment_method: str = "COD"
    status: str = "pending"
    contact: OrderContact = field(default_factory=OrderContact)
    order_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_weight(self) -> float:
        return self.items.total_weight

    @property
    def item_count(self) -> int:
        return self.items.item_count
