import pytest

from storefront.models.domain import Coordinate, Product
from storefront.services.pricing.service import TierConfig


@pytest.fixture
def tiers() -> TierConfig:
    return TierConfig(free_delivery_threshold=100.0, base_delivery_fee=25.0, handling_fee=2.0, small_cart_fee=20.0)


@pytest.fixture
def catalog() -> dict[str, Product]:
    products = [
        Product(product_id="P1", name="Milk 1L", unit_price=30.0, unit_weight=1000.0, category="Dairy"),
        Product(product_id="P2", name="Bread", unit_price=40.0, unit_weight=400.0, category="Bakery"),
        Product(product_id="P3", name="Rice 5kg", unit_price=99.99, unit_weight=5000.0, category="Staples"),
        Product(product_id="P4", name="Eggs (12)", unit_price=60.0, unit_weight=700.0, image_ref="eggs.png"),
    ]
    return {product.product_id: product for product in products}


@pytest.fixture
def satara_central() -> Coordinate:
    return Coordinate(lat=17.688, lng=74.006)


@pytest.fixture
def pune() -> Coordinate:
    return Coordinate(lat=18.5204, lng=73.8567)
