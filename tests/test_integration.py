import pytest
from fastapi.testclient import TestClient

from storefront.api import dependencies
from storefront.errors import ProductNotFound
from storefront.main import create_app
from storefront.models.domain import Product
from storefront.persistence.repositories import InMemoryCartStore, InMemoryOrderSink
from storefront.services.cart.registry import CartRegistry
from storefront.services.checkout.service import CheckoutOrchestrator
from storefront.services.pricing.service import PricingEngine, TierConfig
from storefront.services.zoning.service import ZoneResolver
from storefront.services.zoning.strict import OutOfServiceFallback

SATARA = {"lat": 17.688, "lng": 74.006}
PUNE = {"lat": 18.5204, "lng": 73.8567}
CONTACT = {"name": "Asha", "phone": "9800000000", "address": "12 Station Road"}


@pytest.fixture
def order_sink() -> InMemoryOrderSink:
    return InMemoryOrderSink()


@pytest.fixture
def api_client(
    monkeypatch: pytest.MonkeyPatch, catalog: dict[str, Product], tiers: TierConfig, order_sink: InMemoryOrderSink
) -> TestClient:
    from storefront.api.routes import cart as cart_routes
    from storefront.data import zones_repository
    from storefront.services.zoning import service as zoning_service

    def fake_get_product(product_id: str) -> Product:
        try:
            return catalog[product_id]
        except KeyError:
            raise ProductNotFound(product_id) from None

    monkeypatch.setattr(cart_routes, "get_product", fake_get_product)
    monkeypatch.setattr(zones_repository.settings, "zone_table_file", None)
    zones_repository.get_zones.cache_clear()

    resolver = ZoneResolver(OutOfServiceFallback())
    pricing = PricingEngine(tiers)
    registry = CartRegistry(InMemoryCartStore())
    orchestrator = CheckoutOrchestrator(resolver, pricing, order_sink, refuse_out_of_service=True)
    monkeypatch.setattr(zoning_service, "get_resolver", lambda: resolver)

    app = create_app()
    app.dependency_overrides[dependencies.get_cart_registry] = lambda: registry
    app.dependency_overrides[dependencies.get_pricing_engine] = lambda: pricing
    app.dependency_overrides[dependencies.get_orchestrator] = lambda: orchestrator
    return TestClient(app)


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}


def test_cart_merges_lines_and_prices(api_client: TestClient):
    api_client.post("/api/carts/c1/items", json={"product_id": "P1", "quantity": 2})
    response = api_client.post("/api/carts/c1/items", json={"product_id": "P1", "quantity": 3})

    assert response.status_code == 200
    payload = response.json()
    assert len(payload["items"]) == 1
    assert payload["items"][0]["quantity"] == 5
    assert payload["subtotal"] == 150.0
    assert payload["total_weight"] == 5000.0
    assert payload["pricing"]["delivery_charge"] == 0
    assert payload["pricing"]["grand_total"] == 152.0


def test_cart_update_remove_and_clear(api_client: TestClient):
    api_client.post("/api/carts/c2/items", json={"product_id": "P1"})
    api_client.post("/api/carts/c2/items", json={"product_id": "P2"})
    api_client.post("/api/carts/c2/items", json={"product_id": "P4"})

    updated = api_client.patch("/api/carts/c2/items/P1", json={"quantity": 0}).json()
    assert [item["product_id"] for item in updated["items"]] == ["P2", "P4"]

    removed = api_client.delete("/api/carts/c2/items/P4").json()
    assert [item["product_id"] for item in removed["items"]] == ["P2"]

    cleared = api_client.delete("/api/carts/c2").json()
    assert cleared["items"] == []
    assert cleared["pricing"]["grand_total"] == 0


def test_unknown_product_is_404(api_client: TestClient):
    response = api_client.post("/api/carts/c3/items", json={"product_id": "nope"})
    assert response.status_code == 404


def test_zone_table_and_resolve(api_client: TestClient):
    table = api_client.get("/api/zones").json()
    assert table["fallback_policy"] == "strict"
    assert table["zones"][0]["code"] == "ST-CENTRAL"
    assert len(table["geojson"]["features"]) == len(table["zones"])

    inside = api_client.post("/api/zones/resolve", json={"location": SATARA}).json()
    assert inside["zone_code"] == "ST-CENTRAL"
    assert inside["in_named_zone"] is True

    outside = api_client.post("/api/zones/resolve", json={"location": PUNE}).json()
    assert outside["zone_code"] == "OUT_OF_SERVICE"
    assert outside["in_named_zone"] is False


def test_resolve_rejects_out_of_range_latitude(api_client: TestClient):
    response = api_client.post("/api/zones/resolve", json={"location": {"lat": 123.0, "lng": 0.0}})
    assert response.status_code == 422


def test_pickup_quote_without_location(api_client: TestClient):
    api_client.post("/api/carts/c4/items", json={"product_id": "P2"})

    response = api_client.post("/api/checkout/c4/quote", json={"delivery_option": "pickup"})

    assert response.status_code == 200
    quote = response.json()
    assert quote["zone_code"] == "PICKUP"
    assert quote["delivery_charge"] == 0
    assert quote["grand_total"] == 42.0


def test_delivery_without_location_is_rejected(api_client: TestClient, order_sink: InMemoryOrderSink):
    api_client.post("/api/carts/c5/items", json={"product_id": "P2"})

    response = api_client.post(
        "/api/checkout/c5/orders",
        json={"delivery_option": "delivery", "location": {"error": "denied"}, "contact": CONTACT},
    )

    assert response.status_code == 409
    assert "denied" in response.json()["detail"]
    assert order_sink.orders == []


def test_empty_cart_checkout_is_rejected(api_client: TestClient):
    response = api_client.post("/api/checkout/empty/quote", json={"delivery_option": "pickup"})
    assert response.status_code == 409


def test_place_delivery_order(api_client: TestClient, order_sink: InMemoryOrderSink):
    api_client.post("/api/carts/c6/items", json={"product_id": "P3", "quantity": 1})

    response = api_client.post(
        "/api/checkout/c6/orders",
        json={"delivery_option": "delivery", "location": {"coordinate": SATARA}, "contact": CONTACT},
    )

    assert response.status_code == 201
    order = response.json()
    assert order["zone_code"] == "ST-CENTRAL"
    assert order["grand_total"] == 146.99
    assert order["payment_method"] == "COD"
    assert len(order_sink.orders) == 1
    assert order_sink.orders[0].order_id == order["order_id"]
    assert api_client.get("/api/carts/c6").json()["items"] == []


def test_out_of_service_and_upi_are_refused(api_client: TestClient, order_sink: InMemoryOrderSink):
    api_client.post("/api/carts/c7/items", json={"product_id": "P1"})

    far = api_client.post(
        "/api/checkout/c7/orders",
        json={"delivery_option": "delivery", "location": {"coordinate": PUNE}, "contact": CONTACT},
    )
    upi = api_client.post(
        "/api/checkout/c7/orders",
        json={"delivery_option": "pickup", "contact": CONTACT, "payment_method": "UPI"},
    )

    assert far.status_code == 422
    assert upi.status_code == 422
    assert "Cash on Delivery" in upi.json()["detail"]
    assert order_sink.orders == []
    assert api_client.get("/api/carts/c7").json()["item_count"] == 1
