import json
import math
from pathlib import Path

import pytest

from storefront.data import zones_repository
from storefront.data.zones_repository import SATARA_ZONES, get_zones, parse_zone_table
from storefront.errors import InvalidCoordinate
from storefront.models.domain import OUT_OF_SERVICE, Coordinate, Zone
from storefront.services.geospatial import distance_km
from storefront.services.zoning.dispatcher import get_fallback
from storefront.services.zoning.grid import GridFallback
from storefront.services.zoning.service import ZoneResolver
from storefront.services.zoning.strict import OutOfServiceFallback


@pytest.fixture(autouse=True)
def clear_zone_cache():
    get_zones.cache_clear()
    yield
    get_zones.cache_clear()


def test_point_inside_zone_resolves_to_zone(pune: Coordinate):
    resolver = ZoneResolver(OutOfServiceFallback())
    radhika = SATARA_ZONES[3]

    assert resolver.resolve(radhika.center, [radhika]) == "ST-RADHIKA"
    assert resolver.resolve(pune, [radhika]) == OUT_OF_SERVICE


def test_overlapping_zones_resolve_by_table_order():
    resolver = ZoneResolver(OutOfServiceFallback())
    central, karanje = SATARA_ZONES[0], SATARA_ZONES[1]
    # Karanje's centre lies ~0.7 km from Satara Central, inside both circles.
    point = karanje.center

    assert resolver.resolve(point, [central, karanje]) == "ST-CENTRAL"
    assert resolver.resolve(point, [karanje, central]) == "ST-KARANJE"


def test_first_match_beats_nearest_centre():
    near = Zone(code="NEAR", name="Near", center=Coordinate(10.0, 10.0), radius_km=5.0)
    far = Zone(code="WIDE", name="Wide", center=Coordinate(10.02, 10.0), radius_km=10.0)
    resolver = ZoneResolver(OutOfServiceFallback())

    assert resolver.resolve(Coordinate(10.0, 10.0), [far, near]) == "WIDE"


def test_radius_boundary_is_inclusive():
    centre = Coordinate(0.0, 0.0)
    edge = Coordinate(0.0, 0.01)
    resolver = ZoneResolver(OutOfServiceFallback())

    exact = Zone(code="EDGE", name="Edge", center=centre, radius_km=distance_km(edge, centre))
    point_zone = Zone(code="DOT", name="Dot", center=centre, radius_km=0.0)

    assert resolver.resolve(edge, [exact]) == "EDGE"
    assert resolver.resolve(centre, [point_zone]) == "DOT"


def test_grid_fallback_codes(pune: Coordinate):
    resolver = ZoneResolver(GridFallback(grid_size=0.0225))

    assert resolver.resolve(pune, SATARA_ZONES) == "AREA_823_3282"
    # Same cell, different point
    assert resolver.resolve(Coordinate(18.519, 73.86), SATARA_ZONES) == "AREA_823_3282"
    # Neighbouring cell
    assert resolver.resolve(Coordinate(18.541, 73.86), SATARA_ZONES) == "AREA_824_3282"


def test_grid_fallback_is_idempotent_for_shared_cell():
    grid = GridFallback(grid_size=0.0225)
    a = Coordinate(12.3456, 76.5432)
    b = Coordinate(12.3401, 76.5401)
    assert grid.cell(a) == grid.cell(b)

    resolver = ZoneResolver(grid)
    assert resolver.resolve(a, []) == resolver.resolve(b, []) == resolver.resolve(a, [])


def test_grid_fallback_floors_negative_coordinates():
    grid = GridFallback(grid_size=0.0225)

    assert grid.code_for(Coordinate(-0.01, -0.01)) == "AREA_-1_-1"
    assert grid.code_for(Coordinate(0.01, 0.01)) == "AREA_0_0"


def test_named_zone_wins_over_grid_fallback(satara_central: Coordinate):
    resolver = ZoneResolver(GridFallback())
    assert resolver.resolve(satara_central, SATARA_ZONES) == "ST-CENTRAL"


@pytest.mark.parametrize("policy", ["strict", "grid"])
def test_non_finite_point_fails_fast(policy: str):
    resolver = ZoneResolver(get_fallback(policy))
    with pytest.raises(InvalidCoordinate):
        resolver.resolve(Coordinate(math.nan, 74.0), SATARA_ZONES)
    with pytest.raises(InvalidCoordinate):
        resolver.resolve(Coordinate(17.0, math.inf), [])


def test_dispatcher_rejects_unknown_policy():
    assert get_fallback("strict").name == "strict"
    grid = get_fallback("grid", grid_size=0.05, unused="x")
    assert isinstance(grid, GridFallback) and grid.grid_size == 0.05
    with pytest.raises(ValueError):
        get_fallback("nearest")


def test_locate_reports_matched_zone(satara_central: Coordinate, pune: Coordinate):
    resolver = ZoneResolver(OutOfServiceFallback())

    hit = resolver.locate(satara_central, SATARA_ZONES)
    assert hit.matched and hit.zone.name == "Satara Central"
    assert hit.distance_km == 0

    miss = resolver.locate(pune, SATARA_ZONES)
    assert not miss.matched
    assert miss.code == OUT_OF_SERVICE
    assert miss.policy == "strict"


def test_zone_table_file_overrides_default(tmp_path: Path):
    table = tmp_path / "zones.json"
    table.write_text(
        json.dumps(
            {
                "zones": [
                    {"code": "DL-01", "name": "Delhi Centre", "center": {"lat": 28.6139, "lng": 77.209}, "radiusKm": 2.5},
                    {"code": "DL-02", "latitude": 28.6532, "longitude": 77.2285, "radius_km": 2.5},
                ]
            }
        ),
        encoding="utf-8",
    )

    zones = get_zones(table)

    assert [zone.code for zone in zones] == ["DL-01", "DL-02"]
    assert zones[1].name == "DL-02"
    assert zones[0].center == Coordinate(28.6139, 77.209)


def test_default_zone_table_is_satara(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(zones_repository.settings, "zone_table_file", None)
    assert get_zones() == SATARA_ZONES


def test_zone_table_rejects_duplicates():
    record = {"code": "Z1", "center": {"lat": 1.0, "lng": 1.0}, "radiusKm": 1}
    with pytest.raises(ValueError):
        parse_zone_table([record, record])
