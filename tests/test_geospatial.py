import pytest

from src.planvisit.models.domain import Waypoint
from src.planvisit.services.geospatial import (
    bearing_degrees,
    displace,
    get_range_function,
    haversine_m,
    wgs84_range,
)


def test_wgs84_range_is_symmetric_and_zero_on_identity():
    a = Waypoint.from_degrees(41.185, -8.706)
    b = Waypoint.from_degrees(41.19, -8.70)

    assert wgs84_range(a, a) == 0.0
    assert wgs84_range(a, b) == pytest.approx(wgs84_range(b, a))
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a))


def test_bearing_degrees_cardinal_directions():
    origin = Waypoint.from_degrees(0.0, 0.0)

    assert bearing_degrees(origin, Waypoint.from_degrees(1.0, 0.0)) == pytest.approx(0.0)
    assert bearing_degrees(origin, Waypoint.from_degrees(0.0, 1.0)) == pytest.approx(90.0)
    assert bearing_degrees(origin, Waypoint.from_degrees(-1.0, 0.0)) == pytest.approx(180.0)
    assert bearing_degrees(origin, Waypoint.from_degrees(0.0, -1.0)) == pytest.approx(270.0)


def test_displace_applies_north_and_east_offsets():
    assert displace(0.0, 0.0, 0.0, 0.0) == Waypoint.from_degrees(0.0, 0.0)

    north = displace(0.0, 0.0, 1000.0, 0.0)
    assert north.latitude_deg == pytest.approx(1000.0 / 110574.0, rel=1e-3)
    assert north.longitude_deg == pytest.approx(0.0, abs=1e-9)

    east = displace(0.0, 0.0, 0.0, 1000.0)
    assert east.latitude_deg == pytest.approx(0.0, abs=1e-9)
    assert east.longitude_deg > 0


def test_get_range_function_rejects_unknown_model():
    assert get_range_function("haversine") is haversine_m
    with pytest.raises(ValueError, match="Unknown range model"):
        get_range_function("manhattan")
