"""Geospatial helper functions.

All coordinates handled here are :class:`Waypoint` instances, i.e. radians.
Ranges are returned in metres.
"""

from __future__ import annotations

import math
from typing import Callable

from geopy.distance import geodesic

from ..models.domain import Waypoint

EARTH_RADIUS_M = 6371000.0

RangeFunction = Callable[[Waypoint, Waypoint], float]


def wgs84_range(origin: Waypoint, target: Waypoint) -> float:
    """Geodesic distance on the WGS-84 ellipsoid."""

    if origin == target:
        return 0.0
    return geodesic(
        (origin.latitude_deg, origin.longitude_deg),
        (target.latitude_deg, target.longitude_deg),
        ellipsoid="WGS-84",
    ).meters


def haversine_m(origin: Waypoint, target: Waypoint) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    d_phi = target.latitude - origin.latitude
    d_lambda = target.longitude - origin.longitude

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(origin.latitude) * math.cos(target.latitude) * math.sin(d_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def bearing_degrees(origin: Waypoint, target: Waypoint) -> float:
    """Calculate the initial bearing from origin to target, clockwise from north."""

    delta_lambda = target.longitude - origin.longitude
    y = math.sin(delta_lambda) * math.cos(target.latitude)
    x = math.cos(origin.latitude) * math.sin(target.latitude) - math.sin(origin.latitude) * math.cos(
        target.latitude
    ) * math.cos(delta_lambda)
    bearing = math.degrees(math.atan2(y, x))
    return (bearing + 360) % 360


def displace(latitude: float, longitude: float, north: float, east: float) -> Waypoint:
    """Apply a north/east offset in metres to a reference coordinate given in degrees."""

    distance = math.hypot(north, east)
    if distance == 0.0:
        return Waypoint.from_degrees(latitude, longitude)
    bearing = math.degrees(math.atan2(east, north))
    point = geodesic(meters=distance, ellipsoid="WGS-84").destination((latitude, longitude), bearing=bearing)
    return Waypoint.from_degrees(point.latitude, point.longitude)


RANGE_MODELS: dict[str, RangeFunction] = {
    "wgs84": wgs84_range,
    "haversine": haversine_m,
}


def get_range_function(model: str) -> RangeFunction:
    try:
        return RANGE_MODELS[model]
    except KeyError as exc:
        raise ValueError(f"Unknown range model '{model}'. Expected one of {sorted(RANGE_MODELS)}.") from exc
