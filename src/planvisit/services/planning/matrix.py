"""Distance matrix construction between the depot and the waypoints."""

from __future__ import annotations

from ...models.domain import Waypoint
from ..geospatial import RangeFunction, wgs84_range
from ..waypoints import WaypointSet


def build_distance_matrix(
    depot: Waypoint,
    waypoints: WaypointSet,
    range_fn: RangeFunction = wgs84_range,
) -> list[list[float]]:
    """Return the symmetric (n+1)x(n+1) range matrix in metres.

    Index 0 is the depot, indices 1..n are the waypoints in configured order.
    Each unordered pair is measured once and mirrored.
    """
    points = [depot, *waypoints]
    size = len(points)
    matrix = [[0.0] * size for _ in range(size)]

    for i in range(size):
        for j in range(i + 1, size):
            distance = range_fn(points[i], points[j])
            matrix[i][j] = distance
            matrix[j][i] = distance

    return matrix
