"""Validation of the configured points to visit."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from ..errors import ConfigurationError
from ..models.domain import Waypoint


@dataclass(frozen=True, slots=True)
class WaypointSet:
    """Ordered, validated waypoints. Position ``k`` maps to distance-matrix index ``k + 1``."""

    waypoints: tuple[Waypoint, ...] = ()

    @classmethod
    def from_degrees(cls, values: Sequence[float]) -> "WaypointSet":
        """Build a waypoint set from a flat ``lat, lon, lat, lon, ...`` list in degrees.

        Raises:
            ConfigurationError: if the list has an odd number of values or a
                coordinate falls outside the valid latitude/longitude range.
        """
        if len(values) % 2 != 0:
            raise ConfigurationError(
                f"odd coordinate count: expected latitude/longitude pairs, got {len(values)} values"
            )

        waypoints: list[Waypoint] = []
        for index in range(0, len(values), 2):
            latitude, longitude = float(values[index]), float(values[index + 1])
            if not (math.isfinite(latitude) and math.isfinite(longitude)):
                raise ConfigurationError(f"Point {index // 2} has a non-finite coordinate.")
            if abs(latitude) > 90.0:
                raise ConfigurationError(f"Point {index // 2} latitude {latitude} is outside [-90, 90].")
            if abs(longitude) > 180.0:
                raise ConfigurationError(f"Point {index // 2} longitude {longitude} is outside [-180, 180].")
            waypoints.append(Waypoint.from_degrees(latitude, longitude))
        return cls(waypoints=tuple(waypoints))

    def __len__(self) -> int:
        return len(self.waypoints)

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self.waypoints)

    def __getitem__(self, index: int) -> Waypoint:
        return self.waypoints[index]

    def at_matrix_index(self, index: int) -> Waypoint:
        """Return the waypoint stored at a 1-based distance-matrix index."""
        if index < 1 or index > len(self.waypoints):
            raise IndexError(f"Matrix index {index} does not refer to a waypoint (1..{len(self.waypoints)}).")
        return self.waypoints[index - 1]
