"""Domain models for waypoints, vehicle positions and inbound host messages."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Waypoint:
    """Geographic coordinate with latitude/longitude stored in radians."""

    latitude: float
    longitude: float

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float) -> "Waypoint":
        return cls(latitude=math.radians(latitude), longitude=math.radians(longitude))

    @property
    def latitude_deg(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        return math.degrees(self.longitude)


class VehicleMode(str, Enum):
    """Operating mode reported by the vehicle supervisor."""

    SERVICE = "service"
    CALIBRATION = "calibration"
    ERROR = "error"
    MANEUVER = "maneuver"
    EXTERNAL = "external"
    BOOT = "boot"


class PlanExecutionState(str, Enum):
    BLOCKED = "blocked"
    READY = "ready"
    INITIALIZING = "initializing"
    EXECUTING = "executing"


class PlanOutcome(str, Enum):
    NONE = "none"
    SUCCESS = "success"
    FAILURE = "failure"


class EntityStatus(str, Enum):
    BOOT = "boot"
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(frozen=True, slots=True)
class EstimatedState:
    """Navigation estimate: reference coordinate (degrees) plus north/east offsets in metres."""

    latitude: float
    longitude: float
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True, slots=True)
class VehicleState:
    op_mode: VehicleMode


@dataclass(frozen=True, slots=True)
class PlanControlState:
    state: PlanExecutionState
    plan_progress: float = 0.0
    last_outcome: PlanOutcome = PlanOutcome.NONE


@dataclass(frozen=True, slots=True)
class Configure:
    points_to_visit: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class Activate:
    pass


@dataclass(frozen=True, slots=True)
class Deactivate:
    pass
