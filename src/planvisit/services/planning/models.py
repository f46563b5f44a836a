"""Plan domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

MANEUVER_IS_DONE = "ManeuverIsDone"


@dataclass(slots=True)
class Goto:
    latitude: float
    longitude: float
    speed: float
    speed_units: str
    z: float
    z_units: str


@dataclass(slots=True)
class PlanManeuver:
    maneuver_id: str
    data: Goto


@dataclass(slots=True)
class PlanTransition:
    source_man: str
    dest_man: str
    conditions: str = MANEUVER_IS_DONE


@dataclass(slots=True)
class PlanSpecification:
    plan_id: str
    description: str
    start_man_id: str
    maneuvers: List[PlanManeuver] = field(default_factory=list)
    transitions: List[PlanTransition] = field(default_factory=list)


@dataclass(slots=True)
class SolverResult:
    route: tuple[int, ...]
    cost: float
    evaluated: int


@dataclass(slots=True)
class PlanControl:
    request_id: int
    plan_id: str
    arg: PlanSpecification
    destination: int
    type: str = "request"
    op: str = "start"


@dataclass(slots=True)
class PlanningResult:
    plan: PlanSpecification
    route: tuple[int, ...]
    cost: float
    matrix: list[list[float]]
    metadata: dict
