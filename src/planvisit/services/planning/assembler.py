"""Turns a visiting order into a linear chain of goto maneuvers."""

from __future__ import annotations

from typing import Sequence

from ...config import settings
from ...models.domain import Waypoint
from ..waypoints import WaypointSet
from .models import MANEUVER_IS_DONE, Goto, PlanManeuver, PlanSpecification, PlanTransition

SPEED_UNITS_MPS = "meters_ps"


def maneuver_id(position: int) -> str:
    return f"Goto{position}"


def _goto(target: Waypoint, *, speed: float, z: float, z_units: str) -> Goto:
    return Goto(
        latitude=target.latitude,
        longitude=target.longitude,
        speed=speed,
        speed_units=SPEED_UNITS_MPS,
        z=z,
        z_units=z_units,
    )


def assemble_plan(
    route: Sequence[int],
    waypoints: WaypointSet,
    depot: Waypoint,
    *,
    plan_id: str | None = None,
    description: str | None = None,
    speed: float | None = None,
    z: float | None = None,
    z_units: str | None = None,
) -> PlanSpecification:
    """Build the plan visiting ``route`` (1-based matrix indices) and returning to ``depot``.

    The plan holds ``len(route) + 1`` maneuvers linked by ``len(route)``
    transitions, each gated on the previous maneuver completing.
    """
    speed = speed if speed is not None else settings.cruise_speed_mps
    z = z if z is not None else settings.z_reference
    z_units = z_units or settings.z_units

    targets = [waypoints.at_matrix_index(index) for index in route]
    targets.append(depot)

    maneuvers: list[PlanManeuver] = []
    transitions: list[PlanTransition] = []
    for position, target in enumerate(targets):
        maneuver = PlanManeuver(
            maneuver_id=maneuver_id(position),
            data=_goto(target, speed=speed, z=z, z_units=z_units),
        )
        if maneuvers:
            transitions.append(
                PlanTransition(
                    source_man=maneuvers[-1].maneuver_id,
                    dest_man=maneuver.maneuver_id,
                    conditions=MANEUVER_IS_DONE,
                )
            )
        maneuvers.append(maneuver)

    return PlanSpecification(
        plan_id=plan_id or settings.plan_id,
        description=description or settings.plan_description,
        start_man_id=maneuvers[0].maneuver_id,
        maneuvers=maneuvers,
        transitions=transitions,
    )
