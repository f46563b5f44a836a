"""Serializers for plans and plan-control requests."""

from __future__ import annotations

import math
from dataclasses import asdict

from ...models.domain import Waypoint
from ..geospatial import bearing_degrees, wgs84_range
from ..planning.models import PlanControl, PlanSpecification


def plan_to_json(plan: PlanSpecification) -> dict:
    return {
        "plan_id": plan.plan_id,
        "description": plan.description,
        "start_man_id": plan.start_man_id,
        "maneuvers": [
            {
                "maneuver_id": maneuver.maneuver_id,
                "data": {
                    "type": "Goto",
                    **asdict(maneuver.data),
                    "latitude_deg": math.degrees(maneuver.data.latitude),
                    "longitude_deg": math.degrees(maneuver.data.longitude),
                },
            }
            for maneuver in plan.maneuvers
        ],
        "transitions": [asdict(transition) for transition in plan.transitions],
    }


def plan_control_to_json(control: PlanControl) -> dict:
    return {
        "type": control.type,
        "op": control.op,
        "request_id": control.request_id,
        "plan_id": control.plan_id,
        "destination": control.destination,
        "arg": plan_to_json(control.arg),
    }


def plan_legs(start: Waypoint, plan: PlanSpecification) -> list[dict]:
    """Range and initial bearing of each maneuver measured from the previous target."""
    legs: list[dict] = []
    previous = start
    for maneuver in plan.maneuvers:
        target = Waypoint(latitude=maneuver.data.latitude, longitude=maneuver.data.longitude)
        legs.append(
            {
                "maneuver_id": maneuver.maneuver_id,
                "range_m": wgs84_range(previous, target),
                "bearing_deg": bearing_degrees(previous, target),
            }
        )
        previous = target
    return legs
