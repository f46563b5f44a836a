"""Route planning orchestration service."""

from __future__ import annotations

import logging

from ...config import settings
from ...models.domain import Waypoint
from ...persistence.filesystem import FileStorage
from ...schemas.plans import PlanRequest, PlanResponse
from ..geospatial import get_range_function
from ..outputs.plan_formatter import plan_legs, plan_to_json
from ..waypoints import WaypointSet
from .assembler import assemble_plan
from .matrix import build_distance_matrix
from .models import PlanningResult
from .solver import solve_route

logger = logging.getLogger(__name__)


def compute_plan(
    depot: Waypoint,
    waypoints: WaypointSet,
    *,
    range_model: str | None = None,
    plan_id: str | None = None,
    speed: float | None = None,
    z: float | None = None,
    z_units: str | None = None,
) -> PlanningResult:
    """Run the full pipeline: distance matrix, exact route search, plan assembly."""
    range_model = range_model or settings.range_model
    range_fn = get_range_function(range_model)

    matrix = build_distance_matrix(depot, waypoints, range_fn=range_fn)
    solution = solve_route(matrix)
    plan = assemble_plan(
        solution.route,
        waypoints,
        depot,
        plan_id=plan_id,
        speed=speed,
        z=z,
        z_units=z_units,
    )

    metadata = {
        "waypoints": len(waypoints),
        "range_model": range_model,
        "permutations_evaluated": solution.evaluated,
        "maneuvers": len(plan.maneuvers),
        "transitions": len(plan.transitions),
    }
    logger.info(
        f"Planned visit of {len(waypoints)} waypoints: route={list(solution.route)}, cost={solution.cost:.1f}m"
    )
    return PlanningResult(
        plan=plan,
        route=solution.route,
        cost=solution.cost,
        matrix=matrix,
        metadata=metadata,
    )


def plan_from_request(payload: PlanRequest) -> PlanResponse:
    """Stateless planning entry point used by the HTTP layer."""
    waypoints = WaypointSet.from_degrees(payload.points_to_visit)
    depot = Waypoint.from_degrees(payload.depot.latitude, payload.depot.longitude)

    result = compute_plan(
        depot,
        waypoints,
        range_model=payload.range_model,
        plan_id=payload.plan_id,
        speed=payload.speed,
        z=payload.z,
        z_units=payload.z_units,
    )

    plan_payload = plan_to_json(result.plan)
    legs = plan_legs(depot, result.plan)
    metadata = dict(result.metadata)

    persist = payload.persist if payload.persist is not None else settings.persist_plans
    if persist:
        run_dir = FileStorage().archive_plan(
            {"route": list(result.route), "cost_m": result.cost, "plan": plan_payload, "legs": legs}
        )
        metadata["output_dir"] = str(run_dir)

    return PlanResponse(
        route=list(result.route),
        cost_m=result.cost,
        matrix=result.matrix,
        plan=plan_payload,
        legs=legs,
        metadata=metadata,
    )
