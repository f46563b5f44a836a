"""Planning session: activation state, inbound message handling and the planning trigger."""

from __future__ import annotations

import logging
from typing import Callable, Sequence, Union

from ...config import settings
from ...errors import ConfigurationError, DispatchError
from ...models.domain import (
    Activate,
    Configure,
    Deactivate,
    EntityStatus,
    EstimatedState,
    PlanControlState,
    PlanExecutionState,
    PlanOutcome,
    VehicleMode,
    VehicleState,
    Waypoint,
)
from ..dispatch.dispatcher import Dispatcher, RequestIdGenerator, build_plan_control
from ..geospatial import displace
from ..planning.models import PlanControl
from ..planning.service import compute_plan
from ..waypoints import WaypointSet

logger = logging.getLogger(__name__)

Message = Union[EstimatedState, VehicleState, PlanControlState, Configure, Activate, Deactivate]


class PlanningSession:
    """Explicit session context for a single vehicle.

    ``plan_sent`` is only cleared by :meth:`activate`; the planning trigger
    itself never resets it, so at most one plan goes out per activation.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        request_ids: Callable[[], int] | None = None,
        rearm_on_success: bool | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.request_ids = request_ids or RequestIdGenerator()
        self.rearm_on_success = settings.rearm_on_success if rearm_on_success is None else rearm_on_success

        self.waypoints: WaypointSet | None = None
        self.configured_ok = False
        self.active = False
        self.plan_sent = False
        self.status = EntityStatus.BOOT
        self.vehicle_mode: VehicleMode | None = None
        self.in_mission = False
        self.progress = 0.0
        self.last_outcome = PlanOutcome.NONE
        self.depot: Waypoint | None = None
        self.last_control: PlanControl | None = None
        self.last_route: tuple[int, ...] = ()

    def configure(self, points_to_visit: Sequence[float]) -> bool:
        """Rebuild the waypoint set; an invalid list disables planning until reconfigured."""
        try:
            self.waypoints = WaypointSet.from_degrees(points_to_visit)
        except ConfigurationError as exc:
            logger.warning(f"Invalid points to visit ({exc}). Route planning is disabled.")
            self.waypoints = None
            self.configured_ok = False
            if self.active:
                self.deactivate()
            return False

        self.configured_ok = True
        logger.info(f"Configured {len(self.waypoints)} points to visit")
        return True

    def activate(self) -> bool:
        if not self.configured_ok or self.waypoints is None:
            logger.warning("Cannot activate since the given points to visit are not ok.")
            return False
        if len(self.waypoints) == 0:
            logger.warning("Cannot activate without any points to visit.")
            return False

        self.active = True
        self.plan_sent = False
        self.status = EntityStatus.ACTIVE
        logger.info("Planning session activated")
        return True

    def deactivate(self) -> None:
        self.active = False
        self.status = EntityStatus.IDLE
        logger.info("Planning session deactivated")

    def consume(self, message: Message) -> None:
        if isinstance(message, EstimatedState):
            self._on_estimated_state(message)
        elif isinstance(message, VehicleState):
            self.vehicle_mode = message.op_mode
        elif isinstance(message, PlanControlState):
            self._on_plan_control_state(message)
        elif isinstance(message, Configure):
            self.configure(message.points_to_visit)
        elif isinstance(message, Activate):
            self.activate()
        elif isinstance(message, Deactivate):
            self.deactivate()
        else:
            raise TypeError(f"Unsupported message type: {type(message).__name__}")

    def _on_estimated_state(self, message: EstimatedState) -> None:
        self.depot = displace(message.latitude, message.longitude, message.x, message.y)
        if self.active:
            self.status = EntityStatus.ACTIVE

    def _on_plan_control_state(self, message: PlanControlState) -> None:
        self.in_mission = message.state == PlanExecutionState.EXECUTING
        self.progress = message.plan_progress
        self.last_outcome = message.last_outcome

        if self.in_mission and message.last_outcome == PlanOutcome.SUCCESS and self.active:
            logger.info("Plan completed successfully, requesting deactivation")
            self.deactivate()
            if self.rearm_on_success:
                self.activate()

    def ready_to_plan(self) -> bool:
        return (
            self.active
            and not self.plan_sent
            and self.vehicle_mode == VehicleMode.SERVICE
            and self.depot is not None
            and self.waypoints is not None
        )

    def tick(self) -> PlanControl | None:
        """Plan and dispatch once if the vehicle is idle and no plan went out this activation."""
        if not self.ready_to_plan():
            return None

        result = compute_plan(self.depot, self.waypoints)
        control = build_plan_control(result.plan, self.request_ids())
        try:
            self.dispatcher.dispatch(control)
        except DispatchError as exc:
            logger.error(f"Failed to dispatch plan '{control.plan_id}': {exc}")
            return None

        self.plan_sent = True
        self.last_control = control
        self.last_route = result.route
        return control

    def snapshot(self) -> dict:
        return {
            "status": self.status,
            "configured_ok": self.configured_ok,
            "waypoint_count": len(self.waypoints) if self.waypoints is not None else 0,
            "active": self.active,
            "plan_sent": self.plan_sent,
            "vehicle_mode": self.vehicle_mode,
            "in_mission": self.in_mission,
            "progress": self.progress,
            "last_outcome": self.last_outcome,
            "depot": (
                {"latitude": self.depot.latitude_deg, "longitude": self.depot.longitude_deg}
                if self.depot is not None
                else None
            ),
            "last_request_id": self.last_control.request_id if self.last_control is not None else None,
            "last_route": list(self.last_route),
        }
