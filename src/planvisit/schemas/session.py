"""Planning session schemas for inbound host messages and status snapshots."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import EntityStatus, PlanExecutionState, PlanOutcome, VehicleMode


class ConfigureRequest(BaseModel):
    points_to_visit: List[float] = Field(
        ...,
        description="Flat list of alternating latitude/longitude values in degrees.",
    )


class EstimatedStateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0, description="Reference latitude in degrees.")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Reference longitude in degrees.")
    x: float = Field(default=0.0, description="North offset from the reference in metres.")
    y: float = Field(default=0.0, description="East offset from the reference in metres.")


class VehicleStateModel(BaseModel):
    op_mode: VehicleMode


class PlanControlStateModel(BaseModel):
    state: PlanExecutionState
    plan_progress: float = Field(default=0.0, ge=-1.0, le=100.0)
    last_outcome: PlanOutcome = PlanOutcome.NONE


class SessionStatus(BaseModel):
    status: EntityStatus
    configured_ok: bool
    waypoint_count: int
    active: bool
    plan_sent: bool
    vehicle_mode: Optional[VehicleMode]
    in_mission: bool
    progress: float
    last_outcome: PlanOutcome
    depot: Optional[dict]
    last_request_id: Optional[int]
    last_route: List[int]


class AcceptedResponse(BaseModel):
    accepted: bool = True
    queued: int = Field(..., description="Messages waiting in the session inbox.")
