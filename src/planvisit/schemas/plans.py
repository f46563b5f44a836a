"""Planning request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees.")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees.")


class PlanRequest(BaseModel):
    depot: CoordinateModel = Field(..., description="Vehicle position used as start and end of the tour.")
    points_to_visit: List[float] = Field(
        ...,
        description="Flat list of alternating latitude/longitude values in degrees.",
    )
    range_model: Optional[Literal["wgs84", "haversine"]] = None
    plan_id: Optional[str] = None
    speed: Optional[float] = Field(default=None, gt=0.0, description="Cruise speed in metres per second.")
    z: Optional[float] = None
    z_units: Optional[Literal["depth", "altitude", "height"]] = None
    persist: Optional[bool] = Field(default=None, description="Archive the computed plan under the data root.")


class PlanLegModel(BaseModel):
    maneuver_id: str
    range_m: float
    bearing_deg: float


class PlanResponse(BaseModel):
    route: List[int] = Field(..., description="Visiting order as 1-based waypoint indices.")
    cost_m: float
    matrix: List[List[float]]
    plan: dict
    legs: List[PlanLegModel]
    metadata: dict
