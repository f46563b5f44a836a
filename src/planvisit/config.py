"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PLANVISIT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Plan Visit Service"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level applied by the app factory.")
    data_root: Path = Field(default=Path("data"), description="Root directory for archived plans.")
    points_to_visit: Annotated[tuple[float, ...], NoDecode] = Field(
        default=(),
        description="Flat list of alternating latitude/longitude values in degrees.",
    )
    plan_id: str = "PlanVisit"
    plan_description: str = "Visiting given points in optimal order based on range"
    cruise_speed_mps: float = Field(default=1.6, gt=0.0)
    z_reference: float = Field(default=0.0, description="Depth/altitude reference for every directive.")
    z_units: Literal["depth", "altitude", "height"] = "depth"
    range_model: Literal["wgs84", "haversine"] = Field(
        default="wgs84",
        description="Distance model used when building the distance matrix.",
    )
    poll_interval_seconds: float = Field(default=1.0, gt=0.0)
    rearm_on_success: bool = Field(
        default=False,
        description="Re-activate the session after a successful plan so a new plan is generated.",
    )
    control_loop_enabled: bool = Field(
        default=False,
        description="Start the background control loop with the HTTP application.",
    )
    system_id: int = Field(default=0, ge=0, le=0xFFFF)
    dispatch_base_url: Optional[str] = Field(
        default=None,
        description="Base URL of the host runtime accepting plan-control requests.",
    )
    dispatch_timeout_seconds: float = Field(default=10.0, gt=0.0)
    dispatch_max_retries: int = Field(default=3, ge=0)
    dispatch_backoff_seconds: float = Field(default=1.0, ge=0.0)
    persist_plans: bool = False
    solver_warn_waypoints: int = Field(default=10, ge=1)

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("points_to_visit", mode="before")
    @classmethod
    def _parse_float_tuple_from_env(cls, value: Any) -> tuple[float, ...]:
        """Parse float tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return tuple(float(item) for item in value)
        if isinstance(value, list):
            return tuple(float(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(float(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(float(item.strip()) for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (float(value.strip()),)
        # Return empty tuple if value is None or empty
        return tuple()


settings = Settings()
