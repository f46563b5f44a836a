"""Exception hierarchy for route planning."""

from __future__ import annotations


class PlanVisitError(Exception):
    """Base class for planning failures that disable route planning only."""


class ConfigurationError(PlanVisitError, ValueError):
    """Raised when the configured waypoint list cannot be turned into waypoints."""


class DispatchError(PlanVisitError):
    """Raised when a plan-control request could not be delivered to the host runtime."""
