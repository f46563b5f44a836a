"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root(request: Request) -> dict:
    """Simple health check reporting whether the control loop is running."""
    control_loop = request.app.state.control_loop
    return {
        "status": "ok",
        "control_loop": control_loop.running,
        "dispatch": "http" if settings.dispatch_base_url else "memory",
    }
