"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.routes import health, plans, session
from .config import settings
from .services.dispatch.dispatcher import create_dispatcher
from .services.session.loop import ControlLoop
from .services.session.state import PlanningSession


def build_control_loop() -> ControlLoop:
    planning_session = PlanningSession(create_dispatcher())
    planning_session.configure(settings.points_to_visit)
    return ControlLoop(planning_session)


@asynccontextmanager
async def lifespan(app: FastAPI):
    control_loop: ControlLoop = app.state.control_loop
    if settings.control_loop_enabled:
        control_loop.start()
    try:
        yield
    finally:
        control_loop.stop(timeout=settings.poll_interval_seconds * 2)


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.control_loop = build_control_loop()

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(plans.router, prefix=settings.api_prefix)
    app.include_router(session.router, prefix=settings.api_prefix)
    return app


app = create_app()
