"""Planning session endpoints.

Requests are turned into session messages and queued for the control loop.
When the loop is not running they are applied immediately. Handlers are plain
functions and run in the worker thread pool, so a route search never blocks the
event loop; the control loop lock keeps one of them on the session at a time.
"""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from ...models.domain import (
    Activate,
    Configure,
    Deactivate,
    EstimatedState,
    PlanControlState,
    VehicleState,
)
from ...schemas.session import (
    AcceptedResponse,
    ConfigureRequest,
    EstimatedStateModel,
    PlanControlStateModel,
    SessionStatus,
    VehicleStateModel,
)
from ...services.session.loop import ControlLoop
from ...services.session.state import Message

router = APIRouter(prefix="/session", tags=["session"])


def _submit(request: Request, message: Message) -> AcceptedResponse:
    control_loop: ControlLoop = request.app.state.control_loop
    queued = control_loop.submit(message)
    if not control_loop.running:
        control_loop.drain()
        queued = control_loop.inbox.qsize()
    return AcceptedResponse(queued=queued)


@router.get("", response_model=SessionStatus, status_code=status.HTTP_200_OK)
def get_session(request: Request) -> SessionStatus:
    control_loop: ControlLoop = request.app.state.control_loop
    return SessionStatus(**control_loop.snapshot())


@router.post("/configure", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
def configure(payload: ConfigureRequest, request: Request) -> AcceptedResponse:
    return _submit(request, Configure(points_to_visit=tuple(payload.points_to_visit)))


@router.post("/activate", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
def activate(request: Request) -> AcceptedResponse:
    return _submit(request, Activate())


@router.post("/deactivate", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
def deactivate(request: Request) -> AcceptedResponse:
    return _submit(request, Deactivate())


@router.post("/messages/estimated-state", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
def estimated_state(payload: EstimatedStateModel, request: Request) -> AcceptedResponse:
    return _submit(request, EstimatedState(**payload.model_dump()))


@router.post("/messages/vehicle-state", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
def vehicle_state(payload: VehicleStateModel, request: Request) -> AcceptedResponse:
    return _submit(request, VehicleState(op_mode=payload.op_mode))


@router.post(
    "/messages/plan-control-state",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def plan_control_state(payload: PlanControlStateModel, request: Request) -> AcceptedResponse:
    return _submit(
        request,
        PlanControlState(
            state=payload.state,
            plan_progress=payload.plan_progress,
            last_outcome=payload.last_outcome,
        ),
    )
