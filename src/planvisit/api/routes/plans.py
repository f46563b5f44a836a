"""Stateless planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.plans import PlanRequest, PlanResponse
from ...services.planning.service import plan_from_request

router = APIRouter(prefix="/plans", tags=["plans"])

logger = logging.getLogger(__name__)


@router.post("/compute", response_model=PlanResponse, status_code=status.HTTP_200_OK)
def compute(payload: PlanRequest) -> PlanResponse:
    try:
        return plan_from_request(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error computing plan: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute plan: {str(exc)}",
        ) from exc
