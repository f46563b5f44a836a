"""Delivery of plan-control requests to the host runtime."""

from __future__ import annotations

import logging
import random
import time
from typing import Protocol

import httpx

from ...config import settings
from ...errors import DispatchError
from ..outputs.plan_formatter import plan_control_to_json
from ..planning.models import PlanControl, PlanSpecification

REQUEST_ID_MASK = 0xFFFF

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    def dispatch(self, control: PlanControl) -> None:
        ...


class RequestIdGenerator:
    """Pseudo-random request identifiers masked to 16 bits."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def __call__(self) -> int:
        return self._random.getrandbits(32) & REQUEST_ID_MASK


def build_plan_control(plan: PlanSpecification, request_id: int, destination: int | None = None) -> PlanControl:
    """Wrap ``plan`` into a "submit and start" request addressed to the local system."""
    return PlanControl(
        request_id=request_id & REQUEST_ID_MASK,
        plan_id=plan.plan_id,
        arg=plan,
        destination=destination if destination is not None else settings.system_id,
    )


class InMemoryDispatcher:
    """Keeps dispatched requests in memory; used when no host runtime URL is configured."""

    def __init__(self) -> None:
        self.sent: list[PlanControl] = []

    def dispatch(self, control: PlanControl) -> None:
        self.sent.append(control)
        logger.info(
            f"Recorded plan '{control.plan_id}' (request {control.request_id}) "
            f"with {len(control.arg.maneuvers)} maneuvers"
        )


class HttpDispatcher:
    """Posts plan-control requests to the host runtime over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
    ) -> None:
        self.base_url = base_url or settings.dispatch_base_url
        if not self.base_url:
            raise ValueError("Dispatch base URL is not configured.")
        self.base_url = self.base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.dispatch_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.dispatch_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.dispatch_backoff_seconds

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0))

    def _backoff(self, attempt: int) -> float:
        return self.backoff_seconds * (2 ** (attempt - 1))

    def dispatch(self, control: PlanControl) -> None:
        url = f"{self.base_url}/plan-control"
        payload = plan_control_to_json(control)

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.post(url, json=payload)
                    response.raise_for_status()
                    logger.info(f"Dispatched plan '{control.plan_id}' (request {control.request_id}) to {url}")
                    return
                except httpx.HTTPStatusError as e:
                    # Rejections from the host are not retried
                    if e.response.status_code < 500:
                        raise DispatchError(
                            f"Host runtime rejected plan '{control.plan_id}': "
                            f"HTTP {e.response.status_code} {e.response.text}"
                        ) from e
                    attempt += 1
                    if attempt > self.max_retries:
                        raise DispatchError(
                            f"Host runtime failed to accept plan '{control.plan_id}' "
                            f"after {self.max_retries} retries: HTTP {e.response.status_code}"
                        ) from e
                    time.sleep(self._backoff(attempt))
                except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
                    raise DispatchError(f"Dispatch URL {url} is not usable: {e}") from e
                except httpx.RequestError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise DispatchError(f"Failed to reach host runtime at {self.base_url}: {e}") from e
                    wait_time = self._backoff(attempt)
                    logger.debug(
                        f"Dispatch network error, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt}/{self.max_retries}): {e}"
                    )
                    time.sleep(wait_time)
        finally:
            client.close()


def create_dispatcher() -> Dispatcher:
    if settings.dispatch_base_url:
        return HttpDispatcher()
    return InMemoryDispatcher()
