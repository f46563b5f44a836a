import queue
import time

import httpx

from src.planvisit.models.domain import (
    Activate,
    Configure,
    Deactivate,
    EstimatedState,
    VehicleMode,
    VehicleState,
)
from src.planvisit.services.dispatch.dispatcher import HttpDispatcher, InMemoryDispatcher
from src.planvisit.services.session.loop import ControlLoop
from src.planvisit.services.session.state import PlanningSession


def _messages():
    return [
        Configure(points_to_visit=(1.0, 0.0, 0.0, 1.0)),
        Activate(),
        VehicleState(op_mode=VehicleMode.SERVICE),
        EstimatedState(latitude=0.0, longitude=0.0),
    ]


def _loop(dispatcher: InMemoryDispatcher) -> ControlLoop:
    session = PlanningSession(dispatcher, request_ids=lambda: 9, rearm_on_success=False)
    return ControlLoop(session, poll_interval=0.01)


def test_step_ticks_before_consuming_messages():
    dispatcher = InMemoryDispatcher()
    control_loop = _loop(dispatcher)
    for message in _messages():
        control_loop.submit(message)

    assert control_loop.step() == 4
    # the tick at the start of the step ran before the session was ready
    assert dispatcher.sent == []

    assert control_loop.step() == 0
    assert len(dispatcher.sent) == 1


def test_drain_consumes_then_plans():
    dispatcher = InMemoryDispatcher()
    control_loop = _loop(dispatcher)
    for message in _messages():
        control_loop.submit(message)

    assert control_loop.drain() == 4
    assert len(dispatcher.sent) == 1
    assert control_loop.inbox.empty()


def test_step_waits_for_poll_interval_when_idle():
    control_loop = _loop(InMemoryDispatcher())

    started = time.monotonic()
    assert control_loop.step() == 0
    assert time.monotonic() - started >= 0.005


def test_unsupported_messages_are_dropped(caplog):
    control_loop = _loop(InMemoryDispatcher())
    control_loop.submit(object())

    with caplog.at_level("WARNING"):
        assert control_loop.drain() == 1
    assert "Dropping message" in caplog.text


def test_background_thread_plans_once():
    dispatcher = InMemoryDispatcher()
    inbox: queue.Queue = queue.Queue()
    session = PlanningSession(dispatcher, request_ids=lambda: 9, rearm_on_success=False)
    control_loop = ControlLoop(session, inbox=inbox, poll_interval=0.01)

    control_loop.start()
    try:
        assert control_loop.running
        for message in _messages():
            control_loop.submit(message)
        deadline = time.monotonic() + 5.0
        while not dispatcher.sent and time.monotonic() < deadline:
            time.sleep(0.01)
        time.sleep(0.05)
    finally:
        control_loop.stop(timeout=1.0)

    assert not control_loop.running
    assert len(dispatcher.sent) == 1
    assert session.plan_sent is True


class FlakyDispatcher(InMemoryDispatcher):
    """Raises an unexpected error on the first request, then records."""

    def __init__(self) -> None:
        super().__init__()
        self.attempts = 0

    def dispatch(self, control) -> None:
        self.attempts += 1
        if self.attempts == 1:
            raise RuntimeError("dispatcher blew up")
        super().dispatch(control)


def _wait_for(condition, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


def test_drain_logs_unexpected_tick_errors(caplog):
    dispatcher = FlakyDispatcher()
    control_loop = _loop(dispatcher)
    for message in _messages():
        control_loop.submit(message)

    with caplog.at_level("ERROR"):
        assert control_loop.drain() == 4
    assert "Planning tick failed" in caplog.text
    assert control_loop.session.plan_sent is False

    control_loop.drain()
    assert len(dispatcher.sent) == 1


def test_background_thread_survives_unexpected_tick_errors():
    dispatcher = FlakyDispatcher()
    control_loop = _loop(dispatcher)

    control_loop.start()
    try:
        for message in _messages():
            control_loop.submit(message)
        assert _wait_for(lambda: len(dispatcher.sent) == 1)
        assert control_loop.running
    finally:
        control_loop.stop(timeout=1.0)

    assert dispatcher.attempts == 2


def test_background_thread_survives_protocol_errors(monkeypatch):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.RemoteProtocolError("server disconnected", request=request)

    http_dispatcher = HttpDispatcher(base_url="http://host.local", max_retries=0, backoff_seconds=0.0)
    monkeypatch.setattr(
        http_dispatcher,
        "_get_client",
        lambda: httpx.Client(transport=httpx.MockTransport(handler)),
    )
    session = PlanningSession(http_dispatcher, request_ids=lambda: 9, rearm_on_success=False)
    control_loop = ControlLoop(session, poll_interval=0.01)

    control_loop.start()
    try:
        for message in _messages():
            control_loop.submit(message)
        assert _wait_for(lambda: len(calls) >= 2)
        control_loop.submit(Deactivate())
        assert _wait_for(lambda: not session.active)
        assert control_loop.running
    finally:
        control_loop.stop(timeout=1.0)

    assert session.plan_sent is False
