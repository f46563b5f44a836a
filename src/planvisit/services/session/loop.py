"""Cooperative control loop driving a planning session."""

from __future__ import annotations

import logging
import queue
import threading

from ...config import settings
from .state import Message, PlanningSession

logger = logging.getLogger(__name__)


class ControlLoop:
    """Ticks the session, then waits up to ``poll_interval`` seconds for inbound messages.

    Other threads hand messages over through ``inbox``. Every touch of the
    session (tick, consume, snapshot) holds ``_lock``, so the background thread
    and an inline :meth:`drain` never interleave. A route search started by a
    tick runs to completion before polling resumes. An iteration that raises is
    logged and the loop carries on.
    """

    def __init__(
        self,
        session: PlanningSession,
        inbox: "queue.Queue[Message] | None" = None,
        poll_interval: float | None = None,
    ) -> None:
        self.session = session
        self.inbox: "queue.Queue[Message]" = inbox if inbox is not None else queue.Queue()
        self.poll_interval = poll_interval if poll_interval is not None else settings.poll_interval_seconds
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def submit(self, message: Message) -> int:
        self.inbox.put(message)
        return self.inbox.qsize()

    def _tick(self) -> None:
        try:
            self.session.tick()
        except Exception:
            logger.exception("Planning tick failed; the session stays armed for the next tick")

    def step(self) -> int:
        """Run one iteration; returns the number of messages consumed."""
        with self._lock:
            self._tick()

        try:
            message = self.inbox.get(timeout=self.poll_interval)
        except queue.Empty:
            return 0

        consumed = 0
        with self._lock:
            while True:
                self._consume(message)
                consumed += 1
                try:
                    message = self.inbox.get_nowait()
                except queue.Empty:
                    return consumed

    def _consume(self, message: Message) -> None:
        try:
            self.session.consume(message)
        except TypeError as exc:
            logger.warning(f"Dropping message: {exc}")
        except Exception:
            logger.exception(f"Failed to handle {type(message).__name__}")
        finally:
            self.inbox.task_done()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def drain(self) -> int:
        """Consume every queued message without waiting, then tick once."""
        consumed = 0
        with self._lock:
            while True:
                try:
                    message = self.inbox.get_nowait()
                except queue.Empty:
                    break
                self._consume(message)
                consumed += 1
            self._tick()
        return consumed

    def snapshot(self) -> dict:
        with self._lock:
            return self.session.snapshot()

    def run(self, stop_event: threading.Event | None = None) -> None:
        stop_event = stop_event or self._stop
        logger.info(f"Control loop started (poll interval {self.poll_interval:.1f}s)")
        while not stop_event.is_set():
            self.step()
        logger.info("Control loop stopped")

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="plan-visit-loop", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=timeout)
            self._thread = None
