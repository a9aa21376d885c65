"""Debounced refetch of filtered records.

State changes go through a cancelable timer; only the last state inside the
quiet window is fetched. Fetch failures keep the previous records in place
and are reported through ``last_error``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.3


class Timer(Protocol):
    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def _thread_timer(delay: float, fn: Callable[[], None]) -> Timer:
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    return timer


class Debouncer:
    def __init__(self, delay: float = DEFAULT_DELAY, *, timer_factory: TimerFactory = _thread_timer) -> None:
        self.delay = delay
        self._timer_factory = timer_factory
        self._pending: Optional[Timer] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def trigger(self, fn: Callable[[], None]) -> None:
        """Schedule ``fn`` after the delay, superseding any call still waiting."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            timer: Timer

            def run() -> None:
                with self._lock:
                    if self._pending is not timer:
                        return
                    self._pending = None
                fn()

            timer = self._timer_factory(self.delay, run)
            self._pending = timer
        timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None


class RefetchPipeline:
    def __init__(
        self,
        fetch: Callable[[Mapping[str, object]], List[Dict[str, Any]]],
        *,
        debouncer: Optional[Debouncer] = None,
        on_result: Optional[Callable[[List[Dict[str, Any]]], None]] = None,
    ) -> None:
        self._fetch = fetch
        self._debouncer = debouncer or Debouncer()
        self._on_result = on_result
        self._cond = threading.Condition()
        # Every requested fetch gets a generation; only the newest may apply.
        self._generation = 0
        self._settled = 0
        self.records: List[Dict[str, Any]] = []
        self.state: Dict[str, object] = {}
        self.loading = False
        self.last_error: Optional[Exception] = None

    @classmethod
    def from_settings(
        cls, fetch: Callable[[Mapping[str, object]], List[Dict[str, Any]]], settings: Settings
    ) -> "RefetchPipeline":
        return cls(fetch, debouncer=Debouncer(settings.debounce_seconds))

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    def _next_generation(self) -> int:
        with self._cond:
            self._generation += 1
            return self._generation

    def on_filters_changed(self, state: Mapping[str, object]) -> None:
        snapshot = dict(state)
        self.state = snapshot
        generation = self._next_generation()
        self._debouncer.trigger(lambda: self._run(generation, snapshot))

    def refresh(self, state: Optional[Mapping[str, object]] = None) -> None:
        """Fetch now, superseding anything pending or in flight."""
        snapshot = dict(self.state if state is None else state)
        self._run(self._next_generation(), snapshot)

    def _settle(self, generation: int) -> None:
        self.loading = False
        self._settled = generation
        self._cond.notify_all()

    def _run(self, generation: int, state: Dict[str, object]) -> None:
        with self._cond:
            if generation != self._generation:
                return
            self.loading = True
        try:
            records = self._fetch(state)
        except Exception as exc:
            with self._cond:
                if generation != self._generation:
                    logger.info("superseded record fetch failed: %s", exc)
                    return
                logger.exception("record fetch failed; keeping %d previous records", len(self.records))
                self.last_error = exc
                self._settle(generation)
            return
        with self._cond:
            if generation != self._generation:
                logger.debug("dropping superseded result for %r", state)
                return
            self.records = list(records)
            self.last_error = None
            self._settle(generation)
        if self._on_result is not None:
            self._on_result(self.records)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the newest requested fetch has settled; False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._settled >= self._generation, timeout)

    def close(self) -> None:
        self._debouncer.cancel()
