"""Thread-based batching dispatcher fanning log events out to sinks.

Purpose
-------
Decouple producer threads from IO-bound sinks: producers only touch a bounded
queue, a single background worker assembles batches and performs all sink
I/O.

Contents
--------
* :class:`AsyncDispatcher` - background worker implementation of
  :class:`DispatcherPort`.
* :class:`DispatcherStats` - immutable counter snapshot.

System Role
-----------
Owns the only structure shared between threads. Insertion and the accepting
check happen under one condition lock, so once shutdown flips the state to
``STOPPING`` nothing new can enter the queue and the worker can drain it to
empty before closing the sinks.
"""

from __future__ import annotations

import logging
import math
import queue
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from lib_log_async.application.ports.dispatcher import DispatcherPort
from lib_log_async.application.ports.sink import SinkPort
from lib_log_async.domain.errors import ConfigurationError, PipelineClosedError
from lib_log_async.domain.events import LogEvent
from lib_log_async.domain.policy import BackpressurePolicy, DispatcherState


LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None

# Wakes the worker on shutdown; never delivered to sinks.
_WAKE = object()


@dataclass(frozen=True, slots=True)
class DispatcherStats:
    """Point-in-time view of the dispatcher counters."""

    state: DispatcherState
    queued: int
    accepted: int
    dropped: int
    batches: int
    delivered: int
    sink_failures: int


class AsyncDispatcher(DispatcherPort):
    """Drain a bounded queue into size/time bounded batches on a worker thread.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_async.domain.levels import LogLevel
    >>> class ListSink:
    ...     def __init__(self):
    ...         self.batches = []
    ...     def consume(self, batch):
    ...         self.batches.append([event.message for event in batch])
    ...     def close(self):
    ...         pass
    >>> sink = ListSink()
    >>> dispatcher = AsyncDispatcher([sink], capacity=8, batch_size=4, flush_interval=0.05)
    >>> event = LogEvent(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'main', 'svc', 'msg')
    >>> dispatcher.enqueue(event)
    True
    >>> dispatcher.shutdown()
    >>> sink.batches
    [['msg']]
    """

    def __init__(
        self,
        sinks: Iterable[SinkPort],
        *,
        capacity: int = 10_000,
        batch_size: int = 128,
        flush_interval: float = 1.0,
        policy: BackpressurePolicy | str = BackpressurePolicy.BLOCK,
        on_drop: Callable[[LogEvent], None] | None = None,
        diagnostic: DiagnosticHook = None,
        thread_name: str = "log-dispatcher",
    ) -> None:
        """Validate the configuration and start the worker thread.

        Parameters
        ----------
        sinks:
            Fan-out targets, invoked in this order for every batch.
        capacity:
            Maximum number of queued events before backpressure applies.
        batch_size:
            Upper bound on events handed to a sink in one ``consume`` call.
        flush_interval:
            Seconds the worker waits for the next event before looping; bounds
            delivery latency under low load.
        policy:
            Default :class:`BackpressurePolicy` used by :meth:`enqueue`.
        on_drop:
            Optional callback invoked for every event discarded under ``DROP``.
        diagnostic:
            Optional ``(name, payload)`` hook receiving sink failures and
            shutdown timeouts.
        """
        sink_list = tuple(sinks)
        if not sink_list:
            raise ConfigurationError("AsyncDispatcher requires at least one sink")
        if capacity <= 0:
            raise ConfigurationError("capacity must be positive")
        if batch_size <= 0:
            raise ConfigurationError("batch_size must be positive")
        if flush_interval <= 0:
            raise ConfigurationError("flush_interval must be positive")
        if not math.isfinite(flush_interval):
            raise ConfigurationError("flush_interval must be finite")
        try:
            resolved_policy = BackpressurePolicy.from_name(policy)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        self._sinks = sink_list
        self._capacity = capacity
        self._batch_size = batch_size
        self._flush_interval = flush_interval
        self._policy = resolved_policy
        self._on_drop = on_drop
        self._diagnostic = diagnostic
        # One extra slot so the wake-up marker always fits.
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity + 1)
        self._size = 0
        self._accepting = threading.Condition(threading.Lock())
        self._state = DispatcherState.RUNNING
        self._accepted = 0
        self._dropped = 0
        self._batches = 0
        self._delivered = 0
        self._sink_failures = 0
        self._worker_error: BaseException | None = None
        self._thread = threading.Thread(target=self._run, name=thread_name, daemon=True)
        self._thread.start()

    @property
    def state(self) -> DispatcherState:
        return self._state

    @property
    def policy(self) -> BackpressurePolicy:
        return self._policy

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def flush_interval(self) -> float:
        return self._flush_interval

    @property
    def sinks(self) -> tuple[SinkPort, ...]:
        return self._sinks

    @property
    def dropped(self) -> int:
        """Number of events discarded because the queue was full."""
        return self._dropped

    @property
    def sink_failures(self) -> int:
        """Number of ``consume``/``close`` calls that raised."""
        return self._sink_failures

    def stats(self) -> DispatcherStats:
        """Return a consistent snapshot of the counters."""
        with self._accepting:
            return DispatcherStats(
                state=self._state,
                queued=self._size,
                accepted=self._accepted,
                dropped=self._dropped,
                batches=self._batches,
                delivered=self._delivered,
                sink_failures=self._sink_failures,
            )

    def enqueue(self, event: LogEvent, policy: BackpressurePolicy | None = None) -> bool:
        """Insert ``event`` for asynchronous delivery.

        Returns ``True`` when the event was accepted and ``False`` when the
        queue was full and the ``DROP`` policy discarded it. Under ``BLOCK``
        the caller waits for the worker to free a slot.

        Raises
        ------
        PipelineClosedError
            When shutdown has begun, including while the caller was blocked.
        """
        effective = self._policy if policy is None else policy
        with self._accepting:
            while True:
                if self._state is not DispatcherState.RUNNING:
                    raise PipelineClosedError(f"dispatcher is {self._state.value}; event rejected")
                if self._size < self._capacity:
                    self._queue.put_nowait(event)
                    self._size += 1
                    self._accepted += 1
                    return True
                if effective is BackpressurePolicy.DROP:
                    self._dropped += 1
                    break
                self._accepting.wait()
        self._handle_drop(event)
        return False

    def shutdown(self, timeout: float | None = None) -> None:
        """Stop accepting events, drain the queue, and close every sink once.

        Parameters
        ----------
        timeout:
            Seconds to wait for the worker to finish draining. ``None`` waits
            until it is done.

        Raises
        ------
        RuntimeError
            When the worker is still running after ``timeout`` or terminated
            without draining the queue.
        """
        with self._accepting:
            if self._state is DispatcherState.RUNNING:
                self._state = DispatcherState.STOPPING
                self._queue.put_nowait(_WAKE)
                self._accepting.notify_all()
        if threading.current_thread() is self._thread:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            self._emit_diagnostic("dispatcher_shutdown_timeout", {"timeout": timeout, "queued": self._size})
            raise RuntimeError("Dispatcher worker failed to stop within the allotted timeout")
        if self._state is not DispatcherState.STOPPED:
            self._emit_diagnostic(
                "dispatcher_worker_died",
                {"queued": self._size, "exception": repr(self._worker_error)},
            )
            raise RuntimeError("Dispatcher worker terminated without draining the queue") from self._worker_error

    def _run(self) -> None:
        """Worker loop: wait, assemble a batch, fan out, repeat until drained."""
        try:
            while True:
                with self._accepting:
                    if self._state is not DispatcherState.RUNNING and self._size == 0:
                        break
                batch = self._next_batch()
                if batch:
                    self._deliver(batch)
        except Exception as exc:  # noqa: BLE001
            # Reject further events and wake blocked producers; STOPPED is never reached.
            with self._accepting:
                self._worker_error = exc
                if self._state is DispatcherState.RUNNING:
                    self._state = DispatcherState.STOPPING
                self._accepting.notify_all()
            LOGGER.error("Dispatcher worker crashed; %d queued event(s) will not be delivered", self._size, exc_info=exc)
            self._emit_diagnostic("dispatcher_worker_error", {"queued": self._size, "exception": repr(exc)})
            self._close_sinks()
            return
        self._close_sinks()
        with self._accepting:
            self._state = DispatcherState.STOPPED
            self._accepting.notify_all()

    def _next_batch(self) -> list[LogEvent]:
        """Wait up to the flush interval, then drain without blocking."""
        try:
            first = self._queue.get(timeout=self._flush_interval)
        except queue.Empty:
            return []
        batch = [] if first is _WAKE else [first]
        while len(batch) < self._batch_size:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                break
            if item is not _WAKE:
                batch.append(item)
        if batch:
            with self._accepting:
                self._size -= len(batch)
                self._accepting.notify_all()
        return batch  # type: ignore[return-value]

    def _deliver(self, batch: list[LogEvent]) -> None:
        """Hand ``batch`` to every sink, isolating per-sink failures."""
        for sink in self._sinks:
            try:
                sink.consume(batch)
            except Exception as exc:  # noqa: BLE001
                self._sink_failures += 1
                LOGGER.error("Sink %s failed to consume a batch; continuing", type(sink).__name__, exc_info=exc)
                self._emit_diagnostic(
                    "sink_consume_error",
                    {"sink": type(sink).__name__, "batch_size": len(batch), "exception": repr(exc)},
                )
        self._batches += 1
        self._delivered += len(batch)

    def _close_sinks(self) -> None:
        for sink in self._sinks:
            try:
                sink.close()
            except Exception as exc:  # noqa: BLE001
                self._sink_failures += 1
                LOGGER.error("Sink %s failed to close", type(sink).__name__, exc_info=exc)
                self._emit_diagnostic("sink_close_error", {"sink": type(sink).__name__, "exception": repr(exc)})

    def _handle_drop(self, event: LogEvent) -> None:
        """Invoke the drop callback when the queue rejects an event."""
        if self._on_drop is None:
            return
        try:
            self._on_drop(event)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Dispatcher drop handler raised an exception; continuing", exc_info=exc)
            self._emit_diagnostic(
                "dispatcher_drop_callback_error",
                {"logger": event.logger_name, "exception": repr(exc)},
            )

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Dispatcher diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["AsyncDispatcher", "DiagnosticHook", "DispatcherStats"]
