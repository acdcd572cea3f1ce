"""In-process change notification with deferred dispatch."""
from __future__ import annotations

import threading
from typing import Any, Callable

Handler = Callable[[str, dict[str, Any]], None]

COLLECTED = "collected"
RESPAWNED = "respawned"
WORKBENCH_CHANGED = "workbench_changed"
MIXED = "mixed"
FURNACE_CANCELLED = "furnace_cancelled"
PROCESSING_STARTED = "processing_started"
CRAFTED = "crafted"
JOB_OFFERED = "job_offered"
JOB_ACCEPTED = "job_accepted"
JOB_COMPLETED = "job_completed"
JOB_ABANDONED = "job_abandoned"
PROMOTED = "promoted"
STATUS = "status"


class SignalBus:
    """Publish queues a signal; flush delivers everything queued so far.

    Handlers subscribed to ``"*"`` receive every signal.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        with self._lock:
            self._queue.append((signal_name, data))

    def flush(self) -> None:
        with self._lock:
            snapshot = self._queue
            self._queue = []
        for signal_name, data in snapshot:
            for handler in list(self._subscribers.get(signal_name, [])):
                handler(signal_name, data)
            for handler in list(self._subscribers.get("*", [])):
                handler(signal_name, data)
