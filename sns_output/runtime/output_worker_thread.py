from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sns_output.domain.errors import SnsOutputError
from sns_output.domain.models import Event
from sns_output.output import SnsOutput

log = logging.getLogger("sns_output.runtime.worker")

_STOP = object()


@dataclass(frozen=True)
class OutputWorkerConfig:
    threads: int = 1
    max_queue: int = 2000
    poll_timeout_s: float = 0.5


class OutputWorkerThread:
    """
    Pool of daemon threads feeding events into a shared :class:`SnsOutput`.

    Concurrency Model
    -----------------
    - ``emit()`` is non-blocking by default; events are dropped (and counted)
      when the queue is full. ``emit(event, block=True)`` waits for space.
    - Each worker calls ``output.receive`` for one event at a time. Failures
      are logged and counted; nothing is retried.

    Parameters
    ----------
    output
        Output shared by all workers.
    cfg
        Pool settings.
    """

    def __init__(self, output: SnsOutput, cfg: OutputWorkerConfig | None = None):
        self._output = output
        self._cfg = cfg or OutputWorkerConfig()
        self._q: "queue.Queue[Any]" = queue.Queue(maxsize=self._cfg.max_queue)
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._sent = 0
        self._failed = 0
        self._dropped = 0
        self._threads: List[threading.Thread] = [
            threading.Thread(target=self._run, name=f"sns-output-worker-{i}", daemon=True)
            for i in range(max(1, self._cfg.threads))
        ]

    def start(self) -> None:
        for t in self._threads:
            if not t.is_alive():
                t.start()

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        """
        Stop the workers after the events already queued are processed.

        Parameters
        ----------
        timeout
            Maximum time to wait for each worker thread.
        """
        for _ in self._threads:
            try:
                self._q.put(_STOP, timeout=timeout)
            except queue.Full:
                break
        self.join(timeout=timeout)
        self._stop.set()

    def join(self, timeout: Optional[float] = 2.0) -> None:
        for t in self._threads:
            if t.is_alive():
                t.join(timeout=timeout)

    def emit(self, event: Event, block: bool = False) -> bool:
        """
        Queue an event for publishing.

        Parameters
        ----------
        event
            Event to publish.
        block
            Wait for queue space instead of dropping. Only for callers that
            may stall, such as a batch reader.

        Returns
        -------
        bool
            False when the event was dropped because the queue is full.
        """
        if block:
            self._q.put(event)
            return True
        try:
            self._q.put_nowait(event)
            return True
        except queue.Full:
            with self._lock:
                self._dropped += 1
            log.warning("Output queue full; dropping event")
            return False

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"sent": self._sent, "failed": self._failed, "dropped": self._dropped}

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                item = self._q.get(timeout=self._cfg.poll_timeout_s)
            except queue.Empty:
                continue

            if item is _STOP:
                break

            try:
                self._output.receive(item)
            except SnsOutputError as e:
                self._count(ok=False)
                log.error("Failed to publish event: %s", e)
            except Exception:
                self._count(ok=False)
                log.exception("Unexpected error while publishing event")
            else:
                self._count(ok=True)

    def _count(self, ok: bool) -> None:
        with self._lock:
            if ok:
                self._sent += 1
            else:
                self._failed += 1
