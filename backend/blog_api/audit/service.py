"""
Asynchronous audit event log.

Request handlers hand short event strings to an EventLogger, which buffers
them in a bounded queue and appends them to a text file from a single
background thread. Handlers never wait on file I/O: when the queue is full
the event is dropped and a warning is logged.
"""

import logging
import queue
import threading
import time
from datetime import datetime

from fastapi import Request

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_STOP = object()


class EventLogger:
    """
    Bounded, single-writer event pipeline.

    Every event accepted by ``log_event`` before ``stop`` is called is
    written, in acceptance order, before ``stop`` returns. Each line is
    ``[YYYY-MM-DD HH:MM:SS] <event>`` stamped at write time.
    """

    def __init__(self, file_path: str, capacity: int = 100, throttle_seconds: float = 1.0):
        if capacity < 1:
            raise ValueError("Event log capacity must be at least 1.")
        self._file = open(file_path, "a", encoding="utf-8")
        self._events: queue.Queue = queue.Queue(maxsize=capacity)
        self._throttle_seconds = throttle_seconds
        self._intake_lock = threading.Lock()
        self._closed = False
        self._worker: threading.Thread | None = None
        self._done = threading.Event()

    def start(self) -> None:
        """Start the background writer. Can be called once."""
        with self._intake_lock:
            if self._worker is not None:
                raise RuntimeError("Event logger already started")
            if self._closed:
                raise RuntimeError("Event logger already stopped")
            self._worker = threading.Thread(target=self._run, name="event-logger", daemon=True)
            self._worker.start()

    def log_event(self, event: str) -> bool:
        """
        Enqueue ``event`` without blocking.

        Returns False when the event was dropped (queue full or logger
        stopped). Callers are free to ignore the result.
        """
        with self._intake_lock:
            if self._closed:
                logger.warning("Event logger is stopped, dropping event: %s", event)
                return False
            try:
                self._events.put_nowait(event)
            except queue.Full:
                logger.warning("Event logger channel is full, dropping event: %s", event)
                return False
        return True

    def stop(self) -> None:
        """
        Close the intake, wait for queued events to be written, close the file.

        Calling it again is a no-op.
        """
        with self._intake_lock:
            if self._closed:
                return
            self._closed = True

        if self._worker is None:
            # never started: nothing consumes the queue, drain it here
            self._drain()
        else:
            # nothing can be enqueued after _closed, so the marker is last
            self._events.put(_STOP)
            self._done.wait()
            self._worker.join()
        logger.info("Event logger stopped gracefully")

    @property
    def stopped(self) -> bool:
        return self._closed and self._done.is_set()

    def _run(self) -> None:
        while True:
            event = self._events.get()
            if event is _STOP:
                break
            if self._throttle_seconds > 0:
                time.sleep(self._throttle_seconds)
            self._write(event)
        self._finish()

    def _drain(self) -> None:
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                break
            if self._throttle_seconds > 0:
                time.sleep(self._throttle_seconds)
            self._write(event)
        self._finish()

    def _finish(self) -> None:
        try:
            self._file.close()
        except OSError:
            logger.exception("Failed to close event log file")
        self._done.set()

    def _write(self, event: str) -> None:
        timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        try:
            self._file.write(f"[{timestamp}] {event}\n")
            self._file.flush()
        except (OSError, ValueError):
            logger.exception("Failed to write to event log file")


def get_event_logger(request: Request) -> EventLogger:
    return request.app.state.event_logger
