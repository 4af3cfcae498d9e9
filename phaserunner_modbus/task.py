"""A cooperative worker that runs a setup / run loop / cleanup cycle in a thread."""

from __future__ import annotations

import threading

__all__ = ["Task"]


class Task:
    """Base class for a long running worker.

    Subclasses override :meth:`setup`, :meth:`run` and :meth:`cleanup`.
    Once started, the worker thread calls :meth:`setup` once, calls
    :meth:`run` repeatedly until :meth:`stop` is called, then calls
    :meth:`cleanup`.
    """

    def __init__(self) -> None:
        self.name: str | None = None
        self._thread: threading.Thread | None = None
        self._stopping = threading.Event()
        self._wake = threading.Condition()
        self._resumed = False

    @property
    def running(self) -> bool:
        """True while the worker thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopped(self) -> bool:
        """True once a stop has been requested."""
        return self._stopping.is_set()

    def start(self, name: str | None = None) -> bool:
        """Start the worker thread; False if it is already running."""
        if self.running:
            return False
        self._stopping.clear()
        with self._wake:
            self._resumed = False
        self.name = name
        self._thread = threading.Thread(target=self._bootstrap, name=name, daemon=True)
        self._thread.start()
        return True

    def stop(self) -> None:
        """Ask the worker to leave its loop after the current :meth:`run`."""
        self._stopping.set()
        with self._wake:
            self._wake.notify_all()

    def setup(self) -> None:
        """Called once in the worker thread before the loop starts."""

    def run(self) -> None:
        """Called repeatedly in the worker thread until stopped."""

    def cleanup(self) -> None:
        """Called once in the worker thread after the loop ends."""

    def sleep(self, time_ms: float) -> None:
        """Wait ``time_ms`` milliseconds, returning early if stopped."""
        self._stopping.wait(max(time_ms, 0) / 1000.0)

    def suspend(self) -> None:
        """Block until :meth:`resume` or :meth:`stop` is called.

        A resume that arrives before the suspend is remembered, so the
        next suspend returns at once. Does nothing if never started.
        """
        if self._thread is None:
            return
        with self._wake:
            while not self._resumed and not self._stopping.is_set():
                self._wake.wait()
            self._resumed = False

    def resume(self) -> None:
        """Wake a suspended worker. Does nothing if never started."""
        if self._thread is None:
            return
        with self._wake:
            self._resumed = True
            self._wake.notify_all()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker thread to end; True if it has ended."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _bootstrap(self) -> None:
        self.setup()
        try:
            while not self._stopping.is_set():
                self.run()
        finally:
            self.cleanup()