"""Single-slot delayed task scheduling."""

import threading


class DebounceTimer:
    """Run a callable once input has been quiet for a fixed delay.

    Holds at most one pending task. Scheduling again cancels the pending one,
    so only the latest call ever fires.
    """

    def __init__(self, delay):
        """Initialize the timer.

        Args:
            delay (float): Quiet period in seconds
        """
        self.delay = delay
        self._timer = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self):
        """True while a scheduled task has not fired or been cancelled."""
        with self._lock:
            return self._timer is not None

    def schedule(self, func, *args, **kwargs):
        """Cancel any pending task and schedule func after the delay."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            timer = threading.Timer(self.delay, self._fire, args=(generation, func, args, kwargs))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self):
        """Drop the pending task, if any."""
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        # A timer that already woke up but has not taken the lock yet sees a stale generation
        self._generation += 1

    def _fire(self, generation, func, args, kwargs):
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        func(*args, **kwargs)
