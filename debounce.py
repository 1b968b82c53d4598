"""
Debouncing for search-as-you-type.

A debounced function runs only after calls have stopped arriving for
`delay` seconds; each new call cancels the one still pending.
"""

import threading
from typing import Callable, Optional

from search import search_laws


class Debouncer:
    """
    Delay calls to `func` until input settles.

    Args:
        func: Function to call with the latest arguments.
        delay: Quiet period in seconds.
        timer_factory: Builds a startable, cancellable timer from
                       (delay, callback); threading.Timer by default.
    """

    def __init__(
        self,
        func: Callable,
        delay: float = 0.3,
        timer_factory: Callable = threading.Timer,
    ):
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.func = func
        self.delay = delay
        self._timer_factory = timer_factory
        self._timer = None
        self._pending: Optional[tuple] = None
        self._generation = 0
        self._lock = threading.Lock()

    def __call__(self, *args, **kwargs):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._generation += 1
            generation = self._generation
            self._timer = self._timer_factory(self.delay, lambda: self._fire(generation))
            if hasattr(self._timer, "daemon"):
                self._timer.daemon = True
            self._timer.start()

    def _fire(self, generation: int):
        with self._lock:
            # a newer call superseded this timer
            if generation != self._generation:
                return
            pending, self._pending = self._pending, None
            self._timer = None
        if pending is not None:
            args, kwargs = pending
            self.func(*args, **kwargs)

    @property
    def pending(self) -> bool:
        """Whether a call is waiting to run."""
        with self._lock:
            return self._pending is not None

    def cancel(self):
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self):
        """Run the pending call now instead of waiting."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            generation = self._generation
        self._fire(generation)


def create_debounced_search(
    callback: Callable,
    delay: float = 0.3,
    search_fn: Callable = search_laws,
    timer_factory: Callable = threading.Timer,
) -> Debouncer:
    """
    Debounced search: calling it with (query, records) eventually runs
    `callback(results, query)` for the latest call only.
    """
    def run(query, records):
        callback(search_fn(query, records), query)

    return Debouncer(run, delay=delay, timer_factory=timer_factory)
