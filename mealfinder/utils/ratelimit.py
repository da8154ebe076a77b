"""
Rate-limiting decorators for UI-driven operations.

Two generic wrappers, both parameterized by a time window:

- debounce(wait): postpone a call until no new call has arrived for `wait`
  seconds; only the last arguments are used. Runs on a threading.Timer.
- throttle(wait): accept the first call, then drop further calls until `wait`
  seconds have passed (leading edge, no trailing call).

Neither wrapper knows anything about meals or queries; the orchestrator and the
Streamlit page apply them to their own handlers.
"""

import functools
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class Debounced:
    """
    Callable wrapper that delays execution until input goes quiet.

    Each call cancels the pending timer and starts a new one. Exceptions raised
    by the wrapped function on the timer thread are logged, not re-raised.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        if wait < 0:
            raise ValueError(f"wait must not be negative, got {wait}")
        self.func = func
        self.wait = wait
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]] = None
        functools.update_wrapper(self, func)

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = self._timer_factory(self.wait, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        """True while a call is waiting for the quiet period to end."""
        with self._lock:
            return self._pending is not None

    def _take_pending(self) -> Optional[Tuple[Tuple[Any, ...], Dict[str, Any]]]:
        with self._lock:
            pending = self._pending
            self._pending = None
            self._timer = None
            return pending

    def _fire(self) -> None:
        pending = self._take_pending()
        if pending is None:
            return
        args, kwargs = pending
        try:
            self.func(*args, **kwargs)
        except Exception:
            logger.error("Debounced call to %s failed", getattr(self.func, "__name__", self.func), exc_info=True)

    def flush(self) -> Any:
        """
        Run the pending call immediately on the calling thread.

        Returns:
            The wrapped function's return value, or None if nothing was pending.
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
        pending = self._take_pending()
        if pending is None:
            return None
        args, kwargs = pending
        return self.func(*args, **kwargs)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None


class Throttled:
    """
    Callable wrapper that accepts at most one call per window.

    Dropped calls return None; accepted calls return the wrapped result.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if wait < 0:
            raise ValueError(f"wait must not be negative, got {wait}")
        self.func = func
        self.wait = wait
        self._clock = clock
        self._lock = threading.Lock()
        self._last_accepted: Optional[float] = None
        functools.update_wrapper(self, func)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            now = self._clock()
            if self._last_accepted is not None and now - self._last_accepted < self.wait:
                logger.debug("Throttled call to %s dropped", getattr(self.func, "__name__", self.func))
                return None
            self._last_accepted = now
        return self.func(*args, **kwargs)

    def reset(self) -> None:
        """Forget the last accepted call so the next one goes through."""
        with self._lock:
            self._last_accepted = None


def debounce(wait: float = 0.3, **options: Any) -> Callable[[Callable[..., Any]], Debounced]:
    """
    Decorator form of Debounced.

    Usage:
        @debounce(0.5)
        def on_input(text):
            ...
    """
    def decorator(func: Callable[..., Any]) -> Debounced:
        return Debounced(func, wait, **options)
    return decorator


def throttle(wait: float = 0.6, **options: Any) -> Callable[[Callable[..., Any]], Throttled]:
    """
    Decorator form of Throttled.

    Usage:
        @throttle(0.6)
        def on_next_page():
            ...
    """
    def decorator(func: Callable[..., Any]) -> Throttled:
        return Throttled(func, wait, **options)
    return decorator
