"""Circuit breaker for calls to the resume analysis model.

After repeated failures the breaker opens and calls fail fast until the
reset timeout passes; then a single trial call decides whether it closes.
"""

import logging
import time
from datetime import datetime, timezone
from enum import Enum
from functools import wraps
from threading import Lock
from typing import Callable, Optional, Sequence, Type

logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerError(Exception):
    """Raised when circuit breaker is open."""

    def __init__(self, name: str, retry_after: float):
        self.name = name
        self.retry_after = max(0.0, retry_after)
        super().__init__(
            f"Circuit breaker '{name}' is open. Retry in {self.retry_after:.0f}s."
        )


class CircuitBreaker:
    """
    Usage:
        breaker = CircuitBreaker(name="gemini_api", fail_max=5, reset_timeout=180)

        @breaker
        def call_model(prompt):
            ...
    """

    def __init__(
        self,
        name: str,
        fail_max: int = 5,
        reset_timeout: int = 180,
        exclude: Optional[Sequence[Type[Exception]]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            name: Identifier used in logs
            fail_max: Consecutive failures that open the circuit
            reset_timeout: Seconds the circuit stays open
            exclude: Exception types that don't count as failures
            clock: Time source, seconds
        """
        self.name = name
        self.fail_max = fail_max
        self.reset_timeout = reset_timeout
        self.exclude = tuple(exclude or ())
        self._clock = clock

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._last_failure_wall: Optional[float] = None
        self._lock = Lock()

    @property
    def state(self) -> CircuitState:
        with self._lock:
            return self._current_state()

    def _current_state(self) -> CircuitState:
        if self._state == CircuitState.OPEN and self._opened_at is not None:
            if self._clock() - self._opened_at >= self.reset_timeout:
                logger.info(f"[CircuitBreaker:{self.name}] Reset timeout passed, allowing a trial call")
                self._state = CircuitState.HALF_OPEN
        return self._state

    def retry_after(self) -> float:
        """Seconds until the open circuit lets a call through."""
        with self._lock:
            if self._current_state() != CircuitState.OPEN or self._opened_at is None:
                return 0.0
            return self.reset_timeout - (self._clock() - self._opened_at)

    def _before_call(self) -> None:
        with self._lock:
            state = self._current_state()
            if state != CircuitState.OPEN:
                return
            remaining = self.reset_timeout - (self._clock() - (self._opened_at or 0))
        logger.warning(f"[CircuitBreaker:{self.name}] Circuit OPEN, blocking call")
        raise CircuitBreakerError(self.name, remaining)

    def _record_success(self) -> None:
        with self._lock:
            self._failure_count = 0
            if self._state == CircuitState.HALF_OPEN:
                logger.info(f"[CircuitBreaker:{self.name}] Trial call succeeded, closing circuit")
            self._state = CircuitState.CLOSED
            self._opened_at = None

    def _record_failure(self, exception: Exception) -> None:
        if isinstance(exception, self.exclude):
            return

        with self._lock:
            self._failure_count += 1
            self._last_failure_wall = time.time()

            if self._state == CircuitState.HALF_OPEN or self._failure_count >= self.fail_max:
                logger.warning(
                    f"[CircuitBreaker:{self.name}] Opening circuit after {self._failure_count} failures: "
                    f"{type(exception).__name__}"
                )
                self._state = CircuitState.OPEN
                self._opened_at = self._clock()

    def call(self, func: Callable, *args, **kwargs):
        """Call func under the breaker.

        Raises:
            CircuitBreakerError: If the circuit is open
        """
        self._before_call()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            self._record_failure(e)
            raise
        self._record_success()
        return result

    def __call__(self, func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            return self.call(func, *args, **kwargs)

        return wrapper

    def reset(self) -> None:
        """Close the circuit and forget past failures."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._opened_at = None
            self._last_failure_wall = None

    def get_status(self) -> dict:
        """Breaker status for health output."""
        return {
            "name": self.name,
            "state": self.state.value,
            "failure_count": self._failure_count,
            "fail_max": self.fail_max,
            "last_failure": (
                datetime.fromtimestamp(self._last_failure_wall, tz=timezone.utc).isoformat()
                if self._last_failure_wall else None
            ),
            "reset_timeout": self.reset_timeout,
        }
