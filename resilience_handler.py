"""
Resilience Handler - Fallbacks and circuit breaking around optional providers
"""
from typing import Callable, Any, Dict, Optional, Tuple, Type
import threading
import time

from structured_logger import get_logger


class ResilienceHandler:
    """Runs a primary function with a fallback and a per-service circuit breaker"""

    def __init__(self, failure_threshold: int = 3, cooldown_seconds: float = 60.0):
        """
        Initialize resilience handler

        Args:
            failure_threshold: Consecutive failures before the circuit opens
            cooldown_seconds: Time an open circuit waits before a trial call
        """
        self.failure_threshold = failure_threshold
        self.cooldown_seconds = cooldown_seconds
        self.circuit_breaker_state: Dict[str, Dict[str, Any]] = {}  # service_name -> state
        self._lock = threading.Lock()
        self.logger = get_logger()

    def _state(self, service_name: str) -> Dict[str, Any]:
        return self.circuit_breaker_state.setdefault(service_name, {
            'failures': 0,
            'last_failure': None,
            'state': 'closed'  # closed, open, half-open
        })

    def is_open(self, service_name: str) -> bool:
        """Check whether calls to the service are currently short-circuited"""
        with self._lock:
            state = self._state(service_name)
            if state['state'] != 'open':
                return False
            if time.time() - state['last_failure'] > self.cooldown_seconds:
                state['state'] = 'half-open'
                return False
            return True

    def record_success(self, service_name: str):
        with self._lock:
            state = self._state(service_name)
            state['failures'] = 0
            state['state'] = 'closed'

    def record_failure(self, service_name: str):
        with self._lock:
            state = self._state(service_name)
            state['failures'] += 1
            state['last_failure'] = time.time()
            if state['state'] == 'half-open' or state['failures'] >= self.failure_threshold:
                state['state'] = 'open'

    def with_fallback(self, service_name: str, primary_func: Callable[[], Any],
                      fallback_func: Callable[[], Any],
                      recoverable: Tuple[Type[BaseException], ...] = (Exception,)) -> Tuple[Any, bool]:
        """
        Execute primary function, falling back on recoverable failures

        Args:
            service_name: Name used for circuit breaking and logging
            primary_func: Function to try first
            fallback_func: Function used when the primary fails or the circuit is open
            recoverable: Exception types that trigger the fallback

        Returns:
            (result, used_fallback)
        """
        if self.is_open(service_name):
            self.logger.debug("Circuit open, using fallback", service=service_name)
            return fallback_func(), True

        try:
            result = primary_func()
        except recoverable as e:
            self.record_failure(service_name)
            self.logger.warning("Primary provider failed, using fallback",
                                service=service_name,
                                error_type=type(e).__name__,
                                error_message=str(e))
            return fallback_func(), True

        self.record_success(service_name)
        return result, False

    def get_state(self, service_name: Optional[str] = None) -> Dict[str, Any]:
        with self._lock:
            if service_name is not None:
                return dict(self._state(service_name))
            return {name: dict(state) for name, state in self.circuit_breaker_state.items()}
