"""
Tests for the circuit breaker and fallback helper
"""
import time

import pytest

from enhanced_error_handler import EmbeddingProviderError
from resilience_handler import ResilienceHandler


def fail():
    raise EmbeddingProviderError("down")


def test_primary_result_is_used():
    handler = ResilienceHandler()
    assert handler.with_fallback("svc", lambda: "primary", lambda: "fallback") == ("primary", False)
    assert handler.get_state("svc")['state'] == 'closed'


def test_recoverable_failure_uses_fallback():
    handler = ResilienceHandler()
    result = handler.with_fallback("svc", fail, lambda: "fallback",
                                   recoverable=(EmbeddingProviderError,))
    assert result == ("fallback", True)
    assert handler.get_state("svc")['failures'] == 1


def test_unrecoverable_failure_propagates():
    handler = ResilienceHandler()
    with pytest.raises(KeyError):
        handler.with_fallback("svc", lambda: {}['x'], lambda: "fallback",
                              recoverable=(EmbeddingProviderError,))


def test_circuit_half_opens_after_cooldown():
    handler = ResilienceHandler(failure_threshold=1, cooldown_seconds=0.05)
    handler.with_fallback("svc", fail, lambda: None)
    assert handler.is_open("svc")

    time.sleep(0.1)
    assert not handler.is_open("svc")
    assert handler.with_fallback("svc", lambda: "ok", lambda: None) == ("ok", False)
    assert handler.get_state("svc")['state'] == 'closed'


def test_half_open_failure_reopens():
    handler = ResilienceHandler(failure_threshold=3, cooldown_seconds=0.05)
    for _ in range(3):
        handler.with_fallback("svc", fail, lambda: None)
    time.sleep(0.1)
    assert not handler.is_open("svc")
    handler.with_fallback("svc", fail, lambda: None)
    assert handler.is_open("svc")
