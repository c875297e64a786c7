"""
Unit tests for the in-memory rate limit store
"""

from src.adapter.services.rate_limit_store import InMemoryRateLimitStore
from src.app.services.rate_limiter import RateLimiter


def test_set_window_with_no_timestamps_removes_key():
    store = InMemoryRateLimitStore()
    store.set_window("login:a", [1.0, 2.0], 1000)
    assert store.get_window("login:a") == [1.0, 2.0]

    store.set_window("login:a", [], 1000)

    assert store.get_window("login:a") == []
    assert len(store) == 0


def test_get_window_returns_a_copy():
    store = InMemoryRateLimitStore()
    store.set_window("k", [1.0], 1000)

    window = store.get_window("k")
    window.append(2.0)

    assert store.get_window("k") == [1.0]


def test_sweep_uses_each_keys_own_interval():
    store = InMemoryRateLimitStore()
    store.set_window("short:a", [0.0, 500.0], 1000)
    store.set_window("long:a", [0.0], 60_000)

    removed = store.sweep(now_ms=1200.0)

    assert removed == 0
    assert store.get_window("short:a") == [500.0]
    assert store.get_window("long:a") == [0.0]


def test_sweep_removes_idle_keys_across_limiters():
    store = InMemoryRateLimitStore()
    now = [0.0]
    login = RateLimiter(store, interval_ms=1000, max_requests=5, prefix="login", clock=lambda: now[0])
    otp = RateLimiter(store, interval_ms=5000, max_requests=5, prefix="otp-send", clock=lambda: now[0])
    login.check("1.1.1.1")
    login.check("2.2.2.2")
    otp.check("1.1.1.1")
    assert len(store) == 3

    removed = store.sweep(now_ms=2000.0)

    assert removed == 2
    assert len(store) == 1
    assert store.get_window("otp-send:1.1.1.1") == [0.0]


def test_delete_unknown_key_is_a_noop():
    store = InMemoryRateLimitStore()
    store.delete("missing")
    assert len(store) == 0
