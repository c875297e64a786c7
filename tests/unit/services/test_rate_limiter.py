"""
Unit tests for the sliding window rate limiter
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.adapter.services.rate_limit_store import InMemoryRateLimitStore
from src.app.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryRateLimitStore()


def make_limiter(store, clock, interval_ms=1000, max_requests=5, prefix="test"):
    return RateLimiter(
        store, interval_ms=interval_ms, max_requests=max_requests, prefix=prefix, clock=clock
    )


def test_accepts_up_to_max_requests_then_rejects(store, clock):
    limiter = make_limiter(store, clock)

    remaining = [limiter.check("k").remaining for _ in range(5)]
    assert remaining == [4, 3, 2, 1, 0]

    result = limiter.check("k")
    assert result.success is False
    assert result.remaining == 0
    assert result.reset_in >= 1


def test_accepted_result_reports_full_interval_in_seconds(store, clock):
    limiter = make_limiter(store, clock, interval_ms=1500)

    result = limiter.check("k")

    assert result.success is True
    assert result.reset_in == 2


def test_login_scenario_reset_in_counts_down_from_oldest_request(store, clock):
    """Five logins within a second, the sixth one second later"""
    limiter = make_limiter(store, clock, interval_ms=15 * 60 * 1000, prefix="login")

    results = []
    for _ in range(5):
        results.append(limiter.check("1.2.3.4"))
        clock.advance(200)
    assert all(r.success for r in results)
    assert [r.remaining for r in results] == [4, 3, 2, 1, 0]

    # first request at t0, now t0 + 1000ms
    result = limiter.check("1.2.3.4")

    assert result.success is False
    assert result.remaining == 0
    assert result.reset_in == 899


def test_reset_in_is_rounded_up(store, clock):
    limiter = make_limiter(store, clock, interval_ms=1000, max_requests=1)
    limiter.check("k")
    clock.advance(999)

    result = limiter.check("k")

    assert result.success is False
    assert result.reset_in == 1


def test_window_slides_after_interval(store, clock):
    limiter = make_limiter(store, clock)
    for _ in range(5):
        limiter.check("k")
    assert limiter.check("k").success is False

    clock.advance(1000)
    result = limiter.check("k")

    assert result.success is True
    assert result.remaining == 4


def test_only_expired_timestamps_leave_the_window(store, clock):
    limiter = make_limiter(store, clock, max_requests=2)
    limiter.check("k")  # t=0
    clock.advance(600)
    limiter.check("k")  # t=600
    assert limiter.check("k").success is False

    clock.advance(400)  # t=1000, first request is out, second still counts
    result = limiter.check("k")
    assert result.success is True
    assert result.remaining == 0

    rejected = limiter.check("k")
    assert rejected.success is False
    # oldest in window is t=600, frees at t=1600
    assert rejected.reset_in == 1


def test_rejected_requests_are_not_recorded(store, clock):
    limiter = make_limiter(store, clock, max_requests=1)
    limiter.check("k")
    for _ in range(10):
        clock.advance(50)
        limiter.check("k")

    clock.advance(500)  # t=1000 since the only accepted request
    assert limiter.check("k").success is True


def test_reset_clears_an_exhausted_key(store, clock):
    limiter = make_limiter(store, clock)
    for _ in range(5):
        limiter.check("k")
    assert limiter.check("k").success is False

    limiter.reset("k")

    result = limiter.check("k")
    assert result.success is True
    assert result.remaining == 4


def test_keys_are_tracked_independently(store, clock):
    limiter = make_limiter(store, clock, max_requests=1)

    assert limiter.check("a").success is True
    assert limiter.check("b").success is True
    assert limiter.check("a").success is False


def test_prefixes_namespace_limiters_sharing_a_store(store, clock):
    login = make_limiter(store, clock, max_requests=1, prefix="login")
    otp_send = make_limiter(store, clock, max_requests=1, prefix="otp-send")

    assert login.check("1.2.3.4").success is True
    assert login.check("1.2.3.4").success is False
    assert otp_send.check("1.2.3.4").success is True

    login.reset("1.2.3.4")
    assert otp_send.check("1.2.3.4").success is False


def test_invalid_configuration_is_rejected(store):
    with pytest.raises(ValueError):
        RateLimiter(store, interval_ms=0, max_requests=5)
    with pytest.raises(ValueError):
        RateLimiter(store, interval_ms=1000, max_requests=0)


def test_concurrent_checks_never_exceed_max_requests(store, clock):
    limiter = make_limiter(store, clock, max_requests=10)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: limiter.check("shared"), range(200)))

    assert sum(1 for r in results if r.success) == 10
