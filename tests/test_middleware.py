from __future__ import annotations

from focusforge.api.middleware import RateLimiter


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_rate_limiter_counts_hits_within_window():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=10, clock=clock)

    first = limiter.hit("1.1.1.1")
    second = limiter.hit("1.1.1.1")
    third = limiter.hit("1.1.1.1")

    assert first.allowed and first.remaining == 1
    assert second.allowed and second.remaining == 0
    assert not third.allowed
    assert third.reset_seconds == 10


def test_rate_limiter_resets_after_window():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=1, window_seconds=10, clock=clock)
    limiter.hit("1.1.1.1")
    assert not limiter.hit("1.1.1.1").allowed

    clock.now = 10

    assert limiter.hit("1.1.1.1").allowed


def test_rate_limiter_forgets_clients_that_never_return():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=5, window_seconds=10, clock=clock)

    for second in range(1000):
        clock.now = float(second)
        limiter.hit(f"client-{second}")

    assert len(limiter) <= 20
    assert limiter.hit("client-999").remaining == 3
