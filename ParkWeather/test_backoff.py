"""Tests for backoff tracking and rate-limit state."""
from backoff import BackoffTracker, RateLimitState


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_failures_reach_ceiling():
    tracker = BackoffTracker(max_failures=3)

    tracker.record_failure("Zion")
    tracker.record_failure("Zion")
    assert tracker.should_fallback("Zion") is False

    tracker.record_failure("Zion")
    assert tracker.should_fallback("Zion") is True
    assert tracker.get_record("Zion").failure_count == 3


def test_failure_record_stamps_last_attempt():
    clock = FakeClock()
    tracker = BackoffTracker(clock=clock)

    tracker.record_failure("k")
    clock.now += 5
    record = tracker.record_failure("k")

    assert record.failure_count == 2
    assert record.last_attempt == 1005.0


def test_success_clears_record():
    tracker = BackoffTracker(max_failures=1)
    tracker.record_failure("k")
    assert tracker.should_fallback("k") is True

    tracker.record_success("k")

    assert tracker.get_record("k") is None
    assert tracker.should_fallback("k") is False


def test_keys_are_tracked_separately():
    tracker = BackoffTracker(max_failures=1)
    tracker.record_failure("a")

    assert tracker.should_fallback("a") is True
    assert tracker.should_fallback("b") is False


def test_failures_forgotten_after_reset_window():
    clock = FakeClock()
    tracker = BackoffTracker(max_failures=3, reset_after_seconds=300, clock=clock)
    for _ in range(3):
        tracker.record_failure("k")

    clock.now += 299
    assert tracker.should_fallback("k") is True

    clock.now += 1
    assert tracker.should_fallback("k") is False
    assert tracker.get_record("k") is None


def test_no_reset_window_keeps_failures():
    clock = FakeClock()
    tracker = BackoffTracker(max_failures=1, reset_after_seconds=None, clock=clock)
    tracker.record_failure("k")

    clock.now += 1_000_000
    assert tracker.should_fallback("k") is True


def test_rate_limit_cooldown():
    clock = FakeClock()
    state = RateLimitState(cooldown_seconds=60, clock=clock)
    assert state.is_rate_limited() is False

    state.mark_rate_limited()
    assert state.reset_at == 1060.0
    clock.now = 1059.999
    assert state.is_rate_limited() is True

    clock.now = 1060.001
    assert state.is_rate_limited() is False
    assert state.is_limited is False
