"""Tests for failure alert deduplication."""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

from e2e_runner.dedup import FailureNotificationCache
from e2e_runner.testing.clock import FakeClock


def make_cache(clock: FakeClock, hours: float = 12) -> FailureNotificationCache:
    """Create a cache with the given silence window."""
    return FailureNotificationCache(silence_window=timedelta(hours=hours), clock=clock)


def test_first_failure_escalates(clock: FakeClock) -> None:
    """Escalates and records the time of a test's first failure."""
    cache = make_cache(clock)

    assert cache.should_escalate("LikeTopicTest") is True
    assert cache.last_notified("LikeTopicTest") == clock.now
    assert "LikeTopicTest" in cache


def test_repeat_failure_within_window_is_suppressed(clock: FakeClock) -> None:
    """A second failure inside the window is suppressed and not recorded."""
    cache = make_cache(clock)
    cache.should_escalate("LikeTopicTest")
    first = clock.now

    clock.advance(hours=11, minutes=59)

    assert cache.should_escalate("LikeTopicTest") is False
    assert cache.last_notified("LikeTopicTest") == first


def test_failure_after_window_escalates_again(clock: FakeClock) -> None:
    """A failure once the window has elapsed escalates and updates the record."""
    cache = make_cache(clock)
    cache.should_escalate("LikeTopicTest")

    clock.advance(hours=13)

    assert cache.should_escalate("LikeTopicTest") is True
    assert cache.last_notified("LikeTopicTest") == clock.now


def test_window_boundary_is_inclusive(clock: FakeClock) -> None:
    """Exactly one window after the last alert escalates again."""
    cache = make_cache(clock, hours=1)
    cache.should_escalate("PinTest")

    clock.advance(hours=1)

    assert cache.should_escalate("PinTest") is True


def test_elapsed_time_is_compared_in_full(clock: FakeClock) -> None:
    """Days count toward the window, not just the hour component."""
    cache = make_cache(clock, hours=12)
    cache.should_escalate("PinTest")

    clock.advance(days=1, hours=2)

    assert cache.should_escalate("PinTest") is True


def test_zero_window_always_escalates(clock: FakeClock) -> None:
    """With no silence window every failure escalates."""
    cache = make_cache(clock, hours=0)

    assert cache.should_escalate("PinTest") is True
    assert cache.should_escalate("PinTest") is True


def test_tests_are_tracked_independently(clock: FakeClock) -> None:
    """Suppression of one test does not affect another."""
    cache = make_cache(clock)
    cache.should_escalate("PinTest")

    assert cache.should_escalate("LikeTopicTest") is True
    assert cache.should_escalate("PinTest") is False
    assert len(cache) == 2


def test_concurrent_failures_escalate_once(clock: FakeClock) -> None:
    """Racing completions of the same test escalate exactly once."""
    cache = make_cache(clock)

    with ThreadPoolExecutor(max_workers=16) as pool:
        decisions = list(pool.map(cache.should_escalate, ["RapidLikeTest"] * 64))

    assert decisions.count(True) == 1
