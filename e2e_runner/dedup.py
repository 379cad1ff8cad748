"""Silence repeated failure alerts for the same test."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(kw_only=True)
class FailureNotificationCache:
    """Remembers when each test last had its failure escalated.

    A failing test is escalated the first time it fails, and again only once
    ``silence_window`` has elapsed since its previous escalation. Suppressed
    failures leave the stored timestamp untouched.
    """

    silence_window: timedelta
    clock: Callable[[], datetime] = utcnow
    _last_notified: dict[str, datetime] = field(
        default_factory=dict, init=False, repr=False
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def should_escalate(self, test_name: str) -> bool:
        """Decide whether a failure of ``test_name`` should be escalated now."""
        now = self.clock()
        with self._lock:
            last = self._last_notified.get(test_name)
            if last is not None and now - last < self.silence_window:
                return False
            self._last_notified[test_name] = now
            return True

    def last_notified(self, test_name: str) -> datetime | None:
        """Return when ``test_name`` was last escalated, if ever."""
        with self._lock:
            return self._last_notified.get(test_name)

    def __contains__(self, test_name: object) -> bool:
        with self._lock:
            return test_name in self._last_notified

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_notified)
