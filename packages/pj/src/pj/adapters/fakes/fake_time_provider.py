"""Fake time provider for testing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


class FakeTimeProvider:
    """Fake implementation of TimeProvider with a manually advanced clock.

    Example:
        >>> clock = FakeTimeProvider(datetime(2026, 1, 1, tzinfo=timezone.utc))
        >>> clock.advance(timedelta(days=7))
        >>> clock.now().day
        8
    """

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def set_time(self, now: datetime) -> None:
        self._now = now

    def advance(self, delta: timedelta) -> None:
        self._now = self._now + delta
