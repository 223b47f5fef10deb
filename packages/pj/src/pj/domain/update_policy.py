"""Update-check cadence for the cached binary."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pj.domain.binary import CacheMetadata


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def is_update_check_due(
    metadata: CacheMetadata | None,
    now: datetime,
    interval_days: int,
) -> bool:
    """Decide whether the registry should be polled for a newer release.

    A poll is due when nothing was ever installed, or when at least
    ``interval_days`` have passed since the last check. Naive timestamps are
    read as UTC.

    Args:
        metadata: Persisted cache metadata, or None if absent.
        now: Current time.
        interval_days: Minimum days between checks.

    Returns:
        True if an update check should be attempted.
    """
    if metadata is None:
        return True

    elapsed = _as_utc(now) - _as_utc(metadata.last_update_check)
    return elapsed >= timedelta(days=interval_days)
