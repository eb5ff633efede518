"""UTC time helpers.

Lock expiries and last-login stamps are compared against utc_now(), so
every datetime the core handles must be timezone-aware UTC. Repositories
pass database values through ensure_utc because some drivers return naive
datetimes.
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as aware UTC; naive values are taken to already be UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def minutes_from(now: datetime, minutes: int) -> datetime:
    """Instant `minutes` after now (used for lock expiry)."""
    return now + timedelta(minutes=minutes)
