"""Time sources for the domain.

Aggregates stamp timestamps in UTC; date-based queries compare against the
current UTC calendar date unless a reference date is passed explicitly.
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Return the current timezone-aware UTC time."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return the current calendar date in UTC."""
    return utc_now().date()


def as_utc(moment: datetime) -> datetime:
    """Treat a naive datetime as UTC; aware datetimes are returned unchanged."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment
