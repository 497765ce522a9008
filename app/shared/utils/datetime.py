"""UTC helpers. Every datetime the engine stores or compares is aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Default clock of the engine, resolver and use cases (tests inject their own)."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a value read back from the database to aware UTC.

    SQLite hands back naive datetimes even for timezone-aware columns;
    naive values are taken to be UTC already.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
