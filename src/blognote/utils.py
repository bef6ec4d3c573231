from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def to_iso(value: datetime) -> str:
    """Render a timestamp in the canonical form used by all API views."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds")
