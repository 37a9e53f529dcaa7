from datetime import datetime, UTC


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the TIMESTAMP (without time zone) columns."""
    return datetime.now(UTC).replace(tzinfo=None)
