from datetime import datetime, timezone

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
