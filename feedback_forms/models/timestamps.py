# feedback_forms/models/timestamps.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    # Python-side so ordering keeps microsecond precision on every backend
    return datetime.now(timezone.utc)
