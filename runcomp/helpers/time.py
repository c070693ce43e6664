from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo
from typing import Optional

def utc_to_local(dt: Optional[datetime], tz_name: str) -> Optional[datetime]:
    if not dt:
        return None

    # Treat naive DB values as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(ZoneInfo(tz_name))

def local_now(tz_name: str) -> datetime:
    """
    Current wall-clock time in the competition zone, as a naive datetime.

    Scoring compares calendar days, so everything it sees must share one zone.
    """
    return utc_to_local(datetime.now(timezone.utc), tz_name).replace(tzinfo=None)

def parse_run_date(raw) -> Optional[date]:
    """
    Accepts:
      - a date / datetime
      - "YYYY-MM-DD"
      - a full ISO timestamp (time-of-day is dropped)
    Returns None if it can't be parsed.
    """
    if raw is None:
        return None

    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw

    raw = str(raw).strip()
    if not raw:
        return None

    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None
