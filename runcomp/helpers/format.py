from datetime import date

def format_pace(pace_min_per_km: float) -> str:
    """Format pace as "M:SS min/km" (seconds rounded half up)."""
    mins = int(pace_min_per_km)
    secs = int((pace_min_per_km - mins) * 60 + 0.5)

    # 5.999 min/km rounds to 6:00, not 5:60
    if secs >= 60:
        mins += 1
        secs -= 60

    return f"{mins}:{secs:02d} min/km"

def format_duration(total_mins: int) -> str:
    """Format a duration in minutes as "Xh Ym", or "Ym" under an hour."""
    hours, mins = divmod(int(total_mins), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"

def format_date(d: date) -> str:
    return d.strftime("%d %b %Y")

def format_date_for_input(d: date) -> str:
    return d.isoformat()[:10]
