import time

from flask import current_app

# --- Leaderboard cache ---

DEFAULT_LEADERBOARD_CACHE_TTL = 10.0  # seconds

# key: "individual" / "teams"
# value: (rows, timestamp)
LEADERBOARD_CACHE: dict = {}


def _ttl() -> float:
    return float(current_app.config.get("LEADERBOARD_CACHE_TTL", DEFAULT_LEADERBOARD_CACHE_TTL))


def get_cached_leaderboard(key):
    """
    Return cached rows if still valid.
    """
    entry = LEADERBOARD_CACHE.get(key)
    if not entry:
        return None

    rows, timestamp = entry
    if (time.time() - timestamp) > _ttl():
        LEADERBOARD_CACHE.pop(key, None)
        return None

    return rows


def set_cached_leaderboard(key, rows):
    """
    Store rows in cache.
    """
    LEADERBOARD_CACHE[key] = (rows, time.time())


def invalidate_leaderboard_cache():
    """Clear all cached leaderboard entries."""
    LEADERBOARD_CACHE.clear()
