import os

class Config:
    raw_db_url = os.getenv("DATABASE_URL")

    if raw_db_url:
        if raw_db_url.startswith("postgres://"):
            raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = raw_db_url
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///runcomp.db"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-dev-secret")

    # Competition rules (dates are ISO "YYYY-MM-DD", both days inclusive)
    COMPETITION_START_DATE = os.getenv("COMPETITION_START_DATE", "2026-02-01")
    COMPETITION_END_DATE = os.getenv("COMPETITION_END_DATE", "2026-03-22")
    MIN_SPEED_KMH = float(os.getenv("MIN_SPEED_KMH", "6"))
    SUBMISSION_WINDOW_HOURS = float(os.getenv("SUBMISSION_WINDOW_HOURS", "24"))

    # Wall-clock zone used for "today" and end-of-day arithmetic
    COMPETITION_TZ = os.getenv("COMPETITION_TZ", "UTC")

    LEADERBOARD_CACHE_TTL = float(os.getenv("LEADERBOARD_CACHE_TTL", "10"))

RESEND_API_KEY = os.getenv("RESEND_API_KEY", None)
RESEND_FROM_EMAIL = os.getenv(
    "RESEND_FROM_EMAIL",
    "Team Run Comp <onboarding@resend.dev>",  # fallback; override in prod
)
