from datetime import date, datetime
from typing import Optional

from flask import current_app

from runcomp.helpers.scoring import CompetitionRules, RunScoringEngine
from runcomp.helpers.format import format_date_for_input, format_pace
from runcomp.helpers.time import local_now

def _config_date(value, key: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValueError(f"{key} must be an ISO date (YYYY-MM-DD), got {value!r}")

def rules_from_config(config) -> CompetitionRules:
    """Build the competition rules from a Flask config mapping."""
    return CompetitionRules(
        start_date=_config_date(config["COMPETITION_START_DATE"], "COMPETITION_START_DATE"),
        end_date=_config_date(config["COMPETITION_END_DATE"], "COMPETITION_END_DATE"),
        min_speed_kmh=float(config["MIN_SPEED_KMH"]),
        submission_window_hours=float(config["SUBMISSION_WINDOW_HOURS"]),
    )

def build_engine(config) -> RunScoringEngine:
    return RunScoringEngine(rules_from_config(config))

def get_engine() -> RunScoringEngine:
    """The engine configured for the running app."""
    return current_app.extensions["run_scoring_engine"]

def competition_now() -> datetime:
    """
    Current time in the competition's zone.

    Routes read the clock here, once per request, and hand the value to the engine.
    """
    return local_now(current_app.config.get("COMPETITION_TZ") or "UTC")

def comp_is_live(now: Optional[datetime] = None) -> bool:
    return get_engine().is_live(now or competition_now())

def comp_is_finished(now: Optional[datetime] = None) -> bool:
    return get_engine().is_finished(now or competition_now())

def competition_summary(now: Optional[datetime] = None) -> dict:
    """Dates, rules and progress for the competition banner."""
    now = now or competition_now()
    engine = get_engine()
    rules = engine.rules

    return {
        "start_date": format_date_for_input(rules.start_date),
        "end_date": format_date_for_input(rules.end_date),
        "min_speed_kmh": rules.min_speed_kmh,
        "max_pace": format_pace(rules.max_pace_min_per_km),
        "submission_window_hours": rules.submission_window_hours,
        "is_live": engine.is_live(now),
        "is_finished": engine.is_finished(now),
        "progress": engine.competition_progress(now).to_dict(),
    }
