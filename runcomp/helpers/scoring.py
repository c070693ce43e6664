import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional

from runcomp.helpers.format import format_date, format_pace

# --- Default competition rules ---

COMPETITION_START_DATE = date(2026, 2, 1)
COMPETITION_END_DATE = date(2026, 3, 22)
MIN_SPEED_KMH = 6.0
SUBMISSION_WINDOW_HOURS = 24.0

END_OF_DAY = time(23, 59, 59, 999000)
ONE_DAY = timedelta(days=1)
ONE_HOUR = timedelta(hours=1)


# --- Pure scoring functions ---

def calculate_speed(distance_km, duration_mins) -> float:
    """Speed in km/h. 0 for a non-positive duration (not a validity signal)."""
    duration_hours = duration_mins / 60
    if duration_hours <= 0:
        return 0.0
    return distance_km / duration_hours


def calculate_pace(distance_km, duration_mins) -> float:
    """Pace in minutes per km. 0 for a non-positive distance."""
    if distance_km <= 0:
        return 0.0
    return duration_mins / distance_km


def calculate_points(distance_km, duration_mins, min_speed_kmh=MIN_SPEED_KMH) -> int:
    """
    Points for a run:
    - floor(distance_km) if speed >= min_speed_kmh
    - 0 if the pace is too slow

    Partial kilometres never count (5.9 km -> 5 points).
    """
    speed = calculate_speed(distance_km, duration_mins)
    if speed < min_speed_kmh:
        return 0
    return math.floor(distance_km)


# --- Engine types ---

@dataclass(frozen=True)
class CompetitionRules:
    start_date: date = COMPETITION_START_DATE
    end_date: date = COMPETITION_END_DATE
    min_speed_kmh: float = MIN_SPEED_KMH
    submission_window_hours: float = SUBMISSION_WINDOW_HOURS

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise ValueError(
                f"competition end date {self.end_date} is before start date {self.start_date}"
            )
        if self.min_speed_kmh <= 0:
            raise ValueError("min_speed_kmh must be positive")
        if self.submission_window_hours < 0:
            raise ValueError("submission_window_hours must not be negative")

    @property
    def max_pace_min_per_km(self) -> float:
        return 60 / self.min_speed_kmh


@dataclass(frozen=True)
class RunSubmission:
    distance_km: float
    duration_mins: int
    run_date: date


@dataclass
class ValidationResult:
    is_valid: bool
    points: int = 0
    errors: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "points": self.points,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class CompetitionProgress:
    days_elapsed: int
    total_days: int
    percent_complete: float
    days_remaining: int

    def to_dict(self) -> dict:
        return {
            "days_elapsed": self.days_elapsed,
            "total_days": self.total_days,
            "percent_complete": self.percent_complete,
            "days_remaining": self.days_remaining,
        }


def _as_day(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def _as_number(value) -> Optional[float]:
    """Finite number or None. Booleans are not distances."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


# --- Engine ---

class RunScoringEngine:
    """
    Decides whether a run submission counts and how many points it earns.

    Stateless apart from its rules. Every check that depends on the clock takes
    `now` explicitly, so two calls only agree if they were given the same instant.
    """

    def __init__(self, rules: Optional[CompetitionRules] = None):
        self.rules = rules or CompetitionRules()

    def calculate_points(self, distance_km, duration_mins) -> int:
        return calculate_points(distance_km, duration_mins, self.rules.min_speed_kmh)

    def is_within_competition_window(self, run_date) -> bool:
        day = _as_day(run_date)
        if day is None:
            return False
        return self.rules.start_date <= day <= self.rules.end_date

    def is_within_submission_window(self, run_date, now: datetime) -> bool:
        """
        A run may be logged until `submission_window_hours` after the END of
        its calendar day. Future-dated runs are never accepted.
        """
        day = _as_day(run_date)
        if day is None:
            return False

        if day > now.date():
            return False

        end_of_run_day = datetime.combine(day, END_OF_DAY, tzinfo=now.tzinfo)
        hours_since = (now - end_of_run_day) / ONE_HOUR
        return hours_since <= self.rules.submission_window_hours

    def validate_run(self, submission: RunSubmission, now: Optional[datetime] = None) -> ValidationResult:
        """
        Single pass over the rules, in a fixed order so error lists are stable:
        competition window, submission window, distance, duration, then pace.

        Never raises: every problem ends up in `errors` or `warnings`.
        """
        if now is None:
            now = datetime.now()

        errors = []
        warnings = []
        points = 0

        distance_km = _as_number(submission.distance_km)
        duration_mins = _as_number(submission.duration_mins)
        run_day = _as_day(submission.run_date)

        if run_day is None:
            errors.append("A valid run date is required")
        else:
            if not self.is_within_competition_window(run_day):
                errors.append(
                    f"Run date must be between {format_date(self.rules.start_date)} "
                    f"and {format_date(self.rules.end_date)}"
                )

            if not self.is_within_submission_window(run_day, now):
                errors.append(
                    f"Runs must be logged within {self.rules.submission_window_hours:g} "
                    f"hours of the run date"
                )

        if distance_km is None or distance_km <= 0:
            errors.append("Distance must be greater than 0")

        if duration_mins is None or duration_mins <= 0:
            errors.append("Duration must be greater than 0")

        if not errors:
            speed = calculate_speed(distance_km, duration_mins)
            pace = calculate_pace(distance_km, duration_mins)

            if speed < self.rules.min_speed_kmh:
                warnings.append(
                    f"Pace too slow ({format_pace(pace)}). "
                    f"Minimum speed is {self.rules.min_speed_kmh:g} km/h. "
                    f"Run logged with 0 points."
                )
                points = 0
            else:
                points = self.calculate_points(distance_km, duration_mins)

        return ValidationResult(
            is_valid=not errors,
            points=points,
            errors=errors,
            warnings=warnings,
        )

    # --- competition calendar ---

    def _bounds(self, now: datetime):
        start = datetime.combine(self.rules.start_date, time.min, tzinfo=now.tzinfo)
        end = datetime.combine(self.rules.end_date, time(23, 59, 59), tzinfo=now.tzinfo)
        return start, end

    def competition_progress(self, now: datetime) -> CompetitionProgress:
        start, end = self._bounds(now)

        total_days = math.ceil((end - start) / ONE_DAY)

        days_elapsed = 0
        if now >= start:
            days_elapsed = min(math.ceil((now - start) / ONE_DAY), total_days)

        return CompetitionProgress(
            days_elapsed=days_elapsed,
            total_days=total_days,
            percent_complete=min(100.0, days_elapsed / total_days * 100),
            days_remaining=max(0, total_days - days_elapsed),
        )

    def is_live(self, now: datetime) -> bool:
        """True from the first competition day through the last, inclusive."""
        return self.is_within_competition_window(now.date())

    def is_finished(self, now: datetime) -> bool:
        return now.date() > self.rules.end_date
