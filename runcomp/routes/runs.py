from flask import Blueprint, request, jsonify
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import math
import sys

from runcomp.extensions import db
from runcomp.models import Run
from runcomp.helpers.account import login_required
from runcomp.helpers.competition import get_engine, competition_now
from runcomp.helpers.leaderboard_cache import invalidate_leaderboard_cache
from runcomp.helpers.scoring import RunSubmission
from runcomp.helpers.time import parse_run_date

runs_bp = Blueprint("runs", __name__)

DEFAULT_RUNS_LIMIT = 10
MAX_RUNS_LIMIT = 100

DUPLICATE_DAY_ERROR = "You have already logged a run for this date. Only one run per day is allowed."


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_whole_minutes(raw) -> int:
    """ "45" / 45 / 45.0 -> 45. Raises ValueError on garbage."""
    if isinstance(raw, bool):
        raise ValueError(f"not a whole number of minutes: {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(raw))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"not a whole number of minutes: {raw!r}")


def _parse_duration(data):
    """
    Duration in minutes, from either:
      - "duration_mins"
      - "duration_hours" + "duration_minutes" (as entered in the form)
    Returns None if neither is present.
    """
    if not _is_blank(data.get("duration_mins")):
        return _parse_whole_minutes(data.get("duration_mins"))

    hours_raw = data.get("duration_hours")
    minutes_raw = data.get("duration_minutes")
    if _is_blank(hours_raw) and _is_blank(minutes_raw):
        return None

    hours = 0 if _is_blank(hours_raw) else _parse_whole_minutes(hours_raw)
    minutes = 0 if _is_blank(minutes_raw) else _parse_whole_minutes(minutes_raw)
    return hours * 60 + minutes


@runs_bp.route("/api/runs", methods=["POST"])
@login_required
def api_log_run(user):
    """
    Log today's (or yesterday's) run for the signed-in user.

    Payload:
      {
        "distance_km": 5.2,
        "duration_mins": 31,            # or duration_hours + duration_minutes
        "run_date": "2026-02-14",
        "image_proof_url": "https://..."  # optional
      }

    Points are decided here by the scoring engine, never by the client.
    """
    data = request.get_json(force=True, silent=True) or {}

    distance_raw = data.get("distance_km")
    run_date_raw = data.get("run_date")

    try:
        duration_mins = _parse_duration(data)
    except ValueError:
        return jsonify({"error": "Invalid duration"}), 400

    if _is_blank(distance_raw) or duration_mins is None or _is_blank(run_date_raw):
        return jsonify({"error": "Missing required fields: distance_km, duration_mins, run_date"}), 400

    if isinstance(distance_raw, bool):
        return jsonify({"error": "Invalid distance_km"}), 400
    try:
        distance_km = float(distance_raw)
    except (TypeError, ValueError, OverflowError):
        return jsonify({"error": "Invalid distance_km"}), 400
    if not math.isfinite(distance_km):
        return jsonify({"error": "Invalid distance_km"}), 400

    run_date = parse_run_date(run_date_raw)
    if run_date is None:
        return jsonify({"error": "Invalid run_date (expected YYYY-MM-DD)"}), 400

    validation = get_engine().validate_run(
        RunSubmission(distance_km=distance_km, duration_mins=duration_mins, run_date=run_date),
        now=competition_now(),
    )

    if not validation.is_valid:
        return jsonify({"error": ". ".join(validation.errors), "errors": validation.errors}), 400

    existing = Run.query.filter_by(user_id=user.id, run_date=run_date).first()
    if existing:
        return jsonify({"error": DUPLICATE_DAY_ERROR}), 400

    image_proof_url = (str(data.get("image_proof_url") or "")).strip() or None

    run = Run(
        user_id=user.id,
        distance_km=distance_km,
        duration_mins=duration_mins,
        points=validation.points,
        image_proof_url=image_proof_url,
        run_date=run_date,
    )
    db.session.add(run)

    try:
        db.session.commit()
    except IntegrityError:
        # a parallel request logged the same day first
        db.session.rollback()
        return jsonify({"error": DUPLICATE_DAY_ERROR}), 400
    except SQLAlchemyError as e:
        db.session.rollback()
        print(f"[RUN LOG] Insert failed for user {user.id}: {e}", file=sys.stderr)
        return jsonify({"error": "Failed to log run. Please try again."}), 500

    invalidate_leaderboard_cache()

    return (
        jsonify(
            {
                "data": run.to_dict(),
                "points": validation.points,
                "warnings": validation.warnings,
            }
        ),
        201,
    )


@runs_bp.route("/api/runs")
@login_required
def api_list_runs(user):
    """
    Latest runs, newest run_date first.

    Query args:
      - user_id: only this runner's runs
      - limit: default 10, max 100
    """
    try:
        limit = int(request.args.get("limit", DEFAULT_RUNS_LIMIT))
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid limit"}), 400
    limit = max(1, min(limit, MAX_RUNS_LIMIT))

    q = Run.query.order_by(Run.run_date.desc(), Run.created_at.desc())

    user_id_raw = request.args.get("user_id")
    if user_id_raw:
        try:
            q = q.filter(Run.user_id == int(user_id_raw))
        except ValueError:
            return jsonify({"error": "Invalid user_id"}), 400

    runs = q.limit(limit).all()
    return jsonify({"data": [r.to_dict(with_user=True) for r in runs]})
