from flask import Blueprint, jsonify

from runcomp.extensions import db
from runcomp.models import Run, User
from runcomp.helpers.account import login_required
from runcomp.helpers.leaderboard import build_team_scores, user_stats

users_bp = Blueprint("users", __name__)

RECENT_RUNS_LIMIT = 5

@users_bp.route("/api/dashboard")
@login_required
def api_dashboard(user):
    """
    Everything the signed-in runner's home screen needs:
    their profile, both team totals, their own totals and latest runs.
    """
    recent_runs = (
        Run.query
        .filter_by(user_id=user.id)
        .order_by(Run.run_date.desc())
        .limit(RECENT_RUNS_LIMIT)
        .all()
    )

    return jsonify(
        {
            "data": {
                "user": user.to_dict(),
                "team_scores": build_team_scores(),
                "user_stats": user_stats(user.id),
                "recent_runs": [r.to_dict() for r in recent_runs],
            }
        }
    )

@users_bp.route("/api/users/<int:user_id>")
@login_required
def api_profile(user_id, user):
    """Another runner's profile: all their runs (with proof links) and totals."""
    profile_user = db.session.get(User, user_id)
    if not profile_user:
        return jsonify({"error": "User not found"}), 404

    runs = (
        Run.query
        .filter_by(user_id=profile_user.id)
        .order_by(Run.run_date.desc())
        .all()
    )

    return jsonify(
        {
            "data": {
                "user": profile_user.to_dict(include_email=profile_user.id == user.id),
                "runs": [r.to_dict() for r in runs],
                "stats": user_stats(profile_user.id),
                "is_self": profile_user.id == user.id,
            }
        }
    )
