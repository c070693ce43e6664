from flask import Blueprint, jsonify

from runcomp.helpers.leaderboard import build_leaderboard, build_team_scores

leaderboard_bp = Blueprint("leaderboard", __name__)

@leaderboard_bp.route("/api/leaderboard")
def api_leaderboard():
    """Individual leaderboard across both teams."""
    return jsonify({"data": build_leaderboard()})

@leaderboard_bp.route("/api/teams")
def api_team_scores():
    """Team totals (Alpha vs Beta)."""
    return jsonify({"data": build_team_scores()})
