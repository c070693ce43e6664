from runcomp.models import Run, User, TEAM_NAMES
from runcomp.helpers.leaderboard_cache import get_cached_leaderboard, set_cached_leaderboard


def _totals(runs) -> dict:
    return {
        "total_points": sum(r.points for r in runs),
        "total_runs": len(runs),
        "total_distance": round(sum(r.distance_km for r in runs), 2),
    }


def _runs_by_user() -> dict:
    by_user = {}
    for r in Run.query.all():
        by_user.setdefault(r.user_id, []).append(r)
    return by_user


def user_stats(user_id: int) -> dict:
    """Totals for one user: points, number of runs, distance."""
    runs = Run.query.filter_by(user_id=user_id).all()
    return _totals(runs)


def build_leaderboard():
    """
    Individual leaderboard rows:
      {
        "user_id", "username", "team",
        "total_points", "total_runs", "total_distance",
        "position"
      }

    Sorted by points, then distance, then username. Equal points share a place.
    Users without runs are listed with zero totals.
    """
    cached = get_cached_leaderboard("individual")
    if cached is not None:
        return cached

    by_user = _runs_by_user()

    rows = []
    for u in User.query.all():
        rows.append(
            {
                "user_id": u.id,
                "username": u.username,
                "team": u.team_name,
                **_totals(by_user.get(u.id, [])),
            }
        )

    rows.sort(key=lambda r: (-r["total_points"], -r["total_distance"], r["username"].lower()))

    pos = 0
    prev_key = None
    for row in rows:
        k = row["total_points"]
        if k != prev_key:
            pos += 1
        prev_key = k
        row["position"] = pos

    set_cached_leaderboard("individual", rows)
    return rows


def build_team_scores():
    """
    One row per team, including teams nobody has run for yet:
      {"team", "total_points", "total_runs", "total_distance"}
    Sorted by points (ties keep the team order).
    """
    cached = get_cached_leaderboard("teams")
    if cached is not None:
        return cached

    team_by_user = {u.id: u.team_name for u in User.query.all()}

    by_team = {team: [] for team in TEAM_NAMES}
    for r in Run.query.all():
        team = team_by_user.get(r.user_id)
        if team in by_team:
            by_team[team].append(r)

    rows = [{"team": team, **_totals(runs)} for team, runs in by_team.items()]
    rows.sort(key=lambda r: -r["total_points"])

    set_cached_leaderboard("teams", rows)
    return rows
