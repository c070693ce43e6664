"""Tests for leaderboards, team scores, dashboard, profiles and the competition banner."""

from datetime import date

import pytest

from runcomp.extensions import db
from runcomp.models import Run


@pytest.fixture
def seeded(test_user, make_user):
    """
    Alice (Alpha): 6.5 km + 4.2 km -> 10 points
    Carol (Alpha): 10.2 km       -> 10 points
    Bob   (Beta):  12.4 km       -> 12 points
    Dave  (Beta):  no runs
    """
    carol = make_user("Carol", "Alpha")
    bob = make_user("Bob", "Beta")
    dave = make_user("Dave", "Beta")

    runs = [
        (test_user, 6.5, 6, 10),
        (test_user, 4.2, 4, 11),
        (carol, 10.2, 10, 11),
        (bob, 12.4, 12, 12),
    ]
    for user_id, distance, points, day in runs:
        db.session.add(
            Run(
                user_id=user_id,
                distance_km=distance,
                duration_mins=int(distance * 6),
                points=points,
                run_date=date(2026, 2, day),
            )
        )
    db.session.commit()

    return {"alice": test_user, "carol": carol, "bob": bob, "dave": dave}


class TestIndividualLeaderboard:
    def test_order_and_positions(self, client, seeded):
        rows = client.get("/api/leaderboard").get_json()["data"]

        assert [r["username"] for r in rows] == ["Bob", "Alice", "Carol", "Dave"]
        assert [r["position"] for r in rows] == [1, 2, 2, 3]

        alice = rows[1]
        assert alice["team"] == "Alpha"
        assert alice["total_points"] == 10
        assert alice["total_runs"] == 2
        assert alice["total_distance"] == pytest.approx(10.7)

        assert rows[3]["total_runs"] == 0
        assert rows[3]["total_points"] == 0

    def test_empty(self, client):
        assert client.get("/api/leaderboard").get_json()["data"] == []


class TestTeamScores:
    def test_totals(self, client, seeded):
        rows = client.get("/api/teams").get_json()["data"]

        assert [r["team"] for r in rows] == ["Alpha", "Beta"]
        alpha, beta = rows
        assert alpha["total_points"] == 20
        assert alpha["total_runs"] == 3
        assert alpha["total_distance"] == pytest.approx(20.9)
        assert beta["total_points"] == 12
        assert beta["total_runs"] == 1

    def test_teams_listed_without_runs(self, client):
        rows = client.get("/api/teams").get_json()["data"]
        assert {r["team"] for r in rows} == {"Alpha", "Beta"}
        assert all(r["total_points"] == 0 for r in rows)

    def test_new_run_invalidates_cache(self, auth_client):
        before = auth_client.get("/api/teams").get_json()["data"]
        assert sum(r["total_points"] for r in before) == 0

        resp = auth_client.post(
            "/api/runs",
            json={"distance_km": 8, "duration_mins": 40, "run_date": "2026-02-14"},
        )
        assert resp.status_code == 201

        after = {r["team"]: r for r in auth_client.get("/api/teams").get_json()["data"]}
        assert after["Alpha"]["total_points"] == 8


class TestDashboard:
    def test_dashboard(self, auth_client, seeded):
        for day in range(1, 7):
            db.session.add(
                Run(
                    user_id=seeded["alice"],
                    distance_km=3.0,
                    duration_mins=18,
                    points=3,
                    run_date=date(2026, 2, day),
                )
            )
        db.session.commit()

        data = auth_client.get("/api/dashboard").get_json()["data"]

        assert data["user"]["username"] == "Alice"
        assert data["user"]["email"] == "alice@example.com"
        assert data["user_stats"]["total_runs"] == 8
        assert data["user_stats"]["total_points"] == 28
        assert [r["run_date"] for r in data["recent_runs"]] == [
            "2026-02-11",
            "2026-02-10",
            "2026-02-06",
            "2026-02-05",
            "2026-02-04",
        ]
        assert {r["team"] for r in data["team_scores"]} == {"Alpha", "Beta"}

    def test_requires_login(self, client):
        assert client.get("/api/dashboard").status_code == 401


class TestProfile:
    def test_other_runner(self, auth_client, seeded):
        data = auth_client.get(f"/api/users/{seeded['bob']}").get_json()["data"]

        assert data["user"]["username"] == "Bob"
        assert "email" not in data["user"]
        assert data["is_self"] is False
        assert data["stats"] == {"total_points": 12, "total_runs": 1, "total_distance": 12.4}
        assert len(data["runs"]) == 1

    def test_self_includes_email(self, auth_client, seeded):
        data = auth_client.get(f"/api/users/{seeded['alice']}").get_json()["data"]
        assert data["is_self"] is True
        assert data["user"]["email"] == "alice@example.com"

    def test_unknown_user(self, auth_client):
        resp = auth_client.get("/api/users/9999")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "User not found"}


class TestCompetitionBanner:
    @pytest.mark.parametrize("path", ["/", "/api/competition"])
    def test_summary(self, client, set_now, path):
        data = client.get(path).get_json()["data"]

        assert data["start_date"] == "2026-02-01"
        assert data["end_date"] == "2026-03-22"
        assert data["min_speed_kmh"] == 6.0
        assert data["max_pace"] == "10:00 min/km"
        assert data["is_live"] is True
        assert data["is_finished"] is False
        assert data["progress"]["total_days"] == 50
        assert data["progress"]["days_elapsed"] == 14
        assert data["progress"]["days_remaining"] == 36
