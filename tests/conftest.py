"""Pytest configuration and fixtures for the Flask app tests."""

from datetime import datetime

import pytest

from runcomp import create_app
from runcomp.config import Config
from runcomp.extensions import db
from runcomp.models import User
from runcomp.routes import register_blueprints
from runcomp.helpers.leaderboard_cache import invalidate_leaderboard_cache


# Mid-competition, evening of 14 Feb 2026 (competition-local wall clock)
DEFAULT_NOW = datetime(2026, 2, 14, 19, 0)


class ConfigForTests(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SECRET_KEY = "test-secret"

    COMPETITION_START_DATE = "2026-02-01"
    COMPETITION_END_DATE = "2026-03-22"
    MIN_SPEED_KMH = 6.0
    SUBMISSION_WINDOW_HOURS = 24.0
    COMPETITION_TZ = "UTC"
    LEADERBOARD_CACHE_TTL = 60.0


# -------------------------------------------------------------------------
# App / DB
# -------------------------------------------------------------------------

@pytest.fixture
def app():
    """Flask app with all blueprints and a fresh in-memory database."""
    flask_app = create_app(ConfigForTests)
    register_blueprints(flask_app)

    invalidate_leaderboard_cache()

    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()

    invalidate_leaderboard_cache()


@pytest.fixture
def client(app):
    return app.test_client()


# -------------------------------------------------------------------------
# Clock
# -------------------------------------------------------------------------

@pytest.fixture
def set_now(monkeypatch):
    """
    Pin the competition clock. Returns a setter so a test can move time.
    Defaults to DEFAULT_NOW.
    """
    def _set(now: datetime):
        monkeypatch.setattr("runcomp.helpers.competition.competition_now", lambda: now)
        monkeypatch.setattr("runcomp.routes.runs.competition_now", lambda: now)

    _set(DEFAULT_NOW)
    return _set


# -------------------------------------------------------------------------
# Users
# -------------------------------------------------------------------------

@pytest.fixture
def make_user(app):
    """Factory: create a runner and return their id."""
    def _make(username: str, team_name: str = "Alpha", email: str = None) -> int:
        user = User(
            email=email or f"{username.lower()}@example.com",
            username=username,
            team_name=team_name,
        )
        db.session.add(user)
        db.session.commit()
        return user.id
    return _make


def login(client, user_id: int):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id


@pytest.fixture
def test_user(make_user) -> int:
    return make_user("Alice", "Alpha")


@pytest.fixture
def auth_client(client, test_user, set_now):
    """Test client signed in as Alice, with the clock pinned."""
    login(client, test_user)
    return client


@pytest.fixture
def login_as(client):
    """Sign the shared test client in as another user."""
    def _login(user_id: int):
        login(client, user_id)
    return _login
