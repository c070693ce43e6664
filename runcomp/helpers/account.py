import secrets
from datetime import datetime, timedelta
from functools import wraps
from typing import Optional

from flask import session, jsonify

from runcomp.extensions import db
from runcomp.models import User, LoginCode, TEAM_NAMES
from runcomp.helpers.email import normalize_email, send_login_code_via_email

LOGIN_CODE_TTL = timedelta(minutes=10)

def normalize_team_name(raw: Optional[str]) -> Optional[str]:
    """ "alpha" / " Alpha " -> "Alpha". Unknown teams -> None. """
    k = (raw or "").strip().lower()
    for team in TEAM_NAMES:
        if team.lower() == k:
            return team
    return None

def get_user_by_email(email: str) -> Optional[User]:
    email = normalize_email(email)
    if not email:
        return None
    return User.query.filter_by(email=email).first()

def get_user_for_session() -> Optional[User]:
    user_id = session.get("user_id")
    if not user_id:
        return None

    user = db.session.get(User, user_id)
    if not user:
        # stale session (user deleted)
        session.pop("user_id", None)
    return user

def login_required(view):
    """
    Decorator for JSON endpoints: 401 unless the session holds a known user.
    The user is passed to the view as `user`.
    """
    @wraps(view)
    def wrapped(*args, **kwargs):
        user = get_user_for_session()
        if not user:
            return jsonify({"error": "Unauthorized"}), 401
        return view(*args, user=user, **kwargs)
    return wrapped

def issue_login_code(user: User) -> LoginCode:
    """Create a fresh 6-digit code for this user and email it."""
    code = f"{secrets.randbelow(1_000_000):06d}"
    now = datetime.utcnow()

    login_code = LoginCode(
        user_id=user.id,
        code=code,
        created_at=now,
        expires_at=now + LOGIN_CODE_TTL,
        used=False,
    )
    db.session.add(login_code)
    db.session.commit()

    send_login_code_via_email(user.email, code)
    return login_code

def redeem_login_code(user: User, code: str) -> bool:
    """Mark the newest matching, unexpired code as used. False if none."""
    code = (code or "").strip()
    if not code:
        return False

    now = datetime.utcnow()
    login_code = (
        LoginCode.query
        .filter(
            LoginCode.user_id == user.id,
            LoginCode.code == code,
            LoginCode.used.is_(False),
            LoginCode.expires_at >= now,
        )
        .order_by(LoginCode.created_at.desc())
        .first()
    )
    if not login_code:
        return False

    login_code.used = True
    db.session.commit()
    return True
