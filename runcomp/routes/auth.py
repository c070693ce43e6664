from flask import Blueprint, request, session, jsonify
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
import sys

from runcomp.extensions import db
from runcomp.models import User
from runcomp.helpers.email import normalize_email
from runcomp.helpers.leaderboard_cache import invalidate_leaderboard_cache
from runcomp.helpers.account import (
    get_user_by_email,
    get_user_for_session,
    issue_login_code,
    normalize_team_name,
    redeem_login_code,
)


auth_bp = Blueprint("auth", __name__)

USERNAME_MAX_LEN = 80

@auth_bp.route("/auth/signup", methods=["POST"])
def signup():
    """
    Create a runner and email them a login code.

    Payload:
      {"email": "...", "username": "...", "team_name": "Alpha" | "Beta"}

    Username falls back to the part of the email before the "@".
    """
    data = request.get_json(force=True, silent=True) or {}

    email = normalize_email(data.get("email"))
    username = (data.get("username") or "").strip()
    team_name = normalize_team_name(data.get("team_name"))

    if not email or "@" not in email:
        return jsonify({"error": "Please enter a valid email."}), 400

    if not username:
        username = email.split("@")[0]

    if len(username) > USERNAME_MAX_LEN:
        return jsonify({"error": "Username is too long."}), 400

    if not team_name:
        return jsonify({"error": "Please pick a team: Alpha or Beta."}), 400

    if get_user_by_email(email):
        return jsonify({"error": "An account with that email already exists. Please log in."}), 409

    if User.query.filter(func.lower(User.username) == username.lower()).first():
        return jsonify({"error": "That username is taken."}), 409

    user = User(email=email, username=username, team_name=team_name)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # lost a race with another signup for the same email/username
        db.session.rollback()
        return jsonify({"error": "An account with that email or username already exists."}), 409

    # new runners show up on the leaderboard with zero totals
    invalidate_leaderboard_cache()

    print(f"[SIGNUP] {email} joined team {team_name}", file=sys.stderr)

    issue_login_code(user)
    session["login_email"] = email

    return jsonify({"ok": True, "message": "We emailed you a login code."}), 201

@auth_bp.route("/auth/login", methods=["POST"])
def login_request():
    data = request.get_json(force=True, silent=True) or {}
    email = normalize_email(data.get("email"))

    if not email:
        return jsonify({"error": "Please enter your email."}), 400

    user = get_user_by_email(email)
    if not user:
        return jsonify({"error": "We couldn't find that email. If you're new, please sign up first."}), 404

    issue_login_code(user)
    session["login_email"] = email

    return jsonify({"ok": True, "message": "We emailed you a login code."})

@auth_bp.route("/auth/verify", methods=["POST"])
def login_verify():
    """
    Exchange an emailed code for a session.
    Email comes from the payload, or from the login/signup step in this session.
    """
    data = request.get_json(force=True, silent=True) or {}

    email = normalize_email(data.get("email") or session.get("login_email"))
    code = (str(data.get("code") or "")).strip()

    if not email or not code:
        return jsonify({"error": "Email and code are required."}), 400

    user = get_user_by_email(email)
    if not user or not redeem_login_code(user, code):
        return jsonify({"error": "That code is invalid or has expired."}), 400

    session.pop("login_email", None)
    session["user_id"] = user.id

    return jsonify({"ok": True, "data": user.to_dict()})

@auth_bp.route("/auth/logout", methods=["POST"])
def logout():
    session.pop("user_id", None)
    session.pop("login_email", None)
    return jsonify({"ok": True})

@auth_bp.route("/auth/me")
def me():
    user = get_user_for_session()
    if not user:
        return jsonify({"error": "Unauthorized"}), 401
    return jsonify({"data": user.to_dict()})
