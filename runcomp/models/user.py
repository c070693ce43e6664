from datetime import datetime
from runcomp.extensions import db

# The two competing teams
TEAM_NAMES = ("Alpha", "Beta")

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    username = db.Column(db.String(80), nullable=False, unique=True)

    # "Alpha" or "Beta"
    team_name = db.Column(db.String(20), nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    runs = db.relationship("Run", back_populates="user", lazy=True)
    login_codes = db.relationship("LoginCode", back_populates="user")

    def to_dict(self, include_email: bool = True) -> dict:
        out = {
            "id": self.id,
            "username": self.username,
            "team_name": self.team_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_email:
            out["email"] = self.email
        return out
