from datetime import datetime
from sqlalchemy import UniqueConstraint
from runcomp.extensions import db

class Run(db.Model):
    __tablename__ = "runs"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    distance_km = db.Column(db.Float, nullable=False)
    duration_mins = db.Column(db.Integer, nullable=False)

    # Computed once at submission time and stored
    points = db.Column(db.Integer, nullable=False, default=0)

    # Proof photo lives in external storage; we only keep its URL
    image_proof_url = db.Column(db.String(512), nullable=True)

    run_date = db.Column(db.Date, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", back_populates="runs")

    __table_args__ = (
        # one run per calendar day per user
        UniqueConstraint("user_id", "run_date", name="uq_run_user_date"),
    )

    def to_dict(self, with_user: bool = False) -> dict:
        out = {
            "id": self.id,
            "user_id": self.user_id,
            "distance_km": self.distance_km,
            "duration_mins": self.duration_mins,
            "points": self.points,
            "image_proof_url": self.image_proof_url,
            "run_date": self.run_date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if with_user and self.user is not None:
            out["user"] = {
                "username": self.user.username,
                "team_name": self.user.team_name,
            }
        return out
