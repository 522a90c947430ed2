from models import db
from datetime import datetime


class ChildBadgeProgress(db.Model):
    __tablename__ = "child_badge_progress"

    id = db.Column(db.Integer, primary_key=True)
    child_id = db.Column(db.Integer, db.ForeignKey("children.id"), nullable=False)
    badge_code = db.Column(db.String(50), db.ForeignKey("badges.code"), nullable=False)
    current_progress = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    target_progress = db.Column(db.Numeric(12, 2), nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    child = db.relationship("Child", back_populates="progress")
    badge = db.relationship("Badge")

    __table_args__ = (
        db.UniqueConstraint("child_id", "badge_code", name="unique_child_badge_progress"),
    )

    @property
    def percentage(self):
        if not self.target_progress:
            return 0.0
        return min(float(self.current_progress) / float(self.target_progress) * 100, 100.0)

    def to_dict(self):
        return {
            "badge_code": self.badge_code,
            "badge_name": self.badge.name if self.badge else None,
            "current_progress": float(self.current_progress),
            "target_progress": float(self.target_progress) if self.target_progress is not None else None,
            "percentage": round(self.percentage, 1),
            "progress_text": f"{self.current_progress:g}/{self.target_progress:g}" if self.target_progress is not None else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
