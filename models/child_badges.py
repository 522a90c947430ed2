from models import db
from datetime import datetime


class ChildBadgeAward(db.Model):
    __tablename__ = "child_badges"

    id = db.Column(db.Integer, primary_key=True)
    child_id = db.Column(db.Integer, db.ForeignKey("children.id"), nullable=False)
    badge_code = db.Column(db.String(50), db.ForeignKey("badges.code"), nullable=False)
    earned_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    earned_context = db.Column(db.String(255), nullable=True)
    is_new = db.Column(db.Boolean, nullable=False, default=True)
    is_displayed = db.Column(db.Boolean, nullable=False, default=False)

    child = db.relationship("Child", back_populates="awards")
    badge = db.relationship("Badge")

    # One badge per child; the award ledger relies on this constraint to fail closed.
    __table_args__ = (
        db.UniqueConstraint("child_id", "badge_code", name="unique_child_badge"),
    )

    @classmethod
    def awarded_codes(cls, child_id):
        rows = db.session.query(cls.badge_code).filter_by(child_id=child_id).all()
        return {row.badge_code for row in rows}

    def __repr__(self):
        return f"<ChildBadgeAward Child {self.child_id} Badge {self.badge_code}>"

    def to_dict(self):
        badge = self.badge
        return {
            "id": self.id,
            "badge_code": self.badge_code,
            "badge_name": badge.name if badge else None,
            "description": badge.description if badge else None,
            "icon_url": badge.icon_url if badge else None,
            "category": badge.category if badge else None,
            "rarity": badge.rarity if badge else None,
            "points": badge.points if badge else None,
            "earned_at": self.earned_at.isoformat() if self.earned_at else None,
            "earned_context": self.earned_context,
            "is_new": self.is_new,
            "is_displayed": self.is_displayed,
        }
