from models import db
from datetime import datetime


class Badge(db.Model):
    """Catalog row mirroring a ``BadgeDefinition``, kept in sync by code."""

    __tablename__ = "badges"

    code = db.Column(db.String(50), primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255), nullable=True)
    icon_url = db.Column(db.String(255), nullable=True)
    category = db.Column(db.String(20), nullable=False)
    rarity = db.Column(db.Integer, nullable=False)
    points = db.Column(db.Integer, nullable=False, default=0)
    criteria_type = db.Column(db.String(30), nullable=False)
    criteria_config = db.Column(db.JSON, nullable=False, default=dict)
    triggers = db.Column(db.JSON, nullable=False, default=list)
    is_secret = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def apply_definition(self, definition):
        data = definition.to_dict()
        self.name = data["name"]
        self.description = data["description"]
        self.icon_url = data["icon_url"]
        self.category = data["category"]
        self.rarity = int(definition.rarity)
        self.points = data["points"]
        self.criteria_type = data["criteria_type"]
        self.criteria_config = data["criteria"]
        self.triggers = data["triggers"]
        self.is_secret = data["is_secret"]
        self.is_active = data["is_active"]
        self.sort_order = data["sort_order"]

    def __repr__(self):
        return f"<Badge {self.code}>"
