from models import db

# Running numeric measures maintained by the transaction, task and goal services.
MEASURE_FIELDS = (
    "current_balance",
    "savings_balance",
    "total_saved",
    "transaction_count",
    "task_count",
    "approved_task_streak",
    "saving_streak",
    "budget_streak",
    "monthly_savings_rate",
    "goals_completed",
)

# Dated facts read by time-based criteria; never thresholds.
DATE_FIELDS = (
    "last_allowance_date",
)


class Child(db.Model):
    __tablename__ = "children"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    date_created = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    # Points ledger
    total_points = db.Column(db.Integer, nullable=False, default=0)
    available_points = db.Column(db.Integer, nullable=False, default=0)
    badges_earned = db.Column(db.Integer, nullable=False, default=0)

    current_balance = db.Column(db.Numeric(12, 2), nullable=True)
    savings_balance = db.Column(db.Numeric(12, 2), nullable=True)
    total_saved = db.Column(db.Numeric(12, 2), nullable=True)
    transaction_count = db.Column(db.Integer, nullable=True)
    task_count = db.Column(db.Integer, nullable=True)
    approved_task_streak = db.Column(db.Integer, nullable=True)
    saving_streak = db.Column(db.Integer, nullable=True)
    budget_streak = db.Column(db.Integer, nullable=True)
    monthly_savings_rate = db.Column(db.Numeric(5, 2), nullable=True)
    goals_completed = db.Column(db.Integer, nullable=True)
    last_allowance_date = db.Column(db.Date, nullable=True)

    awards = db.relationship("ChildBadgeAward", back_populates="child", lazy=True, cascade="all, delete-orphan")
    progress = db.relationship("ChildBadgeProgress", back_populates="child", lazy=True, cascade="all, delete-orphan")

    @property
    def spent_points(self):
        return (self.total_points or 0) - (self.available_points or 0)

    def measures(self):
        """Named numeric measures; unset measures are left out."""
        return self._collect(MEASURE_FIELDS)

    def date_facts(self):
        return self._collect(DATE_FIELDS)

    def evaluation_state(self):
        """Everything badge criteria may read about the child."""
        state = self.measures()
        state.update(self.date_facts())
        return state

    def _collect(self, names):
        state = {}
        for name in names:
            value = getattr(self, name)
            if value is not None:
                state[name] = value
        return state

    def __repr__(self):
        return f"<Child {self.id} {self.name}>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "total_points": self.total_points,
            "available_points": self.available_points,
            "badges_earned": self.badges_earned,
        }
